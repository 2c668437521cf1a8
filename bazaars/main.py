from fastapi import FastAPI
from bazaars.api.routes import router as api_router
from bazaars.db import Base, engine
from bazaars.utils import env_flag, logger
import bazaars.models  # noqa: F401 ensure models are imported so tables are known

# create FastAPI instance
app = FastAPI(title="bazaars")
app.include_router(api_router)


@app.on_event("startup")
def on_startup_create_tables():
    # the schema normally comes from `alembic upgrade head`
    if env_flag("AUTO_CREATE_TABLES"):
        Base.metadata.create_all(bind=engine)
        logger.info("Created missing tables")
