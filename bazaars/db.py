# bazaars/db.py
"""Database engine and session utilities.

The engine is built once from ``DATABASE_URL``. PostgreSQL is the production
target; SQLite URLs are accepted for local runs and the test suite.
"""
import os
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

load_dotenv()


def normalize_url(url: str) -> str:
    # SQLAlchemy 2.x doesn't accept the 'postgres://' scheme
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL not set")
DATABASE_URL = normalize_url(DATABASE_URL)


def make_engine(url: str):
    if url.startswith("sqlite"):
        # sessions are shared with FastAPI's threadpool
        return create_engine(url, connect_args={"check_same_thread": False})
    # tuned pool settings for cloud DB
    return create_engine(
        url,
        pool_size=int(os.getenv("DB_POOL_SIZE", 5)),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 10)),
        pool_pre_ping=True
    )


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
