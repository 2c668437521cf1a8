# tests/conftest.py
import os
import tempfile
from pathlib import Path

import pytest

# must be set before anything imports bazaars.db
_TMP = Path(tempfile.mkdtemp(prefix="bazaars-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["IMAGE_DIR"] = str(_TMP / "images")

from bazaars import models  # noqa: E402,F401
from bazaars.db import Base, engine, SessionLocal  # noqa: E402
from bazaars.images import LocalImageStore  # noqa: E402


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(tmp_path):
    return LocalImageStore(tmp_path / "images")


@pytest.fixture
def ad_data():
    return {
        "title": "Bike",
        "description": "Used",
        "price": "120.50",
        "user_email": "a@b.com",
        "user_phone": "555-1234",
    }
