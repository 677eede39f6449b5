# File: tests/conftest.py

import pytest
import os
import sys
import tempfile
import sqlalchemy
from sqlalchemy import text
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the app at a throwaway database BEFORE anything imports the engine
os.environ.setdefault(
    "VIDVOICE_DATABASE_URL",
    f"sqlite:///{os.path.join(tempfile.gettempdir(), 'vidvoice_test.db')}",
)
os.environ.setdefault("VIDVOICE_RECOGNITION_BACKEND", "simulated")

# 3. Import the app engine (built from the URL above)
from vidvoice.core.database.connection import engine as TEST_ENGINE, SessionLocal


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and every table is registered.
    """
    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    from vidvoice.core.database.connection import create_tables
    create_tables()

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Detects DB type and cleans tables appropriately.
    """
    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()

        is_sqlite = "sqlite" in str(TEST_ENGINE.url)

        inspector = sqlalchemy.inspect(TEST_ENGINE)
        table_names = inspector.get_table_names()

        for table in table_names:
            if is_sqlite:
                conn.execute(text(f'DELETE FROM "{table}";'))
            else:
                conn.execute(text(f'TRUNCATE TABLE "{table}" CASCADE;'))

        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
