"""Shared test configuration and fixtures for RegDesk tests"""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from regdesk.context import AppContext
from regdesk.main import create_app
from regdesk.models.database import init_database
from regdesk.models.registration import Registration
from regdesk.services.registration_service import RegistrationService
from regdesk.templating import load_templates
from tests.config import STYLESHEET, test_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def database_path(tmp_path):
    return str(tmp_path / "database.db")


@pytest.fixture
def static_dir(tmp_path):
    """Static directory holding a single stylesheet"""
    directory = tmp_path / "static"
    (directory / "css").mkdir(parents=True)
    (directory / "css" / "site.css").write_bytes(STYLESHEET)
    return str(directory)


@pytest.fixture
def app_context(database_path, static_dir):
    """Context built the same way the entry point builds it"""
    context = AppContext(
        engine=init_database(database_path),
        templates=load_templates(test_config["template_dir"]),
        static_dir=static_dir,
        graceful_timeout=test_config["graceful_timeout"],
    )

    yield context

    context.close()


@pytest.fixture
def client(app_context):
    """Test client for the application around `app_context`"""
    with TestClient(create_app(app_context)) as test_client:
        yield test_client


@pytest.fixture
def _db_session(app_context):
    """Private DB session for fixtures only.

    Prefer `registration_service` or `fetch_registrations` in tests.
    """
    session = Session(app_context.engine)

    yield session

    session.close()


@pytest.fixture
def registration_service(_db_session):
    """Create a RegistrationService instance for testing"""
    return RegistrationService(_db_session)


@pytest.fixture
def fetch_registrations(app_context):
    """Return every stored registration, read through a fresh session"""

    def _fetch():
        with Session(app_context.engine) as session:
            return list(session.exec(select(Registration)).all())

    return _fetch
