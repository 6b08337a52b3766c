"""Shared fixtures for the API and service tests."""

import os
import tempfile

# Settings are read once at import time, so the environment must be in place
# before anything under app/ is imported.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="lichinga-jobs-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import httpx
import pytest
import pytest_asyncio

from app.database import AsyncSessionLocal, drop_db, init_db
from app.main import app
from app.schemas.jobs import JobCreate
from app.services import job_service, user_service

PASSWORD = "s3cret-pass"


@pytest_asyncio.fixture
async def reset_database():
    """Fresh tables for every test."""
    await drop_db()
    await init_db()
    yield


@pytest_asyncio.fixture
async def db(reset_database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(reset_database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def employer(db):
    return await user_service.register(
        db,
        email="boss@acme.co.mz",
        password=PASSWORD,
        name="Ana Employer",
        phone="+258 84 000 0001",
        is_employer=True,
        company="ACME Lda",
    )


@pytest_asyncio.fixture
async def other_employer(db):
    return await user_service.register(
        db,
        email="rival@other.co.mz",
        password=PASSWORD,
        name="Rui Rival",
        phone="+258 84 000 0002",
        is_employer=True,
        company="Other Lda",
    )


@pytest_asyncio.fixture
async def seeker(db):
    return await user_service.register(
        db,
        email="seeker@mail.co.mz",
        password=PASSWORD,
        name="Sara Seeker",
        phone="+258 84 000 0003",
    )


@pytest_asyncio.fixture
async def second_seeker(db):
    return await user_service.register(
        db,
        email="second@mail.co.mz",
        password=PASSWORD,
        name="Tomas Second",
        phone="+258 84 000 0004",
    )


@pytest.fixture
def make_job(db, employer):
    """Factory for jobs owned by `employer` unless another owner is given."""

    async def _make_job(owner=None, **fields):
        data = {
            "title": "Truck Driver",
            "description": "Deliveries between Lichinga and Cuamba",
            "location": "Lichinga",
            "vacancies": 1,
        }
        data.update(fields)
        return await job_service.create_job(db, owner or employer, JobCreate(**data))

    return _make_job


@pytest.fixture
def as_user():
    """Build the headers that identify a user to the API."""

    def _headers(user) -> dict:
        return {"user-id": str(user.id)}

    return _headers


@pytest.fixture
def password():
    """Plaintext password shared by the user fixtures."""
    return PASSWORD
