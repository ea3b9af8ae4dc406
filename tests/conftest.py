"""
Shared fixtures: an in-memory SQLite database per test, the FastAPI app wired
to it, and small factories for users, companies, jobs and applications.
"""
import itertools
import os
import tempfile
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobquest-uploads-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DEBUG"] = "false"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["SENTRY_DSN"] = ""
os.environ["LOG_FORMAT"] = "console"

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.cache import MemoryCache, get_cache  # noqa: E402
from app.core.security import Role, create_access_token, get_password_hash  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from app.models import Application, Company, Job, Resume, User  # noqa: E402
from app.services.email_service import get_email_sender  # noqa: E402
from app.utils.helpers import utcnow  # noqa: E402

PASSWORD = "secret123"
# bcrypt is slow on purpose; hash the shared test password once
PASSWORD_HASH = get_password_hash(PASSWORD)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DataFactory:
    """Inserts committed rows through its own sessions."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._ids = itertools.count(1)

    async def _save(self, *objects):
        async with self.session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects[0]

    async def user(self, role: str = Role.JOB_SEEKER.value, email: str = None, **fields) -> User:
        n = next(self._ids)
        values = {
            "email": email or f"user{n}@example.com",
            "password_hash": PASSWORD_HASH,
            "role": role,
            "full_name": f"User {n}",
            "phone_number": "+1 555 0100",
        }
        values.update(fields)
        return await self._save(User(**values))

    async def job_seeker(self, **fields) -> User:
        return await self.user(Role.JOB_SEEKER.value, **fields)

    async def admin(self, **fields) -> User:
        return await self.user(Role.ADMIN.value, **fields)

    async def recruiter(self, company_name: str = "Acme Corp", **company_fields):
        """A recruiter together with the company they own."""
        user = await self.user(Role.RECRUITER.value)
        company = await self.company(name=company_name, owner_id=user.id, **company_fields)
        return user, company

    async def company(self, name: str = "Acme Corp", **fields) -> Company:
        values = {
            "name": name,
            "description": f"{name} builds things",
            "industry": "Technology",
            "location": "Remote",
            "status": "Active",
        }
        values.update(fields)
        return await self._save(Company(**values))

    async def job(self, recruiter: User, company: Company, **fields) -> Job:
        values = {
            "title": "Backend Developer",
            "company_id": company.id,
            "recruiter_id": recruiter.id,
            "description": "Build and run our APIs",
            "industry": "Technology",
            "job_type": "full-time",
            "experience": "Entry Level",
            "salary": "$40,000 - $50,000",
            "location": "Remote",
            "skills": ["Python"],
            "requirements": ["2 years of Python"],
            "responsibilities": ["Ship features"],
            "logo": "",
            "status": "Active",
            "application_deadline": utcnow() + timedelta(days=30),
        }
        values.update(fields)
        return await self._save(Job(**values))

    async def resume(self, user: User, **fields) -> Resume:
        values = {
            "user_id": user.id,
            "full_name": user.full_name,
            "email": user.email,
            "education": [{"degree": "B.Sc", "institution": "State University", "year": "2020"}],
            "experience": [{"jobTitle": "Developer", "company": "Initech", "duration": "2 years"}],
            "skills": ["Python", "SQL"],
        }
        values.update(fields)
        return await self._save(Resume(**values))

    async def application(self, job_seeker: User, job: Job, **fields) -> Application:
        values = {
            "job_seeker_id": job_seeker.id,
            "recruiter_id": job.recruiter_id,
            "job_id": job.id,
        }
        values.update(fields)
        return await self._save(Application(**values))


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    """Session for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def factory(session_factory):
    return DataFactory(session_factory)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache(default_ttl=300, key_prefix="test", clock=clock)


@pytest.fixture
def email_sender():
    sender = Mock()
    sender.send = AsyncMock()
    return sender


@pytest.fixture
def app(session_factory, cache, email_sender):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_cache] = lambda: cache
    fastapi_app.dependency_overrides[get_email_sender] = lambda: email_sender
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
