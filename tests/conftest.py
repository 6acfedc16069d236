"""
Pytest configuration and shared fixtures.

Provee fixtures reutilizables para:
- Repositorios in-memory sembrados con usuarios y experiencias de prueba
- Casos de uso armados con reloj y generador de UUIDs deterministas
- Base de datos SQLite in-memory (aiosqlite) para los adaptadores SQL
- Cliente HTTP de prueba (FastAPI TestClient)
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from experiencias_api.api.dependencies import (
    _in_memory_bundle,
    build_in_memory_repositories,
    build_use_cases,
    get_mail_sender,
)
from experiencias_api.application.interfaces.clock import FakeClock
from experiencias_api.application.interfaces.uuid_generator import FakeUUIDGenerator
from experiencias_api.config import Settings, get_settings
from experiencias_api.domain.entities.user import User, UserType
from experiencias_api.infrastructure.db.tables import experiences, metadata, users
from experiencias_api.infrastructure.mail.in_memory_mail_sender import InMemoryMailSender
from experiencias_api.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

OWNER_ID = "guest-1"
OTHER_USER_ID = "guest-2"
ADMIN_ID = "admin-1"
PROFESSOR_ID = "prof-1"

TEST_USERS = [
    User(id=OWNER_ID, name="Ana Souza", email="ana@example.com", user_type=UserType.GUEST),
    User(id=OTHER_USER_ID, name="Bruno Dias", email=None, user_type=UserType.GUEST),
    User(id=ADMIN_ID, name="Admin", email="admin@example.com", user_type=UserType.ADMIN),
    User(id=PROFESSOR_ID, name="Carlos Lima", email="carlos@example.com", user_type=UserType.PROFESSOR),
]

# (id, price, active)
TEST_EXPERIENCES = [
    ("exp-trail", Decimal("100.00"), True),
    ("exp-lab", Decimal("250.00"), True),
    ("exp-closed", Decimal("80.00"), False),
]

START = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)
END = datetime(2024, 3, 10, 17, 0, tzinfo=timezone.utc)


def seed_in_memory(repos: dict[str, Any]) -> None:
    for user in TEST_USERS:
        repos["user_repo"].add(user)
    for experience_id, price, active in TEST_EXPERIENCES:
        repos["experience_lookup"].add(experience_id, price, active=active)


# ============================================================================
# FIXTURES IN-MEMORY
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        use_in_memory=True,
        strict_transitions=False,
        frontend_url="https://experiencias.test",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc), tick_seconds=1)


@pytest.fixture
def uuid_generator() -> FakeUUIDGenerator:
    return FakeUUIDGenerator()


@pytest.fixture
def mail_sender() -> InMemoryMailSender:
    return InMemoryMailSender()


@pytest.fixture
def repos() -> dict[str, Any]:
    bundle = build_in_memory_repositories()
    seed_in_memory(bundle)
    return bundle


@pytest.fixture
def use_cases(repos, settings, mail_sender, clock, uuid_generator) -> dict[str, Any]:
    return build_use_cases(
        repos, settings, mail_sender, clock=clock, uuid_generator=uuid_generator
    )


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Engine SQLite in-memory con todas las tablas creadas."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Sesión con usuarios y experiencias de prueba ya confirmados."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        async with session.begin():
            await session.execute(
                insert(users),
                [
                    {
                        "id": u.id,
                        "name": u.name,
                        "email": u.email,
                        "user_type": u.user_type.value,
                        "verified": u.verified,
                    }
                    for u in TEST_USERS
                ],
            )
            await session.execute(
                insert(experiences),
                [
                    {"id": exp_id, "name": exp_id, "price": price, "active": active}
                    for exp_id, price, active in TEST_EXPERIENCES
                ],
            )
        yield session


# ============================================================================
# FIXTURES HTTP
# ============================================================================


@pytest.fixture
def api_mail_sender() -> InMemoryMailSender:
    return InMemoryMailSender()


@pytest.fixture
def api_bundle(settings, api_mail_sender) -> dict[str, Any]:
    """Bundle in-memory de la app, limpio y sembrado para cada test."""
    _in_memory_bundle.cache_clear()
    bundle = _in_memory_bundle()
    seed_in_memory(bundle)

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_mail_sender] = lambda: api_mail_sender
    yield bundle
    app.dependency_overrides.clear()
    _in_memory_bundle.cache_clear()


@pytest.fixture
def client(api_bundle) -> TestClient:
    return TestClient(app)


def headers_for(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def group_payload(experience_id: str = "exp-trail", members_count: int = 2) -> dict:
    return {
        "reservations": [
            {
                "experience_id": experience_id,
                "start_date": START.isoformat(),
                "end_date": END.isoformat(),
                "members_count": members_count,
            }
        ],
        "members": [
            {"name": "Ana Souza", "document": "123.456.789-00"},
            {"name": "João Souza"},
        ],
        "notes": "Grupo da escola",
    }
