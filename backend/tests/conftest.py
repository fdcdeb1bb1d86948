"""
Shared test fixtures — TestClient, in-memory SQLite, seeded personas.
"""

import os
import tempfile

# Set environment variables BEFORE any app imports to avoid /app filesystem access
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "persona_test_logs"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DIR", os.path.join(tempfile.gettempdir(), "persona_test_data"))
os.environ["ROTATION_ENABLED"] = "false"

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from api.rate_limit import limiter  # noqa: E402
from domain.entities import Persona  # noqa: E402
from infrastructure.database import get_session  # noqa: E402
from main import app  # noqa: E402

# ---------------------------------------------------------------------------
# In-memory SQLite engine with StaticPool (shared single connection)
# ---------------------------------------------------------------------------

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def _override_get_session() -> Generator[Session, None, None]:
    with Session(test_engine) as session:
        yield session


# Rotation order: mentor → analyst → storyteller
SEED_PERSONAS = [
    ("mentor", "Mentor", 1),
    ("analyst", "Analyst", 2),
    ("storyteller", "Storyteller", 3),
]


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    """Create all tables once for the test session."""
    import domain.entities  # noqa: F401 — register models with SQLModel

    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Truncate all tables between tests for isolation."""
    yield
    with Session(test_engine) as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            session.exec(table.delete())  # type: ignore[arg-type]
        session.commit()


@pytest.fixture()
def personas() -> list[str]:
    """Seed three personas into the test DB; returns their ids in rotation order."""
    with Session(test_engine) as session:
        for persona_id, name, order in SEED_PERSONAS:
            session.add(
                Persona(
                    id=persona_id,
                    name=name,
                    system_prompt=f"You are the {name.lower()}.",
                    display_order=order,
                )
            )
        session.commit()
    return [persona_id for persona_id, _, _ in SEED_PERSONAS]


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """TestClient with overridden DB session and a fresh rate-limit window."""
    app.dependency_overrides[get_session] = _override_get_session
    limiter.reset()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Standalone DB session fixture for service layer unit tests."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


@pytest.fixture()
def session_factory():
    """Factory yielding fresh sessions on the test engine (for RotationScheduler)."""
    return lambda: Session(test_engine)
