"""
Test configuration for pytest
"""

import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session
from typing import Any, Dict, Generator, Optional
import uuid

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["PLATFORM_ADMIN_EMAILS"] = "admin@braunstud.io"
os.environ["MERCADOPAGO_ACCESS_TOKEN"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from wedding_builder.core.auth import create_access_token  # noqa: E402
from wedding_builder.core.database import get_session  # noqa: E402
from wedding_builder.core.events import event_bus  # noqa: E402
from wedding_builder.main import app  # noqa: E402
from wedding_builder.models import Wedding, WeddingStatus  # noqa: E402
from wedding_builder.services.payments import get_payment_gateway  # noqa: E402


# One shared in-memory database per test, visible from every connection
test_engine = create_engine(
    "sqlite:///:memory:",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

ADMIN_EMAIL = "admin@braunstud.io"
COUPLE_EMAIL = "sarah@example.com"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    # Create all tables
    SQLModel.metadata.create_all(test_engine)

    # Create session
    with Session(test_engine) as session:
        yield session

    # Cleanup
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(autouse=True)
def clean_event_bus():
    yield
    event_bus.clear_subscribers()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client bound to the test database session"""
    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_payment_gateway] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(email: str, role: str = "couple") -> str:
    return create_access_token(user_id=uuid.uuid4(), email=email, role=role)


def auth_headers(email: str = ADMIN_EMAIL) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return auth_headers(ADMIN_EMAIL)


@pytest.fixture
def couple_headers() -> Dict[str, str]:
    return auth_headers(COUPLE_EMAIL)


def build_wedding(
    slug: str = "sarah-and-john",
    status: WeddingStatus = WeddingStatus.LIVE,
    enabled_sections: Optional[list] = None,
    section_content: Optional[Dict[str, Any]] = None,
    theme: Optional[Dict[str, Any]] = None,
    template_id: str = "classic",
    template_version: str = "v1",
    **fields,
) -> Wedding:
    """Unsaved wedding with sensible defaults"""
    return Wedding(
        name=fields.pop("name", "Sarah & John"),
        slug=slug,
        status=status,
        template_id=template_id,
        template_version=template_version,
        enabled_sections=enabled_sections if enabled_sections is not None else ["hero", "rsvp"],
        section_content=section_content if section_content is not None else {},
        theme=theme if theme is not None else {"light": {}, "dark": {}},
        couple_emails=fields.pop("couple_emails", [COUPLE_EMAIL]),
        **fields,
    )


@pytest.fixture
def make_wedding(db: Session):
    """Factory persisting weddings in the test database"""
    def _make(**kwargs) -> Wedding:
        wedding = build_wedding(**kwargs)
        db.add(wedding)
        db.commit()
        db.refresh(wedding)
        return wedding
    return _make


GIFTS_CONTENT = {
    "title": "Gifts",
    "mode": "gifts",
    "items": [
        {"id": "honeymoon", "name": "Honeymoon Fund", "priceInCents": 15000},
        {"id": "espresso", "name": "Espresso Machine", "priceInCents": 42050},
    ],
}
