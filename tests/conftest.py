"""Pytest configuration for all tests."""

from datetime import datetime, timezone
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from playerpath.domain.services.invitation_notifier import InvitationNotifier
from playerpath.infrastructure.auth.jwt_service import jwt_service
from playerpath.infrastructure.persistence.database import Base
from playerpath.infrastructure.persistence.models import CoachInvitationModel
from playerpath.infrastructure.services.email import EmailDispatchClient, EmailProvider

ATHLETE_UID = "uid_athlete_1"
OTHER_UID = "uid_athlete_2"


class RecordingEmailProvider(EmailProvider):
    """In-memory provider that records every send.

    Set `error` to make the next sends raise it, or `accept` to False to
    make the provider decline without raising.
    """

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.error: Exception | None = None
        self.accept = True

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "html": html_body,
                "text": text_body,
                "from_email": from_email,
                "from_name": from_name,
                "reply_to": reply_to,
            }
        )
        return self.accept

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to an in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest.fixture
def dispatch_client(email_provider: RecordingEmailProvider) -> EmailDispatchClient:
    return EmailDispatchClient(
        provider=email_provider,
        from_email="noreply@playerpath.app",
        from_name="PlayerPath",
    )


@pytest.fixture
def notifier(
    session_factory: async_sessionmaker[AsyncSession],
    dispatch_client: EmailDispatchClient,
) -> InvitationNotifier:
    return InvitationNotifier(session_factory=session_factory, dispatch_client=dispatch_client)


@pytest.fixture
def app(
    notifier: InvitationNotifier,
    session_factory: async_sessionmaker[AsyncSession],
) -> FastAPI:
    """Application wired to the in-memory database and recording provider."""
    from playerpath.infrastructure.api.app import create_app
    from playerpath.infrastructure.persistence.database import get_db_session

    application = create_app(notifier=notifier)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a uid."""

    def build(uid: str = ATHLETE_UID) -> dict[str, str]:
        token = jwt_service.create_access_token(uid=uid)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def invitation_document() -> dict:
    """A well-formed coach invitation document payload."""
    return {
        "athleteID": ATHLETE_UID,
        "athleteName": "Alex Rivera",
        "coachEmail": "coach@example.com",
        "folderID": "folder_1",
        "folderName": "Spring Season 2025",
        "permissions": {"canUpload": True, "canComment": True, "canDelete": False},
        "status": "pending",
        "createdAt": datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def seed_invitation(session_factory: async_sessionmaker[AsyncSession]):
    """Insert an invitation row; keyword arguments override column values."""

    async def seed(invitation_id: str = "inv_001", **overrides) -> CoachInvitationModel:
        values = {
            "id": invitation_id,
            "athlete_id": ATHLETE_UID,
            "athlete_name": "Alex Rivera",
            "coach_email": "coach@example.com",
            "folder_id": "folder_1",
            "folder_name": "Spring Season 2025",
            "can_upload": True,
            "can_comment": True,
            "can_delete": False,
        }
        values.update(overrides)
        model = CoachInvitationModel(**values)
        async with session_factory() as session:
            session.add(model)
            await session.commit()
        return model

    return seed


@pytest.fixture
def load_invitation(session_factory: async_sessionmaker[AsyncSession]):
    """Read an invitation row back in a fresh session."""

    async def load(invitation_id: str = "inv_001") -> CoachInvitationModel | None:
        async with session_factory() as session:
            return await session.get(CoachInvitationModel, invitation_id)

    return load
