"""Process-wide application context built once at startup."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cwie.config import Settings
from cwie.services.identity_service import IdentityVerifier


@dataclass
class AppContext:
    """Explicit dependencies handed to request handlers through ``app.state``."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    identity_verifier: IdentityVerifier
