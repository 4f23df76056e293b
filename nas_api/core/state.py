"""Per-application service wiring and the FastAPI dependencies that expose it."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Request

from nas_api.core.config import BOOTSTRAP_ADMIN_USERNAME, Settings
from nas_api.services.authenticator import Authenticator
from nas_api.services.credentials import CredentialStore
from nas_api.services.file_store import FileStore
from nas_api.services.sessions import SessionStore
from nas_api.services.shares import ShareRegistry

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Shared stores for one application instance. Nothing here is persisted."""

    settings: Settings
    credentials: CredentialStore
    sessions: SessionStore
    authenticator: Authenticator
    file_store: FileStore
    shares: ShareRegistry


def build_state(settings: Settings) -> AppState:
    """Create the stores and provision the bootstrap admin account on first run."""
    credentials = CredentialStore(bcrypt_rounds=settings.BCRYPT_ROUNDS)
    sessions = SessionStore(ttl=timedelta(hours=settings.SESSION_TTL_HOURS))
    file_store = FileStore(settings.STORAGE_ROOT, settings.MAX_UPLOAD_BYTES)

    created = credentials.ensure_bootstrap_admin(
        email=settings.BOOTSTRAP_ADMIN_EMAIL,
        password=settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
    )
    if created is not None and settings.uses_default_admin_password:
        logger.warning(
            "Bootstrap account %r uses the default password; set BOOTSTRAP_ADMIN_PASSWORD to rotate it.",
            BOOTSTRAP_ADMIN_USERNAME,
        )

    return AppState(
        settings=settings,
        credentials=credentials,
        sessions=sessions,
        authenticator=Authenticator(credentials, sessions),
        file_store=file_store,
        shares=ShareRegistry(file_store),
    )


def get_state(request: Request) -> AppState:
    """Dependency: the AppState attached to the running application."""
    return request.app.state.nas


def get_settings_dep(request: Request) -> Settings:
    return get_state(request).settings


def get_authenticator(request: Request) -> Authenticator:
    return get_state(request).authenticator


def get_credentials(request: Request) -> CredentialStore:
    return get_state(request).credentials


def get_sessions(request: Request) -> SessionStore:
    return get_state(request).sessions


def get_file_store(request: Request) -> FileStore:
    return get_state(request).file_store


def get_shares(request: Request) -> ShareRegistry:
    return get_state(request).shares
