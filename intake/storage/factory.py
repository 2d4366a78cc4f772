"""Backend selection: build every collection store once, from settings, at startup."""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from intake.core.config import Settings
from intake.schemas.records import Admin, Case, CaseUpdate, ChannelConfig, User
from intake.storage.base import RecordStore, T
from intake.storage.file_store import FileRecordStore
from intake.storage.remote_store import RemoteTableStore

logger = logging.getLogger(__name__)

BackendName = Literal["file", "remote"]

# Collection (file / table) names.
USERS = "users"
CASES = "cases"
UPDATES = "updates"
ADMINS = "admins"
CONFIG = "config"

# Subdirectory of the system temp dir used when running on a read-only host.
HOSTED_DATA_SUBDIR = "hcx-data"


@dataclass(frozen=True)
class Storage:
    """All collection stores for one process; immutable after construction."""

    users: RecordStore[User]
    cases: RecordStore[Case]
    updates: RecordStore[CaseUpdate]
    admins: RecordStore[Admin]
    config: RecordStore[ChannelConfig]
    backend: BackendName


def resolve_data_dir(settings: Settings) -> Path:
    """DATA_DIR if set; a temp-dir path on Vercel; else ./data under the working directory."""
    if settings.DATA_DIR:
        return Path(settings.DATA_DIR)
    if settings.VERCEL:
        return Path(tempfile.gettempdir()) / HOSTED_DATA_SUBDIR
    return Path.cwd() / "data"


def select_backend(settings: Settings) -> BackendName:
    return "remote" if settings.remote_storage_enabled else "file"


def _make_store(model: type[T], collection: str, settings: Settings) -> RecordStore[T]:
    key = settings.SUPABASE_SERVICE_ROLE_KEY
    if settings.SUPABASE_URL and key is not None:
        return RemoteTableStore(
            model,
            collection,
            base_url=f"{settings.SUPABASE_URL}/rest/v1",
            api_key=key.get_secret_value(),
            timeout=settings.SUPABASE_REQUEST_TIMEOUT_SEC,
        )
    return FileRecordStore(model, collection, resolve_data_dir(settings))


def build_storage(settings: Settings) -> Storage:
    """Choose the backend from settings and construct one store per collection."""
    backend = select_backend(settings)
    storage = Storage(
        users=_make_store(User, USERS, settings),
        cases=_make_store(Case, CASES, settings),
        updates=_make_store(CaseUpdate, UPDATES, settings),
        admins=_make_store(Admin, ADMINS, settings),
        config=_make_store(ChannelConfig, CONFIG, settings),
        backend=backend,
    )
    if backend == "file":
        logger.info(
            "Using JSON file storage",
            extra={"storage_backend": backend, "data_dir": str(resolve_data_dir(settings))},
        )
    else:
        logger.info(
            "Using Supabase table storage",
            extra={"storage_backend": backend, "supabase_url": settings.SUPABASE_URL},
        )
    return storage
