"""Record storage: a predicate-based collection contract with file and remote-table backends."""

from intake.storage.base import Predicate, RecordStore, StoreError
from intake.storage.factory import Storage, build_storage, resolve_data_dir, select_backend
from intake.storage.file_store import FileRecordStore
from intake.storage.remote_store import RemoteStoreError, RemoteTableStore

__all__ = [
    "FileRecordStore",
    "Predicate",
    "RecordStore",
    "RemoteStoreError",
    "RemoteTableStore",
    "Storage",
    "StoreError",
    "build_storage",
    "resolve_data_dir",
    "select_backend",
]
