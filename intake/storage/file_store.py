"""JSON-file backend: one pretty-printed array document per collection."""

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from intake.storage.base import Predicate, RecordStore, StoreError, T

logger = logging.getLogger(__name__)

# One document row: the JSON as stored, plus the parsed record (None when the row is invalid).
Row = tuple[Any, T | None]


class FileRecordStore(RecordStore[T]):
    """
    Stores a collection at <data_dir>/<collection>.json.

    A missing or unparseable document reads as an empty collection (logged as a
    warning). Rows the model rejects are skipped on read and written back verbatim
    by every mutation. Every mutation is read-all, change in memory, write-all;
    there is no lock, so concurrent writers in different requests can overwrite
    each other.
    """

    def __init__(self, model: type[T], collection: str, data_dir: Path) -> None:
        super().__init__(model, collection)
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / f"{collection}.json"

    async def read_all(self) -> list[T]:
        rows = await asyncio.to_thread(self._load_rows)
        return [item for _, item in rows if item is not None]

    async def write_all(self, items: list[T]) -> None:
        """Replace the whole document with items."""
        await asyncio.to_thread(self._write_sync, [self._dump(item) for item in items])

    async def create(self, item: T) -> T:
        rows = await asyncio.to_thread(self._load_rows)
        document = [raw for raw, _ in rows]
        document.append(self._dump(item))
        await asyncio.to_thread(self._write_sync, document)
        return item

    async def update(self, predicate: Predicate[T], changes: Mapping[str, Any]) -> T | None:
        rows = await asyncio.to_thread(self._load_rows)
        for index, (_, item) in enumerate(rows):
            if item is not None and predicate(item):
                merged = self.merge(item, changes)
                document = [raw for raw, _ in rows]
                document[index] = self._dump(merged)
                await asyncio.to_thread(self._write_sync, document)
                return merged
        return None

    async def delete(self, predicate: Predicate[T]) -> bool:
        rows = await asyncio.to_thread(self._load_rows)
        kept = [raw for raw, item in rows if item is None or not predicate(item)]
        if len(kept) == len(rows):
            return False
        await asyncio.to_thread(self._write_sync, kept)
        return True

    async def ping(self) -> None:
        await asyncio.to_thread(self._check_writable)

    def _check_writable(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create data directory {self.data_dir}: {e}") from e
        if not os.access(self.data_dir, os.W_OK):
            raise StoreError(f"Data directory {self.data_dir} is not writable")

    @staticmethod
    def _dump(item: T) -> dict[str, Any]:
        return item.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _load_rows(self) -> list[Row]:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        except (OSError, ValueError) as e:
            logger.warning(
                "Could not read %s; treating collection as empty",
                self.path,
                extra={"path": str(self.path), "error": str(e)},
            )
            return []

        rows: list[Row] = []
        for index, row in enumerate(raw):
            try:
                rows.append((row, self.model.model_validate(row)))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid %s record at index %d in %s",
                    self.model.__name__,
                    index,
                    self.path,
                    extra={"path": str(self.path), "index": index, "error": str(e)},
                )
                rows.append((row, None))
        return rows

    def _write_sync(self, document: list[Any]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        text = json.dumps(document, indent=2, ensure_ascii=False)
        # Write beside the target, then swap in, so readers never see a partial document.
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.collection}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
