"""JSON-file festival catalog.

The catalog is a single JSON array of festival objects.  It is read from
disk on every :meth:`load` so hand edits and admin approvals are visible
immediately.  :meth:`append` rewrites the whole file through a temporary
sibling and ``os.replace`` so readers never see a half-written array.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.interfaces.catalog_provider import ICatalogProvider
from src.models.festival import Festival
from src.utils.errors import CatalogError
from src.utils.logging import get_logger

_PROVIDER_NAME = "json_catalog"


class JSONCatalogProvider(ICatalogProvider):
    """Festival catalog backed by a JSON array on disk.

    Parameters
    ----------
    path:
        Location of the catalog file.  A missing file reads as an empty
        catalog and is created on the first append.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._logger = get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Festival]:
        try:
            return [Festival.model_validate(record) for record in self._read_raw()]
        except PydanticValidationError as exc:
            self._logger.error("catalog_record_invalid", path=str(self._path), error=str(exc))
            raise CatalogError(
                message=f"Invalid festival record in {self._path}",
                provider_name=_PROVIDER_NAME,
            ) from exc

    def append(self, record: dict[str, Any]) -> Festival:
        festival = Festival.model_validate(record)
        records = self._read_raw()
        records.append(record)
        self._write_raw(records)
        self._logger.info("catalog_festival_appended", festival_id=festival.id, total=len(records))
        return festival

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _read_raw(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            self._logger.error("catalog_read_failed", path=str(self._path), error=str(exc))
            raise CatalogError(
                message=f"Could not read festival catalog {self._path}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not isinstance(data, list):
            raise CatalogError(
                message=f"Festival catalog {self._path} is not a JSON array",
                provider_name=_PROVIDER_NAME,
            )
        return data

    def _write_raw(self, records: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".festivals-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
                f.write("\n")
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            self._logger.error("catalog_write_failed", path=str(self._path), error=str(exc))
            raise CatalogError(
                message=f"Could not write festival catalog {self._path}",
                provider_name=_PROVIDER_NAME,
            ) from exc
