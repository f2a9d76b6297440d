"""Rate table store — serves consistent snapshots of named rate tables."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from courtquote.exceptions import ConfigurationError
from courtquote.models.rate_table import RateTable

logger = logging.getLogger(__name__)


class RateTableStore:
    """Read-mostly store of named rate tables.

    Tables are replaced whole under a lock, and every read returns a deep
    copy, so a request never observes a half-updated table and callers
    cannot change the stored rates.
    """

    def __init__(self, tables: Iterable[RateTable] = ()) -> None:
        self._lock = threading.Lock()
        self._tables: dict[str, RateTable] = {
            table.name: table.model_copy(deep=True) for table in tables
        }

    def get(self, name: str) -> RateTable:
        """Return a snapshot of the table called *name*.

        Raises:
            ConfigurationError: If no table with that name exists.
        """
        with self._lock:
            table = self._tables.get(name)
        if table is None:
            msg = f"Rate table '{name}' not found"
            raise ConfigurationError(msg)
        return table.model_copy(deep=True)

    def put(self, table: RateTable | Mapping[str, Any]) -> RateTable:
        """Validate *table* and replace the stored table of the same name.

        Raises:
            ValueError: If *table* is not a valid rate table.
        """
        if not isinstance(table, RateTable):
            try:
                table = RateTable.model_validate(table)
            except ValidationError as exc:
                msg = f"Invalid rate table: {exc}"
                raise ValueError(msg) from exc
        snapshot = table.model_copy(deep=True)
        with self._lock:
            self._tables[snapshot.name] = snapshot
        logger.info("Rate table '%s' updated", snapshot.name)
        return snapshot.model_copy(deep=True)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._tables)
