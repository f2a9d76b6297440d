"""In-memory quotation repository with sequential quotation numbers."""

from __future__ import annotations

import itertools
import logging
import math
import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from courtquote.exceptions import ConcurrentModificationError, QuotationNotFoundError
from courtquote.models.enums import QuotationStatus
from courtquote.models.pricing import PricingBreakdown
from courtquote.models.quotation import ClientInfo, Quotation, QuotationPage
from courtquote.models.requirements import ProjectInfo, Requirements

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def _utcnow() -> datetime:
    return datetime.now(UTC)


class QuotationRepository:
    """Thread-safe store of quotation records.

    Quotation numbers come from a counter advanced under the same lock
    that inserts the record, so concurrent creations get unique numbers
    with no gaps. Updates are compare-and-set on ``version``.
    """

    def __init__(
        self,
        prefix: str = "QTN",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._prefix = prefix
        self._clock = clock
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._records: dict[str, Quotation] = {}

    def create(
        self,
        *,
        client_info: ClientInfo,
        project_info: ProjectInfo,
        requirements: Requirements,
        pricing: PricingBreakdown,
    ) -> Quotation:
        """Persist a new ``pending`` quotation with the next number."""
        with self._lock:
            now = self._clock()
            quotation = Quotation(
                id=uuid.uuid4().hex,
                quotation_number=f"{self._prefix}-{next(self._sequence):05d}",
                client_info=client_info,
                project_info=project_info,
                requirements=requirements,
                pricing=pricing,
                status=QuotationStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self._records[quotation.id] = quotation
        logger.info("Created quotation %s (%s)", quotation.quotation_number, quotation.id)
        return quotation.model_copy(deep=True)

    def get(self, quotation_id: str) -> Quotation:
        with self._lock:
            quotation = self._records.get(quotation_id)
        if quotation is None:
            msg = f"Quotation '{quotation_id}' not found"
            raise QuotationNotFoundError(msg)
        return quotation.model_copy(deep=True)

    def list(
        self,
        status: QuotationStatus | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> QuotationPage:
        """Return one page of quotations, newest first."""
        page = max(page, 1)
        limit = limit if limit > 0 else DEFAULT_PAGE_SIZE
        with self._lock:
            matching = [
                q for q in reversed(self._records.values())
                if status is None or q.status == status
            ]
        total = len(matching)
        start = (page - 1) * limit
        return QuotationPage(
            quotations=[q.model_copy(deep=True) for q in matching[start:start + limit]],
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_quotations=total,
        )

    def all(self) -> list[Quotation]:
        """Every quotation, newest first."""
        with self._lock:
            records = list(reversed(self._records.values()))
        return [q.model_copy(deep=True) for q in records]

    def count(
        self,
        status: QuotationStatus | None = None,
        created_since: datetime | None = None,
        created_before: datetime | None = None,
    ) -> int:
        with self._lock:
            return sum(
                1
                for q in self._records.values()
                if (status is None or q.status == status)
                and (created_since is None or q.created_at >= created_since)
                and (created_before is None or q.created_at < created_before)
            )

    def update(self, quotation_id: str, expected_version: int, **changes: Any) -> Quotation:
        """Apply *changes* if the stored version still equals *expected_version*.

        Raises:
            QuotationNotFoundError: If the quotation does not exist.
            ConcurrentModificationError: If another write got there first.
        """
        with self._lock:
            current = self._records.get(quotation_id)
            if current is None:
                msg = f"Quotation '{quotation_id}' not found"
                raise QuotationNotFoundError(msg)
            if current.version != expected_version:
                msg = (
                    f"Quotation {current.quotation_number} was modified concurrently "
                    f"(expected version {expected_version}, found {current.version})"
                )
                raise ConcurrentModificationError(msg)
            data = current.model_dump()
            data.update(changes)
            data["version"] = current.version + 1
            data["updated_at"] = self._clock()
            updated = Quotation.model_validate(data)
            self._records[quotation_id] = updated
        return updated.model_copy(deep=True)
