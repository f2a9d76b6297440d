"""Tests for the in-memory QuotationRepository."""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

import pytest

from courtquote.data.repository import QuotationRepository
from courtquote.exceptions import ConcurrentModificationError, QuotationNotFoundError
from courtquote.models.enums import QuotationStatus
from courtquote.models.pricing import PricingBreakdown
from courtquote.models.quotation import ClientInfo, Quotation
from courtquote.models.requirements import ProjectInfo, Requirements

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _Clock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


def _create(repo: QuotationRepository, name: str = "Asha") -> Quotation:
    return repo.create(
        client_info=ClientInfo(name=name, email=f"{name.lower()}@example.com"),
        project_info=ProjectInfo(area=100, perimeter=40),
        requirements=Requirements.model_validate({"flooring": {"type": "acrylic"}}),
        pricing=PricingBreakdown(flooring_cost=95_000, subtotal=95_000),
    )


@pytest.fixture()
def repo() -> QuotationRepository:
    return QuotationRepository(clock=_Clock(datetime(2024, 3, 1, 9, 0, tzinfo=UTC)))


# ---------------------------------------------------------------------------
# Creation and lookup
# ---------------------------------------------------------------------------


class TestCreate:
    def test_assigns_sequential_numbers(self, repo: QuotationRepository) -> None:
        numbers = [_create(repo).quotation_number for _ in range(3)]
        assert numbers == ["QTN-00001", "QTN-00002", "QTN-00003"]

    def test_custom_prefix(self) -> None:
        repo = QuotationRepository(prefix="NXG")
        assert _create(repo).quotation_number == "NXG-00001"

    def test_new_quotation_is_pending(self, repo: QuotationRepository) -> None:
        q = _create(repo)
        assert q.status == QuotationStatus.PENDING
        assert q.version == 1
        assert q.created_at == q.updated_at

    def test_concurrent_creation_gives_unique_gapless_numbers(self) -> None:
        repo = QuotationRepository()
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            for _ in range(25):
                _create(repo)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        numbers = sorted(q.quotation_number for q in repo.all())
        assert numbers == [f"QTN-{i:05d}" for i in range(1, 201)]

    def test_get_unknown_raises(self, repo: QuotationRepository) -> None:
        with pytest.raises(QuotationNotFoundError):
            repo.get("missing")

    def test_returned_records_are_copies(self, repo: QuotationRepository) -> None:
        q = _create(repo)
        q.client_info.name = "Changed"
        assert repo.get(q.id).client_info.name == "Asha"


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestList:
    def test_newest_first_with_pagination(self, repo: QuotationRepository) -> None:
        for i in range(12):
            _create(repo, name=f"Client{i}")

        page = repo.list(page=1, limit=5)
        assert page.total_quotations == 12
        assert page.total_pages == 3
        assert page.quotations[0].client_info.name == "Client11"

        last = repo.list(page=3, limit=5)
        assert [q.client_info.name for q in last.quotations] == ["Client1", "Client0"]

    def test_status_filter(self, repo: QuotationRepository) -> None:
        first = _create(repo)
        _create(repo)
        repo.update(first.id, first.version, status=QuotationStatus.REJECTED)

        rejected = repo.list(status=QuotationStatus.REJECTED)
        assert [q.id for q in rejected.quotations] == [first.id]
        assert repo.list(status=QuotationStatus.PENDING).total_quotations == 1

    def test_empty_listing(self, repo: QuotationRepository) -> None:
        page = repo.list()
        assert page.quotations == []
        assert page.total_pages == 0

    def test_invalid_paging_falls_back(self, repo: QuotationRepository) -> None:
        _create(repo)
        page = repo.list(page=0, limit=0)
        assert page.current_page == 1
        assert len(page.quotations) == 1

    def test_count_by_creation_window(self, repo: QuotationRepository) -> None:
        _create(repo)
        _create(repo)
        since = datetime(2024, 3, 1, 9, 1, tzinfo=UTC)
        assert repo.count() == 2
        assert repo.count(created_since=since) == 1
        assert repo.count(created_before=since) == 1


# ---------------------------------------------------------------------------
# Compare-and-set updates
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_update_bumps_version(self, repo: QuotationRepository) -> None:
        q = _create(repo)
        updated = repo.update(q.id, q.version, admin_notes="Checked")
        assert updated.version == 2
        assert updated.admin_notes == "Checked"
        assert updated.updated_at > q.updated_at

    def test_stale_version_rejected(self, repo: QuotationRepository) -> None:
        q = _create(repo)
        repo.update(q.id, q.version, admin_notes="first")
        with pytest.raises(ConcurrentModificationError):
            repo.update(q.id, q.version, admin_notes="second")
        assert repo.get(q.id).admin_notes == "first"

    def test_update_unknown_raises(self, repo: QuotationRepository) -> None:
        with pytest.raises(QuotationNotFoundError):
            repo.update("missing", 1, admin_notes="x")

    def test_only_one_concurrent_writer_wins(self) -> None:
        repo = QuotationRepository()
        q = _create(repo)
        barrier = threading.Barrier(10)
        wins: list[int] = []
        lock = threading.Lock()

        def worker(n: int) -> None:
            barrier.wait()
            try:
                repo.update(q.id, q.version, status=QuotationStatus.APPROVED)
            except ConcurrentModificationError:
                return
            with lock:
                wins.append(n)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(wins) == 1
        assert repo.get(q.id).version == 2
