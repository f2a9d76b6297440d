"""Quotation service — creation, review, approval and rejection of quotations.

Every flow that needs a price goes through the one :class:`PricingEngine`
held here, against a fresh snapshot of the configured rate table.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from courtquote.exceptions import (
    ConfigurationError,
    DocumentRenderingError,
    QuotationStateError,
)
from courtquote.models.enums import QuotationStatus
from courtquote.models.quotation import (
    ApprovalOutcome,
    ClientInfo,
    DashboardStats,
    Quotation,
    QuotationEdit,
    QuotationPage,
    QuotationSubmission,
)
from courtquote.models.requirements import ProjectInfo, Requirements
from courtquote.services.intake import normalize_submission, validate_submission

if TYPE_CHECKING:
    from courtquote.data.rate_store import RateTableStore
    from courtquote.data.repository import QuotationRepository
    from courtquote.engine import PricingEngine
    from courtquote.models.pricing import PricingBreakdown
    from courtquote.models.rate_table import RateTable
    from courtquote.services.notifier import EmailNotifier
    from courtquote.services.renderer import QuotationRenderer

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_NOTE = "Quotation rejected after review."


def _utcnow() -> datetime:
    return datetime.now(UTC)


class QuotationService:
    """Orchestrates intake → pricing → persistence → document → email."""

    def __init__(
        self,
        engine: PricingEngine,
        rate_store: RateTableStore,
        repository: QuotationRepository,
        renderer: QuotationRenderer,
        notifier: EmailNotifier,
        rate_table_name: str = "default",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self._rate_store = rate_store
        self._repository = repository
        self._renderer = renderer
        self._notifier = notifier
        self._rate_table_name = rate_table_name
        self._clock = clock

    def current_rate_table(self) -> RateTable:
        """Snapshot of the configured rate table.

        Raises
        ------
        ConfigurationError
            If the configured table does not exist.
        """
        return self._rate_store.get(self._rate_table_name)

    def update_rate_table(self, table: RateTable) -> RateTable:
        """Replace the configured rate table; the name is forced to match."""
        return self._rate_store.put(table.model_copy(update={"name": self._rate_table_name}))

    # ------------------------------------------------------------------
    # Creation and lookup
    # ------------------------------------------------------------------

    def create(self, submission: QuotationSubmission) -> Quotation:
        """Validate, price and persist a client submission as ``pending``.

        Raises
        ------
        QuotationValidationError
            If a required field is missing.
        ConfigurationError
            If the rate table cannot be loaded.
        """
        validate_submission(submission)
        rate_table = self.current_rate_table()
        normalized = normalize_submission(submission, rate_table)
        pricing = self._engine.compute(
            rate_table, normalized.project_info, normalized.requirements
        )
        return self._repository.create(
            client_info=normalized.client_info,
            project_info=normalized.project_info,
            requirements=normalized.requirements,
            pricing=pricing,
        )

    def get(self, quotation_id: str) -> Quotation:
        return self._repository.get(quotation_id)

    def list(
        self,
        status: QuotationStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> QuotationPage:
        return self._repository.list(status=status, page=page, limit=limit)

    def all(self) -> list[Quotation]:
        return self._repository.all()

    def dashboard(self) -> DashboardStats:
        """Counts for the admin dashboard; "today" is the current UTC day."""
        start_of_day = self._clock().replace(hour=0, minute=0, second=0, microsecond=0)
        return DashboardStats(
            quotations_today=self._repository.count(
                created_since=start_of_day,
                created_before=start_of_day + timedelta(days=1),
            ),
            total_quotations=self._repository.count(),
            pending_quotations=self._repository.count(status=QuotationStatus.PENDING),
            approved_quotations=self._repository.count(status=QuotationStatus.APPROVED),
            rejected_quotations=self._repository.count(status=QuotationStatus.REJECTED),
        )

    # ------------------------------------------------------------------
    # Admin actions
    # ------------------------------------------------------------------

    def edit(self, quotation_id: str, edit: QuotationEdit) -> Quotation:
        """Merge an admin edit into a quotation.

        Sections are shallow-merged. A pricing override replaces individual
        buckets; subtotal, GST and grand total are always recomputed.
        """
        current = self._repository.get(quotation_id)
        changes: dict[str, object] = {}

        if edit.client_info:
            changes["client_info"] = ClientInfo.model_validate(
                {**current.client_info.model_dump(by_alias=True), **edit.client_info}
            )
        if edit.project_info:
            changes["project_info"] = ProjectInfo.model_validate(
                {**current.project_info.model_dump(by_alias=True), **edit.project_info}
            )
        if edit.requirements:
            changes["requirements"] = Requirements.model_validate(
                {**current.requirements.model_dump(by_alias=True), **edit.requirements}
            )
        if edit.pricing is not None:
            buckets = edit.pricing.merged_with(current.pricing)
            changes["pricing"] = self._engine.apply_totals(buckets)

        updated = self._repository.update(quotation_id, current.version, **changes)
        logger.info("Edited quotation %s (%s)", updated.quotation_number, ", ".join(changes) or "no changes")
        return updated

    def approve(
        self,
        quotation_id: str,
        notes: str = "",
        approved_by: str = "admin",
    ) -> ApprovalOutcome:
        """Approve a quotation, re-price it, and email the PDF to the client.

        Pricing is recomputed against the current rate table; if that
        fails the stored pricing is kept. The status change is a
        compare-and-set on the version read here, so of two concurrent
        approvals only one succeeds and only that one sends email.

        Raises
        ------
        QuotationNotFoundError
            If the quotation does not exist.
        QuotationStateError
            If the quotation is already approved.
        ConcurrentModificationError
            If the quotation changed while this approval was in flight.
        """
        current = self._repository.get(quotation_id)
        if current.status == QuotationStatus.APPROVED:
            msg = f"Quotation {current.quotation_number} is already approved"
            raise QuotationStateError(msg)

        logger.info("Approving quotation %s", current.quotation_number)
        pricing, recalculated = self._recalculate(current)
        now = self._clock()
        approved = self._repository.update(
            quotation_id,
            current.version,
            status=QuotationStatus.APPROVED,
            pricing=pricing,
            admin_notes=notes or "",
            approved_at=now,
            approved_by=approved_by,
        )

        recipient = approved.client_info.email
        try:
            pdf = self._renderer.render(approved)
        except DocumentRenderingError as exc:
            logger.exception("PDF rendering failed for quotation %s", approved.quotation_number)
            return ApprovalOutcome(
                quotation=approved,
                email_sent=False,
                pdf_attached=False,
                recipient=recipient,
                email_error=str(exc),
                pricing_recalculated=recalculated,
            )

        result = self._notifier.send_quotation(
            approved, pdf, filename=self._renderer.filename(approved)
        )
        return ApprovalOutcome(
            quotation=approved,
            email_sent=result.sent,
            pdf_attached=result.sent,
            recipient=recipient,
            email_error=result.error,
            pricing_recalculated=recalculated,
        )

    def reject(
        self,
        quotation_id: str,
        notes: str = "",
        rejected_by: str = "admin",
    ) -> Quotation:
        """Mark a quotation as rejected.

        Raises
        ------
        QuotationStateError
            If the quotation has already been approved.
        """
        current = self._repository.get(quotation_id)
        if current.status == QuotationStatus.APPROVED:
            msg = f"Quotation {current.quotation_number} is approved and cannot be rejected"
            raise QuotationStateError(msg)
        rejected = self._repository.update(
            quotation_id,
            current.version,
            status=QuotationStatus.REJECTED,
            admin_notes=notes or DEFAULT_REJECTION_NOTE,
            rejected_at=self._clock(),
            rejected_by=rejected_by,
        )
        logger.info("Rejected quotation %s", rejected.quotation_number)
        return rejected

    def render_pdf(self, quotation_id: str) -> tuple[str, bytes]:
        """Return ``(filename, pdf_bytes)`` for a quotation."""
        quotation = self._repository.get(quotation_id)
        return self._renderer.filename(quotation), self._renderer.render(quotation)

    def _recalculate(self, quotation: Quotation) -> tuple[PricingBreakdown, bool]:
        try:
            rate_table = self.current_rate_table()
            pricing = self._engine.compute(
                rate_table, quotation.project_info, quotation.requirements
            )
        except (ConfigurationError, ArithmeticError):
            logger.exception(
                "Re-pricing failed for quotation %s; keeping stored pricing",
                quotation.quotation_number,
            )
            return quotation.pricing, False
        return pricing, True
