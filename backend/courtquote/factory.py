"""Factory functions for creating pre-configured engines and services."""

from __future__ import annotations

from courtquote.data.rate_store import RateTableStore
from courtquote.data.repository import QuotationRepository
from courtquote.data.seed import DEFAULT_RATE_TABLE
from courtquote.engine import PricingEngine
from courtquote.services.notifier import EmailNotifier
from courtquote.services.quotations import QuotationService
from courtquote.services.renderer import QuotationRenderer
from courtquote.settings import Settings


def create_default_store() -> RateTableStore:
    """A RateTableStore holding the built-in default rate table."""
    return RateTableStore([DEFAULT_RATE_TABLE])


def create_service(
    settings: Settings | None = None,
    rate_store: RateTableStore | None = None,
) -> QuotationService:
    """Wire up a QuotationService.

    This is the recommended way to build the service: it connects the
    pricing engine, rate table store, in-memory repository, PDF renderer
    and email notifier using *settings*.

    Example::

        from courtquote import Settings, create_service

        service = create_service(Settings.from_env())
        quotation = service.create(submission)
    """
    settings = settings or Settings()
    if rate_store is None:
        rate_store = create_default_store()
        if settings.rate_table_name not in rate_store.names():
            rate_store.put(DEFAULT_RATE_TABLE.model_copy(update={"name": settings.rate_table_name}))
    return QuotationService(
        engine=PricingEngine(),
        rate_store=rate_store,
        repository=QuotationRepository(prefix=settings.quotation_prefix),
        renderer=QuotationRenderer(settings),
        notifier=EmailNotifier(settings),
        rate_table_name=settings.rate_table_name,
    )
