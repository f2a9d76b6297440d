"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, Header, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

from courtquote.data.sports import sports_config
from courtquote.exceptions import (
    ConcurrentModificationError,
    ConfigurationError,
    CourtQuoteError,
    QuotationNotFoundError,
    QuotationStateError,
    QuotationValidationError,
)
from courtquote.models.enums import QuotationStatus
from courtquote.models.quotation import QuotationEdit, QuotationSubmission  # noqa: TCH001 (FastAPI resolves at runtime)
from courtquote.models.rate_table import RateTable  # noqa: TCH001
from courtquote.settings import Settings

if TYPE_CHECKING:
    from courtquote.services.quotations import QuotationService

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


class ReviewNotes(BaseModel):
    """Body of approve/reject actions."""

    notes: str = ""


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _to_http(exc: CourtQuoteError) -> HTTPException:
    if isinstance(exc, QuotationValidationError):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, QuotationNotFoundError):
        return HTTPException(status_code=404, detail="Quotation not found")
    if isinstance(exc, (QuotationStateError, ConcurrentModificationError)):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ConfigurationError):
        logger.exception("Pricing configuration error")
        return HTTPException(status_code=500, detail=f"Pricing is not configured: {exc}")
    logger.exception("Unhandled service error")
    return HTTPException(status_code=500, detail=str(exc))


def create_app(
    *,
    service: QuotationService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    service
        Optional pre-built service for dependency injection (e.g. tests).
        If not provided, one is created from environment settings on first
        request.
    settings
        Optional settings; read from the environment when omitted.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Court Quotations", version=API_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.service = service

    def _get_service() -> QuotationService:
        svc: QuotationService | None = app.state.service
        if svc is not None:
            return svc
        from courtquote.api.deps import create_service_from_settings

        svc = create_service_from_settings(settings)
        app.state.service = svc
        return svc

    # ------------------------------------------------------------------
    # Public endpoints
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    @app.get("/api/quotations/sports-config")
    def get_sports_config() -> dict[str, Any]:
        return {"sports": sports_config()}

    @app.post("/api/quotations", status_code=201)
    def create_quotation(submission: QuotationSubmission) -> dict[str, Any]:
        try:
            quotation = _get_service().create(submission)
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc
        return {
            "success": True,
            "message": "Quotation generated successfully",
            "quotation": _dump(quotation),
        }

    @app.get("/api/quotations")
    def list_all_quotations() -> dict[str, Any]:
        return {
            "success": True,
            "quotations": [_dump(q) for q in _get_service().all()],
        }

    @app.get("/api/pricing")
    def get_pricing() -> dict[str, Any]:
        try:
            return _dump(_get_service().current_rate_table())
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc

    @app.put("/api/pricing")
    def update_pricing(table: RateTable) -> dict[str, Any]:
        updated = _get_service().update_rate_table(table)
        return _dump(updated)

    # ------------------------------------------------------------------
    # Admin endpoints
    # ------------------------------------------------------------------

    @app.get("/api/admin/dashboard")
    def dashboard() -> dict[str, Any]:
        return _dump(_get_service().dashboard())

    @app.get("/api/admin/quotations")
    def list_quotations(
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
    ) -> dict[str, Any]:
        status_filter: QuotationStatus | None = None
        if status and status != "all":
            try:
                status_filter = QuotationStatus(status)
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=f"Unknown status '{status}'") from exc
        return _dump(_get_service().list(status=status_filter, page=page, limit=limit))

    @app.get("/api/admin/quotations/{quotation_id}")
    def get_quotation(quotation_id: str) -> dict[str, Any]:
        try:
            return _dump(_get_service().get(quotation_id))
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc

    @app.get("/api/admin/quotations/{quotation_id}/pdf")
    def download_pdf(quotation_id: str) -> Response:
        try:
            filename, pdf = _get_service().render_pdf(quotation_id)
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.put("/api/admin/quotations/{quotation_id}/edit")
    def edit_quotation(quotation_id: str, edit: QuotationEdit) -> dict[str, Any]:
        try:
            quotation = _get_service().edit(quotation_id, edit)
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc
        return {"message": "Quotation updated successfully", "quotation": _dump(quotation)}

    @app.post("/api/admin/quotations/{quotation_id}/approve")
    def approve_quotation(
        quotation_id: str,
        body: ReviewNotes | None = None,
        x_admin_user: str = Header(default="admin"),
    ) -> dict[str, Any]:
        try:
            outcome = _get_service().approve(
                quotation_id, notes=body.notes if body else "", approved_by=x_admin_user
            )
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc
        return {
            "message": outcome.message,
            **_dump(outcome),
        }

    @app.post("/api/admin/quotations/{quotation_id}/reject")
    def reject_quotation(
        quotation_id: str,
        body: ReviewNotes | None = None,
        x_admin_user: str = Header(default="admin"),
    ) -> dict[str, Any]:
        try:
            quotation = _get_service().reject(
                quotation_id, notes=body.notes if body else "", rejected_by=x_admin_user
            )
        except CourtQuoteError as exc:
            raise _to_http(exc) from exc
        return {"message": "Quotation rejected successfully", "quotation": _dump(quotation)}

    return app
