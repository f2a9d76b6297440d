"""Quotation records and the payloads that create and modify them."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from courtquote.models.enums import QuotationStatus
from courtquote.models.pricing import PricingBreakdown, PricingOverride
from courtquote.models.requirements import IntakeModel, ProjectInfo, Requirements


class ClientInfo(IntakeModel):
    """Contact details captured in the first wizard step."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    purpose: str = ""

    @field_validator("name", "email", "phone", "address", "purpose", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()


class QuotationSubmission(IntakeModel):
    """Body of a client's quotation request."""

    client_info: ClientInfo = Field(default_factory=ClientInfo)
    project_info: ProjectInfo = Field(default_factory=ProjectInfo)
    requirements: Requirements = Field(default_factory=Requirements)

    @field_validator("client_info", "project_info", "requirements", mode="before")
    @classmethod
    def _record(cls, v: Any) -> Any:
        if v is None:
            return {}
        return v


class QuotationEdit(IntakeModel):
    """Admin edit payload; sections are shallow-merged into the record."""

    client_info: dict[str, Any] | None = None
    project_info: dict[str, Any] | None = None
    requirements: dict[str, Any] | None = None
    pricing: PricingOverride | None = None


class Quotation(BaseModel):
    """A persisted quotation.

    ``version`` increases on every write and is the compare-and-set token
    used to serialize concurrent status transitions.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    quotation_number: str
    client_info: ClientInfo
    project_info: ProjectInfo
    requirements: Requirements
    pricing: PricingBreakdown
    status: QuotationStatus = QuotationStatus.PENDING
    admin_notes: str = ""
    approved_at: datetime | None = None
    approved_by: str | None = None
    rejected_at: datetime | None = None
    rejected_by: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int = 1


class QuotationPage(BaseModel):
    """One page of a quotation listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quotations: list[Quotation]
    current_page: int
    total_pages: int
    total_quotations: int


class DashboardStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quotations_today: int
    total_quotations: int
    pending_quotations: int
    approved_quotations: int
    rejected_quotations: int


class ApprovalOutcome(BaseModel):
    """Result of approving a quotation, including delivery status."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quotation: Quotation
    email_sent: bool
    pdf_attached: bool
    recipient: str
    email_error: str | None = None
    pricing_recalculated: bool = True

    @property
    def message(self) -> str:
        if self.email_sent:
            return "Quotation approved and PDF sent to client via email!"
        return (
            "Quotation approved but email with PDF failed to send. "
            "Please contact the client manually."
        )
