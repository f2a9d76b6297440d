"""Quotation PDF renderer — writes an approved quotation as an A4 document."""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from typing import TYPE_CHECKING

import fitz  # type: ignore[import-untyped]

from courtquote.exceptions import DocumentRenderingError
from courtquote.formatting import format_indian_number, format_label

if TYPE_CHECKING:
    from courtquote.models.pricing import CourtPricing
    from courtquote.models.quotation import Quotation
    from courtquote.models.requirements import CourtRequirement
    from courtquote.settings import Settings

logger = logging.getLogger(__name__)

_PAGE = fitz.paper_rect("a4")
_MARGIN = 40.0
_HEADER_HEIGHT = 50.0
_FOOTER_HEIGHT = 30.0
_BRAND = (0.957, 0.259, 0.216)
_WHITE = (1, 1, 1)
_BLACK = (0, 0, 0)
_GREY = (0.4, 0.4, 0.4)
_RULE = (0.2, 0.2, 0.2)

_REGULAR = "helv"
_BOLD = "hebo"

TERMS: tuple[str, ...] = (
    "This quotation is valid for 30 days from the date of issue",
    "Prices are subject to change without prior notice",
    "50% advance payment required to commence work",
    "Balance payment upon completion of project",
    "Installation timeline: 4-6 weeks from advance payment",
    "Warranty: 1 year on materials and workmanship",
)

# (label, bucket field) in the order they are printed.
_PRICE_ROWS: tuple[tuple[str, str], ...] = (
    ("Subbase Construction", "subbase_cost"),
    ("Flooring System", "flooring_cost"),
    ("Sports Equipment", "equipment_cost"),
    ("Fencing System", "fencing_cost"),
    ("Lighting System", "lighting_cost"),
    ("Drainage System", "drainage_cost"),
    ("Edgewall Construction", "edgewall_cost"),
)


@dataclass
class _Cursor:
    page: fitz.Page
    y: float


class QuotationRenderer:
    """Renders quotations to PDF bytes with PyMuPDF."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def render(self, quotation: Quotation) -> bytes:
        """Render *quotation* as a paginated A4 PDF.

        Raises
        ------
        DocumentRenderingError
            If PyMuPDF fails to lay out or serialize the document.
        """
        try:
            doc = fitz.open()
            try:
                self._layout(doc, quotation)
                self._decorate_pages(doc)
                data = doc.tobytes()
            finally:
                doc.close()
        except Exception as exc:
            msg = f"Failed to render quotation {quotation.quotation_number}: {exc}"
            raise DocumentRenderingError(msg) from exc
        logger.info(
            "Rendered quotation %s (%d bytes)", quotation.quotation_number, len(data)
        )
        return data

    @staticmethod
    def filename(quotation: Quotation) -> str:
        return f"Quotation_{quotation.quotation_number}.pdf"

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _layout(self, doc: fitz.Document, quotation: Quotation) -> None:
        cursor = self._new_page(doc)
        width = _PAGE.width

        self._text(cursor, "QUOTATION FOR SPORTS COURT CONSTRUCTION", 13, bold=True, align="center")
        cursor.y += 20
        issued = quotation.approved_at or quotation.created_at
        self._text(cursor, f"Ref. No: {quotation.quotation_number}", 9)
        self._text(cursor, f"Date: {issued:%d/%m/%Y}", 9, align="right")
        cursor.y += 13
        self._text(cursor, f"Status: {quotation.status.value.upper()}", 9)
        cursor.y += 24

        client = quotation.client_info
        self._heading(doc, cursor, "CLIENT DETAILS:")
        self._line(doc, cursor, f"Name: {client.name or 'N/A'}")
        self._line(doc, cursor, f"Email: {client.email or 'N/A'}")
        self._line(doc, cursor, f"Phone: {client.phone or 'N/A'}")
        self._paragraph(doc, cursor, f"Address: {client.address or 'N/A'}")
        cursor.y += 10

        project = quotation.project_info
        construction = (project.construction_type or "standard").upper()
        self._heading(doc, cursor, "PROPOSAL DETAILS:")
        self._line(doc, cursor, f"Proposal for {project.sport_names} {construction}")
        self._line(doc, cursor, f"Area: {project.area:g} sq. meters")
        self._line(doc, cursor, f"Perimeter: {project.perimeter:g} meters")
        cursor.y += 10

        self._heading(doc, cursor, "CONSTRUCTION REQUIREMENTS:")
        requirements = quotation.requirements
        details = {court.court_key: court for court in quotation.pricing.courts}
        if requirements.is_multi_court:
            for position, (key, court) in enumerate(requirements.courts(), start=1):
                self._ensure_space(doc, cursor, 70)
                self._line(doc, cursor, court.label(position), bold=True)
                self._court_lines(doc, cursor, court, details.get(key))
                cursor.y += 6
        else:
            self._court_lines(doc, cursor, requirements, details.get(None))
        cursor.y += 10

        self._ensure_space(doc, cursor, 60)
        self._heading(doc, cursor, "PRICE BREAKDOWN")
        self._text(cursor, "Description", 9, bold=True)
        self._text(cursor, "Amount (Rs.)", 9, bold=True, align="right")
        cursor.y += 6
        cursor.page.draw_line((_MARGIN, cursor.y), (width - _MARGIN, cursor.y), color=_RULE)
        cursor.y += 14

        pricing = quotation.pricing
        for label, field_name in _PRICE_ROWS:
            amount = getattr(pricing, field_name)
            if amount > 0:
                self._ensure_space(doc, cursor, 14)
                self._text(cursor, label, 9)
                self._text(cursor, format_indian_number(amount), 9, align="right")
                cursor.y += 14

        self._ensure_space(doc, cursor, 70)
        cursor.page.draw_line((_MARGIN, cursor.y), (width - _MARGIN, cursor.y), color=_RULE)
        cursor.y += 16
        self._total_row(cursor, "Subtotal:", pricing.subtotal, 9)
        self._total_row(cursor, "GST @18%:", pricing.gst_amount, 9)
        cursor.page.draw_line(
            (width - 200, cursor.y - 6), (width - _MARGIN, cursor.y - 6), color=_BRAND, width=2
        )
        cursor.y += 6
        self._total_row(cursor, "GRAND TOTAL:", pricing.grand_total, 11)

        if quotation.admin_notes:
            cursor.y += 14
            self._heading(doc, cursor, "SPECIAL NOTES:")
            self._paragraph(doc, cursor, quotation.admin_notes)

        cursor.y += 14
        self._heading(doc, cursor, "TERMS & CONDITIONS:")
        for term in TERMS:
            self._line(doc, cursor, f"- {term}", size=8)

    def _court_lines(
        self,
        doc: fitz.Document,
        cursor: _Cursor,
        court: CourtRequirement,
        detail: CourtPricing | None = None,
    ) -> None:
        subbase = format_label(court.subbase.type)
        if court.subbase.edgewall:
            subbase += " + Edgewall"
        if court.subbase.drainage.required:
            subbase += " + Drainage"
        fencing = format_label(court.fencing.type, "Yes") if court.fencing.required else "No"
        lighting = format_label(court.lighting.type, "Yes") if court.lighting.required else "No"
        if court.lighting.required and detail is not None and detail.lighting_poles:
            lighting += f" ({detail.lighting_poles} poles x {detail.lights_per_pole:g})"
        self._line(doc, cursor, f"Subbase: {subbase}", size=8)
        self._line(doc, cursor, f"Flooring: {format_label(court.flooring.type)}", size=8)
        self._line(doc, cursor, f"Fencing: {fencing}", size=8)
        self._line(doc, cursor, f"Lighting: {lighting}", size=8)
        if court.equipment:
            names = ", ".join(
                f"{format_label(item.name or item.id, 'Item')} x{item.quantity:g}"
                for item in court.equipment
            )
            self._paragraph(doc, cursor, f"Equipment: {names}", size=8)

    # ------------------------------------------------------------------
    # Drawing primitives
    # ------------------------------------------------------------------

    def _new_page(self, doc: fitz.Document) -> _Cursor:
        page = doc.new_page(width=_PAGE.width, height=_PAGE.height)
        s = self._settings
        page.draw_rect(fitz.Rect(0, 0, _PAGE.width, _HEADER_HEIGHT), color=None, fill=_BRAND)
        page.insert_text((_MARGIN, 24), s.company_name.upper(), fontsize=16, fontname=_BOLD, color=_WHITE)
        page.insert_text((_MARGIN, 38), s.company_tagline, fontsize=8, fontname=_REGULAR, color=_WHITE)
        contact_y = 16.0
        for detail in (s.company_phone, s.company_email, s.company_website):
            if detail:
                x = _PAGE.width - _MARGIN - fitz.get_text_length(detail, fontname=_REGULAR, fontsize=7)
                page.insert_text((x, contact_y), detail, fontsize=7, fontname=_REGULAR, color=_WHITE)
                contact_y += 10
        return _Cursor(page=page, y=_HEADER_HEIGHT + 30)

    def _decorate_pages(self, doc: fitz.Document) -> None:
        s = self._settings
        footer = " | ".join(
            part for part in (f"{s.company_name} - {s.company_tagline}", s.company_address) if part
        )
        contact = " | ".join(part for part in (s.company_phone, s.company_email, s.company_website) if part)
        total = doc.page_count
        for index, page in enumerate(doc, start=1):
            top = _PAGE.height - _FOOTER_HEIGHT
            page.draw_rect(fitz.Rect(0, top, _PAGE.width, _PAGE.height), color=None, fill=_BRAND)
            self._centered(page, footer, top + 12, 7, _WHITE)
            if contact:
                self._centered(page, contact, top + 22, 7, _WHITE)
            self._centered(page, f"Page {index} of {total}", top - 8, 8, _GREY)

    def _ensure_space(self, doc: fitz.Document, cursor: _Cursor, needed: float) -> None:
        if cursor.y + needed > _PAGE.height - _FOOTER_HEIGHT - 24:
            fresh = self._new_page(doc)
            cursor.page, cursor.y = fresh.page, fresh.y

    def _heading(self, doc: fitz.Document, cursor: _Cursor, text: str) -> None:
        self._ensure_space(doc, cursor, 40)
        self._text(cursor, text, 10, bold=True)
        cursor.y += 16

    def _line(
        self, doc: fitz.Document, cursor: _Cursor, text: str, size: float = 9, bold: bool = False
    ) -> None:
        self._ensure_space(doc, cursor, size + 6)
        self._text(cursor, text, size, bold=bold)
        cursor.y += size + 5

    def _paragraph(self, doc: fitz.Document, cursor: _Cursor, text: str, size: float = 9) -> None:
        # Helvetica averages about half an em per character.
        chars = max(int((_PAGE.width - 2 * _MARGIN) / (size * 0.5)), 20)
        for raw_line in text.splitlines() or [""]:
            for wrapped in textwrap.wrap(raw_line, chars) or [""]:
                self._line(doc, cursor, wrapped, size=size)

    def _total_row(self, cursor: _Cursor, label: str, amount: int, size: float) -> None:
        cursor.page.insert_text((_PAGE.width - 200, cursor.y), label, fontsize=size, fontname=_BOLD)
        self._text(cursor, format_indian_number(amount), size, bold=True, align="right")
        cursor.y += size + 6

    @staticmethod
    def _text(
        cursor: _Cursor, text: str, size: float, bold: bool = False, align: str = "left"
    ) -> None:
        font = _BOLD if bold else _REGULAR
        length = fitz.get_text_length(text, fontname=font, fontsize=size)
        if align == "right":
            x = _PAGE.width - _MARGIN - length
        elif align == "center":
            x = (_PAGE.width - length) / 2
        else:
            x = _MARGIN
        cursor.page.insert_text((x, cursor.y), text, fontsize=size, fontname=font, color=_BLACK)

    @staticmethod
    def _centered(page: fitz.Page, text: str, y: float, size: float, color: tuple[float, ...]) -> None:
        length = fitz.get_text_length(text, fontname=_REGULAR, fontsize=size)
        page.insert_text(((_PAGE.width - length) / 2, y), text, fontsize=size, fontname=_REGULAR, color=color)
