"""Tests for the QuotationRenderer — renders real PDFs and reads them back."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import fitz  # type: ignore[import-untyped]
import pytest

from courtquote.engine import PricingEngine
from courtquote.exceptions import DocumentRenderingError
from courtquote.models.enums import QuotationStatus
from courtquote.models.quotation import ClientInfo, Quotation
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import ProjectInfo, Requirements
from courtquote.services.renderer import TERMS, QuotationRenderer
from courtquote.settings import Settings

_CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_quotation(requirements: dict[str, Any] | None = None, **overrides: Any) -> Quotation:
    rates = RateTable(
        subbase={"concrete": 500.0},
        edgewall=200.0,
        flooring={"acrylic": 800.0},
        lighting={"standard": 5000.0},
    )
    project = ProjectInfo(area=420, perimeter=86, sport="basketball", construction_type="standard")
    reqs = Requirements.model_validate(
        requirements
        or {
            "subbase": {"type": "concrete", "edgewall": True},
            "flooring": {"type": "acrylic"},
            "lighting": {"required": True},
        }
    )
    data: dict[str, Any] = {
        "id": "abc123",
        "quotation_number": "QTN-00042",
        "client_info": ClientInfo(
            name="Asha Rao", email="asha@example.com", phone="98765", address="12 MG Road"
        ),
        "project_info": project,
        "requirements": reqs,
        "pricing": PricingEngine().compute(rates, project, reqs),
        "status": QuotationStatus.APPROVED,
        "approved_at": _CREATED,
        "created_at": _CREATED,
        "updated_at": _CREATED,
    }
    data.update(overrides)
    return Quotation(**data)


def _text(pdf: bytes) -> tuple[int, str]:
    doc = fitz.open(stream=pdf, filetype="pdf")
    try:
        return doc.page_count, "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


@pytest.fixture()
def renderer() -> QuotationRenderer:
    return QuotationRenderer(
        Settings(company_name="Acme Courts", company_phone="+91 98765 43210")
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestRender:
    def test_produces_pdf_with_quotation_details(self, renderer: QuotationRenderer) -> None:
        quotation = _make_quotation()
        pdf = renderer.render(quotation)

        assert pdf.startswith(b"%PDF")
        pages, text = _text(pdf)
        assert pages == 1
        assert "ACME COURTS" in text
        assert "QTN-00042" in text
        assert "01/03/2024" in text
        assert "Asha Rao" in text
        assert "BASKETBALL" in text
        assert "Page 1 of 1" in text

    def test_price_rows_and_totals(self, renderer: QuotationRenderer) -> None:
        quotation = _make_quotation()
        _, text = _text(renderer.render(quotation))

        assert "Subbase Construction" in text
        assert "Flooring System" in text
        # No fencing was requested, so the row is omitted.
        assert "Fencing System" not in text
        assert "GST @18%:" in text
        assert "GRAND TOTAL:" in text
        assert "Acrylic" in text

    def test_indian_grouping_in_totals(self, renderer: QuotationRenderer) -> None:
        quotation = _make_quotation()
        _, text = _text(renderer.render(quotation))
        # 420 m2 x 800 = 336000 flooring
        assert "3,36,000" in text

    def test_multi_court_requirements(self, renderer: QuotationRenderer) -> None:
        quotation = _make_quotation(
            {
                "courtRequirements": {
                    "basketball-1": {
                        "sport": "basketball",
                        "courtNumber": 1,
                        "subbase": {"type": "concrete"},
                        "flooring": {"type": "acrylic"},
                    },
                    "basketball-2": {
                        "sport": "basketball",
                        "courtNumber": 2,
                        "subbase": {"type": "concrete"},
                        "flooring": {"type": "acrylic"},
                        "fencing": {"required": True, "type": "weld_mesh"},
                    },
                }
            }
        )
        _, text = _text(renderer.render(quotation))
        assert "BASKETBALL - Court 1" in text
        assert "BASKETBALL - Court 2" in text
        assert "Weld Mesh" in text

    def test_unnumbered_courts_are_labelled_by_position(self, renderer: QuotationRenderer) -> None:
        court = {"sport": "tennis", "subbase": {"type": "concrete"}, "flooring": {"type": "acrylic"}}
        quotation = _make_quotation({"courtRequirements": {"a": court, "b": court}})
        _, text = _text(renderer.render(quotation))
        assert "TENNIS - Court 1" in text
        assert "TENNIS - Court 2" in text

    def test_lighting_line_shows_poles(self, renderer: QuotationRenderer) -> None:
        _, text = _text(renderer.render(_make_quotation()))
        # 86 m perimeter / 9.14 m spacing rounds up to 10 poles.
        assert "Lighting: Yes (10 poles x 2)" in text

    def test_notes_and_terms(self, renderer: QuotationRenderer) -> None:
        quotation = _make_quotation(admin_notes="Includes site levelling.")
        _, text = _text(renderer.render(quotation))
        assert "SPECIAL NOTES:" in text
        assert "Includes site levelling." in text
        assert TERMS[0] in text

    def test_long_content_paginates(self, renderer: QuotationRenderer) -> None:
        courts = {
            f"tennis-{n}": {
                "sport": "tennis",
                "courtNumber": n,
                "subbase": {"type": "concrete", "edgewall": True},
                "flooring": {"type": "acrylic"},
                "lighting": {"required": True},
            }
            for n in range(1, 21)
        }
        pdf = renderer.render(_make_quotation({"courtRequirements": courts}))
        pages, text = _text(pdf)
        assert pages > 1
        assert f"Page {pages} of {pages}" in text
        assert "TENNIS - Court 20" in text

    def test_failure_is_wrapped(
        self, renderer: QuotationRenderer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(*args: Any, **kwargs: Any) -> None:
            msg = "broken"
            raise RuntimeError(msg)

        monkeypatch.setattr(QuotationRenderer, "_layout", boom)
        with pytest.raises(DocumentRenderingError, match="QTN-00042"):
            renderer.render(_make_quotation())

    def test_filename(self) -> None:
        assert QuotationRenderer.filename(_make_quotation()) == "Quotation_QTN-00042.pdf"
