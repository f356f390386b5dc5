import io
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _render_pdf(pages: list[list[str]]) -> bytes:
    """Render a PDF with one drawn line per string, one list per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[[list[list[str]]], bytes]:
    return _render_pdf


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Two-page contract: termination for convenience on page 1, indemnity on page 2."""
    return _render_pdf(
        [
            ["This Agreement may be terminated for convenience by either party."],
            ["The vendor shall indemnify the client for any data breach."],
        ]
    )


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a single blank page."""
    return _render_pdf([[]])
