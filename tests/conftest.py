import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

LEASE_TEXT = (
    "RESIDENTIAL LEASE AGREEMENT. This lease agreement is made between the landlord, "
    "Acme Properties LLC, and the tenant, Jane Doe. The parties hereby agree that the "
    "tenant shall pay rent of $1,500 per month for the premises at 12 Main Street. "
    "Either party may seek termination of this agreement upon breach. Section 4 covers "
    "the security deposit. Governing law is the State of California."
)


def _pdf(*pages: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for index, text in enumerate(pages):
        if index:
            c.showPage()
        if text:
            c.drawString(72, 720, text)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A minimal single-page PDF with known text content."""
    return _pdf("Lease agreement between landlord and tenant")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return _pdf("Page one: the tenant pays rent", "Page two: the landlord repairs")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with a blank page."""
    return _pdf("")


@pytest.fixture()
def lease_text() -> str:
    return LEASE_TEXT


@pytest.fixture()
def lease_bytes() -> bytes:
    return LEASE_TEXT.encode("utf-8")
