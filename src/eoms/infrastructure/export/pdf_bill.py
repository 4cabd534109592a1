"""PDF rendering of a monthly bill (fpdf2).

The built-in PDF fonts only cover Latin-1, so the rupee sign is written
as ``Rs.`` and any other character outside Latin-1 is replaced.
"""

from __future__ import annotations

import re
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from eoms.application.dto import BillDTO

HEADER_TEXT = "Electroplating Order Management System"
COLUMNS: list[tuple[str, int]] = [
    ("Order ID", 22),
    ("Item Name", 30),
    ("Material", 20),
    ("Plating Types", 32),
    ("Qty (kg)", 16),
    ("Rate/kg", 20),
    ("Item Total", 22),
    ("Order Date", 18),
]
HEADER_FILL = (67, 97, 238)
STRIPE_FILL = (242, 242, 242)


def _latin1(text: str) -> str:
    return text.replace("₹", "Rs. ").encode("latin-1", "replace").decode("latin-1")


def bill_filename(bill: BillDTO) -> str:
    safe_name = re.sub(r"[\\/:*?\"<>|]+", "_", bill.customer_name)
    return f"Bill_{safe_name}_{bill.month}.pdf"


class _BillDocument(FPDF):
    """Adds the running header and footer.

    While ``in_table`` is set, every new page also starts with the column
    headings, so long bills keep their titles after a page break.
    """

    in_table = False

    def header(self) -> None:
        self.set_font("Helvetica", size=10)
        self.set_text_color(40)
        self.cell(0, 6, HEADER_TEXT, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(4)
        if self.in_table:
            self.table_headings()

    def table_headings(self) -> None:
        self.set_font("Helvetica", "B", 9)
        self.set_fill_color(*HEADER_FILL)
        self.set_text_color(255)
        for title, width in COLUMNS:
            self.cell(width, 8, title, border=1, fill=True)
        self.ln()

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", size=10)
        self.set_text_color(40)
        self.cell(0, 10, f"Page {self.page_no()}")


def build_bill_document(bill: BillDTO) -> FPDF:
    """Lay out ``bill`` as a PDF document, ready for ``output()``."""
    pdf = _BillDocument()
    pdf.set_margins(15, 15, 15)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 18)
    pdf.set_text_color(0)
    pdf.cell(0, 10, "Monthly Bill", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_font("Helvetica", size=12)
    for line in (
        f"Customer: {bill.customer_name}",
        f"Phone: {bill.customer_phone}",
        f"Billing Month: {bill.month}",
    ):
        pdf.cell(0, 7, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(8)

    pdf.table_headings()
    pdf.in_table = True

    # Table body
    pdf.set_font("Helvetica", size=9)
    pdf.set_text_color(0)
    pdf.set_fill_color(*STRIPE_FILL)
    for index, row in enumerate(bill.rows):
        values = [
            row.order_id,
            row.item_name,
            row.material,
            row.plating_types,
            row.quantity,
            row.rate_per_kg,
            row.line_total,
            row.order_date,
        ]
        for value, (_, width) in zip(values, COLUMNS):
            pdf.cell(width, 7, _latin1(value), border=1, fill=index % 2 == 1)
        pdf.ln()
    pdf.in_table = False

    pdf.ln(6)
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 10, _latin1(f"Grand Total: ₹{bill.grand_total}"), align="R")
    return pdf


def render_bill_pdf(bill: BillDTO, path: Path) -> Path:
    """Write ``bill`` to ``path`` and return the path."""
    pdf = build_bill_document(bill)
    path.parent.mkdir(parents=True, exist_ok=True)
    pdf.output(str(path))
    return path
