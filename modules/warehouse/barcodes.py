# modules/warehouse/barcodes.py
import random
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.graphics import renderSVG
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.lib.pagesizes import A6
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer


def generate_barcode(rng=random) -> str:
    """Random 12-digit code for goods that arrive without a label."""
    return str(rng.randint(100000000000, 999999999999))


def barcode_drawing(value: str, bar_height=15 * mm, bar_width=0.35 * mm):
    return createBarcodeDrawing(
        'Code128',
        value=value,
        barHeight=bar_height,
        barWidth=bar_width,
        humanReadable=True,
    )


def barcode_svg(value: str) -> str:
    """Inline SVG markup for the preview panel."""
    svg = renderSVG.drawToString(barcode_drawing(value))
    # drop the XML prolog/doctype so the markup can be embedded in HTML
    start = svg.find('<svg')
    return svg[start:] if start >= 0 else svg


def label_pdf(value: str, name: str = "", category: str = "") -> BytesIO:
    """Printable product label: name, barcode, category."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A6,
        leftMargin=8 * mm, rightMargin=8 * mm,
        topMargin=10 * mm, bottomMargin=10 * mm,
        title=f"Label {value}",
    )
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(escape(name or "Product name"), styles['Title']),
        Spacer(1, 4 * mm),
        barcode_drawing(value),
    ]
    if category:
        elements += [Spacer(1, 4 * mm), Paragraph(escape(category), styles['Normal'])]

    doc.build(elements)
    buffer.seek(0)
    return buffer
