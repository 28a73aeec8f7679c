# backend/utils/labels.py
import io
import logging
from typing import Any

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import code128, eanbc
from reportlab.graphics.shapes import Drawing
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from utils.barcode import is_valid_ean13

logger = logging.getLogger(__name__)

LABEL_WIDTH = 60 * mm
LABEL_HEIGHT = 40 * mm
FONT_REGULAR_NAME = "Helvetica"
FONT_BOLD_NAME = "Helvetica-Bold"


def _draw_ean13(c: canvas.Canvas, code: str, x: float, y: float) -> None:
    # The widget computes the check digit itself from the 12-digit payload
    widget = eanbc.Ean13BarcodeWidget(code[:12])
    widget.barHeight = 14 * mm
    x0, y0, x1, y1 = widget.getBounds()
    drawing = Drawing(x1 - x0, y1 - y0)
    drawing.add(widget)
    renderPDF.draw(drawing, c, x - (x1 - x0) / 2, y)


def _draw_code128(c: canvas.Canvas, code: str, x: float, y: float) -> None:
    symbol = code128.Code128(code, barHeight=14 * mm, barWidth=0.3 * mm, humanReadable=True)
    symbol.drawOn(c, x - symbol.width / 2, y)


def render_label(item: Any) -> bytes:
    """
    Single printable label for a product or laptop:
    - name (truncated) and reference
    - sale price
    - EAN-13 symbol, or Code 128 when the stored barcode is free-form
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(LABEL_WIDTH, LABEL_HEIGHT))
    center = LABEL_WIDTH / 2

    c.setFont(FONT_BOLD_NAME, 8)
    c.drawCentredString(center, LABEL_HEIGHT - 6 * mm, (item.name or "")[:34])
    c.setFont(FONT_REGULAR_NAME, 6)
    c.drawCentredString(center, LABEL_HEIGHT - 9 * mm, f"Ref: {item.reference}")
    c.setFont(FONT_BOLD_NAME, 9)
    c.drawCentredString(center, LABEL_HEIGHT - 13.5 * mm, f"{(item.sale_price or 0.0):.2f}")

    code = (item.barcode or item.reference or "").strip()
    if is_valid_ean13(code):
        _draw_ean13(c, code, center, 3 * mm)
    elif code:
        _draw_code128(c, code, center, 4 * mm)
    else:
        logger.warning(f"Label for {item.reference} printed without barcode")

    c.showPage()
    c.save()
    return buffer.getvalue()
