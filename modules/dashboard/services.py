# modules/dashboard/services.py
from reportlab.graphics import renderSVG
from reportlab.graphics.charts.piecharts import Pie
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors

from modules.inventory.models import Product
from modules.inventory.services import category_counts, count_low_stock
from modules.warehouse.models import TxType
from modules.warehouse.services import count_transactions, get_transactions

PIE_COLORS = ['#34C759', '#32ADE6', '#FF9500', '#FF3B30', '#AF52DE']


def get_summary(low_stock_threshold=10, recent_limit=10):
    """
    Figures for the dashboard cards and the recent-movements table.
    Returns: {total_items, low_stock, total_in, total_out, categories, recent}
    """
    return {
        "total_items": Product.query.count(),
        "low_stock": count_low_stock(low_stock_threshold),
        "total_in": count_transactions(TxType.INBOUND),
        "total_out": count_transactions(TxType.OUTBOUND),
        "categories": category_counts(),
        "recent": get_transactions(limit=recent_limit),
    }


def category_pie_svg(counts, width=320, height=240):
    """Products per category as an inline SVG pie, or None when there is nothing to draw."""
    counts = [(name or "—", n) for name, n in counts if n > 0]
    if not counts:
        return None

    total = sum(n for _, n in counts)
    drawing = Drawing(width, height)
    pie = Pie()
    pie.x = width / 2 - 80
    pie.y = height / 2 - 80
    pie.width = pie.height = 160
    pie.data = [n for _, n in counts]
    pie.labels = [f"{name} {n * 100 / total:.0f}%" for name, n in counts]
    pie.simpleLabels = 1
    pie.slices.strokeWidth = 0
    for i in range(len(counts)):
        pie.slices[i].fillColor = colors.HexColor(PIE_COLORS[i % len(PIE_COLORS)])
    drawing.add(pie)

    svg = renderSVG.drawToString(drawing)
    start = svg.find('<svg')
    return svg[start:] if start >= 0 else svg
