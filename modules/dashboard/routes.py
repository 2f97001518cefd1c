from flask import Blueprint, current_app, render_template

from modules.auth.permissions import permission_required
from modules.dashboard.services import category_pie_svg, get_summary

dashboard_bp = Blueprint('dashboard', __name__, template_folder='templates')


@dashboard_bp.route('/dashboard')
@permission_required('dashboard')
def index():
    summary = get_summary(
        low_stock_threshold=current_app.config.get('LOW_STOCK_THRESHOLD', 10),
        recent_limit=current_app.config.get('RECENT_TRANSACTIONS_LIMIT', 10),
    )
    return render_template(
        'dashboard/index.html',
        summary=summary,
        chart=category_pie_svg(summary["categories"]),
    )
