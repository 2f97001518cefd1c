import sys, os
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from flask import Flask, render_template, flash, g, redirect, request, url_for
from sqlalchemy.exc import IntegrityError
from urllib.parse import urlparse
from config import Config
from extensions import csrf, db
from register_blueprints import register_blueprints

def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = "dev-change-me"  # flash and the session cookie need it

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    csrf.init_app(app)
    register_blueprints(app)

    # Model imports (so create_all sees every table)
    from modules.inventory.models import Product
    from modules.warehouse.models import StockTransaction
    from modules.users.models import User
    from modules.users.services import get_user, get_users

    from modules.auth.permissions import landing_page, menu_for
    from modules.auth.session import current_session, end_session

    with app.app_context():
        db.create_all()
        get_users()  # materialise the seed administrator

    @app.before_request
    def load_session_context():
        ctx = current_session()
        if ctx is not None and get_user(ctx.user_id) is None:
            app.logger.info("Dropping session of removed user %s", ctx.username)
            end_session()
            ctx = None
        g.session_ctx = ctx
        g.page_id = None

    @app.context_processor
    def inject_session():
        ctx = g.get("session_ctx")
        return {
            "current_user": ctx,
            "menu": menu_for(ctx),
            "active_page": g.get("page_id"),
        }

    @app.route('/')
    def index():
        page = landing_page(g.get("session_ctx"))
        if page is None:
            return redirect(url_for('auth.login'))
        return redirect(url_for(page.endpoint))

    # ── where to send the user after an error
    def _safe_redirect_target() -> str:
        path = (request.path or "").lower()
        if any(seg in path for seg in ("/create", "/edit")):
            return request.path  # GET of the same form
        ref = request.referrer
        if ref:
            ref_netloc = urlparse(ref).netloc
            if not ref_netloc or ref_netloc == request.host:
                return ref
        return url_for('index')

    # ── single IntegrityError handler
    def _integrity_error_handler(e):
        db.session.rollback()
        msg = str(getattr(e, "orig", e))
        app.logger.warning(f"IntegrityError caught: {msg}")

        if "UNIQUE constraint failed" in msg:
            flash('A record with this identifier already exists.', 'warning')
            return redirect(_safe_redirect_target()), 303

        flash('Data integrity violation. Check required fields.', 'warning')
        return redirect(_safe_redirect_target()), 303

    def _forbidden(e):
        return render_template('errors/message.html', title='Access denied', code=403), 403

    def _not_found(e):
        return render_template('errors/message.html', title='Page not found', code=404), 404

    app.register_error_handler(IntegrityError, _integrity_error_handler)
    app.register_error_handler(403, _forbidden)
    app.register_error_handler(404, _not_found)

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='127.0.0.1', port=5001, debug=True)
