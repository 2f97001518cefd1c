# modules/auth/permissions.py
from collections import namedtuple
from functools import wraps

from flask import abort, current_app, flash, g, redirect, request, url_for

from modules.users.models import Permission

Page = namedtuple("Page", "id endpoint label permission")

# Sidebar order
PAGES = (
    Page("dashboard", "dashboard.index", "Dashboard", Permission.DASHBOARD),
    Page("inbound", "warehouse.stock_in", "Inbound", Permission.INBOUND),
    Page("outbound", "warehouse.stock_out", "Outbound", Permission.OUTBOUND),
    Page("inventory", "inventory.index", "Products", Permission.INVENTORY),
    Page("admin_users", "users.index", "Admin panel", Permission.ADMIN),
)
PAGES_BY_ID = {p.id: p for p in PAGES}
PAGE_BY_PERMISSION = {p.permission: p for p in PAGES}


def has_permission(ctx, permission) -> bool:
    if ctx is None:
        return False
    return Permission(permission) in ctx.permissions


def can_access(ctx, page_id) -> bool:
    page = PAGES_BY_ID.get(page_id)
    if page is None:
        return False
    return has_permission(ctx, page.permission)


def menu_for(ctx):
    return [p for p in PAGES if has_permission(ctx, p.permission)]


def landing_page(ctx):
    """Dashboard when allowed, otherwise the page of the first permission held."""
    if ctx is None:
        return None
    if has_permission(ctx, Permission.DASHBOARD):
        return PAGES_BY_ID["dashboard"]
    for perm in Permission:
        if perm in ctx.permissions:
            return PAGE_BY_PERMISSION[perm]
    return None


def permission_required(page_id):
    """View guard: anonymous -> login page, missing tag -> 403."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            ctx = g.get("session_ctx")
            if ctx is None:
                flash("Please sign in first.", "info")
                return redirect(url_for("auth.login", next=request.path))
            if not can_access(ctx, page_id):
                current_app.logger.warning("User %s denied access to %s", ctx.username, page_id)
                abort(403)
            g.page_id = page_id
            return view(*args, **kwargs)
        return wrapped
    return decorator
