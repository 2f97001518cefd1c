from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from extensions import db
from modules.auth.permissions import permission_required
from modules.users.forms import PERMISSION_LABELS, UserForm
from modules.users.models import Permission, User
from modules.users.services import ADMIN_USERNAME, delete_user, get_user, get_users, save_user

users_bp = Blueprint('users', __name__, url_prefix='/admin/users', template_folder='templates')


def _username_taken(username, exclude_id=None):
    return any(u.username == username and u.id != exclude_id for u in get_users())


def _render_form(form, user=None):
    title = 'Edit employee' if user else 'New employee'
    return render_template('users/form.html', form=form, user=user, title=title)


@users_bp.route('/')
@permission_required('admin_users')
def index():
    return render_template(
        'users/index.html',
        users=get_users(),
        labels=PERMISSION_LABELS,
        admin_username=ADMIN_USERNAME,
    )


# ➕ New employee
@users_bp.route('/create', methods=['GET', 'POST'])
@permission_required('admin_users')
def create():
    form = UserForm()
    if form.validate_on_submit():
        username = form.username.data.strip()
        if not form.password.data:
            flash('Password is required for a new employee.', 'danger')
            return _render_form(form)
        if _username_taken(username):
            flash(f"Login '{username}' is already taken.", 'danger')
            return _render_form(form)

        user = User(
            username=username,
            password=form.password.data,
            full_name=form.full_name.data.strip(),
        )
        user.permissions = [Permission(p) for p in form.permissions.data]
        try:
            save_user(user)
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Create User failed")
            flash('Could not save the employee.', 'danger')
            return _render_form(form)

        flash('Employee added.', 'success')
        return redirect(url_for('users.index'))

    if request.method == 'POST':
        current_app.logger.warning("UserForm POST errors=%s", dict(form.errors or {}))
    return _render_form(form)


# ✏️ Edit employee; empty password keeps the current one
@users_bp.route('/<user_id>/edit', methods=['GET', 'POST'])
@permission_required('admin_users')
def edit(user_id):
    user = get_user(user_id)
    if user is None:
        flash('User not found.', 'warning')
        return redirect(url_for('users.index'))

    form = UserForm(obj=user)
    if request.method == 'GET':
        form.password.data = ''
        form.permissions.data = [p.value for p in user.permissions]

    if form.validate_on_submit():
        username = form.username.data.strip()
        if user.username == ADMIN_USERNAME and username != ADMIN_USERNAME:
            flash('The main administrator login cannot be changed.', 'danger')
            return _render_form(form, user)
        if _username_taken(username, exclude_id=user.id):
            flash(f"Login '{username}' is already taken.", 'danger')
            return _render_form(form, user)

        user.username = username
        user.full_name = form.full_name.data.strip()
        if form.password.data:
            user.password = form.password.data
        user.permissions = [Permission(p) for p in form.permissions.data]
        try:
            save_user(user)
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Update User failed")
            flash('Could not save changes.', 'danger')
            return _render_form(form, user)

        flash('Changes saved. They apply from the next sign-in.', 'success')
        return redirect(url_for('users.index'))

    return _render_form(form, user)


# 🗑️ Delete employee (the main administrator is permanent)
@users_bp.route('/<user_id>/delete', methods=['POST'])
@permission_required('admin_users')
def delete(user_id):
    user = get_user(user_id)
    if user is None:
        flash('User not found.', 'warning')
    elif delete_user(user_id):
        flash('Employee deleted.', 'info')
    else:
        flash('The main administrator cannot be deleted.', 'warning')
    return redirect(url_for('users.index'))
