from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for

from modules.auth.forms import LoginForm
from modules.auth.permissions import landing_page
from modules.auth.session import end_session, start_session
from modules.users.services import login_user

auth_bp = Blueprint('auth', __name__, template_folder='templates')


def _safe_next(target):
    # relative paths only
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if g.get('session_ctx') is not None:
        page = landing_page(g.session_ctx)
        if page is not None:
            return redirect(url_for(page.endpoint))

    form = LoginForm()
    if form.validate_on_submit():
        user = login_user(form.username.data, form.password.data)
        if user is None:
            current_app.logger.warning("Failed login for '%s'", form.username.data)
            flash('Invalid username or password.', 'danger')
            return render_template('auth/login.html', form=form)

        ctx = start_session(user)
        page = landing_page(ctx)
        if page is None:
            end_session()
            flash('Your account has no permissions. Contact an administrator.', 'warning')
            return render_template('auth/login.html', form=form)

        current_app.logger.info("User '%s' signed in", user.username)
        return redirect(_safe_next(request.args.get('next')) or url_for(page.endpoint))

    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    ctx = g.get('session_ctx')
    end_session()
    g.session_ctx = None
    if ctx is not None:
        current_app.logger.info("User '%s' signed out", ctx.username)
    return redirect(url_for('auth.login'))
