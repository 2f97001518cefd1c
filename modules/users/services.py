# modules/users/services.py
from flask import current_app

from extensions import db
from modules.users.models import Permission, User

# Any user carrying this username is exempt from deletion
ADMIN_USERNAME = "admin"
ADMIN_ID = "admin_1"


def _seed_admin() -> User:
    admin = User(
        id=ADMIN_ID,
        username=ADMIN_USERNAME,
        password=current_app.config.get("ADMIN_PASSWORD", "123"),
        full_name="Head Administrator",
    )
    admin.permissions = list(Permission)
    db.session.add(admin)
    db.session.commit()
    current_app.logger.info("Seeded default administrator '%s'", ADMIN_USERNAME)
    return admin


def get_users():
    """All users; the seed administrator is written on first access to an empty table."""
    users = User.query.order_by(User.username.asc()).all()
    if not users:
        return [_seed_admin()]
    return users


def get_user(user_id):
    if not user_id:
        return None
    get_users()
    return db.session.get(User, user_id)


def save_user(user: User) -> User:
    merged = db.session.merge(user)
    db.session.commit()
    return merged


def delete_user(user_id) -> bool:
    """Returns False when nothing was removed (unknown id or the protected admin)."""
    user = get_user(user_id)
    if user is None:
        return False
    if user.username == ADMIN_USERNAME:
        current_app.logger.warning("Refused to delete protected account '%s'", user.username)
        return False
    db.session.delete(user)
    db.session.commit()
    return True


def login_user(username, password):
    """Exact username and password match, otherwise None."""
    for user in get_users():
        if user.username == username and user.password == password:
            return user
    return None
