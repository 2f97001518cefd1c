# modules/users/models.py

import enum

from extensions import db
from modules.inventory.models import new_id


class Permission(enum.Enum):
    DASHBOARD = "dashboard"
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    INVENTORY = "inventory"
    ADMIN = "admin"


class User(db.Model):
    __tablename__ = 'ombor_users'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    username = db.Column(db.String(64), nullable=False, index=True)
    password = db.Column(db.String(128), nullable=False)  # plain text, no hashing
    full_name = db.Column(db.String(255), nullable=False)

    # Format: ["dashboard", "inbound", ...]
    permissions_json = db.Column(db.JSON, nullable=False, default=list)

    @property
    def permissions(self) -> list:
        return [Permission(p) for p in (self.permissions_json or [])]

    @permissions.setter
    def permissions(self, values):
        self.permissions_json = [Permission(v).value for v in values]

    def __repr__(self):
        return f'<User {self.username}>'
