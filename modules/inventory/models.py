# modules/inventory/models.py

import enum
import uuid
from datetime import datetime

from extensions import db


def new_id() -> str:
    return uuid.uuid4().hex


class UnitType(enum.Enum):
    PIECE = "piece"
    KILOGRAM = "kilogram"
    LITER = "liter"
    METER = "meter"
    SQUARE_METER = "square_meter"

    @property
    def label(self) -> str:
        return UNIT_LABELS[self]


UNIT_LABELS = {
    UnitType.PIECE: "pcs",
    UnitType.KILOGRAM: "kg",
    UnitType.LITER: "l",
    UnitType.METER: "m",
    UnitType.SQUARE_METER: "sq.m",
}


class Product(db.Model):
    __tablename__ = 'ombor_products'

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False, default="")

    # Meant to be unique, but not enforced (see DESIGN.md)
    barcode = db.Column(db.String(64), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False, default=0)
    unit = db.Column(db.Enum(UnitType), nullable=False, default=UnitType.PIECE)
    price = db.Column(db.Float, nullable=True)
    last_updated = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    # insertion order, never changes after the first save
    created_seq = db.Column(db.Integer, nullable=False, default=0, index=True)

    def __repr__(self):
        return f'<Product {self.name} [{self.barcode}] qty={self.quantity}>'
