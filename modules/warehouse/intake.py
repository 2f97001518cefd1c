# modules/warehouse/intake.py
"""
Barcode intake for inbound goods.

One scan/confirm cycle, nothing persisted between requests:

    idle --scan--> known  (product found: only quantity is editable)
                   new    (unknown code: all fields editable)

Confirming a known product books an inbound movement. Confirming a new one
creates the product with zero stock and then books the entered quantity as
an inbound movement, so the journal always explains the stock level.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from modules.inventory.models import Product, UnitType
from modules.inventory.services import get_product_by_barcode, save_product
from modules.warehouse.models import TxType
from modules.warehouse.services import update_stock


class IntakeMode(enum.Enum):
    IDLE = "idle"
    KNOWN = "known"
    NEW = "new"


@dataclass
class IntakeState:
    mode: IntakeMode
    barcode: str = ""
    product: Optional[Product] = None

    @property
    def locked(self) -> bool:
        """Name, category and unit are read-only for a known product."""
        return self.mode is IntakeMode.KNOWN


@dataclass
class IntakeResult:
    ok: bool
    product: Optional[Product] = None
    created: bool = False
    error: str = ""


def scan(barcode) -> IntakeState:
    code = (barcode or "").strip()
    if not code:
        return IntakeState(IntakeMode.IDLE)
    product = get_product_by_barcode(code)
    if product is not None:
        return IntakeState(IntakeMode.KNOWN, code, product)
    return IntakeState(IntakeMode.NEW, code)


def receive(state: IntakeState, quantity, name=None, category=None, unit=None, username=None) -> IntakeResult:
    if state.mode is IntakeMode.IDLE or not state.barcode:
        return IntakeResult(False, error="Scan or enter a barcode first.")
    if not quantity or quantity <= 0:
        return IntakeResult(False, error="Quantity must be a positive number.")

    if state.mode is IntakeMode.KNOWN:
        ok = update_stock(state.product.id, quantity, TxType.INBOUND, username)
        if not ok:
            return IntakeResult(False, state.product, error="Could not update stock.")
        return IntakeResult(True, state.product)

    name = (name or "").strip()
    category = (category or "").strip()
    if not name or not category:
        return IntakeResult(False, error="Fill in all fields!")

    product = save_product(Product(
        name=name,
        category=category,
        barcode=state.barcode,
        quantity=0,
        unit=UnitType(unit) if unit else UnitType.PIECE,
    ))
    ok = update_stock(product.id, quantity, TxType.INBOUND, username)
    if not ok:
        return IntakeResult(False, product, created=True, error="Product saved, but stock was not updated.")
    return IntakeResult(True, product, created=True)
