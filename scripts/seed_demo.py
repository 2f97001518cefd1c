import os
import sys

# --- make the project root importable ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # ../
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

# --- imports only after BASE_DIR is on the path ---
from app import create_app
from modules.inventory.models import Product, UnitType
from modules.inventory.services import get_product_by_barcode, save_product
from modules.warehouse.models import TxType
from modules.warehouse.services import update_stock

# (name, category, barcode, unit, opening stock)
DEMO_PRODUCTS = [
    ("Screws 4x40", "Hardware", "000111", UnitType.PIECE, 500),
    ("Wall paint, white", "Paint", "000222", UnitType.LITER, 40),
    ("Copper cable 2.5", "Electrical", "000333", UnitType.METER, 250),
    ("Cement M400", "Building materials", "000444", UnitType.KILOGRAM, 8),
    ("Ceramic tile 30x30", "Finishing", "000555", UnitType.SQUARE_METER, 60),
]


def main():
    app = create_app()
    with app.app_context():
        added = []
        for name, category, barcode, unit, qty in DEMO_PRODUCTS:
            if get_product_by_barcode(barcode) is not None:
                continue
            product = save_product(Product(name=name, category=category, barcode=barcode, unit=unit, quantity=0))
            update_stock(product.id, qty, TxType.INBOUND, "seed")
            added.append(name)
        print(f"Done. Added products: {added or 'none (already present)'}")


if __name__ == "__main__":
    main()
