from modules.inventory.models import UnitType
from modules.inventory.services import get_all_categories, get_product_by_barcode
from modules.warehouse.barcodes import barcode_svg, generate_barcode, label_pdf
from modules.warehouse.intake import IntakeMode, receive, scan
from modules.warehouse.models import TxType
from modules.warehouse.services import get_transactions


def test_scan_modes(make_product):
    make_product(barcode="000111")

    assert scan("").mode is IntakeMode.IDLE
    assert scan("   ").mode is IntakeMode.IDLE

    known = scan("000111")
    assert known.mode is IntakeMode.KNOWN
    assert known.locked
    assert known.product.name == "Screws"

    new = scan(" 000999 ")
    assert new.mode is IntakeMode.NEW
    assert new.barcode == "000999"
    assert not new.locked
    assert new.product is None


def test_receive_new_product_creates_then_books_inbound(app):
    result = receive(scan("000111"), 50, name="Screws", category="Hardware", unit="piece", username="alice")

    assert result.ok and result.created
    product = get_product_by_barcode("000111")
    assert product.quantity == 50
    assert product.unit is UnitType.PIECE
    assert "Hardware" in get_all_categories()

    journal = get_transactions()
    assert len(journal) == 1
    assert journal[0].tx_type is TxType.INBOUND
    assert journal[0].qty == 50
    assert journal[0].user == "alice"


def test_receive_known_product_only_changes_quantity(make_product):
    make_product(barcode="000111", quantity=3)

    result = receive(scan("000111"), 4, name="Ignored", category="Ignored", unit="liter")

    assert result.ok and not result.created
    product = get_product_by_barcode("000111")
    assert product.quantity == 7
    assert product.name == "Screws"
    assert product.unit is UnitType.PIECE


def test_receive_rejects_incomplete_input(app):
    assert not receive(scan(""), 5).ok
    assert not receive(scan("000111"), 0, name="Screws", category="Hardware").ok
    assert not receive(scan("000111"), 5, name="Screws", category="").ok
    assert not receive(scan("000111"), 5, name=" ", category="Hardware").ok

    assert get_product_by_barcode("000111") is None
    assert get_transactions() == []


def test_generate_barcode_is_twelve_digits():
    for _ in range(20):
        code = generate_barcode()
        assert len(code) == 12 and code.isdigit()
        assert not code.startswith("0")


def test_barcode_rendering():
    svg = barcode_svg("000111")
    assert svg.startswith("<svg")

    pdf = label_pdf("000111", "Screws", "Hardware")
    assert pdf.read(4) == b"%PDF"
