from modules.inventory.models import UnitType
from modules.inventory.services import get_all_categories, get_product, get_product_by_barcode
from modules.users.models import Permission
from modules.users.services import ADMIN_ID, get_user, get_users
from modules.warehouse.models import TxType
from modules.warehouse.services import get_transactions


# ---------- AUTH / PERMISSIONS ----------

def test_anonymous_is_sent_to_login(client):
    r = client.get("/dashboard")
    assert r.status_code == 302
    assert "/login" in r.headers["Location"]

    r = client.get("/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/login")


def test_login_failure(login):
    r = login("admin", "wrong")
    assert r.status_code == 200
    assert b"Invalid username or password." in r.data


def test_admin_login_lands_on_dashboard(login, client):
    r = login()
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/dashboard")

    r = client.get("/dashboard")
    assert r.status_code == 200
    assert b"Admin panel" in r.data


def test_restricted_user_sees_only_permitted_pages(login, client, make_user):
    make_user(username="picker", password="pw", permissions=[Permission.OUTBOUND])

    r = login("picker", "pw")
    assert r.headers["Location"].endswith("/warehouse/out")

    assert client.get("/warehouse/out").status_code == 200
    assert client.get("/dashboard").status_code == 403
    assert client.get("/warehouse/in").status_code == 403
    assert client.get("/inventory/").status_code == 403
    assert client.get("/admin/users/").status_code == 403

    page = client.get("/warehouse/out").data
    assert b"Admin panel" not in page


def test_user_without_permissions_is_not_signed_in(login, client, make_user):
    make_user(username="idle", password="pw", permissions=[])

    r = login("idle", "pw")
    assert r.status_code == 200
    assert b"no permissions" in r.data
    assert client.get("/warehouse/out").status_code == 302


def test_logout_clears_session(login, client):
    login()
    r = client.post("/logout")
    assert r.status_code == 302
    assert client.get("/dashboard").status_code == 302


def test_removed_user_loses_access(app, login, client, make_user):
    clerk = make_user(username="clerk", password="pw", permissions=[Permission.OUTBOUND])
    clerk_client = app.test_client()
    clerk_client.post("/login", data={"username": "clerk", "password": "pw"})
    assert clerk_client.get("/warehouse/out").status_code == 200

    login()
    client.post(f"/admin/users/{clerk.id}/delete")

    r = clerk_client.get("/warehouse/out")
    assert r.status_code == 302
    assert "/login" in r.headers["Location"]


def test_unknown_page(login, client):
    login()
    assert client.get("/no/such/page").status_code == 404


# ---------- INBOUND ----------

def test_inbound_scan_modes(login, client, make_product):
    login()
    make_product(barcode="000111")

    r = client.get("/warehouse/in?barcode=000111")
    assert r.status_code == 200
    assert b"Product found! Enter the quantity." in r.data
    assert b"<svg" in r.data

    r = client.get("/warehouse/in?barcode=000999")
    assert r.status_code == 200
    assert b"New product! Fill in the details." in r.data


def test_inbound_new_product_scenario(login, client):
    login()
    r = client.get("/warehouse/in?barcode=000111")
    assert b"New product!" in r.data

    r = client.post("/warehouse/in", data={
        "barcode": "000111",
        "name": "Screws",
        "category": "__new__",
        "new_category": "Hardware",
        "unit": "piece",
        "quantity": "50",
    })
    assert r.status_code == 302

    product = get_product_by_barcode("000111")
    assert product.name == "Screws"
    assert product.quantity == 50
    assert "Hardware" in get_all_categories()

    journal = get_transactions()
    assert len(journal) == 1
    assert journal[0].tx_type is TxType.INBOUND
    assert journal[0].qty == 50
    assert journal[0].user == "admin"


def test_inbound_known_product_adds_quantity(login, client, make_product):
    login()
    product = make_product(quantity=10)

    r = client.post("/warehouse/in", data={"barcode": "000111", "quantity": "5"}, follow_redirects=True)
    assert b"Product quantity updated!" in r.data
    assert get_product(product.id).quantity == 15
    assert get_product(product.id).name == "Screws"


def test_inbound_rejects_missing_fields(login, client):
    login()
    r = client.post("/warehouse/in", data={
        "barcode": "000111",
        "name": "Screws",
        "category": "",
        "unit": "piece",
        "quantity": "5",
    })
    assert r.status_code == 400
    assert b"Fill in all fields!" in r.data
    assert get_product_by_barcode("000111") is None

    r = client.post("/warehouse/in", data={"barcode": "000111", "name": "Screws", "quantity": "0"})
    assert r.status_code == 400
    assert get_transactions() == []


def test_generate_barcode_redirects_to_new_product_form(login, client):
    login()
    r = client.get("/warehouse/in/generate")
    assert r.status_code == 302
    assert "barcode=" in r.headers["Location"]

    r = client.get(r.headers["Location"])
    assert b"New barcode generated." in r.data


def test_label_pdf(login, client, make_product):
    login()
    make_product()
    r = client.get("/warehouse/label?barcode=000111")
    assert r.status_code == 200
    assert r.mimetype == "application/pdf"
    assert r.data.startswith(b"%PDF")


# ---------- OUTBOUND ----------

def test_outbound_scan_not_found(login, client):
    login()
    r = client.get("/warehouse/out?barcode=404404")
    assert b"Product not found!" in r.data


def test_outbound_scenario(login, client, make_product):
    login()
    product = make_product(quantity=50)

    r = client.get("/warehouse/out?barcode=000111")
    assert b'id="available">50<' in r.data

    r = client.post(f"/warehouse/out/{product.id}", data={"amount": "60"}, follow_redirects=True)
    assert b"Not enough stock! Available: 50 pcs" in r.data
    assert get_product(product.id).quantity == 50
    assert get_transactions() == []

    r = client.post(f"/warehouse/out/{product.id}", data={"amount": "20"}, follow_redirects=True)
    assert b"Screws - 20 pcs dispatched." in r.data
    assert get_product(product.id).quantity == 30

    journal = get_transactions()
    assert len(journal) == 1
    assert journal[0].tx_type is TxType.OUTBOUND
    assert journal[0].qty == 20


def test_outbound_rejects_non_positive_amount(login, client, make_product):
    login()
    product = make_product(quantity=5)

    for amount in ("0", "-3", "abc"):
        r = client.post(f"/warehouse/out/{product.id}", data={"amount": amount}, follow_redirects=True)
        assert b"Invalid amount!" in r.data

    assert get_product(product.id).quantity == 5
    assert get_transactions() == []


# ---------- INVENTORY ----------

def test_inventory_search_and_filter(login, client, make_product):
    login()
    make_product(name="Screws", category="Hardware", barcode="000111")
    make_product(name="Wall paint", category="Paint", barcode="000222")

    r = client.get("/inventory/?search=screw")
    assert b"Screws" in r.data and b"Wall paint" not in r.data

    r = client.get("/inventory/?category=Paint")
    assert b"Wall paint" in r.data and b"Screws" not in r.data


def test_inventory_edit_keeps_quantity_and_warns_on_duplicate_barcode(login, client, make_product):
    login()
    make_product(name="Screws", category="Hardware", barcode="000111", quantity=4)
    nails = make_product(name="Nails", category="Hardware", barcode="000222", quantity=9)

    r = client.post(f"/inventory/{nails.id}/edit", data={
        "name": "Steel nails",
        "category": "Hardware",
        "unit": "kilogram",
        "barcode": "000111",
        "quantity": "-100",
    }, follow_redirects=True)

    assert b"is also used by" in r.data
    assert b"Product updated." in r.data
    stored = get_product(nails.id)
    assert stored.name == "Steel nails"
    assert stored.barcode == "000111"
    assert stored.quantity == 9
    assert stored.unit is UnitType.KILOGRAM


def test_inventory_edit_form_shows_current_values(login, client, make_product):
    login()
    product = make_product(name="Screws", barcode="000111", unit=UnitType.METER)

    r = client.get(f"/inventory/{product.id}/edit")
    assert r.status_code == 200
    assert b"Screws" in r.data
    assert b"000111" in r.data


def test_inventory_edit_unknown_product_redirects(login, client):
    login()
    r = client.get("/inventory/ghost/edit")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/inventory/")

    r = client.post("/inventory/ghost/edit", data={"name": "X"}, follow_redirects=True)
    assert b"Product not found." in r.data


# ---------- DASHBOARD ----------

def test_dashboard_figures(login, client, make_product):
    login()
    make_product(name="Screws", barcode="1", quantity=50)
    make_product(name="Paint", category="Paint", barcode="2", quantity=3)
    client.post("/warehouse/in", data={"barcode": "1", "quantity": "5"})

    r = client.get("/dashboard")
    assert r.status_code == 200
    assert b'id="total-items">2<' in r.data
    assert b'id="low-stock">1<' in r.data
    assert b'id="total-in">1<' in r.data
    assert b'id="total-out">0<' in r.data
    assert b"<svg" in r.data


# ---------- ADMIN USERS ----------

def test_admin_creates_user_with_permissions(login, client):
    login()
    r = client.post("/admin/users/create", data={
        "full_name": "Store Clerk",
        "username": "clerk",
        "password": "pw",
        "permissions": ["inbound", "outbound"],
    })
    assert r.status_code == 302

    clerk = next(u for u in get_users() if u.username == "clerk")
    assert clerk.permissions == [Permission.INBOUND, Permission.OUTBOUND]

    r = client.post("/admin/users/create", data={
        "full_name": "Another", "username": "clerk", "password": "x", "permissions": ["dashboard"],
    })
    assert b"is already taken" in r.data


def test_admin_account_cannot_be_deleted(login, client):
    login()
    r = client.post(f"/admin/users/{ADMIN_ID}/delete", follow_redirects=True)
    assert b"cannot be deleted" in r.data
    assert get_user(ADMIN_ID) is not None


def test_admin_deletes_regular_user(login, client, make_user):
    login()
    user = make_user()
    r = client.post(f"/admin/users/{user.id}/delete", follow_redirects=True)
    assert b"Employee deleted." in r.data
    assert get_user(user.id) is None


def test_edit_user_keeps_password_when_blank(login, client, make_user):
    login()
    user = make_user(password="secret")

    r = client.post(f"/admin/users/{user.id}/edit", data={
        "full_name": "Senior Clerk",
        "username": "clerk",
        "password": "",
        "permissions": ["inventory"],
    })
    assert r.status_code == 302

    stored = get_user(user.id)
    assert stored.full_name == "Senior Clerk"
    assert stored.password == "secret"
    assert stored.permissions == [Permission.INVENTORY]


def test_admin_login_cannot_be_renamed(login, client):
    login()
    r = client.post(f"/admin/users/{ADMIN_ID}/edit", data={
        "full_name": "Boss", "username": "boss", "password": "", "permissions": ["admin"],
    })
    assert b"cannot be changed" in r.data
    assert get_user(ADMIN_ID).username == "admin"
