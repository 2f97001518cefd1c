# tests/conftest.py
import pytest

from app import create_app
from config import Config
from extensions import db
from modules.inventory.models import Product, UnitType
from modules.inventory.services import save_product
from modules.users.models import Permission, User
from modules.users.services import save_user


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ADMIN_PASSWORD = "123"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username="admin", password="123", follow_redirects=False):
        return client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=follow_redirects,
        )
    return _login


@pytest.fixture
def make_product(app):
    def _make(name="Screws", category="Hardware", barcode="000111", quantity=0, unit=UnitType.PIECE, **kw):
        return save_product(Product(
            name=name, category=category, barcode=barcode, quantity=quantity, unit=unit, **kw
        ))
    return _make


@pytest.fixture
def make_user(app):
    def _make(username="clerk", password="pw", full_name="Store Clerk", permissions=(Permission.DASHBOARD,), **kw):
        user = User(username=username, password=password, full_name=full_name, **kw)
        user.permissions = list(permissions)
        return save_user(user)
    return _make
