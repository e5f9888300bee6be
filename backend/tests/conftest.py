import pytest
from flask_jwt_extended import create_access_token

from splitledger import create_app, get_services
from splitledger.config import TestConfig
from splitledger.core import LedgerServices
from splitledger.stores import MemoryExpenseStore, MemoryUserStore


@pytest.fixture
def user_store():
    return MemoryUserStore()


@pytest.fixture
def expense_store():
    return MemoryExpenseStore()


@pytest.fixture
def services(user_store, expense_store):
    return LedgerServices.build(user_store, expense_store)


@pytest.fixture
def app(user_store, expense_store):
    return create_app(TestConfig, user_store=user_store, expense_store=expense_store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    from splitledger.users.model import User

    user = get_services(app).user_store.create(
        User(name="Tester", email="tester@example.org", password_hash=b"unused")
    )
    with app.app_context():
        token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}
