import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo.errors import ServerSelectionTimeoutError

from splitledger import create_app, get_services
from splitledger.config import TestConfig
from splitledger.errors import StorageError, ValidationError
from splitledger.expenses.models import Expense, ParticipantShare
from splitledger.stores import MemoryExpenseStore, MemoryUserStore
from splitledger.stores.mongo import (
    MongoExpenseStore, MongoUserStore, expense_from_document, expense_to_document,
    user_from_document, user_to_document,
)
from splitledger.users.model import ShadowUser
from splitledger.utils.enums import SplitType


def _percentage_expense(*percentages):
    return Expense(
        amount=Decimal("100"),
        description="Groceries",
        paid_by="Alice",
        paid_by_user_id=ObjectId(),
        split_type=SplitType.PERCENTAGE,
        split_details=[
            ParticipantShare(name=f"P{i}", user_id=ObjectId(), amount=p, percentage=p)
            for i, p in enumerate(percentages)
        ],
    )


def test_save_rechecks_percentage_total(expense_store):
    with pytest.raises(ValidationError, match="Percentages must add up to 100%"):
        expense_store.save(_percentage_expense(Decimal("50"), Decimal("49")))

    assert len(expense_store) == 0


def test_save_accepts_percentages_summing_to_100(expense_store):
    saved = expense_store.save(_percentage_expense(Decimal("50"), Decimal("50")))

    assert saved.id is not None
    assert expense_store.find_all()[0].id == saved.id


def test_memory_store_keeps_insertion_order(expense_store):
    first = expense_store.save(_percentage_expense(Decimal("100")))
    second = expense_store.save(_percentage_expense(Decimal("100")))

    assert [e.id for e in expense_store.find_all()] == [first.id, second.id]


def test_memory_store_returns_copies(expense_store):
    expense_store.save(_percentage_expense(Decimal("100")))

    expense_store.find_all()[0].description = "changed"

    assert expense_store.find_all()[0].description == "Groceries"


def test_expense_document_stores_decimal128():
    expense = _percentage_expense(Decimal("33.5"), Decimal("66.5"))
    expense.date = datetime(2024, 5, 1, tzinfo=timezone.utc)
    doc = expense_to_document(expense)

    assert isinstance(doc["amount"], Decimal128)
    assert doc["split_details"][0]["percentage"] == Decimal128("33.5")

    doc["_id"] = ObjectId()
    loaded = expense_from_document(doc)
    assert loaded.split_type == SplitType.PERCENTAGE
    assert [d.percentage for d in loaded.split_details] == [Decimal("33.5"), Decimal("66.5")]


def test_user_document_keeps_shadow_flag():
    shadow = ShadowUser.for_name("Bob", "example.com", b"hash")
    doc = user_to_document(shadow)
    doc["_id"] = ObjectId()

    assert doc["is_shadow"] is True
    assert isinstance(user_from_document(doc), ShadowUser)


class _FailingCollection:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("no servers")
        return fail


class _FailingDb:
    users = _FailingCollection()
    expenses = _FailingCollection()


def test_mongo_failures_become_storage_errors():
    with pytest.raises(StorageError):
        MongoUserStore(_FailingDb()).find_by_name("Alice")

    with pytest.raises(StorageError):
        MongoExpenseStore(_FailingDb()).find_all()

    with pytest.raises(StorageError):
        MongoExpenseStore(_FailingDb()).save(_percentage_expense(Decimal("100")))


def test_memory_user_store_concurrent_create_and_lookup(user_store):
    def worker(n):
        for i in range(50):
            user_store.create(ShadowUser.for_name(f"user-{n}-{i}", "example.com", b"hash"))
            user_store.find_by_name(f"user-{n}-0")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(user_store) == 200
    assert user_store.find_by_name("user-3-49") is not None


def test_app_without_mongo_uri_uses_memory_stores():
    app = create_app(TestConfig)
    services = get_services(app)

    assert isinstance(services.user_store, MemoryUserStore)
    assert isinstance(services.expense_store, MemoryExpenseStore)
