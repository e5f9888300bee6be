"""
MongoDB stores.

Users live in the ``users`` collection, expenses in ``expenses``. Money
values are stored as Decimal128 so split amounts round-trip exactly.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo.errors import PyMongoError

from splitledger.errors import StorageError
from splitledger.expenses.models import Expense, ParticipantShare
from splitledger.users.model import ShadowUser, User
from splitledger.utils.enums import SplitType

from .base import ExpenseStore, UserStore

logger = logging.getLogger(__name__)


def _to_db_decimal(value: Optional[Decimal]) -> Optional[Decimal128]:
    return None if value is None else Decimal128(value)


def _from_db_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value))


def user_to_document(user: User) -> Dict[str, Any]:
    return {
        "name": user.name,
        "email": user.email,
        "password_hash": user.password_hash,
        "mobile": user.mobile,
        "is_shadow": user.is_shadow,
        "created_at": user.created_at,
    }


def user_from_document(doc: Dict[str, Any]) -> User:
    cls = ShadowUser if doc.get("is_shadow") else User
    return cls(
        id=doc["_id"],
        name=doc["name"],
        email=doc.get("email"),
        password_hash=doc.get("password_hash"),
        mobile=doc.get("mobile"),
        created_at=doc.get("created_at"),
    )


def expense_to_document(expense: Expense) -> Dict[str, Any]:
    return {
        "amount": _to_db_decimal(expense.amount),
        "description": expense.description,
        "paid_by": expense.paid_by,
        "paid_by_user_id": expense.paid_by_user_id,
        "split_type": expense.split_type.value,
        "date": expense.date,
        "split_details": [
            {
                "user": d.name,
                "user_id": d.user_id,
                "amount": _to_db_decimal(d.amount),
                "percentage": _to_db_decimal(d.percentage),
            }
            for d in expense.split_details
        ],
    }


def expense_from_document(doc: Dict[str, Any]) -> Expense:
    return Expense(
        id=doc["_id"],
        amount=_from_db_decimal(doc["amount"]),
        description=doc["description"],
        paid_by=doc["paid_by"],
        paid_by_user_id=doc["paid_by_user_id"],
        split_type=SplitType(doc["split_type"]),
        date=doc["date"],
        split_details=[
            ParticipantShare(
                name=d["user"],
                user_id=d["user_id"],
                amount=_from_db_decimal(d.get("amount")),
                percentage=_from_db_decimal(d.get("percentage")),
            )
            for d in doc.get("split_details", [])
        ],
    )


class MongoUserStore(UserStore):

    def __init__(self, db):
        self.collection = db.users

    def _find_one(self, query):
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("User lookup %s failed: %s", query, e)
            raise StorageError("User lookup failed") from e
        return user_from_document(doc) if doc else None

    def find_by_name(self, name):
        return self._find_one({"name": name})

    def find_by_id(self, user_id):
        return self._find_one({"_id": ObjectId(user_id)})

    def find_by_email(self, email):
        return self._find_one({"email": email})

    def create(self, user):
        try:
            result = self.collection.insert_one(user_to_document(user))
        except PyMongoError as e:
            logger.error("Creating user %r failed: %s", user.name, e)
            raise StorageError("Could not create user") from e
        user.id = result.inserted_id
        return user


class MongoExpenseStore(ExpenseStore):

    def __init__(self, db):
        self.collection = db.expenses

    def _insert(self, expense):
        try:
            result = self.collection.insert_one(expense_to_document(expense))
        except PyMongoError as e:
            logger.error("Saving expense %r failed: %s", expense.description, e)
            raise StorageError("Could not save expense") from e
        expense.id = result.inserted_id
        return expense

    def find_all(self):
        try:
            return [expense_from_document(doc) for doc in self.collection.find()]
        except PyMongoError as e:
            logger.error("Listing expenses failed: %s", e)
            raise StorageError("Could not load expenses") from e

    def find_by_participant(self, user_id):
        try:
            cursor = self.collection.find({"split_details.user_id": ObjectId(user_id)})
            return [expense_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Expense lookup for user %s failed: %s", user_id, e)
            raise StorageError("Could not load expenses") from e
