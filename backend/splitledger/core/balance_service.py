"""
Balance Reader - reads a user's owed amount back out of persisted expenses.

get_owed_amount returns the share from the FIRST expense (storage order)
the user appears in; it does not add up across expenses. get_total_owed
is the aggregate over every matching expense.
"""
from decimal import Decimal
from typing import Union

from bson import ObjectId

from splitledger.errors import InvalidIdentifier, NotFound
from splitledger.stores.base import ExpenseStore


def parse_object_id(value: Union[str, ObjectId], label: str = "user ID") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if not ObjectId.is_valid(value):
        raise InvalidIdentifier(f"Invalid {label}")
    return ObjectId(value)


class BalanceReader:

    def __init__(self, expense_store: ExpenseStore):
        self.expense_store = expense_store

    def get_owed_amount(self, user_id: Union[str, ObjectId]) -> Decimal:
        oid = parse_object_id(user_id)

        expense = next(iter(self.expense_store.find_by_participant(oid)), None)
        if expense is None:
            raise NotFound("No expenses found for this user")

        share = expense.share_for(oid)
        if share is None:
            raise NotFound("No amount found for this user")
        return share.amount

    def get_total_owed(self, user_id: Union[str, ObjectId]) -> Decimal:
        oid = parse_object_id(user_id)

        amounts = [
            expense.share_for(oid).amount
            for expense in self.expense_store.find_by_participant(oid)
        ]
        if not amounts:
            raise NotFound("No expenses found for this user")
        return sum(amounts, Decimal(0))
