"""
Expense Service - expense creation and listing.

Responsibilities:
- Parse the create-expense request body
- Validate the split fully before any user is resolved or created
- Resolve payer and participants to user ids
- Calculate the split and persist the expense
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId

from splitledger.errors import NotFound, ValidationError
from splitledger.expenses.models import Expense, ParticipantShare
from splitledger.stores.base import ExpenseStore, UserStore
from splitledger.users.model import User
from splitledger.utils.money import optional_decimal, to_decimal

from .balance_service import parse_object_id
from .participant_service import ParticipantResolver
from .split_service import SplitCalculator

logger = logging.getLogger(__name__)


def _required_text(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} is required")
    return value


def parse_split_details(raw: Any) -> List[ParticipantShare]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("splitDetails must contain at least one participant")

    shares = []
    for detail in raw:
        if not isinstance(detail, dict):
            raise ValidationError("Each split detail must be an object")
        name = detail.get("user")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Every split detail needs a user name")
        shares.append(ParticipantShare(
            name=name,
            amount=optional_decimal(detail.get("amount"), "splitDetails.amount"),
            percentage=optional_decimal(detail.get("percentage"), "splitDetails.percentage"),
        ))
    return shares


class ExpenseService:

    def __init__(
        self,
        user_store: UserStore,
        expense_store: ExpenseStore,
        resolver: ParticipantResolver
    ):
        self.user_store = user_store
        self.expense_store = expense_store
        self.resolver = resolver

    def create_expense(self, payload: Dict[str, Any]) -> Expense:
        """
        Create an expense from a request body.

        Request body:
        {
            "amount": 90,
            "description": "Dinner",
            "paidBy": "Alice",
            "paidByUserId": "...",  // optional, resolved from paidBy when absent
            "splitType": "equal|exact|percentage",
            "splitDetails": [{"user": "Bob", "amount": 30, "percentage": 50}]
        }

        Every check runs before users are resolved, so a rejected request
        leaves no shadow accounts behind.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        amount = to_decimal(payload.get("amount"), "amount")
        if amount <= 0:
            raise ValidationError("amount must be greater than 0")
        description = _required_text(payload, "description")
        paid_by = _required_text(payload, "paidBy")

        split_type = SplitCalculator.parse_split_type(payload.get("splitType"))
        shares = parse_split_details(payload.get("splitDetails"))
        SplitCalculator.validate_shares(split_type, shares)

        paid_by_user_id = self._resolve_payer(paid_by, payload.get("paidByUserId"))
        resolved = self.resolver.resolve_shares(shares)
        split_details = SplitCalculator.compute_split(amount, split_type, resolved)

        expense = self.expense_store.save(Expense(
            amount=amount,
            description=description,
            paid_by=paid_by,
            paid_by_user_id=paid_by_user_id,
            split_type=split_type,
            split_details=split_details,
        ))
        logger.info(
            "Created %s expense %s of %s paid by %r among %d participants",
            split_type.value, expense.id, amount, paid_by, len(split_details)
        )
        return expense

    def _resolve_payer(self, paid_by: str, paid_by_user_id: Any) -> ObjectId:
        if paid_by_user_id in (None, ""):
            return self.resolver.resolve(paid_by)

        oid = parse_object_id(paid_by_user_id, "paidByUserId")
        if self.user_store.find_by_id(oid) is None:
            raise NotFound("Payer not found")
        return oid

    def list_expenses(self) -> List[Expense]:
        return self.expense_store.find_all()

    def user_directory(self, expenses: List[Expense]) -> Dict[ObjectId, User]:
        """Users referenced by the expenses, keyed by id."""
        ids = set()
        for expense in expenses:
            ids.add(expense.paid_by_user_id)
            ids.update(d.user_id for d in expense.split_details)

        users = {}
        for user_id in ids:
            user = self.user_store.find_by_id(user_id)
            if user:
                users[user_id] = user
        return users
