"""Store interfaces used by the ledger services."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, List, Optional

from bson import ObjectId

from splitledger.errors import ValidationError
from splitledger.expenses.models import Expense
from splitledger.users.model import User
from splitledger.utils.enums import SplitType


class UserStore(ABC):

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_id(self, user_id: ObjectId) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def create(self, user: User) -> User:
        """Persist a new user and return it with its assigned id."""
        pass


class ExpenseStore(ABC):

    def save(self, expense: Expense) -> Expense:
        """
        Persist an expense after re-checking its split invariants.

        Raises:
            ValidationError: percentage split whose percentages are not exactly 100
        """
        self.check_invariants(expense)
        return self._insert(expense)

    @staticmethod
    def check_invariants(expense: Expense) -> None:
        if expense.split_type == SplitType.PERCENTAGE:
            if expense.total_percentage() != Decimal(100):
                raise ValidationError("Percentages must add up to 100%")

    @abstractmethod
    def _insert(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    def find_all(self) -> List[Expense]:
        pass

    def find_by_participant(self, user_id: ObjectId) -> Iterable[Expense]:
        """Expenses containing user_id in their split details, in storage order."""
        return (e for e in self.find_all() if e.share_for(user_id) is not None)
