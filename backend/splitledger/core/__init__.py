"""Core ledger services: participant resolution, split calculation, balances."""

from dataclasses import dataclass

from splitledger.stores.base import ExpenseStore, UserStore

from .balance_service import BalanceReader
from .expense_service import ExpenseService
from .export_service import ExportService
from .participant_service import ParticipantResolver
from .split_service import SplitCalculator


@dataclass
class LedgerServices:
    user_store: UserStore
    expense_store: ExpenseStore
    resolver: ParticipantResolver
    expenses: ExpenseService
    balances: BalanceReader

    @classmethod
    def build(cls, user_store, expense_store, email_domain="example.com",
              shadow_password="defaultpassword"):
        resolver = ParticipantResolver(user_store, email_domain, shadow_password)
        return cls(
            user_store=user_store,
            expense_store=expense_store,
            resolver=resolver,
            expenses=ExpenseService(user_store, expense_store, resolver),
            balances=BalanceReader(expense_store),
        )


__all__ = [
    "LedgerServices",
    "BalanceReader",
    "ExpenseService",
    "ExportService",
    "ParticipantResolver",
    "SplitCalculator",
]
