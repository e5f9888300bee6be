"""Storage ports and their implementations."""

from .base import UserStore, ExpenseStore
from .memory import MemoryUserStore, MemoryExpenseStore
from .mongo import MongoUserStore, MongoExpenseStore

__all__ = [
    "UserStore",
    "ExpenseStore",
    "MemoryUserStore",
    "MemoryExpenseStore",
    "MongoUserStore",
    "MongoExpenseStore",
]
