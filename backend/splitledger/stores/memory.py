"""In-process stores for tests and local runs without MongoDB."""

import copy
import threading
from typing import Dict, List

from bson import ObjectId

from splitledger.expenses.models import Expense
from splitledger.users.model import User

from .base import ExpenseStore, UserStore


class MemoryUserStore(UserStore):

    def __init__(self):
        self._users: Dict[ObjectId, User] = {}
        self._lock = threading.Lock()

    def _find(self, predicate):
        with self._lock:
            for user in self._users.values():
                if predicate(user):
                    return copy.deepcopy(user)
        return None

    def find_by_name(self, name):
        return self._find(lambda u: u.name == name)

    def find_by_id(self, user_id):
        return self._find(lambda u: u.id == user_id)

    def find_by_email(self, email):
        return self._find(lambda u: u.email == email)

    def create(self, user):
        stored = copy.deepcopy(user)
        stored.id = ObjectId()
        with self._lock:
            self._users[stored.id] = stored
        return copy.deepcopy(stored)

    def __len__(self):
        with self._lock:
            return len(self._users)


class MemoryExpenseStore(ExpenseStore):

    def __init__(self):
        self._expenses: List[Expense] = []
        self._lock = threading.Lock()

    def _insert(self, expense):
        stored = copy.deepcopy(expense)
        stored.id = ObjectId()
        with self._lock:
            self._expenses.append(stored)
        return copy.deepcopy(stored)

    def find_all(self):
        with self._lock:
            return copy.deepcopy(self._expenses)

    def __len__(self):
        with self._lock:
            return len(self._expenses)
