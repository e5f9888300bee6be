"""Expense models."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from bson import ObjectId

from splitledger.utils.enums import SplitType
from splitledger.utils.money import as_number


@dataclass
class ParticipantShare:
    name: str
    user_id: Optional[ObjectId] = None
    amount: Optional[Decimal] = None
    percentage: Optional[Decimal] = None

    def to_json(self, users: Optional[Dict] = None) -> dict:
        data = {
            "user": self.name,
            "userId": str(self.user_id) if self.user_id else None,
            "amount": as_number(self.amount),
        }
        if self.percentage is not None:
            data["percentage"] = as_number(self.percentage)
        if users is not None:
            user = users.get(self.user_id)
            data["userEmail"] = user.email if user else None
        return data


@dataclass
class Expense:
    amount: Decimal
    description: str
    paid_by: str
    paid_by_user_id: ObjectId
    split_type: SplitType
    split_details: List[ParticipantShare]
    id: Optional[ObjectId] = None
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def share_for(self, user_id: ObjectId) -> Optional[ParticipantShare]:
        for detail in self.split_details:
            if detail.user_id == user_id:
                return detail
        return None

    def total_percentage(self) -> Decimal:
        return sum((d.percentage or Decimal(0) for d in self.split_details), Decimal(0))

    def to_json(self, users: Optional[Dict] = None) -> dict:
        data = {
            "_id": str(self.id) if self.id else None,
            "amount": as_number(self.amount),
            "description": self.description,
            "paidBy": self.paid_by,
            "paidByUserId": str(self.paid_by_user_id),
            "splitType": self.split_type.value,
            "date": self.date.isoformat(),
            "splitDetails": [d.to_json(users) for d in self.split_details],
        }
        if users is not None:
            payer = users.get(self.paid_by_user_id)
            data["paidByEmail"] = payer.email if payer else None
        return data
