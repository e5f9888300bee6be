"""Export Service - flattens expenses into one row per participant."""
import csv
import io
from typing import Dict, List

from bson import ObjectId

from splitledger.expenses.models import Expense
from splitledger.users.model import User
from splitledger.utils.money import as_number

HEADERS = [
    "Expense ID",
    "Amount",
    "Description",
    "Paid By",
    "Paid By User ID",
    "Paid By Email",
    "Split Type",
    "Date",
    "User",
    "User ID",
    "User Email",
    "Split Amount",
    "Percentage",
]


class ExportService:

    @classmethod
    def rows(cls, expenses: List[Expense], users: Dict[ObjectId, User]) -> List[Dict]:
        rows = []
        for expense in expenses:
            payer = users.get(expense.paid_by_user_id)
            for detail in expense.split_details:
                user = users.get(detail.user_id)
                rows.append(dict(zip(HEADERS, [
                    str(expense.id),
                    as_number(expense.amount),
                    expense.description,
                    expense.paid_by,
                    str(expense.paid_by_user_id),
                    payer.email if payer else None,
                    expense.split_type.value,
                    expense.date.isoformat(),
                    detail.name,
                    str(detail.user_id),
                    user.email if user else None,
                    as_number(detail.amount),
                    as_number(detail.percentage),
                ])))
        return rows

    @classmethod
    def to_csv(cls, rows: List[Dict]) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=HEADERS, lineterminator="\n")
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue()
