# splitledger/expenses/routes.py

import logging

from flask import Blueprint, Response, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from splitledger import get_services
from splitledger.core import ExportService
from splitledger.errors import LedgerError
from splitledger.utils.money import as_number

logger = logging.getLogger(__name__)

expenses_bp = Blueprint("expenses", __name__)


def _error(e: LedgerError):
    return jsonify({"error": e.message}), e.status_code


@expenses_bp.route("/", methods=["POST"])
@jwt_required()
def add_expense():
    """Create an expense; see ExpenseService.create_expense for the body."""
    data = request.get_json(silent=True)

    try:
        expense = get_services(current_app).expenses.create_expense(data)
    except LedgerError as e:
        logger.warning("Rejected expense: %s", e.message)
        return _error(e)

    return jsonify(expense.to_json()), 201


@expenses_bp.route("/", methods=["GET"])
@jwt_required()
def get_all_expenses():
    service = get_services(current_app).expenses
    try:
        expenses = service.list_expenses()
        users = service.user_directory(expenses)
    except LedgerError as e:
        return _error(e)

    return jsonify([e.to_json(users) for e in expenses])


@expenses_bp.route("/download", methods=["GET"])
@jwt_required()
def download_balance_sheet():
    service = get_services(current_app).expenses
    try:
        expenses = service.list_expenses()
        rows = ExportService.rows(expenses, service.user_directory(expenses))
    except LedgerError as e:
        return _error(e)

    return Response(
        ExportService.to_csv(rows),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )


@expenses_bp.route("/<user_id>", methods=["GET"])
@jwt_required()
def get_user_expenses(user_id):
    try:
        amount = get_services(current_app).balances.get_owed_amount(user_id)
    except LedgerError as e:
        return _error(e)

    return jsonify({"amount": as_number(amount)})


@expenses_bp.route("/<user_id>/total", methods=["GET"])
@jwt_required()
def get_user_total(user_id):
    try:
        amount = get_services(current_app).balances.get_total_owed(user_id)
    except LedgerError as e:
        return _error(e)

    return jsonify({"amount": as_number(amount)})
