from bcrypt import checkpw, gensalt, hashpw
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from splitledger import get_services
from splitledger.errors import LedgerError
from splitledger.core.balance_service import parse_object_id
from splitledger.users.model import User

users_bp = Blueprint("users", __name__)


def _token_response(user, status=200):
    return jsonify({
        "_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "token": create_access_token(identity=str(user.id)),
    }), status


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@users_bp.route("/", methods=["POST"])
def register():
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    if not all(isinstance(data.get(k), str) and data[k] for k in ("name", "email", "password")):
        return jsonify({"error": "Missing required fields"}), 400

    store = get_services(current_app).user_store
    try:
        if store.find_by_email(data["email"]):
            return jsonify({"error": "User already exists"}), 400

        user = store.create(User(
            name=data["name"],
            email=data["email"],
            mobile=data.get("mobile"),
            password_hash=hashpw(data["password"].encode(), gensalt()),
        ))
    except LedgerError as e:
        return jsonify({"error": e.message}), e.status_code

    return _token_response(user, 201)


@users_bp.route("/login", methods=["POST"])
def login():
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    email = data.get("email")
    password = data.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        return jsonify({"error": "Email and password are required"}), 400

    try:
        user = get_services(current_app).user_store.find_by_email(email)
    except LedgerError as e:
        return jsonify({"error": e.message}), e.status_code

    # Shadow accounts only hold a placeholder credential
    if not user or user.is_shadow or not checkpw(password.encode(), user.password_hash):
        return jsonify({"error": "Invalid email or password"}), 401

    return _token_response(user)


@users_bp.route("/profile", methods=["GET"])
@jwt_required()
def profile():
    try:
        uid = parse_object_id(get_jwt_identity())
        user = get_services(current_app).user_store.find_by_id(uid)
    except LedgerError as e:
        return jsonify({"error": e.message}), e.status_code

    if not user:
        return jsonify({"error": "User not found"}), 404

    return jsonify(user.to_public())
