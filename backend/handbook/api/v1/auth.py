from flask import request, jsonify
from flask_jwt_extended import create_access_token, jwt_required, get_jwt_identity
from handbook.models.user import User
from handbook.application.accounts.authenticate import authenticate
from handbook.application.accounts.register_user import register_user
from handbook.normalizers.user import normalize_user
from . import v1_bp


def issue_token(user):
    return create_access_token(
        identity=user.id,
        additional_claims={"email": user.email, "role": user.role},
    )


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400

    user = authenticate(email=email, password=password)
    if not user:
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify({
        "token": issue_token(user),
        "user": normalize_user(user)
    }), 200


@v1_bp.route("/auth/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    if not data.get("email") or not data.get("password"):
        return jsonify({"error": "Email and password are required"}), 400

    user = register_user(
        email=data["email"],
        password=data["password"],
        name=data.get("name"),
    )

    return jsonify({
        "token": issue_token(user),
        "user": normalize_user(user)
    }), 201


@v1_bp.route("/auth/verify", methods=["GET"])
@jwt_required()
def verify():
    user = User.query.filter_by(id=get_jwt_identity()).first_or_404(
        description="User not found"
    )
    return jsonify({"user": normalize_user(user)}), 200
