from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from sqlalchemy import func
from handbook.extensions import db
from handbook.models.content_item import ContentItem
from handbook.models.user import User
from handbook.application.accounts.register_user import create_user as create_account
from handbook.application.accounts.update_user import update_user as update_account
from handbook.application.accounts.delete_user import delete_user as delete_account
from handbook.normalizers.user import normalize_user
from handbook.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_users():
    rows = (
        db.session.query(User, func.count(ContentItem.id))
        .outerjoin(ContentItem, ContentItem.author_id == User.id)
        .group_by(User.id)
        .order_by(User.created_at.desc())
        .all()
    )

    return jsonify([
        normalize_user(user, content_count=count)
        for user, count in rows
    ]), 200


@v1_bp.route("/users", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_user():
    data = request.get_json(silent=True) or {}

    if not data.get("email") or not data.get("password"):
        return jsonify({"error": "Email and password are required"}), 400

    user = create_account(
        email=data["email"],
        password=data["password"],
        name=data.get("name"),
        role=data.get("role", "user"),
    )

    return jsonify(normalize_user(user)), 201


@v1_bp.route("/users/<user_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def update_user(user_id):
    data = request.get_json(silent=True) or {}
    user = update_account(user_id=user_id, data=data)
    return jsonify(normalize_user(user)), 200


@v1_bp.route("/users/<user_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_user(user_id):
    delete_account(user_id=user_id, actor_id=get_jwt_identity())
    return jsonify({"message": "User deleted successfully"}), 200
