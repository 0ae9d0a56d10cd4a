# handbook/api/v1/sections.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import func
from handbook.extensions import db
from handbook.models.content_item import ContentItem
from handbook.models.section import Section
from handbook.application.cms.create_section import create_section as create_section_uc
from handbook.application.cms.update_section import update_section as update_section_uc
from handbook.application.cms.delete_section import delete_section as delete_section_uc
from handbook.application.cms.move_section import move_section as move_section_uc
from handbook.normalizers.content_item import normalize_content_item
from handbook.normalizers.section import normalize_section
from handbook.utils.decorators import roles_required
from . import v1_bp


def _content_counts():
    rows = (
        db.session.query(ContentItem.section_id, func.count(ContentItem.id))
        .group_by(ContentItem.section_id)
        .all()
    )
    return dict(rows)


def _ordered_sections():
    return Section.query.order_by(Section.order_index.asc(), Section.name.asc()).all()


# ------------------------
# Reads (public)
# ------------------------

@v1_bp.route("/sections", methods=["GET"])
def list_sections():
    counts = _content_counts()
    return jsonify([
        normalize_section(s, content_count=counts.get(s.id, 0))
        for s in _ordered_sections()
    ]), 200


@v1_bp.route("/sections/<section_id>", methods=["GET"])
def get_section(section_id):
    section = Section.query.filter_by(id=section_id).first_or_404(
        description="Section not found"
    )
    return jsonify(normalize_section(section, content_count=len(section.content_items))), 200


@v1_bp.route("/sections/slug/<slug>", methods=["GET"])
def get_section_by_slug(slug):
    slug = slug.lower()
    section = next((s for s in _ordered_sections() if s.slug == slug), None)
    if section is None:
        return jsonify({"error": "Section not found"}), 404

    return jsonify(normalize_section(section, content_count=len(section.content_items))), 200


@v1_bp.route("/sections/<section_id>/content", methods=["GET"])
def list_section_content(section_id):
    """Published items only, in display order."""
    Section.query.filter_by(id=section_id).first_or_404(description="Section not found")

    items = (
        ContentItem.query.filter_by(section_id=section_id, published=True)
        .order_by(
            func.coalesce(ContentItem.order_index, 0).asc(),
            ContentItem.created_at.asc(),
        )
        .all()
    )
    return jsonify([normalize_content_item(i) for i in items]), 200


# ------------------------
# Writes (editor / admin)
# ------------------------

@v1_bp.route("/sections", methods=["POST"])
@jwt_required()
@roles_required("editor", "admin")
def create_section():
    data = request.get_json(silent=True) or {}
    section = create_section_uc(data=data)
    return jsonify(normalize_section(section, content_count=0)), 201


@v1_bp.route("/sections/<section_id>", methods=["PUT"])
@jwt_required()
@roles_required("editor", "admin")
def update_section(section_id):
    data = request.get_json(silent=True) or {}
    section = update_section_uc(section_id=section_id, data=data)
    return jsonify(normalize_section(section)), 200


@v1_bp.route("/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@roles_required("editor", "admin")
def delete_section(section_id):
    delete_section_uc(section_id=section_id)
    return jsonify({"message": "Section deleted successfully"}), 200


@v1_bp.route("/sections/<section_id>/move", methods=["POST"])
@jwt_required()
@roles_required("editor", "admin")
def move_section(section_id):
    data = request.get_json(silent=True) or {}
    sections = move_section_uc(section_id=section_id, direction=data.get("direction"))
    return jsonify([normalize_section(s) for s in sections]), 200
