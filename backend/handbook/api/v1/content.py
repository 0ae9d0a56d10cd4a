# handbook/api/v1/content.py
from dataclasses import asdict
from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from handbook.containers.editor import ContentDraft
from handbook.containers.renderer import render_item, to_html
from handbook.models.content_item import ContentItem
from handbook.application.cms.create_content import create_content as create_content_uc
from handbook.application.cms.update_content import update_content as update_content_uc
from handbook.application.cms.delete_content import delete_content as delete_content_uc
from handbook.application.stores import ServiceContentStore
from handbook.normalizers.container import normalize_container
from handbook.normalizers.content_item import normalize_content_item
from handbook.utils.decorators import roles_required
from . import v1_bp


def _get_item(item_id):
    return ContentItem.query.filter_by(id=item_id).first_or_404(
        description="Content not found"
    )


@v1_bp.route("/content", methods=["GET"])
@jwt_required()
def list_content():
    query = ContentItem.query

    section_id = request.args.get("section_id")
    if section_id:
        query = query.filter_by(section_id=section_id)

    items = query.order_by(ContentItem.created_at.desc()).all()
    return jsonify([normalize_content_item(i) for i in items]), 200


@v1_bp.route("/content/<item_id>", methods=["GET"])
@jwt_required()
def get_content(item_id):
    return jsonify(normalize_content_item(_get_item(item_id))), 200


@v1_bp.route("/content", methods=["POST"])
@jwt_required()
@roles_required("editor", "admin")
def create_content():
    data = request.get_json(silent=True) or {}
    item = create_content_uc(author_id=get_jwt_identity(), data=data)
    return jsonify(normalize_content_item(item)), 201


@v1_bp.route("/content/<item_id>", methods=["PUT"])
@jwt_required()
@roles_required("editor", "admin")
def update_content(item_id):
    data = request.get_json(silent=True) or {}
    item = update_content_uc(item_id=item_id, data=data)
    return jsonify(normalize_content_item(item)), 200


@v1_bp.route("/content/<item_id>", methods=["DELETE"])
@jwt_required()
@roles_required("editor", "admin")
def delete_content(item_id):
    delete_content_uc(item_id=item_id)
    return jsonify({"message": "Content deleted successfully"}), 200


# ------------------------
# Editing / display views
# ------------------------

@v1_bp.route("/content/<item_id>/edit", methods=["GET"])
@jwt_required()
@roles_required("editor", "admin")
def edit_content(item_id):
    """
    The item as the editor loads it: content repaired into its canonical
    shape, the form controls for it, and a type suggestion when the stored
    type does not match the content.
    """
    item = normalize_content_item(_get_item(item_id))
    draft = ContentDraft.load(item)

    return jsonify({
        "item": item,
        "container_type": draft.container_type,
        "content": draft.content,
        "suggested_type": draft.suggested_type(),
        "fields": [{**asdict(f), "name": f.name} for f in draft.form_fields()],
    }), 200


@v1_bp.route("/content/<item_id>/edit", methods=["POST"])
@jwt_required()
@roles_required("editor", "admin")
def save_edited_content(item_id):
    """
    Persist the repaired content shown by the GET view. With
    ``accept_suggestion`` the suggested type is adopted first.
    """
    data = request.get_json(silent=True) or {}
    draft = ContentDraft.load(normalize_content_item(_get_item(item_id)))

    if data.get("accept_suggestion"):
        draft.accept_suggestion()

    saved = draft.save(ServiceContentStore(actor_id=get_jwt_identity()))
    return jsonify(saved), 200


@v1_bp.route("/content/<item_id>/render", methods=["GET"])
def render_content_item(item_id):
    item = ContentItem.query.filter_by(id=item_id, published=True).first_or_404(
        description="Content not found"
    )

    tree = render_item(
        normalize_content_item(item),
        lambda _item_id: [normalize_container(c) for c in item.containers],
    )

    return jsonify({"tree": tree, "html": str(to_html(tree))}), 200
