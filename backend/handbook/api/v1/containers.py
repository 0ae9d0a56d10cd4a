from flask import request, jsonify
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import NotFound
from handbook.models.container_instance import ContainerInstance
from handbook.models.content_item import ContentItem
from handbook.application.cms.create_container import create_container as create_container_uc
from handbook.application.cms.update_container import update_container as update_container_uc
from handbook.application.cms.delete_container import delete_container as delete_container_uc
from handbook.application.stores import ServiceContainerStore
from handbook.containers.board import ContainerBoard
from handbook.normalizers.container import normalize_container
from handbook.utils.decorators import current_actor
from . import v1_bp


def _ordered_containers(item_id):
    return (
        ContainerInstance.query.filter_by(content_item_id=item_id)
        .order_by(ContainerInstance.order_index.asc())
        .all()
    )


@v1_bp.route("/content/<item_id>/containers", methods=["GET"])
def list_containers(item_id):
    ContentItem.query.filter_by(id=item_id).first_or_404(description="Content item not found")

    return jsonify([normalize_container(c) for c in _ordered_containers(item_id)]), 200


@v1_bp.route("/content/<item_id>/containers/<container_id>", methods=["GET"])
def get_container(item_id, container_id):
    container = ContainerInstance.query.filter_by(
        id=container_id, content_item_id=item_id
    ).first_or_404(description="Container not found")
    return jsonify(normalize_container(container)), 200


@v1_bp.route("/content/<item_id>/containers", methods=["POST"])
@jwt_required()
def create_container(item_id):
    data = request.get_json(silent=True) or {}
    actor_id, actor_role = current_actor()

    container = create_container_uc(
        item_id=item_id, actor_id=actor_id, actor_role=actor_role, data=data
    )
    return jsonify(normalize_container(container)), 201


@v1_bp.route("/content/<item_id>/containers/<container_id>", methods=["PUT"])
@jwt_required()
def update_container(item_id, container_id):
    data = request.get_json(silent=True) or {}
    actor_id, actor_role = current_actor()

    container = update_container_uc(
        item_id=item_id,
        container_id=container_id,
        actor_id=actor_id,
        actor_role=actor_role,
        data=data,
    )
    return jsonify(normalize_container(container)), 200


@v1_bp.route("/content/<item_id>/containers/<container_id>", methods=["DELETE"])
@jwt_required()
def delete_container(item_id, container_id):
    actor_id, actor_role = current_actor()
    delete_container_uc(
        item_id=item_id,
        container_id=container_id,
        actor_id=actor_id,
        actor_role=actor_role,
    )
    return jsonify({"message": "Container deleted successfully"}), 200


@v1_bp.route("/content/<item_id>/containers/<container_id>/move", methods=["POST"])
@jwt_required()
def move_container(item_id, container_id):
    """
    Swap a container with its neighbour. The pair is written with two
    separate updates, as the dashboard board does.
    """
    data = request.get_json(silent=True) or {}
    direction = data.get("direction")
    if direction not in ("up", "down"):
        raise ValueError("direction must be 'up' or 'down'")

    actor_id, actor_role = current_actor()
    board = ContainerBoard(
        ServiceContainerStore(actor_id=actor_id, actor_role=actor_role), item_id
    )

    entries = board.load()
    index = next((i for i, e in enumerate(entries) if e.id == container_id), None)
    if index is None:
        raise NotFound("Container not found")

    board.move(index, -1 if direction == "up" else 1)
    return jsonify([normalize_container(c) for c in _ordered_containers(item_id)]), 200
