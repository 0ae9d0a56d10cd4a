from flask import request, jsonify
from handbook.application.search.search_handbook import search_handbook
from . import v1_bp


@v1_bp.route("/search", methods=["GET"])
def search():
    results = search_handbook(query=request.args.get("q", ""))
    return jsonify({"results": results}), 200
