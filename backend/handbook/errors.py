from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from handbook.domain.invariants.exceptions import InvariantViolation
from handbook.extensions import jwt

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({"error": str(error)})
        response.status_code = 400
        return response

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        response = jsonify({"error": str(error)})
        response.status_code = 400
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({"error": error.description})
        response.status_code = error.code
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled error: %s", error)
        response = jsonify({"error": "Internal server error"})
        response.status_code = 500
        return response


def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": "Authorization required"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": "Invalid token"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401
