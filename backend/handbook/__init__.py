import logging
import os

from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .cli import register_cli
from .errors import register_error_handlers, register_jwt_handlers
from flask_swagger_ui import get_swaggerui_blueprint


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Models must be imported before migrations or create_all see them
    from . import models  # noqa: F401

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api")
    register_error_handlers(app)
    register_jwt_handlers()

    register_cli(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC)
    # -------------------------------------------------
    @app.route("/openapi/handbook.yaml", methods=["GET"], endpoint="openapi_handbook")
    def serve_openapi():
        yaml_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "handbook_openapi.yaml",
        )

        if not os.path.exists(yaml_path):
            raise FileNotFoundError("handbook_openapi.yaml not found")

        return send_file(
            yaml_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/handbook.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Staff Handbook API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.debug("Staff handbook app created with %s config", config_name)
    return app
