# app/__init__.py
from __future__ import annotations

import importlib
import os

from flask import Flask, jsonify, redirect
from flask_cors import CORS

from .errors import register_error_handlers
from .extensions import ma
from .slots import SlotManager, repair_pool, waiting_pool
from .store import DocumentRepository, build_repository


def _load_config(app: Flask) -> None:
    """
    Load a config class via APP_CONFIG env var.
    Examples:
      APP_CONFIG=app.config.ProductionConfig
      APP_CONFIG=app.config.TestingConfig
      APP_CONFIG=app.config.DevelopmentConfig
    """
    cfg_path = os.getenv("APP_CONFIG", "app.config.ProductionConfig")
    module, _, cls = cfg_path.rpartition(".")
    if not module or not cls:
        raise RuntimeError(f"Invalid APP_CONFIG value: {cfg_path}")
    mod = importlib.import_module(module)
    app.config.from_object(getattr(mod, cls))


def create_app(overrides: dict | None = None, repository: DocumentRepository | None = None) -> Flask:
    app = Flask(__name__)
    app.url_map.strict_slashes = False

    # --- Config ---
    _load_config(app)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # --- Extensions ---
    CORS(app)
    ma.init_app(app)

    # --- Store (chosen once, shared by every handler) ---
    repo = repository or build_repository(app.config)
    app.extensions["repository"] = repo
    app.extensions["slot_managers"] = {
        "repair": SlotManager(repo, repair_pool(app.config["REPAIR_SLOT_COUNT"])),
        "waiting": SlotManager(repo, waiting_pool(app.config["WAITING_SLOT_COUNT"])),
    }
    app.logger.info("Store mode: %s", repo.mode)

    # --- Swagger UI (/docs) ---
    try:
        from flask_swagger_ui import get_swaggerui_blueprint

        SWAGGER_URL = "/docs"
        API_URL = "/swagger.json"
        swaggerui_bp = get_swaggerui_blueprint(
            SWAGGER_URL,
            API_URL,
            config={"app_name": "Repair Shop API"},
        )
        app.register_blueprint(swaggerui_bp, url_prefix=SWAGGER_URL)

        from app.swagger import swagger_spec

        @app.route("/swagger.json")
        def swagger_json():
            return jsonify(swagger_spec)

    except Exception as e:
        app.logger.warning("Swagger UI not configured: %s", e)

    # --- Blueprints ---
    from .blueprints.catalog.routes import parts_bp, part_types_bp, vehicle_types_bp
    from .blueprints.clients.routes import clients_bp
    from .blueprints.completions.routes import completions_bp, fin_reparation_bp
    from .blueprints.health.routes import health_bp
    from .blueprints.notifications.routes import notifications_bp
    from .blueprints.owners.routes import owners_bp
    from .blueprints.payments.routes import payments_bp
    from .blueprints.repairs.routes import repairs_bp
    from .blueprints.slots.routes import repair_slots_bp, waiting_slots_bp
    from .blueprints.vehicles.routes import vehicles_bp

    app.register_blueprint(vehicles_bp, url_prefix="/api/vehicles")
    app.register_blueprint(clients_bp, url_prefix="/api/clients")
    app.register_blueprint(owners_bp, url_prefix="/api/owners")
    app.register_blueprint(repairs_bp, url_prefix="/api/repairs")
    app.register_blueprint(completions_bp, url_prefix="/api/repair-completions")
    app.register_blueprint(fin_reparation_bp, url_prefix="/api/finReparation")
    app.register_blueprint(parts_bp, url_prefix="/api/parts")
    app.register_blueprint(part_types_bp, url_prefix="/api/part-types")
    app.register_blueprint(vehicle_types_bp, url_prefix="/api/vehicle-types")
    app.register_blueprint(payments_bp, url_prefix="/api/payments")
    app.register_blueprint(notifications_bp, url_prefix="/api/notifications")
    app.register_blueprint(repair_slots_bp, url_prefix="/api/slotReparation")
    app.register_blueprint(waiting_slots_bp, url_prefix="/api/slotAttente")
    app.register_blueprint(health_bp, url_prefix="/api")

    # --- Errors: every failure is {"error": message} ---
    register_error_handlers(app)

    @app.route("/", methods=["GET", "HEAD"])
    def root():
        return redirect("/docs", code=302)

    return app
