import logging

from flask import Flask
from calorie_tracker.extensions import db, cors
from flask_migrate import Migrate
from calorie_tracker.routes import register_routes
from config import engine_options_for


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object("config.Config")

    if test_config:
        app.config.update(test_config)
        if "SQLALCHEMY_ENGINE_OPTIONS" not in test_config:
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options_for(
                app.config["SQLALCHEMY_DATABASE_URI"]
            )

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database
    db.init_app(app)

    # Initialize Flask-Migrate
    Migrate(app, db)

    # CORS Configuration
    cors.init_app(app,
                  origins=app.config["CLIENT_URL"],
                  allow_headers=["Content-Type", "Authorization"],
                  methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])

    if not app.config.get("SPOONACULAR_API_KEY"):
        logging.getLogger(__name__).warning(
            "SPOONACULAR_API_KEY is not set; food detection requests will fail"
        )

    register_routes(app)

    return app
