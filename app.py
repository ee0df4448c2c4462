"""
Flask entrypoint for the typing trainer JSON API.
"""

import logging
import os
import sys
from typing import Any, Dict, Optional

from flask import Flask

from api.session_api import TRAINER_EXTENSION_KEY, session_api
from models.history_manager import HISTORY_CAPACITY
from services import init_services

DB_PATH_ENV_VAR = "TYPING_TRAINER_DB_PATH"
DEFAULT_DB_PATH = "typing_trainer.db"


def create_app(test_config: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory; `test_config` overrides the default settings."""
    app = Flask(__name__)
    app.config.from_mapping(
        DATABASE=os.environ.get(DB_PATH_ENV_VAR, DEFAULT_DB_PATH),
        HISTORY_CAPACITY=HISTORY_CAPACITY,
    )
    if test_config:
        app.config.update(test_config)

    db_manager, _history, trainer = init_services(
        app.config["DATABASE"], capacity=int(app.config["HISTORY_CAPACITY"])
    )
    app.extensions[TRAINER_EXTENSION_KEY] = trainer
    app.extensions["db_manager"] = db_manager

    app.register_blueprint(session_api)
    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Events must be handled one at a time, in arrival order
    create_app().run(host="localhost", port=5000, debug=True, threaded=False)
