# app.py
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import Config
from routes.interview_routes import interview_bp
from services.errors import StoreUnavailableError
from services.query_aggregator import QueryAggregator
from services.record_store import RecordStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(config: Optional[Config] = None, store: Optional[RecordStore] = None) -> Flask:
    """
    Build the Flask app. The store is connected here, once, and shared by
    every request; a StoreUnavailableError propagates if it cannot be reached.
    """
    if config is None:
        load_dotenv()  # loads from .env
        config = Config.from_env()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    app = Flask(__name__)
    # Only the frontend may call the API, and only with GET/POST JSON requests
    CORS(
        app,
        resources={r"/api/*": {"origins": list(config.cors_origins)}},
        methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    store = store or RecordStore(config.database_url)
    store.connect()
    app.extensions["record_store"] = store
    app.extensions["query_aggregator"] = QueryAggregator(store)

    app.register_blueprint(interview_bp)
    return app


if __name__ == '__main__':
    load_dotenv()
    config = Config.from_env()
    try:
        app = create_app(config)
    except StoreUnavailableError as e:
        logger.error("Unable to connect to the server: %s", e.details)
        raise SystemExit(1)
    logger.info("Server is running on port: %s", config.port)
    app.run(host=config.host, port=config.port, debug=config.debug)
