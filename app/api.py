import logging

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from app.rate_limit import RateLimiter
from app.routes import close_db, get_db, v1_bp
from feeds import FeedError
from pipeline import run_ingestion

logger = logging.getLogger(__name__)


def create_app(settings, session_factory, provider, summarizer):
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["SESSION_FACTORY"] = session_factory
    app.config["FEED_PROVIDER"] = provider
    app.config["SUMMARIZER"] = summarizer

    if settings.rate_limit_per_minute > 0:
        RateLimiter(settings.rate_limit_per_minute).init_app(app)

    app.teardown_appcontext(close_db)
    app.register_blueprint(v1_bp)

    @app.route("/", methods=["GET"])
    def index():
        return "Welcome to the news app!"

    # GET /fetch-news runs one ingestion cycle synchronously
    @app.route("/fetch-news", methods=["GET"])
    def fetch_news():
        try:
            run_ingestion(get_db(), current_app.config["FEED_PROVIDER"], current_app.config["SUMMARIZER"])
        except FeedError as e:
            logger.error("News ingestion failed: %s", e)
            return jsonify({"error": "News ingestion failed"}), 502
        return jsonify({"status": "News fetched and stored successfully"})

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error: %s", e)
        return jsonify({"error": "Internal server error"}), 500

    return app
