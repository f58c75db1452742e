import logging

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import IntegrityError

import crud
from app.auth import check_password, generate_token, hash_password, jwt_required
from pipeline import get_personalized_news

logger = logging.getLogger(__name__)

v1_bp = Blueprint("v1", __name__, url_prefix="/v1")


def get_db():
    if "db" not in g:
        g.db = current_app.config["SESSION_FACTORY"]()
    return g.db


def close_db(exc=None):
    db = g.pop("db", None)
    if db is not None:
        db.close()


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


def _missing(body, *fields):
    return [f for f in fields if body.get(f) in (None, "")]


def _int_field(body, name, default=0):
    value = body.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(name)
    return value


def user_to_dict(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


@v1_bp.route("/register", methods=["POST"])
def register():
    body = _json_body()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    missing = _missing(body, "name", "email", "password")
    if missing:
        return jsonify({"error": "Missing fields: %s" % ", ".join(missing)}), 400

    db_session = get_db()
    email = str(body["email"]).strip().lower()
    if crud.get_user_by_email(db_session, email) is not None:
        return jsonify({"error": "Email already registered"}), 409
    try:
        user = crud.create_user(db_session, str(body["name"]), email, hash_password(str(body["password"])))
    except IntegrityError:
        db_session.rollback()
        return jsonify({"error": "Email already registered"}), 409
    logger.info("Registered user %s", user.id)
    return jsonify(user_to_dict(user)), 201


@v1_bp.route("/login", methods=["POST"])
def login():
    body = _json_body()
    if body is None or _missing(body, "email", "password"):
        return jsonify({"error": "email and password are required"}), 400

    db_session = get_db()
    user = crud.get_user_by_email(db_session, str(body["email"]).strip().lower())
    if user is None or not check_password(str(body["password"]), user.password_hash):
        return jsonify({"error": "Invalid email or password"}), 401

    settings = current_app.config["SETTINGS"]
    token = generate_token(user, settings.jwt_secret, settings.jwt_expiry_hours)
    return jsonify({"token": token})


@v1_bp.route("/preference", methods=["POST"])
@jwt_required
def set_preference():
    body = _json_body()
    if body is None or _missing(body, "category"):
        return jsonify({"error": "category is required"}), 400
    try:
        frequency = _int_field(body, "frequency")
    except ValueError:
        return jsonify({"error": "frequency must be an integer"}), 400

    pref = crud.create_preference(get_db(), g.user_id, str(body["category"]).strip(), frequency)
    return jsonify({
        "id": pref.id,
        "user_id": pref.user_id,
        "category": pref.category,
        "frequency": pref.frequency,
    }), 201


@v1_bp.route("/track", methods=["POST"])
@jwt_required
def track_interaction():
    body = _json_body()
    if body is None or _missing(body, "news_id", "action"):
        return jsonify({"error": "news_id and action are required"}), 400
    try:
        news_id = _int_field(body, "news_id")
        duration = _int_field(body, "duration")
    except ValueError as e:
        return jsonify({"error": "%s must be an integer" % e}), 400

    db_session = get_db()
    if crud.get_article_by_id(db_session, news_id) is None:
        return jsonify({"error": "Article not found"}), 404
    interaction = crud.create_interaction(db_session, g.user_id, news_id, str(body["action"]), duration)
    return jsonify({
        "id": interaction.id,
        "user_id": interaction.user_id,
        "news_id": interaction.news_id,
        "action": interaction.action,
        "duration": interaction.duration,
    }), 201


@v1_bp.route("/news", methods=["GET"])
@jwt_required
def personalized_news():
    db_session = get_db()
    categories = [p.category for p in crud.get_preferences_for_user(db_session, g.user_id)]
    settings = current_app.config["SETTINGS"]
    news = get_personalized_news(
        db_session,
        g.user_id,
        categories,
        current_app.config["SUMMARIZER"],
        resummarize=settings.resummarize_on_read,
    )
    return jsonify(news)
