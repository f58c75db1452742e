# app/auth.py
import datetime
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request
from werkzeug.security import check_password_hash, generate_password_hash

JWT_ALGORITHM = "HS256"


def hash_password(password):
    return generate_password_hash(password)


def check_password(password, password_hash):
    return check_password_hash(password_hash, password)


def generate_token(user, secret, expiry_hours=24):
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "iat": now,
        "exp": now + datetime.timedelta(hours=expiry_hours),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token, secret):
    """Decode `token`; raises jwt.InvalidTokenError (incl. expiry) when it is not valid."""
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])


def _bearer_token():
    header = request.headers.get("Authorization", "").strip()
    if header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip()
    return header


def jwt_required(view):
    """Reject the request with 401 unless it carries a valid token; sets g.user_id."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"error": "Missing or invalid token"}), 401
        try:
            claims = verify_token(token, current_app.config["SETTINGS"].jwt_secret)
            g.user_id = int(claims["sub"])
        except jwt.ExpiredSignatureError:
            return jsonify({"error": "Token expired"}), 401
        except (jwt.InvalidTokenError, KeyError, ValueError):
            return jsonify({"error": "Invalid token"}), 401
        return view(*args, **kwargs)

    return wrapper
