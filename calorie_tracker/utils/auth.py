import datetime as dt
from functools import wraps
from flask import request, current_app
import jwt

from calorie_tracker.extensions import db
from calorie_tracker.models.user import User
from calorie_tracker.utils.http import error


def create_token(user_id: int) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    ttl = dt.timedelta(hours=current_app.config.get("TOKEN_TTL_HOURS", 12))
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, current_app.config["SECRET_KEY"], algorithm="HS256")


def decode_token(token: str):
    return jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])


def require_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return error("UNAUTHORIZED", "Not authorized, no token", 401)
        token = auth_header.split(" ", 1)[1]
        try:
            payload = decode_token(token)
            user_id = int(payload["sub"])
        except (jwt.InvalidTokenError, KeyError, ValueError):
            return error("UNAUTHORIZED", "Not authorized, token failed", 401)
        if db.session.get(User, user_id) is None:
            return error("UNAUTHORIZED", "Not authorized, user not found", 401)
        request.user_id = user_id  # type: ignore
        return f(*args, **kwargs)
    return wrapper

__all__ = ["create_token", "decode_token", "require_auth"]
