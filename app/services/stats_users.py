# app/services/stats_users.py
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from app.extensions import db
from app.models.auth import StatsUser


def ensure_default_stats_user() -> Optional[StatsUser]:
    """
    Insert the configured default login if stats_users is empty. Returns the new
    row, or None when nothing was inserted.

    Two first requests can both see an empty table; the unique username makes
    the second insert fail, and that failure is treated as "already seeded".
    """
    username = (current_app.config.get("STATS_DEFAULT_USER") or "").strip()
    password = current_app.config.get("STATS_DEFAULT_PASSWORD") or ""
    if not username or not password:
        return None

    if db.session.query(StatsUser.id).first() is not None:
        return None

    user = StatsUser(username=username)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.info("Default stats user already created by another request")
        return None

    current_app.logger.warning("Created default stats user %r; change its password", username)
    return user


def authenticate(username: str, password: str) -> Optional[StatsUser]:
    """User on success, None on unknown user or wrong password (callers can't tell which)."""
    username = (username or "").strip()
    if not username or not password:
        return None
    user = StatsUser.query.filter_by(username=username).first()
    if user is None or not user.check_password(password):
        return None
    return user


def create_or_update_user(username: str, password: str) -> tuple[StatsUser, bool]:
    """Returns (user, created)."""
    username = username.strip()
    user = StatsUser.query.filter_by(username=username).first()
    created = user is None
    if created:
        user = StatsUser(username=username)
        db.session.add(user)
    user.set_password(password)
    db.session.commit()
    return user, created
