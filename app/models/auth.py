# app/models/auth.py
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.sql import func
from werkzeug.security import check_password_hash, generate_password_hash

from app.extensions import db


class StatsUser(db.Model, UserMixin):
    __tablename__ = "stats_users"

    id            = db.Column(db.Integer, primary_key=True)
    username      = db.Column(db.String(64), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at    = db.Column(
        db.DateTime, nullable=False,
        default=datetime.utcnow, server_default=func.now(),
    )

    def set_password(self, raw: str) -> None:
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, raw)

    def __repr__(self):
        return f"<StatsUser {self.username!r}>"
