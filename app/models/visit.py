# app/models/visit.py
from datetime import datetime

from sqlalchemy.sql import func

from app.extensions import db

FORCED_MODES = ("friday", "no")


class VisitLog(db.Model):
    """One row per page view reported by the beacon. Append-only."""
    __tablename__ = "visit_logs"

    id           = db.Column(db.Integer, primary_key=True)
    timezone     = db.Column(db.String(100), nullable=True, index=True)
    is_friday    = db.Column(db.Boolean, nullable=True)
    forced_mode  = db.Column(
        db.Enum(*FORCED_MODES, name="visit_forced_mode", native_enum=False, create_constraint=True),
        nullable=True,
    )
    season       = db.Column(db.String(30), nullable=True)
    generated_at = db.Column(db.DateTime, nullable=True)   # client clock, advisory
    remote_addr  = db.Column(db.String(45), nullable=True)
    user_agent   = db.Column(db.String(255), nullable=True)
    created_at   = db.Column(
        db.DateTime, nullable=False, index=True,
        default=datetime.utcnow, server_default=func.now(),
    )

    def __repr__(self):
        return f"<VisitLog {self.id} {self.timezone!r} friday={self.is_friday}>"
