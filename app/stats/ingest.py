# app/stats/ingest.py
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.extensions import db
from app.models.visit import FORCED_MODES, VisitLog

TIMEZONE_MAX = 100
SEASON_MAX = 30
REMOTE_ADDR_MAX = 45
USER_AGENT_MAX = 255

# RFC 3339 with a mandatory offset; fraction optional (JS toISOString() fits)
_TIMESTAMP_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})$"
)


def _clip(value: Any, limit: int) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value[:limit]


def parse_generated_at(value: Any) -> Optional[datetime]:
    """Strict timestamp -> naive UTC datetime, or None. Never raises."""
    if not isinstance(value, str) or not _TIMESTAMP_RE.match(value):
        return None
    fmt = "%Y-%m-%dT%H:%M:%S.%f%z" if "." in value else "%Y-%m-%dT%H:%M:%S%z"
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


def extract_visit_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Field-by-field, lossy: anything of the wrong type becomes None instead of
    failing the request.
    """
    is_friday = data.get("isFriday")
    forced = data.get("forcedMode")
    return {
        "timezone": _clip(data.get("timezone"), TIMEZONE_MAX),
        "is_friday": is_friday if isinstance(is_friday, bool) else None,
        "forced_mode": forced if isinstance(forced, str) and forced in FORCED_MODES else None,
        "season": _clip(data.get("season"), SEASON_MAX),
        "generated_at": parse_generated_at(data.get("generatedAt")),
    }


def ensure_visit_table() -> None:
    VisitLog.__table__.create(bind=db.engine, checkfirst=True)


def record_visit(fields: Dict[str, Any], remote_addr: Optional[str], user_agent: Optional[str]) -> VisitLog:
    """Create the table if needed and append one row. SQLAlchemy errors propagate."""
    ensure_visit_table()
    row = VisitLog(
        **fields,
        remote_addr=remote_addr[:REMOTE_ADDR_MAX] if remote_addr else None,
        user_agent=user_agent[:USER_AGENT_MAX] if user_agent else None,
    )
    db.session.add(row)
    db.session.commit()
    return row
