# app/services/visit_stats.py
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, literal_column

from app.extensions import db
from app.models.visit import VisitLog

UNKNOWN_TIMEZONE = "unknown"


@dataclass
class VisitSummary:
    total: int
    top_timezones: List[Tuple[str, int]] = field(default_factory=list)
    daily: List[Tuple[str, int]] = field(default_factory=list)
    recent: List[VisitLog] = field(default_factory=list)


def total_visits() -> int:
    return db.session.query(func.count(VisitLog.id)).scalar() or 0


def top_timezones(limit: int = 20) -> List[Tuple[str, int]]:
    # inline literals so SELECT and GROUP BY render the same expression on Postgres
    tz = func.coalesce(
        func.nullif(func.trim(VisitLog.timezone), literal_column("''")),
        literal_column(f"'{UNKNOWN_TIMEZONE}'"),
    )
    rows = (
        db.session.query(tz.label("tz"), func.count(VisitLog.id).label("n"))
        .group_by(tz)
        .order_by(desc("n"), tz)
        .limit(limit)
        .all()
    )
    return [(name, int(n)) for name, n in rows]


def daily_counts(days: int = 14, today: Optional[date] = None) -> List[Tuple[str, int]]:
    """Visits per calendar day (UTC), `days` days back including today, newest first."""
    today = today or datetime.utcnow().date()
    start = datetime.combine(today - timedelta(days=days - 1), time.min)
    end = datetime.combine(today + timedelta(days=1), time.min)

    day = func.date(VisitLog.created_at)
    rows = (
        db.session.query(day.label("day"), func.count(VisitLog.id).label("n"))
        .filter(VisitLog.created_at >= start, VisitLog.created_at < end)
        .group_by(day)
        .order_by(day.desc())
        .all()
    )
    return [(str(d), int(n)) for d, n in rows]


def recent_visits(limit: int = 50) -> List[VisitLog]:
    return (
        VisitLog.query
        .order_by(VisitLog.created_at.desc(), VisitLog.id.desc())
        .limit(limit)
        .all()
    )


def build_summary(today: Optional[date] = None) -> VisitSummary:
    return VisitSummary(
        total=total_visits(),
        top_timezones=top_timezones(20),
        daily=daily_counts(14, today=today),
        recent=recent_visits(50),
    )


def summary_lines(summary: VisitSummary) -> List[str]:
    """Plain-text rendering for the CLI."""
    lines = [f"Total recorded visits: {summary.total}", "", "Top timezones:"]
    for name, n in summary.top_timezones:
        lines.append(f"  {n:>6}  {name}")
    lines += ["", "Visits per day (last 14 days):"]
    for day, n in summary.daily:
        lines.append(f"  {day}  {n:>6}")
    return lines
