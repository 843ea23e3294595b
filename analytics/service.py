import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.page_view import PageView
from models.product import Product
from models.project import Project
from models.quote import Quote

logger = logging.getLogger(__name__)


# ============================================================
# PAGE VIEW TRACKING
# ============================================================

def clean_ip(ip_address: Optional[str]) -> str:
    # IPv4-mapped IPv6 addresses arrive as ::ffff:a.b.c.d
    if not ip_address:
        return ""
    return ip_address.replace("::ffff:", "", 1) if ip_address.startswith("::ffff:") else ip_address


def track_page_view(
    db: Session,
    page: str,
    session_id: str,
    user_agent: Optional[str] = None,
    ip_address: Optional[str] = None,
    referrer: Optional[str] = None,
) -> PageView:
    view = PageView(
        page=page,
        session_id=session_id,
        user_agent=user_agent or "",
        ip_address=clean_ip(ip_address),
        referrer=referrer,
    )
    db.add(view)
    db.commit()
    return view


# ============================================================
# VISITORS
# ============================================================

def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _unique_visitors(db: Session, start: datetime, end: Optional[datetime] = None) -> int:
    query = db.query(func.count(func.distinct(PageView.session_id))).filter(PageView.timestamp >= start)
    if end is not None:
        query = query.filter(PageView.timestamp < end)
    return query.scalar() or 0


def get_today_unique_visitors(db: Session, now: Optional[datetime] = None) -> int:
    return _unique_visitors(db, _start_of_day(now or datetime.utcnow()))


def get_visitor_growth(db: Session, now: Optional[datetime] = None) -> int:
    """Percent change of unique visitors today versus yesterday (0 when yesterday had none)."""
    today_start = _start_of_day(now or datetime.utcnow())
    yesterday_start = today_start - timedelta(days=1)

    today_visitors = _unique_visitors(db, today_start)
    yesterday_visitors = _unique_visitors(db, yesterday_start, today_start)

    if yesterday_visitors == 0:
        return 0
    return round((today_visitors - yesterday_visitors) / yesterday_visitors * 100)


# ============================================================
# DASHBOARD SUMMARY
# ============================================================

def get_analytics(db: Session, now: Optional[datetime] = None) -> dict:
    status_rows = (
        db.query(Quote.status, func.count(Quote.id))
        .group_by(Quote.status)
        .order_by(Quote.status)
        .all()
    )
    quoted_value = db.query(func.coalesce(func.sum(Quote.final_total), 0.0)).scalar()

    return {
        "total_products": db.query(func.count(Product.id)).scalar() or 0,
        "total_quotes": db.query(func.count(Quote.id)).scalar() or 0,
        "total_projects": db.query(func.count(Project.id)).scalar() or 0,
        "quotes_by_status": {status: count for status, count in status_rows},
        "quoted_value": float(quoted_value or 0),
        "unique_visitors_today": get_today_unique_visitors(db, now),
        "visitor_growth": get_visitor_growth(db, now),
        "recent_activity": [],
    }
