"""
Display helpers used when rendering content on the public pages.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

CATEGORY_LABELS = {
    "tournament": "Tournament",
    "social": "Social",
    "clinic": "Clinic",
    "league": "League",
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
    "all": "All Levels",
    "apparel": "Apparel",
    "equipment": "Equipment",
    "accessories": "Accessories",
    "announcement": "Announcement",
    "news": "News",
    "tip": "Tip",
}


def _parse_date(value: str) -> date:
    return date.fromisoformat(value[:10])


def format_date(value: str) -> dict:
    """Split an ISO date into the pieces event cards display."""
    parsed = _parse_date(value)
    return {
        "day": parsed.day,
        "month": parsed.strftime("%b"),
        "month_long": parsed.strftime("%B"),
        "year": parsed.year,
        "full": f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}",
    }


def format_price(price) -> str:
    """Display a price; missing prices (e.g. no ``salePrice``) render as empty."""
    if price is None or (isinstance(price, str) and not price.strip()):
        return ""
    if price == 0:
        return "Free"
    amount = float(price)
    if amount.is_integer():
        return f"${amount:.0f}"
    return f"${amount:.2f}"


def relative_date(value: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    parsed = _parse_date(value)
    diff_days = (now.date() - parsed).days
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if 0 < diff_days < 7:
        return f"{diff_days} days ago"
    if 0 < diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    return f"{parsed.strftime('%b')} {parsed.day}"


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)
