"""Derived dashboard views over a list of serialized transactions.

Everything here is pure: functions take the transaction dicts returned by
the API and a :class:`FilterState`, and recompute the filtered table,
pagination, totals and chart series from scratch.
"""

import logging
import math
from dataclasses import dataclass, field, fields, replace
from datetime import date as date_cls, datetime, time, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

PAGE_SIZE = 50
RECENT_ACTIVITY_DAYS = 30
FILTER_MODES = ("all", "date", "month", "description")


def parse_date(value):
    try:
        return date_cls.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def month_bounds(month):
    """First and last day of a ``YYYY-MM`` month."""
    first = date_cls.fromisoformat(f"{month}-01")
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


def current_month():
    return date_cls.today().strftime("%Y-%m")


def today():
    return date_cls.today().isoformat()


def format_currency(amount, symbol="Rp"):
    return f"{symbol} {amount:,.0f}".replace(",", ".")


@dataclass
class FilterState:
    mode: str = "all"
    search: str = ""
    date: Optional[str] = field(default_factory=today)
    month: Optional[str] = field(default_factory=current_month)
    # exact description, only applied in month mode
    donor: Optional[str] = None
    description: str = ""
    category: Optional[str] = None

    def __post_init__(self):
        if self.mode not in FILTER_MODES:
            raise ValueError(f"Unknown filter mode: {self.mode!r}")
        if self.month:
            month_bounds(self.month)

    def label(self):
        if self.mode == "month" and self.month:
            first, _ = month_bounds(self.month)
            text = first.strftime("%B %Y")
            return f"{text} ({self.donor})" if self.donor else text
        if self.mode == "date" and self.date:
            parsed = parse_date(self.date)
            return parsed.strftime("%A, %d/%m/%Y") if parsed else self.date
        if self.mode == "description":
            text = f'Description: "{self.description}"'
            return f"{text} ({self.category})" if self.category else text
        return "All Periods"


def _matches_search(txn, search):
    if not search:
        return True
    needle = search.lower()
    return needle in txn["description"].lower() or needle in txn["category"].lower()


def _in_month(txn, month):
    if not month:
        return False
    parsed = parse_date(txn["date"])
    if parsed is None:
        return False
    first, last = month_bounds(month)
    return first <= parsed <= last


def _matches_description(txn, description, category):
    if (description or "").lower() not in txn["description"].lower():
        return False
    return not category or txn["category"] == category


def matches(txn, filters):
    if not _matches_search(txn, filters.search):
        return False
    if filters.mode == "date":
        return txn["date"] == filters.date
    if filters.mode == "month":
        if not _in_month(txn, filters.month):
            return False
        return not filters.donor or txn["description"] == filters.donor
    if filters.mode == "description":
        return _matches_description(txn, filters.description, filters.category)
    return True


def filter_transactions(transactions, filters):
    return [t for t in transactions if matches(t, filters)]


def in_month(transactions, month):
    return [t for t in transactions if _in_month(t, month)]


def on_date(transactions, day):
    return [t for t in transactions if t["date"] == day]


def by_description(transactions, description, category=None):
    return [t for t in transactions if _matches_description(t, description, category)]


def of_type(transactions, t_type):
    return [t for t in transactions if t["type"] == t_type]


def page_count(total, page_size=PAGE_SIZE):
    return math.ceil(total / page_size)


def paginate(items, page, page_size=PAGE_SIZE):
    start = (page - 1) * page_size
    return items[start:start + page_size]


def compute_stats(transactions):
    income = sum(t["amount"] for t in transactions if t["type"] == "income")
    expense = sum(t["amount"] for t in transactions if t["type"] == "expense")
    return {"income": income, "expense": expense, "balance": income - expense}


def monthly_series(transactions):
    """Income/expense totals per calendar month, oldest month first."""
    buckets = {}
    for t in transactions:
        parsed = parse_date(t["date"])
        if parsed is None:
            logger.debug("skipping transaction id=%s with unparseable date %r", t.get("id"), t["date"])
            continue
        first = parsed.replace(day=1)
        bucket = buckets.setdefault(first, {"income": 0, "expense": 0})
        if t["type"] == "income":
            bucket["income"] += t["amount"]
        else:
            bucket["expense"] += t["amount"]
    return [
        {"name": first.strftime("%b %Y"), **values}
        for first, values in sorted(buckets.items())
    ]


def expense_by_category(transactions):
    totals = {}
    for t in transactions:
        if t["type"] != "expense":
            continue
        totals[t["category"]] = totals.get(t["category"], 0) + t["amount"]
    return [{"name": name, "value": value} for name, value in totals.items()]


def recent_activity(transactions, now=None, days=RECENT_ACTIVITY_DAYS):
    now = now or datetime.now()
    cutoff = now - timedelta(days=days)
    recent = []
    for t in transactions:
        parsed = parse_date(t["date"])
        if parsed is not None and datetime.combine(parsed, time.min) >= cutoff:
            recent.append((parsed, t))
    recent.sort(key=lambda pair: pair[0], reverse=True)
    return [
        {"text": f"{t['description']} ({format_currency(t['amount'])})", "type": t["type"]}
        for _, t in recent
    ]


@dataclass
class DashboardState:
    """In-memory dashboard state: the fetched ledger plus filter and page."""

    transactions: list = field(default_factory=list)
    filters: FilterState = field(default_factory=FilterState)
    page: int = 1
    is_admin: bool = False

    def set_filters(self, **changes):
        updated = replace(self.filters, **changes)
        if updated != self.filters:
            self.filters = updated
            self.page = 1
        return self.filters

    def set_page(self, page):
        self.page = max(1, int(page))

    @property
    def filtered(self):
        return filter_transactions(self.transactions, self.filters)

    @property
    def total_pages(self):
        return page_count(len(self.filtered))

    @property
    def page_items(self):
        return paginate(self.filtered, self.page)

    @property
    def stats(self):
        return compute_stats(self.filtered)

    @property
    def monthly_chart(self):
        return monthly_series(self.transactions)

    @property
    def expense_categories(self):
        return expense_by_category(self.filtered)

    def recent_activity(self, now=None):
        return recent_activity(self.transactions, now=now)

    def summary(self, now=None):
        filtered = self.filtered
        return {
            "filter": {f.name: getattr(self.filters, f.name) for f in fields(self.filters)},
            "label": self.filters.label(),
            "count": len(filtered),
            "page": self.page,
            "page_size": PAGE_SIZE,
            "pages": page_count(len(filtered)),
            "transactions": paginate(filtered, self.page),
            "stats": compute_stats(filtered),
            "monthly": monthly_series(self.transactions),
            "expense_categories": expense_by_category(filtered),
            "recent": recent_activity(self.transactions, now=now),
        }
