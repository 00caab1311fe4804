"""
Contribution calendar: daily counts, intensity levels and heatmap layout.

The layout is independent of where the counts come from (GraphQL calendar or
bucketed public events); it only needs dated counts.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any

from app.services.analytics.types import CalendarLayout, CalendarMonth, ContributionDay

DAYS_PER_WEEK = 7

# Upper bound (inclusive) of the count range for levels 1-3; anything above is level 4
LEVEL_THRESHOLDS = (2, 4, 6)


def contribution_level(count: int) -> int:
    """Map a daily count to its 0-4 intensity level."""
    if count <= 0:
        return 0
    for level, upper in enumerate(LEVEL_THRESHOLDS, start=1):
        if count <= upper:
            return level
    return len(LEVEL_THRESHOLDS) + 1


def make_day(day: date, count: int) -> ContributionDay:
    return ContributionDay(date=day, count=count, level=contribution_level(count))


def build_contribution_days(
    counts: dict[date, int],
    end: date,
    window_days: int = 365,
) -> list[ContributionDay]:
    """
    One ContributionDay per calendar day of the trailing window ending on `end`.

    Days missing from `counts` get count 0, so the result has exactly
    window_days entries in ascending order with no gaps.
    """
    if window_days <= 0:
        return []

    start = end - timedelta(days=window_days - 1)
    return [
        make_day(start + timedelta(days=offset), counts.get(start + timedelta(days=offset), 0))
        for offset in range(window_days)
    ]


def count_events_by_day(events: Iterable[dict[str, Any]]) -> dict[date, int]:
    """
    Bucket public events by the UTC date of their created_at timestamp.

    Events without a parseable timestamp are ignored.
    """
    counts: dict[date, int] = {}
    for event in events:
        created_at = event.get("created_at")
        if not isinstance(created_at, str):
            continue
        try:
            day = datetime.fromisoformat(created_at.replace("Z", "+00:00")).date()
        except ValueError:
            continue
        counts[day] = counts.get(day, 0) + 1
    return counts


def _week_start(day: date) -> date:
    """The Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % DAYS_PER_WEEK)


def layout_calendar(days: Iterable[ContributionDay]) -> CalendarLayout:
    """
    Arrange contribution days into Sunday-first weeks.

    Starts at the Sunday on/before the earliest date and walks day by day
    through the latest date; dates absent from the input count as 0. The last
    week is padded with zero-count days following the latest date. A month
    label is emitted for week 0 and for every week whose first day falls in a
    different month than the previous week's first day.
    """
    ordered = sorted(days, key=lambda d: d.date)
    if not ordered:
        return CalendarLayout()

    by_date = {d.date: d for d in ordered}
    first, last = ordered[0].date, ordered[-1].date

    weeks: list[list[ContributionDay]] = []
    current_week: list[ContributionDay] = []
    cursor = _week_start(first)
    while cursor <= last:
        current_week.append(by_date.get(cursor) or make_day(cursor, 0))
        if len(current_week) == DAYS_PER_WEEK:
            weeks.append(current_week)
            current_week = []
        cursor += timedelta(days=1)

    if current_week:
        while len(current_week) < DAYS_PER_WEEK:
            current_week.append(make_day(current_week[-1].date + timedelta(days=1), 0))
        weeks.append(current_week)

    months: list[CalendarMonth] = []
    for index, week in enumerate(weeks):
        first_day = week[0].date
        if index == 0 or first_day.month != weeks[index - 1][0].date.month:
            months.append(CalendarMonth(name=first_day.strftime("%b"), week_index=index))

    return CalendarLayout(
        weeks=weeks,
        months=months,
        total_contributions=sum(d.count for d in ordered),
    )
