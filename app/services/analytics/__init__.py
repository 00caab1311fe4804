"""GitHub analytics: aggregation, contribution calendar, snapshot encoding.

The sync service is imported from app.services.analytics.sync.
"""

from app.services.analytics.aggregator import build_snapshot, select_top_repositories
from app.services.analytics.calendar import (
    build_contribution_days,
    contribution_level,
    count_events_by_day,
    layout_calendar,
)
from app.services.analytics.serialization import (
    decode_contributions,
    decode_languages,
    decode_repositories,
    encode_contributions,
    encode_languages,
    encode_repositories,
)
from app.services.analytics.types import (
    AnalyticsResult,
    CalendarLayout,
    CalendarMonth,
    ContributionDay,
)

__all__ = [
    "AnalyticsResult",
    "CalendarLayout",
    "CalendarMonth",
    "ContributionDay",
    "build_contribution_days",
    "build_snapshot",
    "contribution_level",
    "count_events_by_day",
    "decode_contributions",
    "decode_languages",
    "decode_repositories",
    "encode_contributions",
    "encode_languages",
    "encode_repositories",
    "layout_calendar",
    "select_top_repositories",
]
