"""
JSON text encoding of snapshot collections.

The snapshot table stores the repository list, language map and contribution
days as text columns. Each encode_* has a matching decode_*, and encoding a
decoded value reproduces the stored text exactly. Decoding None or an empty
string yields an empty structure.
"""

import json
from dataclasses import asdict, fields
from datetime import date
from typing import Any

from app.services.analytics.calendar import contribution_level
from app.services.analytics.types import ContributionDay
from app.services.github.types import RemoteRepository

_REPOSITORY_FIELDS = {f.name for f in fields(RemoteRepository)}


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def encode_repositories(repositories: list[RemoteRepository]) -> str:
    return _dumps([asdict(r) for r in repositories])


def decode_repositories(raw: str | None) -> list[RemoteRepository]:
    """Unknown keys are dropped so rows written by older versions still load."""
    if not raw:
        return []
    return [
        RemoteRepository(**{k: v for k, v in item.items() if k in _REPOSITORY_FIELDS})
        for item in json.loads(raw)
    ]


def encode_languages(languages: dict[str, float]) -> str:
    return _dumps(languages)


def decode_languages(raw: str | None) -> dict[str, float]:
    if not raw:
        return {}
    decoded: dict[str, float] = json.loads(raw)
    return decoded


def encode_contributions(days: list[ContributionDay]) -> str:
    return _dumps(
        [{"date": d.date.isoformat(), "count": d.count, "level": d.level} for d in days]
    )


def decode_contributions(raw: str | None) -> list[ContributionDay]:
    """A missing level is recomputed from the count."""
    if not raw:
        return []
    days = []
    for item in json.loads(raw):
        count = int(item.get("count", 0))
        level = item.get("level")
        days.append(
            ContributionDay(
                date=date.fromisoformat(item["date"]),
                count=count,
                level=contribution_level(count) if level is None else int(level),
            )
        )
    return days
