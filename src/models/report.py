"""
Report data model.

The terminal aggregate produced once per run and handed to the renderer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from src.models.review import Category


@dataclass(frozen=True)
class Report:
    """
    Immutable trend report for one period.

    Frequency mappings have no key ordering; renderers sort them.
    The General mapping carries the externally supplied cancellation
    count under the "Cancellations" key.
    Reports are not hashable.
    """
    start: datetime
    end: datetime
    total_reviews: int
    trends: Mapping[Category, Mapping[str, int]]
    weeks: Mapping[str, int] = field(default_factory=dict)
    surprises: Tuple[str, ...] = ()
    flags: Tuple[str, ...] = ()

    __hash__ = None

    def __post_init__(self):
        missing = [c.value for c in Category if c not in self.trends]
        if missing:
            raise ValueError(f"Report is missing trend frequencies for: {', '.join(missing)}")

        # Freeze the nested containers as well as the dataclass itself
        frozen_trends = {c: MappingProxyType(dict(self.trends[c])) for c in Category}
        object.__setattr__(self, "trends", MappingProxyType(frozen_trends))
        object.__setattr__(self, "weeks", MappingProxyType(dict(self.weeks)))
        object.__setattr__(self, "surprises", tuple(self.surprises))
        object.__setattr__(self, "flags", tuple(self.flags))

    @property
    def general(self) -> Mapping[str, int]:
        return self.trends[Category.GENERAL]

    @property
    def tdd(self) -> Mapping[str, int]:
        return self.trends[Category.TDD]

    @property
    def requirements_gathering(self) -> Mapping[str, int]:
        return self.trends[Category.REQUIREMENTS_GATHERING]

    @property
    def debugging(self) -> Mapping[str, int]:
        return self.trends[Category.DEBUGGING]

    def to_dict(self) -> Dict:
        """Convert to JSON-serializable dict."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_reviews": self.total_reviews,
            "trends": {c.value: dict(self.trends[c]) for c in Category},
            "weeks": dict(self.weeks),
            "surprises": list(self.surprises),
            "flags": list(self.flags),
        }
