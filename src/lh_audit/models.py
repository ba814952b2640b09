"""Data models for Lighthouse analysis and fix suggestions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Priority(str, Enum):
    """Priority bucket for a fix suggestion."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()


PRIORITY_ORDER = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


@dataclass
class Snippet:
    """A templated code or text block attached to a fix."""
    type: str  # fence language: html, css, bash, text, markdown, javascript
    title: str
    code: str


@dataclass
class Fix:
    """A remediation suggestion for one failing audit."""
    title: str
    priority: Priority
    impact: str
    description: str
    diagnosis: Optional[str] = None
    snippets: list[Snippet] = field(default_factory=list)


@dataclass
class CategoryScore:
    """Category score on a 0-100 scale."""
    id: str
    title: str
    score: Optional[int]


@dataclass
class Summary:
    url: Optional[str]
    final_url: Optional[str]
    timestamp: Optional[str]
    version: Optional[str]
    scores: list[CategoryScore] = field(default_factory=list)

    def score_for(self, category_id: str) -> Optional[int]:
        for score in self.scores:
            if score.id == category_id:
                return score.score
        return None


@dataclass
class Opportunity:
    """An audit carrying a time/byte savings estimate."""
    id: str
    title: str
    description: str
    score: Optional[float]
    wasted_ms: float = 0
    wasted_bytes: float = 0
    item_count: int = 0


@dataclass
class Diagnostic:
    id: str
    title: str
    description: str
    score: Optional[float]
    display_value: Optional[str] = None


@dataclass
class Vital:
    """A Core Web Vitals metric read from its audit."""
    key: str  # lcp, fid, cls, fcp, tbt, si
    name: str
    value: Optional[float]
    unit: Optional[str]
    display_value: Optional[str]
    rating: Optional[str]

    @property
    def passed(self) -> bool:
        return self.rating == "pass"
