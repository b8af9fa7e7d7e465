# -*- coding: utf-8 -*-
"""Recommendation — shared record and lifecycle tracking.

Every recommendation variant carries the same identity, display fields,
timestamps, engagement counters and provenance. Variants add their own
content, progress tracking and structural checks on top.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from .models import RecommendationValidation

logger = logging.getLogger(__name__)

RECOMMENDATION_SOURCES: Tuple[str, ...] = ("ai_generated", "api_based", "rule_based", "expert_curated")

# Tracking state folded into metadata by to_json(), in output order.
TRACKING_METADATA_KEYS: Tuple[str, ...] = (
    "isActive",
    "isCompleted",
    "completedAt",
    "rating",
    "feedback",
    "viewCount",
    "shareCount",
    "source",
    "confidence",
    "version",
)
EVENT_METADATA_KEYS: Tuple[str, ...] = ("lastViewedAt", "lastSharedAt")

_IMMUTABLE_FIELDS = frozenset({"id", "user_id", "type", "title", "description"})
_MONOTONIC_FIELDS = frozenset({"view_count", "share_count"})
# Stored tz-aware; naive values are taken as UTC.
_TIMESTAMP_FIELDS = frozenset({"created_at", "expires_at", "completed_at"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept a datetime or an ISO-8601 string; naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now(value: Optional[datetime]) -> datetime:
    return utcnow() if value is None else parse_timestamp(value)


def number_field(data: Mapping[str, Any], key: str) -> float:
    """Read a finite numeric payload value; booleans and strings are rejected."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return value


@dataclass(eq=False)
class Recommendation(ABC):
    """Common record shared by every recommendation variant."""

    id: str
    user_id: str
    title: str
    description: str
    created_at: datetime = field(default_factory=utcnow)
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    source: str = "ai_generated"
    confidence: float = 1.0
    version: str = "1.0"

    is_active: bool = field(default=True, init=False)
    is_completed: bool = field(default=False, init=False)
    completed_at: Optional[datetime] = field(default=None, init=False)
    rating: Optional[int] = field(default=None, init=False)
    feedback: Optional[str] = field(default=None, init=False)
    view_count: int = field(default=0, init=False)
    share_count: int = field(default=0, init=False)

    type: ClassVar[str] = ""
    REQUIRED_KEYS: ClassVar[Tuple[str, ...]] = ("id", "userId", "title", "description")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "type" or (name in _IMMUTABLE_FIELDS and name in self.__dict__):
            raise AttributeError(f"{name} is immutable")
        if name in _MONOTONIC_FIELDS and value < getattr(self, name, 0):
            raise ValueError(f"{name} cannot decrease")
        if name == "is_completed" and not value and getattr(self, "is_completed", False):
            raise ValueError("a completed recommendation cannot be reopened")
        if name == "confidence" and (
            isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0
        ):
            raise ValueError(f"confidence must be between 0 and 1, got {value!r}")
        if name == "source" and value not in RECOMMENDATION_SOURCES:
            raise ValueError(f"source must be one of: {', '.join(RECOMMENDATION_SOURCES)}")
        if name in _TIMESTAMP_FIELDS:
            value = parse_timestamp(value)
        super().__setattr__(name, value)

    # ---- construction -------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Recommendation":
        """Build an instance from a camelCase payload (e.g. a to_json() snapshot).

        Tracking state found in the payload is not restored: the new instance
        starts active, uncompleted and with zeroed counters.
        """
        missing = [key for key in cls.REQUIRED_KEYS if data.get(key) is None]
        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")

        kwargs: Dict[str, Any] = {
            "id": data["id"],
            "user_id": data["userId"],
            "title": data["title"],
            "description": data["description"],
            "metadata": {
                key: value
                for key, value in dict(data.get("metadata") or {}).items()
                if not cls.is_reserved_metadata_key(key)
            },
        }
        created_at = parse_timestamp(data.get("createdAt"))
        if created_at is not None:
            kwargs["created_at"] = created_at
        expires_at = parse_timestamp(data.get("expiresAt"))
        if expires_at is not None:
            kwargs["expires_at"] = expires_at
        for key in ("source", "confidence", "version"):
            if data.get(key) is not None:
                kwargs[key] = data[key]
        kwargs.update(cls._variant_kwargs(data))
        return cls(**kwargs)

    @classmethod
    def _variant_kwargs(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {}

    @classmethod
    def is_reserved_metadata_key(cls, key: str) -> bool:
        return key in TRACKING_METADATA_KEYS or key in EVENT_METADATA_KEYS

    # ---- lifecycle ----------------------------------------------------

    def mark_as_viewed(self) -> None:
        self.view_count += 1
        self.metadata["lastViewedAt"] = utcnow()

    def mark_as_completed(self, rating: Optional[int] = None, feedback: Optional[str] = None) -> None:
        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
                raise ValueError(f"rating must be an integer between 1 and 5, got {rating!r}")
        if self.is_completed:
            logger.debug("Recommendation %s completed again; completed_at overwritten", self.id)
        self.is_completed = True
        self.completed_at = utcnow()
        if rating is not None:
            self.rating = rating
        if feedback:
            self.feedback = feedback

    def mark_as_shared(self) -> None:
        self.share_count += 1
        self.metadata["lastSharedAt"] = utcnow()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return _now(now) > self.expires_at

    def get_age_in_days(self, now: Optional[datetime] = None) -> int:
        elapsed = abs(_now(now) - self.created_at)
        return math.ceil(elapsed / timedelta(days=1))

    def update_metadata(self, updates: Mapping[str, Any]) -> None:
        reserved = [key for key in updates if self.is_reserved_metadata_key(key)]
        if reserved:
            raise ValueError(f"Reserved metadata key(s): {', '.join(reserved)}")
        self.metadata = {**self.metadata, **updates}

    # ---- snapshot -----------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """Flattened snapshot: tracking state lives inside ``metadata``."""
        metadata = dict(self.metadata)
        metadata.update(self._progress_metadata())
        metadata.update(
            {
                "isActive": self.is_active,
                "isCompleted": self.is_completed,
                "completedAt": self.completed_at,
                "rating": self.rating,
                "feedback": self.feedback,
                "viewCount": self.view_count,
                "shareCount": self.share_count,
                "source": self.source,
                "confidence": self.confidence,
                "version": self.version,
            }
        )
        result: Dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at,
            "metadata": metadata,
        }
        if self.expires_at is not None:
            result["expiresAt"] = self.expires_at
        result.update(self._variant_json())
        return result

    def _progress_metadata(self) -> Dict[str, Any]:
        return {}

    def _variant_json(self) -> Dict[str, Any]:
        return {}

    def clone(self, new_id: str) -> "Recommendation":
        """Structural copy with a fresh identity, creation time and progress."""
        data = self.to_json()
        data["id"] = new_id
        data["createdAt"] = utcnow()
        return type(self).from_dict(data)

    def validate(self) -> RecommendationValidation:
        return RecommendationValidation.from_errors(self._validation_errors())

    @abstractmethod
    def _validation_errors(self) -> List[str]:
        """Structural problems that make this recommendation unfit to persist."""
