"""Decision record schema, validated at the storage boundary.

Records are persisted as JSON objects with camelCase keys (``finalDecision``,
``emotionalState``). ``DecisionRecord.from_dict`` is the only way raw data
becomes a record: it checks required fields, applies defaults for the
optional ones and clamps ``emotionalState`` into 0–10. The analytics engine
can therefore assume every record it sees is well-formed.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from continuum.engine.tagging import TagClassifier, merge_tags

EMOTION_MIN = 0
EMOTION_MAX = 10
DEFAULT_EMOTION = 5

# JSON key → (attribute, required)
_TEXT_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("title", "title", True),
    ("intent", "intent", True),
    ("constraints", "constraints", True),
    ("alternatives", "alternatives", False),
    ("finalDecision", "final_decision", True),
    ("reasoning", "reasoning", True),
)


class RecordValidationError(ValueError):
    """Raised when raw data cannot be turned into a DecisionRecord."""


@dataclass
class DecisionRecord:
    id: int
    title: str
    intent: str
    constraints: str
    final_decision: str
    reasoning: str
    alternatives: str = ""
    emotional_state: int = DEFAULT_EMOTION
    tags: list[str] = field(default_factory=list)
    timestamp: int = 0
    date: str = ""

    def __post_init__(self) -> None:
        self.emotional_state = clamp_emotion(self.emotional_state)
        self.tags = merge_tags(self.tags)
        if not self.timestamp:
            self.timestamp = self.id
        if not self.date:
            self.date = format_date(self.timestamp)

    @classmethod
    def from_dict(cls, data: Any) -> DecisionRecord:
        """Validate *data* (a parsed JSON object) and build a record.

        Raises:
            RecordValidationError: if *data* is not a mapping, ``id`` is not an
                integer, a required text field is missing, the title is blank, or
                the timestamp is outside the representable date range.
        """
        if not isinstance(data, dict):
            raise RecordValidationError(f"record must be an object, got {type(data).__name__}")

        record_id = data.get("id")
        if not _is_int(record_id):
            raise RecordValidationError(f"record id must be an integer, got {record_id!r}")

        values: dict[str, Any] = {}
        for key, attr, required in _TEXT_FIELDS:
            raw = data.get(key)
            if raw is None:
                if required:
                    raise RecordValidationError(f"record {record_id}: missing required field '{key}'")
                raw = ""
            if not isinstance(raw, str):
                raise RecordValidationError(f"record {record_id}: field '{key}' must be a string")
            values[attr] = raw

        if not values["title"].strip():
            raise RecordValidationError(f"record {record_id}: title must not be empty")

        tags = data.get("tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list):
            raise RecordValidationError(f"record {record_id}: tags must be a list")

        timestamp = data.get("timestamp")
        if not _is_int(timestamp):
            timestamp = record_id
        if not is_valid_timestamp(timestamp):
            raise RecordValidationError(
                f"record {record_id}: timestamp {timestamp} is outside the supported date range"
            )

        date = data.get("date")
        return cls(
            id=record_id,
            emotional_state=parse_emotion(data.get("emotionalState")),
            tags=[str(t) for t in tags],
            timestamp=timestamp,
            date=date if isinstance(date, str) else "",
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted/exported JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "intent": self.intent,
            "constraints": self.constraints,
            "alternatives": self.alternatives,
            "finalDecision": self.final_decision,
            "reasoning": self.reasoning,
            "emotionalState": self.emotional_state,
            "tags": list(self.tags),
            "timestamp": self.timestamp,
            "date": self.date,
        }

    def merged(self, fields: dict[str, Any], *, now: int | None = None) -> DecisionRecord:
        """Return a copy with *fields* (JSON keys) laid over this record.

        ``id`` is never changed. ``timestamp`` and ``date`` are re-stamped
        with *now* (defaults to the current time).
        """
        data = self.to_dict()
        data.update({k: v for k, v in fields.items() if k != "id"})
        stamp = now if now is not None else now_ms()
        data["timestamp"] = stamp
        data["date"] = format_date(stamp)
        return DecisionRecord.from_dict(data)

    def copy(self) -> DecisionRecord:
        return replace(self, tags=list(self.tags))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def format_date(timestamp: int) -> str:
    """Human-readable local date for an epoch-ms timestamp, e.g. 'Monday, October 19, 2026'."""
    dt = datetime.fromtimestamp(timestamp / 1000)
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def is_valid_timestamp(timestamp: int) -> bool:
    """True if *timestamp* (epoch ms) maps to a local date ``datetime`` can represent."""
    try:
        datetime.fromtimestamp(timestamp / 1000)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def clamp_emotion(value: int) -> int:
    return max(EMOTION_MIN, min(EMOTION_MAX, int(value)))


def parse_emotion(value: Any) -> int:
    """Coerce a raw emotionalState to an int in 0–10; absent means 5.

    Out-of-range values are clamped, not rejected.

    Raises:
        RecordValidationError: if *value* is not numeric.
    """
    if value is None or value == "":
        return DEFAULT_EMOTION
    if isinstance(value, bool):
        raise RecordValidationError(f"emotionalState must be a number, got {value!r}")
    try:
        return clamp_emotion(int(float(value)))
    except (TypeError, ValueError, OverflowError):
        raise RecordValidationError(f"emotionalState must be a number, got {value!r}") from None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def new_record(
    *,
    title: str,
    intent: str,
    constraints: str,
    final_decision: str,
    reasoning: str,
    alternatives: str = "",
    emotional_state: Any = None,
    tags: list[str] | None = None,
    classifier: TagClassifier | None = None,
    now: int | None = None,
) -> DecisionRecord:
    """Build a fresh record from user input, as the capture flow does.

    Text fields are trimmed, ``id`` and ``timestamp`` are both set to *now*
    (epoch ms) and the classifier's tags are merged after the user's own.
    The record store may still bump ``id`` to keep it unique.

    Raises:
        RecordValidationError: if the title is blank or emotional_state is not numeric.
    """
    classifier = classifier or TagClassifier()
    stamp = now if now is not None else now_ms()
    auto_tags = classifier.classify(constraints, reasoning)
    return DecisionRecord.from_dict(
        {
            "id": stamp,
            "title": title.strip(),
            "intent": intent.strip(),
            "constraints": constraints.strip(),
            "alternatives": alternatives.strip(),
            "finalDecision": final_decision.strip(),
            "reasoning": reasoning.strip(),
            "emotionalState": emotional_state,
            "tags": merge_tags(tags or [], auto_tags),
            "timestamp": stamp,
        }
    )
