"""Domain model for a single CEL event."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any

from cel_amqp.cel_types import CelEventType, parse_amaflag, parse_event_type
from cel_amqp.errors import CelFormattingError

_STRING_FIELDS: tuple[str, ...] = (
    "user_defined_name",
    "unique_id",
    "linked_id",
    "caller_id_num",
    "caller_id_name",
    "caller_id_ani",
    "caller_id_rdnis",
    "caller_id_dnid",
    "extension",
    "context",
    "channel_name",
    "application_name",
    "application_data",
    "account_code",
    "user_field",
    "peer",
    "peer_account",
)


@dataclass(frozen=True, slots=True)
class CelEventRecord:
    """Snapshot of a channel at the moment a CEL event fired.

    ``event_type`` is a raw string only when the host reported a type this
    package does not know; formatting such a record fails.
    """

    event_type: CelEventType | str
    event_time: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    user_defined_name: str = ""
    unique_id: str = ""
    linked_id: str = ""
    caller_id_num: str = ""
    caller_id_name: str = ""
    caller_id_ani: str = ""
    caller_id_rdnis: str = ""
    caller_id_dnid: str = ""
    extension: str = ""
    context: str = ""
    channel_name: str = ""
    application_name: str = ""
    application_data: str = ""
    account_code: str = ""
    amaflag: int = 0
    user_field: str = ""
    peer: str = ""
    peer_account: str = ""
    extra: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CelEventRecord:
        """Build a record from a host payload such as one decoded JSON line."""

        if not isinstance(data, Mapping):
            raise CelFormattingError("invalid_record", "CEL record must be a JSON object.")

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise CelFormattingError("invalid_record", f"Unknown CEL record fields: {', '.join(unknown)}.")

        raw_type = data.get("event_type")
        if raw_type is None or raw_type == "":
            raise CelFormattingError("invalid_record", "CEL record is missing event_type.")

        kwargs: dict[str, Any] = {"event_type": _coerce_event_type(raw_type)}
        for name in _STRING_FIELDS:
            value = data.get(name)
            kwargs[name] = "" if value is None else str(value)

        if data.get("event_time") is not None:
            kwargs["event_time"] = _coerce_event_time(data["event_time"])

        try:
            kwargs["amaflag"] = parse_amaflag(data.get("amaflag") or 0)
        except (TypeError, ValueError) as exc:
            raise CelFormattingError("invalid_record", str(exc)) from exc

        kwargs["extra"] = _coerce_extra(data.get("extra"))
        return cls(**kwargs)


def _coerce_event_type(raw_type: Any) -> CelEventType | str:
    if isinstance(raw_type, CelEventType):
        return raw_type
    try:
        return parse_event_type(str(raw_type))
    except ValueError:
        # Left for the formatter to reject with its own error.
        return str(raw_type)


def _coerce_event_time(raw_time: Any) -> datetime:
    if isinstance(raw_time, datetime):
        return raw_time
    if isinstance(raw_time, bool):
        raise CelFormattingError("invalid_record", "event_time must be an ISO-8601 string or epoch seconds.")
    if isinstance(raw_time, (int, float)):
        try:
            return datetime.fromtimestamp(raw_time, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise CelFormattingError("invalid_record", f"event_time out of range: {raw_time!r}.") from exc
    if isinstance(raw_time, str):
        try:
            return datetime.fromisoformat(raw_time)
        except ValueError as exc:
            raise CelFormattingError("invalid_record", f"Invalid event_time: '{raw_time}'.") from exc
    raise CelFormattingError("invalid_record", "event_time must be an ISO-8601 string or epoch seconds.")


def _coerce_extra(raw_extra: Any) -> str:
    if raw_extra is None:
        return ""
    if isinstance(raw_extra, str):
        return raw_extra
    return json.dumps(raw_extra)
