"""CEL event to JSON document formatting.

Every document carries the full key set. Source values that are absent are
published as empty strings, except ``extra`` which is ``null`` when empty.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from cel_amqp.cel_types import CelEventType, amaflags_to_string
from cel_amqp.domain.records import CelEventRecord
from cel_amqp.errors import CelFormattingError

logger = logging.getLogger(__name__)

DOCUMENT_KEYS: tuple[str, ...] = (
    "event_name",
    "account_code",
    "caller_id",
    "extension",
    "context",
    "channel",
    "application",
    "app_data",
    "event_time",
    "amaflags",
    "unique_id",
    "linked_id",
    "user_field",
    "peer",
    "peer_account",
    "extra",
)
CALLER_ID_KEYS: tuple[str, ...] = ("num", "name", "ani", "rdnis", "dnid")


def resolve_event_name(record: CelEventRecord) -> str:
    """Return the published event name, preferring the user-defined name for USER_DEFINED events."""

    if not isinstance(record.event_type, CelEventType):
        raise CelFormattingError("unknown_event_type", f"Unknown CEL event type: '{record.event_type}'.")
    if record.event_type is CelEventType.USER_DEFINED:
        return record.user_defined_name
    return record.event_type.value


def parse_extra(raw_extra: str) -> Any:
    """Decode the free-form extra field, falling back to the raw text."""

    if not raw_extra:
        return None
    try:
        return json.loads(raw_extra, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        logger.error("Error parsing extra field", extra={"extra_field": raw_extra})
        return raw_extra


def format_event_time(event_time: datetime) -> str:
    """Render a timestamp as ``YYYY-MM-DDTHH:MM:SS.mmm+HHMM``; naive values are local time."""

    if event_time.tzinfo is None:
        event_time = event_time.astimezone()
    milliseconds = event_time.microsecond // 1000
    return f"{event_time:%Y-%m-%dT%H:%M:%S}.{milliseconds:03d}{event_time:%z}"


def build_cel_document(record: CelEventRecord) -> dict[str, Any]:
    return {
        "event_name": resolve_event_name(record),
        "account_code": record.account_code,
        "caller_id": {
            "num": record.caller_id_num,
            "name": record.caller_id_name,
            "ani": record.caller_id_ani,
            "rdnis": record.caller_id_rdnis,
            "dnid": record.caller_id_dnid,
        },
        "extension": record.extension,
        "context": record.context,
        "channel": record.channel_name,
        "application": record.application_name,
        "app_data": record.application_data,
        "event_time": format_event_time(record.event_time),
        "amaflags": amaflags_to_string(record.amaflag),
        "unique_id": record.unique_id,
        "linked_id": record.linked_id,
        "user_field": record.user_field,
        "peer": record.peer,
        "peer_account": record.peer_account,
        "extra": parse_extra(record.extra),
    }


def format_cel_event(record: CelEventRecord) -> str:
    """Serialize a CEL record to the JSON text that gets published."""

    document = build_cel_document(record)
    try:
        text = json.dumps(document, ensure_ascii=False, allow_nan=False)
        text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise CelFormattingError("serialization_failed", f"Failed to build string from JSON: {exc}") from exc
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")
