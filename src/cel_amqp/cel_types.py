"""Shared CEL enums and parsing helpers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TypeVar


class CelEventType(str, Enum):
    """CEL event types keyed by the name published in ``event_name``."""

    CHANNEL_START = "CHAN_START"
    CHANNEL_END = "CHAN_END"
    HANGUP = "HANGUP"
    ANSWER = "ANSWER"
    APP_START = "APP_START"
    APP_END = "APP_END"
    PARK_START = "PARK_START"
    PARK_END = "PARK_END"
    USER_DEFINED = "USER_DEFINED"
    BRIDGE_ENTER = "BRIDGE_ENTER"
    BRIDGE_EXIT = "BRIDGE_EXIT"
    BLINDTRANSFER = "BLINDTRANSFER"
    ATTENDEDTRANSFER = "ATTENDEDTRANSFER"
    PICKUP = "PICKUP"
    FORWARD = "FORWARD"
    LINKEDID_END = "LINKEDID_END"
    LOCAL_OPTIMIZE = "LOCAL_OPTIMIZE"
    LOCAL_OPTIMIZE_BEGIN = "LOCAL_OPTIMIZE_BEGIN"
    STREAM_BEGIN = "STREAM_BEGIN"
    STREAM_END = "STREAM_END"
    DTMF = "DTMF"


class AmaFlag(IntEnum):
    """Automated message accounting flags carried on a channel."""

    OMIT = 1
    BILLING = 2
    DOCUMENTATION = 3


EnumT = TypeVar("EnumT", bound=Enum)


def enum_values(enum_cls: type[EnumT]) -> tuple[str, ...]:
    """Return enum values for CLI hinting in declaration order."""

    return tuple(str(member.value) for member in enum_cls)


def parse_case_insensitive_enum(raw_value: str, enum_cls: type[EnumT]) -> EnumT:
    """Parse enum values or names case-insensitively and raise ValueError with allowed values."""

    normalized = raw_value.strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == normalized or member.name.lower() == normalized:
            return member

    allowed = ", ".join(enum_values(enum_cls))
    enum_name = enum_cls.__name__
    raise ValueError(f"Invalid {enum_name}: '{raw_value}'. Allowed values: {allowed}.")


def parse_event_type(raw_value: str) -> CelEventType:
    return parse_case_insensitive_enum(raw_value, CelEventType)


def parse_amaflag(raw_value: str | int) -> int:
    """Accept an AMA flag as integer, digit string or flag name."""

    if isinstance(raw_value, int):
        return raw_value
    stripped = raw_value.strip()
    if not stripped:
        return 0
    if stripped.isdigit():
        return int(stripped)
    for member in AmaFlag:
        if member.name.lower() == stripped.lower():
            return int(member)
    raise ValueError(f"Invalid AmaFlag: '{raw_value}'. Allowed values: OMIT, BILLING, DOCUMENTATION.")


def amaflags_to_string(value: int) -> str:
    """Render an AMA flag the way channel accounting reports it."""

    try:
        return AmaFlag(value).name
    except ValueError:
        return "Unknown"
