"""Exception types and resolution sentinels."""

from __future__ import annotations


class VisitInsightsError(Exception):
    """Base class for errors raised by the analytics plugins."""


class InvalidArgument(VisitInsightsError, ValueError):
    """A caller passed arguments that cannot be turned into a widget or record."""


class AccessDenied(VisitInsightsError, PermissionError):
    """The current user cannot see the requested website."""


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# An action without a resolvable entry/exit URL id.
NOT_FOUND = _Sentinel("NOT_FOUND")
# New visit: leave the column null.
NO_VALUE = _Sentinel("NO_VALUE")
# Existing visit: keep whatever is stored.
NO_CHANGE = _Sentinel("NO_CHANGE")


__all__ = [
    "VisitInsightsError",
    "InvalidArgument",
    "AccessDenied",
    "NOT_FOUND",
    "NO_VALUE",
    "NO_CHANGE",
]
