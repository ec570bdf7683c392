"""Visit dimension capability and the registry that applies dimensions.

A visit dimension owns one column of the visit record. The tracking pipeline
asks every registered dimension for a value when a visit starts and for an
update on each later request of the same visit. Dimensions return
``NO_VALUE`` / ``NO_CHANGE`` when the column should be left alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Protocol

from sqlalchemy.types import TypeEngine

from visit_insights.core.errors import NO_CHANGE, NO_VALUE, NOT_FOUND, InvalidArgument

logger = logging.getLogger(__name__)

# Action types whose URL can start or end a visit.
URL_ACTION_TYPES = frozenset({"pageview", "site_search"})


@dataclass(frozen=True)
class TrackerRequest:
    id_site: int
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Visitor:
    """Column values of the visit currently being processed."""

    columns: dict[str, Any] = field(default_factory=dict)
    is_known: bool = False

    def get_column(self, name: str) -> Any:
        return self.columns.get(name)

    def set_column(self, name: str, value: Any) -> None:
        self.columns[name] = value


@dataclass(frozen=True)
class TrackedAction:
    action_type: str = "pageview"
    id_action_url: int | None = None
    url: str | None = None

    def entry_or_exit_url_id(self) -> Any:
        """Return the action id usable as entry/exit page, or ``NOT_FOUND``."""

        if self.action_type not in URL_ACTION_TYPES or self.id_action_url is None:
            return NOT_FOUND
        return self.id_action_url


@dataclass(frozen=True)
class Segment:
    segment: str
    name: str
    column: str
    category: str = "Actions"
    type: str = "dimension"


class VisitDimension(Protocol):
    column_name: str
    column_type: str

    def column_schema(self) -> TypeEngine:
        ...

    def on_new_visit(self, request: TrackerRequest, visitor: Visitor, action: TrackedAction | None) -> Any:
        ...

    def on_existing_visit(self, request: TrackerRequest, visitor: Visitor, action: TrackedAction | None) -> Any:
        ...

    def segments(self) -> list[Segment]:
        ...


class DimensionRegistry:
    """Dimensions registered with the tracker, in registration order."""

    def __init__(self, dimensions: Iterable[VisitDimension] = ()):
        self._dimensions: dict[str, VisitDimension] = {}
        for dimension in dimensions:
            self.register(dimension)

    def register(self, dimension: VisitDimension) -> None:
        column = dimension.column_name
        if column in self._dimensions:
            raise InvalidArgument(f"A visit dimension for column {column!r} is already registered")
        self._dimensions[column] = dimension

    def __iter__(self) -> Iterator[VisitDimension]:
        return iter(self._dimensions.values())

    def __len__(self) -> int:
        return len(self._dimensions)

    def get(self, column_name: str) -> VisitDimension | None:
        return self._dimensions.get(column_name)

    def segments(self) -> list[Segment]:
        return [segment for dimension in self for segment in dimension.segments()]

    def new_visit_values(
        self,
        request: TrackerRequest,
        visitor: Visitor,
        action: TrackedAction | None,
    ) -> dict[str, Any]:
        """Column values to insert for a new visit."""

        values: dict[str, Any] = {}
        for dimension in self:
            value = dimension.on_new_visit(request, visitor, action)
            if value is NO_VALUE:
                continue
            values[dimension.column_name] = value
        logger.debug("New visit on site %s: %s", request.id_site, values)
        return values

    def existing_visit_updates(
        self,
        request: TrackerRequest,
        visitor: Visitor,
        action: TrackedAction | None,
    ) -> dict[str, Any]:
        """Column values to update on a visit that is already stored."""

        updates: dict[str, Any] = {}
        for dimension in self:
            value = dimension.on_existing_visit(request, visitor, action)
            if value is NO_CHANGE:
                continue
            updates[dimension.column_name] = value
        if updates:
            logger.debug("Updating visit on site %s: %s", request.id_site, updates)
        return updates


__all__ = [
    "URL_ACTION_TYPES",
    "TrackerRequest",
    "Visitor",
    "TrackedAction",
    "Segment",
    "VisitDimension",
    "DimensionRegistry",
]
