"""Entry page URL visit dimension."""

from __future__ import annotations

from typing import Any

from sqlalchemy.types import TypeEngine

from visit_insights.core.errors import NO_CHANGE, NO_VALUE, NOT_FOUND
from visit_insights.core.translations import translate
from visit_insights.db.types import UnsignedInteger
from visit_insights.tracking.dimensions import Segment, TrackedAction, TrackerRequest, Visitor


class EntryPageUrl:
    """Stores the first page URL of a visit in ``visit_entry_idaction_url``."""

    column_name = "visit_entry_idaction_url"
    column_type = "INTEGER(11) UNSIGNED NULL  DEFAULT NULL"
    name_key = "Actions_ColumnEntryPageURL"

    def column_schema(self) -> TypeEngine:
        return UnsignedInteger

    def name(self) -> str:
        return translate(self.name_key)

    def segments(self) -> list[Segment]:
        return [Segment(segment="entryPageUrl", name=self.name(), column=self.column_name)]

    def on_new_visit(self, request: TrackerRequest, visitor: Visitor, action: TrackedAction | None) -> Any:
        id_action_url = NOT_FOUND
        if action:
            id_action_url = action.entry_or_exit_url_id()

        if id_action_url is NOT_FOUND:
            return NO_VALUE

        return int(id_action_url)

    def on_existing_visit(self, request: TrackerRequest, visitor: Visitor, action: TrackedAction | None) -> Any:
        id_action = visitor.get_column(self.column_name)

        if id_action is None and action:
            id_action = action.entry_or_exit_url_id()
            if id_action:
                return id_action

        return NO_CHANGE


__all__ = ["EntryPageUrl"]
