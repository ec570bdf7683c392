from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.dialects import mysql

from visit_insights.core.errors import NO_CHANGE, NO_VALUE
from visit_insights.tracking import EntryPageUrl, TrackedAction, TrackerRequest, Visitor

REQUEST = TrackerRequest(id_site=1)


def test_column_metadata():
    dimension = EntryPageUrl()

    assert dimension.column_name == "visit_entry_idaction_url"
    assert dimension.column_type == "INTEGER(11) UNSIGNED NULL  DEFAULT NULL"
    schema = dimension.column_schema()
    assert isinstance(schema, Integer)
    assert schema.compile(dialect=mysql.dialect()) == "INTEGER(11) UNSIGNED"


def test_name_and_segment():
    dimension = EntryPageUrl()

    assert dimension.name() == "Entry Page URL"
    (segment,) = dimension.segments()
    assert segment.segment == "entryPageUrl"
    assert segment.name == "Entry Page URL"
    assert segment.column == "visit_entry_idaction_url"


def test_new_visit_without_action_has_no_value():
    assert EntryPageUrl().on_new_visit(REQUEST, Visitor(), None) is NO_VALUE


def test_new_visit_uses_action_url_id():
    action = TrackedAction(action_type="pageview", id_action_url=42)

    assert EntryPageUrl().on_new_visit(REQUEST, Visitor(), action) == 42


def test_new_visit_with_unresolvable_action_has_no_value():
    event = TrackedAction(action_type="event", id_action_url=9)
    missing = TrackedAction(action_type="pageview", id_action_url=None)

    assert EntryPageUrl().on_new_visit(REQUEST, Visitor(), event) is NO_VALUE
    assert EntryPageUrl().on_new_visit(REQUEST, Visitor(), missing) is NO_VALUE


def test_existing_visit_keeps_stored_value():
    visitor = Visitor(columns={"visit_entry_idaction_url": 3}, is_known=True)
    action = TrackedAction(id_action_url=7)

    assert EntryPageUrl().on_existing_visit(REQUEST, visitor, action) is NO_CHANGE


def test_existing_visit_fills_unset_column():
    visitor = Visitor(columns={"visit_entry_idaction_url": None}, is_known=True)

    assert EntryPageUrl().on_existing_visit(REQUEST, visitor, TrackedAction(id_action_url=7)) == 7


def test_existing_visit_without_resolution_is_unchanged():
    visitor = Visitor(is_known=True)

    assert EntryPageUrl().on_existing_visit(REQUEST, visitor, TrackedAction(action_type="download", id_action_url=7)) is NO_CHANGE
    assert EntryPageUrl().on_existing_visit(REQUEST, visitor, TrackedAction(id_action_url=None)) is NO_CHANGE
    assert EntryPageUrl().on_existing_visit(REQUEST, visitor, None) is NO_CHANGE
