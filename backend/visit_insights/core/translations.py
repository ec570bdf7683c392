"""Localized labels used by reports and tracking dimensions."""

from __future__ import annotations

DEFAULT_TRANSLATIONS: dict[str, str] = {
    "General_ColumnNbVisits": "Visits",
    "General_ColumnNbUniqVisitors": "Unique visitors",
    "General_ColumnNbUsers": "Users",
    "General_ColumnNbActions": "Actions",
    "General_ColumnBounceCount": "Bounces",
    "General_ColumnSumVisitLength": "Total time spent by visitors (in seconds)",
    "General_ColumnMaxActions": "Maximum actions in one visit",
    "General_ColumnNbVisitsConverted": "Visits with conversions",
    "General_EvolutionTooltip": "%(current)s %(label)s in %(current_period)s compared to %(past)s %(label)s in %(past_period)s",
    "Actions_ColumnEntryPageURL": "Entry Page URL",
    "Actions_ColumnExitPageURL": "Exit Page URL",
}

DEFAULT_METRIC_TRANSLATION_KEYS: dict[str, str] = {
    "nb_visits": "General_ColumnNbVisits",
    "nb_uniq_visitors": "General_ColumnNbUniqVisitors",
    "nb_users": "General_ColumnNbUsers",
    "nb_actions": "General_ColumnNbActions",
    "bounce_count": "General_ColumnBounceCount",
    "sum_visit_length": "General_ColumnSumVisitLength",
    "max_actions": "General_ColumnMaxActions",
    "nb_visits_converted": "General_ColumnNbVisitsConverted",
}

def translate(key: str) -> str:
    """Return the label for ``key``, or the key itself when it is unknown."""

    return DEFAULT_TRANSLATIONS.get(key, key)


def get_default_metric_translations() -> dict[str, str]:
    """Map metric column names to their translated labels."""

    return {metric: translate(key) for metric, key in DEFAULT_METRIC_TRANSLATION_KEYS.items()}


__all__ = [
    "DEFAULT_TRANSLATIONS",
    "DEFAULT_METRIC_TRANSLATION_KEYS",
    "translate",
    "get_default_metric_translations",
]
