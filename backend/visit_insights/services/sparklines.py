"""Sparkline widget configuration for dashboard views.

A :class:`SparklineSetBuilder` is created for a single dashboard render. The
caller declares the metrics to fetch, adds one entry per sparkline (a value,
a description and optionally an evolution against a past period) plus any
placeholders, and finally asks for the entries sorted by their order.

Example::

    builder = SparklineSetBuilder(context, sites)
    builder.add_entry({"columns": ["nb_visits"]}, 120, "%s visits",
                      {"currentValue": 120, "pastValue": 100})
    builder.add_placeholder()
    entries = builder.get_sorted_entries()

Each entry carries the query string used to fetch its sparkline image. The
string is the current request's query with ``viewDataTable=sparkline`` and a
concrete ``date`` range merged in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Sequence, Union
from urllib.parse import quote

from visit_insights.config import AppSettings, get_settings
from visit_insights.core.context import RequestContext
from visit_insights.core.errors import InvalidArgument
from visit_insights.core.translations import get_default_metric_translations
from visit_insights.services.evolution import calculate_evolution, to_number
from visit_insights.services.periods import relative_date_range
from visit_insights.services.sites import SiteResolver

logger = logging.getLogger(__name__)

MetricValue = Union[int, float, Decimal, str]
Columns = Union[str, Sequence[str]]

SPARKLINE_VIEW = "sparkline"


@dataclass
class MetricDisplay:
    column: str
    value: MetricValue
    description: str


@dataclass
class Evolution:
    percent: float
    tooltip: str | None = None


@dataclass
class SparklineEntry:
    order: int
    url: str = ""
    metrics: list[MetricDisplay] = field(default_factory=list)
    evolution: Evolution | None = None

    @property
    def is_placeholder(self) -> bool:
        return not self.metrics


@dataclass
class MetricDeclaration:
    columns: Columns
    order: int | None = None


def as_sequence(value: Any) -> list[Any]:
    """Normalize a single value or a sequence of values to a list."""

    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _same_columns(left: Columns, right: Columns) -> bool:
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    return list(left) == list(right)


def _encode_param(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return quote(",".join(str(item) for item in value), safe="")
    return value


class SparklineSetBuilder:
    """Collects sparkline entries for one dashboard view."""

    def __init__(
        self,
        context: RequestContext,
        sites: SiteResolver,
        *,
        translations: Mapping[str, str] | None = None,
        settings: AppSettings | None = None,
    ):
        self._context = context
        self._sites = sites
        self._settings = settings or get_settings()
        self._metrics: list[MetricDeclaration] = []
        self._entries: list[SparklineEntry] = []
        self.translations: dict[str, str] = (
            dict(translations) if translations is not None else get_default_metric_translations()
        )

    # Metric declarations

    def get_metrics(self) -> list[MetricDeclaration]:
        return list(self._metrics)

    def has_metrics(self) -> bool:
        return bool(self._metrics)

    def add_metric(self, metric_names: Columns, order: int | None = None) -> None:
        """Declare metric(s) to fetch from the report's data request.

        ``metric_names`` is either one column (``"nb_visits"``) or several
        columns shown after a single sparkline (``["nb_visits", "nb_actions"]``).
        """

        self._metrics.append(MetricDeclaration(columns=metric_names, order=order))

    def remove_metric(self, metric_names: Columns) -> None:
        """Remove the first declaration added with exactly ``metric_names``."""

        for index, declaration in enumerate(self._metrics):
            if _same_columns(declaration.columns, metric_names):
                del self._metrics[index]
                logger.debug("Removed sparkline metric %s", metric_names)
                break

    def replace_metric(self, metric_names: Columns, replacement_columns: Columns) -> None:
        """Swap the columns of the first declaration added with exactly ``metric_names``."""

        for declaration in self._metrics:
            if _same_columns(declaration.columns, metric_names):
                declaration.columns = replacement_columns
                break

    # Translations

    def add_translation(self, key: str, label: str) -> None:
        self.translations[key] = label

    def add_translations(self, labels: Mapping[str, str]) -> None:
        self.translations.update(labels)

    def translate_metric(self, key: str) -> str:
        return self.translations.get(key, key)

    # Entries

    def add_placeholder(self, order: int | None = None) -> None:
        """Add an empty slot, e.g. to leave one column of the grid blank."""

        self._entries.append(SparklineEntry(order=self._entry_order(order)))

    def add_entry(
        self,
        request_params: Mapping[str, Any],
        value: MetricValue | Sequence[MetricValue],
        description: str | Sequence[str],
        evolution: Mapping[str, Any] | None = None,
        order: int | None = None,
    ) -> None:
        """Add a sparkline showing one or more values with their descriptions.

        ``description`` is already translated and may contain ``%s`` where the
        value should appear. ``evolution`` needs ``currentValue`` and
        ``pastValue`` keys and may carry a ``tooltip``.
        """

        values = as_sequence(value)
        descriptions = as_sequence(description)

        if len(values) != len(descriptions):
            raise InvalidArgument(
                "The number of values and descriptions need to be the same to add a sparkline. "
                f"Values: {', '.join(str(v) for v in values)} "
                f"Descriptions: {', '.join(str(d) for d in descriptions)}"
            )

        columns: list[str] = []
        requested_columns = request_params.get("columns")
        if requested_columns:
            candidate = as_sequence(requested_columns)
            if len(candidate) == len(values):
                columns = candidate

        metrics = [
            MetricDisplay(
                column=columns[index] if index < len(columns) else "",
                value=metric_value,
                description=descriptions[index],
            )
            for index, metric_value in enumerate(values)
        ]
        if not metrics:
            return

        entry_evolution = self._build_evolution(evolution) if evolution else None

        entry = SparklineEntry(
            order=self._entry_order(order),
            url=self.build_fetch_url(request_params),
            metrics=metrics,
            evolution=entry_evolution,
        )
        self._entries.append(entry)
        logger.debug("Added sparkline %s at order %d", [m.column for m in metrics], entry.order)

    def get_sorted_entries(self) -> list[SparklineEntry]:
        """Return the entries ordered by ``order``, keeping insertion order for ties."""

        return sorted(self._entries, key=lambda entry: entry.order)

    def _entry_order(self, order: int | None) -> int:
        if order is None:
            return self._settings.sparkline_default_order_base + len(self._entries)
        return int(order)

    def _build_evolution(self, evolution: Any) -> Evolution | None:
        if (
            not isinstance(evolution, Mapping)
            or "currentValue" not in evolution
            or "pastValue" not in evolution
        ):
            raise InvalidArgument(
                "In order to show an evolution in the sparklines view a currentValue "
                "and pastValue array key needs to be present"
            )

        current_value = evolution["currentValue"]
        percent = calculate_evolution(
            current_value,
            evolution["pastValue"],
            precision=self._settings.evolution_precision,
        )

        # Hide "0% / 0 visits" rows but keep a drop to zero visible.
        if percent != 0 or to_number(current_value) != 0:
            return Evolution(percent=percent, tooltip=evolution.get("tooltip") or None)
        return None

    # URLs

    def build_fetch_url(self, custom_params: Mapping[str, Any] | None = None) -> str:
        """Return the query string that fetches the sparkline image for ``custom_params``."""

        params = dict(custom_params or {})
        params["viewDataTable"] = SPARKLINE_VIEW
        params = self.resolve_date_range(params)
        encoded = {key: _encode_param(value) for key, value in params.items()}
        return self._context.merge_query_string(encoded)

    def resolve_date_range(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Replace ``date`` with the concrete range the sparkline should plot.

        With ``range=last30`` and ``date=2008-03-10`` the date becomes
        ``2008-02-10,2008-03-10``. Custom range periods pass through unchanged.
        """

        params = dict(params)
        period = params.get("period")
        if period is None:
            period = self._context.get_param("period")
        if period == "range":
            return params

        last_n = params.get("range")
        if last_n is None:
            last_n = self._settings.sparkline_default_range

        id_site = params.get("idSite")
        if id_site is None:
            id_site = self._context.get_param("idSite")

        end_date = params.get("date")
        if end_date is None:
            end_date = self._context.get_param("date", self._settings.sparkline_default_date, str)

        site = self._sites.resolve_site(id_site)
        params["date"] = relative_date_range(period, last_n, end_date, site)
        return params


__all__ = [
    "MetricDisplay",
    "Evolution",
    "SparklineEntry",
    "MetricDeclaration",
    "SparklineSetBuilder",
    "as_sequence",
]
