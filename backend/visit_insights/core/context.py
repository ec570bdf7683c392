"""Read-only view of the current request's query parameters."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping
from urllib.parse import unquote_plus

from visit_insights.core.errors import InvalidArgument

_MISSING = object()


class RequestContext:
    """Ambient request parameters threaded through builders explicitly.

    Values are kept exactly as they appeared in the query string so that a
    merged query string reproduces untouched parameters byte for byte.
    """

    def __init__(self, params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None):
        items = params.items() if isinstance(params, Mapping) else (params or [])
        self._raw: dict[str, str] = {}
        for key, value in items:
            self._raw[str(key)] = "" if value is None else str(value)

    @classmethod
    def from_query_string(cls, query: str) -> "RequestContext":
        query = query[1:] if query.startswith("?") else query
        pairs: list[tuple[str, str]] = []
        for chunk in query.split("&"):
            if not chunk:
                continue
            key, _, value = chunk.partition("=")
            pairs.append((unquote_plus(key), value))
        return cls(pairs)

    def __contains__(self, name: str) -> bool:
        return name in self._raw

    def get_param(
        self,
        name: str,
        default: Any = _MISSING,
        type_: Callable[[str], Any] | None = None,
    ) -> Any:
        """Return a decoded request parameter, converted with ``type_`` when given."""

        if name not in self._raw or self._raw[name] == "":
            if default is _MISSING:
                raise InvalidArgument(f"The parameter '{name}' isn't set in the Request.")
            return default
        value = unquote_plus(self._raw[name])
        if type_ is None:
            return value
        try:
            return type_(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"The parameter '{name}' has an invalid value: {value!r}") from exc

    def query_params(self) -> dict[str, str]:
        return dict(self._raw)

    def merge_query_string(self, overrides: Mapping[str, Any]) -> str:
        """Return ``?query`` with ``overrides`` applied on top of the current parameters.

        Override values are written as given; a ``None`` value drops the key.
        """

        merged = dict(self._raw)
        for key, value in overrides.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = str(value)
        return "?" + "&".join(f"{key}={value}" for key, value in merged.items())


__all__ = ["RequestContext"]
