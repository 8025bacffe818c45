"""Shared bookkeeping for the report and suite builders."""

from __future__ import annotations

from typing import Any

from bitbelay.errors import MissingFieldError, MultipleValuesError


class FieldBuilder:
    """Tracks single-valued and appendable fields for a builder.

    Single-valued fields may be set once; a second assignment raises
    :class:`MultipleValuesError`. Appendable fields grow with ``_push`` and
    must be non-empty when required.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._lists: dict[str, list[Any]] = {}

    def _set(self, field: str, value: Any):
        if field in self._values:
            raise MultipleValuesError(field)
        self._values[field] = value
        return self

    def _push(self, field: str, value: Any):
        self._lists.setdefault(field, []).append(value)
        return self

    def _require(self, field: str) -> Any:
        try:
            return self._values[field]
        except KeyError:
            raise MissingFieldError(field) from None

    def _optional(self, field: str, default: Any = None) -> Any:
        return self._values.get(field, default)

    def _require_list(self, field: str) -> tuple[Any, ...]:
        items = self._lists.get(field)
        if not items:
            raise MissingFieldError(field)
        return tuple(items)
