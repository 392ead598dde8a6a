#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Form fields
===========
Minimal form model around the condition evaluator: fields are built from a
``name → params`` mapping, read their values from submitted request data
(keys prefixed ``wp``), and answer whether they are hidden or disabled.

Supported field types: ``text``, ``select`` and ``check`` (with optional
``invert``).  Conditions are validated when the field is built, so a bad
``hide-if`` fails the whole form up front.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .conditions import (
    ConditionEvaluator,
    ConditionValidationError,
    FieldValue,
    maybe_condition,
)


# -----------------------------------------------------------------------------

REQUEST_PREFIX = "wp"


def _request_bool(value: Any) -> bool:
    return value not in (None, "", "0", False)


def _describe(raw: Any) -> str:
    """JSON text of a raw condition for error messages."""
    try:
        return json.dumps(raw, default=str)
    except RecursionError:
        return "[...]"


# -----------------------------------------------------------------------------
# Fields
# -----------------------------------------------------------------------------

class FormField:
    field_type = "text"

    def __init__(self, name: str, params: Optional[Mapping[str, Any]] = None) -> None:
        params = dict(params or {})
        self.name = name
        self.params = params
        self.parent: Optional["Form"] = None
        self.hide_if = self._condition(params.get("hide-if"))
        self.disable_if = self._condition(params.get("disable-if"))

    def _condition(self, raw: Any) -> Optional[ConditionEvaluator]:
        try:
            return maybe_condition(raw)
        except ConditionValidationError as ex:
            spec = _describe(raw)
            raise ConditionValidationError(
                f"Invalid hide-if or disable-if specification for {self.name}: {ex} in {spec}"
            ) from ex

    @property
    def request_key(self) -> str:
        return REQUEST_PREFIX + self.name

    def get_default(self) -> FieldValue:
        return self.params.get("default", "")

    def load_data_from_request(self, request: Mapping[str, Any], submit_attempt: bool = False) -> FieldValue:
        if self.request_key in request:
            return str(request[self.request_key])
        return self.get_default()

    def display_value(self, value: FieldValue) -> FieldValue:
        """The value other fields' conditions see."""
        return value

    # ── state ──────────────────────────────────────────────────────────────

    def _condition_values(self, alldata: Mapping[str, FieldValue]) -> dict[str, FieldValue]:
        if self.parent is None:
            return dict(alldata)
        return self.parent.condition_values(alldata)

    def is_hidden(self, alldata: Mapping[str, FieldValue]) -> bool:
        return self.hide_if is not None and self.hide_if.evaluate(self._condition_values(alldata))

    def is_disabled(self, alldata: Mapping[str, FieldValue]) -> bool:
        """Disabled explicitly, by ``disable-if``, or because the field is hidden."""
        if self.params.get("disabled"):
            return True
        if self.is_hidden(alldata):
            return True
        return self.disable_if is not None and self.disable_if.evaluate(self._condition_values(alldata))


class TextField(FormField):
    field_type = "text"


class SelectField(FormField):
    field_type = "select"

    @property
    def options(self) -> dict[str, str]:
        return dict(self.params.get("options") or {})

    def get_default(self) -> FieldValue:
        default = self.params.get("default")
        if default is not None:
            return str(default)
        # Browsers submit the first option when nothing is selected.
        return next(iter(self.options.values()), "")


class CheckField(FormField):
    field_type = "check"

    @property
    def inverted(self) -> bool:
        return bool(self.params.get("invert", False))

    def get_default(self) -> FieldValue:
        return bool(self.params.get("default", False))

    def load_data_from_request(self, request: Mapping[str, Any], submit_attempt: bool = False) -> FieldValue:
        # An unchecked box is absent from a submitted form, so on a real submit
        # attempt absence means "unchecked" rather than "use the default".
        if submit_attempt or self.request_key in request:
            checked = _request_bool(request.get(self.request_key))
            return not checked if self.inverted else checked
        return self.get_default()

    def display_value(self, value: FieldValue) -> FieldValue:
        return not value if self.inverted else value


FIELD_TYPES: dict[str, type[FormField]] = {
    "text": TextField,
    "select": SelectField,
    "check": CheckField,
}


def field_from_params(name: str, params: Mapping[str, Any]) -> FormField:
    field_type = params.get("type", "text")
    cls = FIELD_TYPES.get(field_type)
    if cls is None:
        raise ValueError(f"Unknown field type '{field_type}' for {name}")
    return cls(name, params)


# -----------------------------------------------------------------------------
# Form
# -----------------------------------------------------------------------------

class Form:
    """A set of fields plus the values loaded for one request."""

    def __init__(
        self,
        field_info: Mapping[str, Mapping[str, Any]],
        request_data: Optional[Mapping[str, Any]] = None,
        submit_attempt: bool = False,
    ) -> None:
        self.fields: dict[str, FormField] = {}
        for name, params in field_info.items():
            field = field_from_params(name, params)
            field.parent = self
            self.fields[name] = field

        request_data = request_data or {}
        self.field_data: dict[str, FieldValue] = {
            name: field.load_data_from_request(request_data, submit_attempt)
            for name, field in self.fields.items()
        }

    def get_field(self, name: str) -> FormField:
        try:
            return self.fields[name]
        except KeyError:
            raise KeyError(f"No field named '{name}'") from None

    def condition_values(self, alldata: Mapping[str, FieldValue]) -> dict[str, FieldValue]:
        """Map each field name to the value conditions compare against."""
        values: dict[str, FieldValue] = dict(alldata)
        for name, field in self.fields.items():
            if name in alldata:
                values[name] = field.display_value(alldata[name])
        return values

    def field_states(self) -> dict[str, dict[str, bool]]:
        return {
            name: {
                "hidden": field.is_hidden(self.field_data),
                "disabled": field.is_disabled(self.field_data),
            }
            for name, field in self.fields.items()
        }


# -----------------------------------------------------------------------------
