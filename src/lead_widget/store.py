from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping

from .errors import UnknownFieldError, ValidationError
from .models import FORM_FIELDS, ContactFormData, FormSnapshot, PreferredContact


class FormStateStore:
    """Holds the single in-progress contact submission and its error map."""

    def __init__(self) -> None:
        self._values = ContactFormData()
        self._errors: Dict[str, str] = {}

    def update(self, field: str, value: Any) -> None:
        if field not in FORM_FIELDS:
            raise UnknownFieldError(field)
        if field == "preferred_contact":
            value = self._coerce_preferred_contact(value)
        elif not isinstance(value, str):
            raise ValidationError(f"Field '{field}' expects text")
        self._values = replace(self._values, **{field: value})

    def reset(self) -> None:
        self._values = ContactFormData()
        self._errors = {}

    def set_errors(self, errors: Mapping[str, str]) -> None:
        self._errors = dict(errors)

    def read(self) -> FormSnapshot:
        return FormSnapshot(values=replace(self._values), errors=dict(self._errors))

    @staticmethod
    def _coerce_preferred_contact(value: Any) -> PreferredContact:
        try:
            return PreferredContact(value)
        except ValueError as exc:
            options = ", ".join(item.value for item in PreferredContact)
            raise ValidationError(
                f"Preferred contact must be one of: {options}"
            ) from exc
