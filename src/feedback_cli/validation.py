"""Field validation for the feedback form.

Every flag is ``True`` when the field is *invalid*. The e-mail rule is
intentionally naive: it only asks for an ``@`` and a ``.`` somewhere in the
raw value, the collection endpoint does the real checking.
"""
from dataclasses import dataclass, replace, asdict
from typing import Any, Mapping, Union

from feedback_cli.utils import FIELDS, FormData


@dataclass(frozen=True)
class ValidationResult:
    name: bool = False
    email: bool = False
    comment: bool = False

    def __getitem__(self, field: str) -> bool:
        if field not in FIELDS:
            raise KeyError(field)
        return getattr(self, field)

    def cleared(self, field: str) -> "ValidationResult":
        """Copy with the flag of ``field`` reset, other flags untouched."""
        return replace(self, **{field: False})

    def invalid_fields(self) -> list:
        return [field for field in FIELDS if self[field]]

    def as_dict(self) -> dict:
        return asdict(self)


def _blank(value: str) -> bool:
    return not value.strip()


def validate(form: Union[FormData, Mapping[str, Any]]) -> ValidationResult:
    if not isinstance(form, FormData):
        form = FormData.from_mapping(form)
    name = form.name or ""
    email = form.email or ""
    comment = form.comment or ""
    return ValidationResult(
        name=_blank(name),
        email="@" not in email or "." not in email,
        comment=_blank(comment),
    )


def is_form_valid(result: ValidationResult) -> bool:
    return not any(result[field] for field in FIELDS)
