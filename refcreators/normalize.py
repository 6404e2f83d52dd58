"""Creator normalization: validate loose creator data into a canonical record

Creator data arrives in API JSON form, either as a single combined name::

    {"name": "Plato", "creatorType": "author"}

or as a two-part name::

    {"firstName": "Ada", "lastName": "Lovelace", "creatorType": "editor"}

`normalize` turns either shape into a `CanonicalCreator`, the form used for
storage and identity matching.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional, Union

from .creator_types import CreatorTypeRegistry, registry as default_registry
from .errors import ValidationError, CategoryResolutionWarning
from .observability import DiagnosticChannel, diagnostics as default_diagnostics


class FieldMode(IntEnum):
    TWO_FIELD = 0
    SINGLE_FIELD = 1


NAME_KEYS = ("name", "firstName", "lastName")


def clean_name(value: str) -> str:
    """Trim and NFC-normalize a name part"""
    return unicodedata.normalize("NFC", value.strip())


def coerce_field_mode(value: Any) -> int:
    """Coerce a raw fieldMode to 0 or 1; falsy values mean two-field mode"""
    if not value:
        return FieldMode.TWO_FIELD
    try:
        mode = int(value)
    except (TypeError, ValueError):
        raise ValidationError("field-mode", f"'fieldMode' must be 0 or 1, got {value!r}")
    if mode not in (FieldMode.TWO_FIELD, FieldMode.SINGLE_FIELD):
        raise ValidationError("field-mode", f"'fieldMode' must be 0 or 1, got {value!r}")
    return FieldMode(mode)


def _require_str(key: str, value: Any) -> None:
    if not isinstance(value, str):
        raise ValidationError("not-a-string", f"'{key}' must be a string")


@dataclass(frozen=True)
class SingleFieldName:
    """Creator given as one opaque name (institutions, mononyms)"""
    name: str
    creator_type: Any = None

    def __post_init__(self):
        _require_str("name", self.name)


@dataclass(frozen=True)
class TwoFieldName:
    """Creator given as first/last name parts"""
    first_name: str = ""
    last_name: str = ""
    field_mode: int = FieldMode.TWO_FIELD
    creator_type: Any = None

    def __post_init__(self):
        _require_str("firstName", self.first_name)
        _require_str("lastName", self.last_name)
        if self.field_mode not in (FieldMode.TWO_FIELD, FieldMode.SINGLE_FIELD):
            raise ValidationError("field-mode", f"'fieldMode' must be 0 or 1, got {self.field_mode!r}")
        if self.field_mode == FieldMode.SINGLE_FIELD and self.first_name != "":
            raise ValidationError(
                "single-field-first-name", "'fieldMode' cannot be 1 with 'firstName' property"
            )


CreatorInput = Union[SingleFieldName, TwoFieldName]


@dataclass(frozen=True)
class CanonicalCreator:
    """Normalized creator record"""
    first_name: str
    last_name: str
    field_mode: int = FieldMode.TWO_FIELD
    creator_type_id: Optional[int] = None

    @property
    def key(self) -> tuple[str, str, int]:
        """Identity key; the creator type is per-usage and not part of it"""
        return (self.first_name, self.last_name, int(self.field_mode))

    def to_raw(self) -> dict:
        """Equivalent loose creator data, accepted back by `normalize`"""
        raw = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fieldMode": int(self.field_mode),
        }
        if self.creator_type_id is not None:
            raw["creatorTypeID"] = self.creator_type_id
        return raw


def parse_creator_input(raw: Mapping[str, Any]) -> CreatorInput:
    """
    Validate loose creator data into a tagged input form.

    A name key is present whenever it is in the mapping, even when mapped
    to None (JSON null), which then fails the string check. Raises
    ValidationError naming the violated rule.
    """
    has_name = "name" in raw
    has_first = "firstName" in raw
    has_last = "lastName" in raw

    if not (has_name or has_first or has_last):
        raise ValidationError(
            "missing-name",
            "Creator data must contain either 'name' or 'firstName'/'lastName' properties",
        )
    if has_name and (has_first or has_last):
        raise ValidationError(
            "name-and-parts",
            "Creator data cannot contain both 'name' and 'firstName'/'lastName' properties",
        )

    raw_mode = raw.get("fieldMode")
    explicit_mode = None if raw_mode is None or raw_mode == "" else coerce_field_mode(raw_mode)

    if has_name and explicit_mode == FieldMode.TWO_FIELD:
        raise ValidationError("name-field-mode", "'fieldMode' cannot be 0 with 'name' property")
    if explicit_mode == FieldMode.SINGLE_FIELD and raw.get("firstName") not in (None, ""):
        raise ValidationError(
            "single-field-first-name", "'fieldMode' cannot be 1 with 'firstName' property"
        )
    for key in NAME_KEYS:
        if key in raw:
            _require_str(key, raw[key])

    creator_type = raw.get("creatorType") or raw.get("creatorTypeID") or None

    if has_name:
        return SingleFieldName(name=raw["name"], creator_type=creator_type)
    return TwoFieldName(
        first_name=raw.get("firstName") or "",
        last_name=raw.get("lastName") or "",
        field_mode=explicit_mode or FieldMode.TWO_FIELD,
        creator_type=creator_type,
    )


def canonicalize(
    form: CreatorInput,
    registry: Optional[CreatorTypeRegistry] = None,
    diagnostics: Optional[DiagnosticChannel] = None,
) -> CanonicalCreator:
    """Map a validated input form to a canonical record"""
    registry = registry or default_registry
    diagnostics = diagnostics or default_diagnostics

    creator_type_id = None
    if form.creator_type:
        creator_type_id = registry.get_id(form.creator_type)
        if creator_type_id is None:
            diagnostics.report_anomaly(CategoryResolutionWarning(form.creator_type))

    if isinstance(form, SingleFieldName):
        return CanonicalCreator(
            first_name="",
            last_name=clean_name(form.name),
            field_mode=FieldMode.SINGLE_FIELD,
            creator_type_id=creator_type_id,
        )
    return CanonicalCreator(
        first_name=clean_name(form.first_name),
        last_name=clean_name(form.last_name),
        field_mode=FieldMode(form.field_mode),
        creator_type_id=creator_type_id,
    )


def normalize(
    raw: Union[Mapping[str, Any], CreatorInput, CanonicalCreator],
    registry: Optional[CreatorTypeRegistry] = None,
    diagnostics: Optional[DiagnosticChannel] = None,
) -> CanonicalCreator:
    """
    Validate and canonicalize creator data.

    Accepts loose API JSON data, a tagged input form, or an existing
    canonical record. Unknown creator types are reported to the diagnostic
    channel and left out of the result.
    """
    if isinstance(raw, CanonicalCreator):
        raw = raw.to_raw()
    if isinstance(raw, (SingleFieldName, TwoFieldName)):
        form = raw
    else:
        form = parse_creator_input(raw)
    return canonicalize(form, registry, diagnostics)


def to_api_json(
    creator: CanonicalCreator,
    registry: Optional[CreatorTypeRegistry] = None,
) -> dict:
    """Convert a canonical record back to API JSON"""
    registry = registry or default_registry

    obj: dict[str, Any] = {}
    if creator.field_mode == FieldMode.SINGLE_FIELD:
        obj["name"] = creator.last_name
    else:
        obj["firstName"] = creator.first_name
        obj["lastName"] = creator.last_name

    creator_type = registry.get_name(creator.creator_type_id)
    if creator_type:
        obj["creatorType"] = creator_type
    return obj
