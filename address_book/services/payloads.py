"""Boundary normalization for contact and method payloads.

Everything that reaches the store passes through here first: method types are
parsed into the closed ``MethodType`` set, values are trimmed and empty values
dropped, blank labels become ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from address_book.errors import StructuralError, ValidationError
from address_book.models import MethodType


@dataclass(frozen=True)
class MethodCandidate:
    """A normalized, not-yet-persisted communication method."""

    type: MethodType
    value: str
    label: str | None = None

    def to_dict(self) -> dict[str, object | None]:
        return {"type": self.type.value, "value": self.value, "label": self.label}


@dataclass(frozen=True)
class ContactCandidate:
    """A normalized, not-yet-persisted contact with its methods."""

    name: str
    is_bookmarked: bool = False
    methods: tuple[MethodCandidate, ...] = field(default_factory=tuple)


def parse_method_type(raw: object) -> MethodType:
    """Map a wire value onto ``MethodType`` or raise ``ValidationError``."""
    if isinstance(raw, MethodType):
        return raw
    token = str(raw or "").strip().lower()
    try:
        return MethodType(token)
    except ValueError:
        allowed = ", ".join(MethodType.values())
        raise ValidationError(
            f"Unknown contact method type '{raw}'. Expected one of: {allowed}.",
            details={"type": raw},
        ) from None


def clean_text(value: object | None) -> str:
    if value is None:
        return ""
    return str(value).strip()


def clean_label(value: object | None) -> str | None:
    return clean_text(value) or None


def normalize_method(raw: Mapping[str, object] | MethodCandidate) -> MethodCandidate | None:
    """Normalize one method; returns ``None`` when its value is blank."""
    if isinstance(raw, MethodCandidate):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        raise StructuralError("Each contact method must be an object with 'type' and 'value'.")

    method_type = parse_method_type(raw.get("type"))
    value = clean_text(raw.get("value"))
    if not value:
        return None
    return MethodCandidate(type=method_type, value=value, label=clean_label(raw.get("label")))


def normalize_methods(raw_methods: Iterable[object] | None) -> tuple[MethodCandidate, ...]:
    """
    Normalize a method list from an untrusted source.

    Types are validated for every entry (blank ones included) so an unknown
    type is never silently discarded.
    """
    if raw_methods is None:
        return ()
    if isinstance(raw_methods, (str, bytes, Mapping)) or not isinstance(raw_methods, Sequence):
        raise StructuralError("'methods' must be a list.")

    normalized: list[MethodCandidate] = []
    for raw in raw_methods:
        method = normalize_method(raw)
        if method is not None:
            normalized.append(method)
    return tuple(normalized)


def require_name(raw: object | None) -> str:
    name = clean_text(raw)
    if not name:
        raise ValidationError("Name is required.")
    return name


def coerce_flag(value: object | None) -> bool:
    """JSON-style truthiness for ``isBookmarked`` request fields."""
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def candidate_from_payload(payload: object) -> ContactCandidate | None:
    """
    Build a candidate from the ``{name, isBookmarked, methods}`` wire shape.

    Returns ``None`` when the name is blank so batch callers can skip it.
    """
    if not isinstance(payload, Mapping):
        return None
    name = clean_text(payload.get("name"))
    if not name:
        return None
    return ContactCandidate(
        name=name,
        is_bookmarked=coerce_flag(payload.get("isBookmarked")),
        methods=normalize_methods(payload.get("methods")),
    )
