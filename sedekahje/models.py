"""The institution record and its validation rules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class InstitutionCategory(str, Enum):
    MOSQUE = "mosque"
    SURAU = "surau"
    OTHERS = "others"


@dataclass(frozen=True)
class FieldError:
    field: str
    tag: str


class InstitutionValidationError(ValueError):
    """Raised when an institution breaks one or more validation rules."""

    def __init__(self, errors):
        self.errors = tuple(errors)
        super().__init__("\n".join(
            f"Field '{e.field}' validation failed: {e.tag}" for e in self.errors))


# attribute, document key, kind: "str", "int", "strs" or "floats"
_SCHEMA = (
    ("old_id", "oldId", "int"),
    ("name", "name", "str"),
    ("category", "category", "str"),
    ("state", "state", "str"),
    ("city", "city", "str"),
    ("qr_image", "qrImage", "str"),
    ("qr_content", "qrContent", "str"),
    ("supported_payment", "supportedPayment", "strs"),
    ("coords", "coords", "floats"),
    ("slug", "slug", "str"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _convert(key: str, kind: str, raw: Any) -> Any:
    if kind == "str" and isinstance(raw, str):
        return raw
    if kind == "int" and isinstance(raw, int) and not isinstance(raw, bool) \
            and -(2**31) <= raw < 2**31:
        return raw
    if kind == "strs" and isinstance(raw, list) \
            and all(v is None or isinstance(v, str) for v in raw):
        return [v or "" for v in raw]
    if kind == "floats" and isinstance(raw, list) \
            and all(v is None or _is_number(v) for v in raw):
        return [float(v or 0) for v in raw]
    raise ValueError(f"field {key!r} has the wrong type")


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class Institution:
    """A place that accepts donations through a QR payment code."""

    old_id: int = 0
    name: str = ""
    category: str = ""
    state: str = ""
    city: str = ""
    qr_image: str = ""
    qr_content: str = ""
    supported_payment: list[str] | None = None
    coords: list[float] | None = None
    slug: str = ""

    def validate(self) -> None:
        """Raise InstitutionValidationError listing every broken rule."""
        errors = []
        if not self.name:
            errors.append(FieldError("Name", "required"))
        if not self.category:
            errors.append(FieldError("Category", "required"))
        elif _plain(self.category) not in {c.value for c in InstitutionCategory}:
            errors.append(FieldError("Category", "oneof"))
        for field, value in (("State", self.state), ("City", self.city),
                             ("QRContent", self.qr_content)):
            if not value:
                errors.append(FieldError(field, "required"))
        if self.supported_payment is None:
            errors.append(FieldError("SupportedPayment", "required"))
        if self.coords is None:
            errors.append(FieldError("Coords", "required"))
        elif len(self.coords) != 2:
            errors.append(FieldError("Coords", "min" if len(self.coords) < 2 else "max"))
        if not self.slug:
            errors.append(FieldError("Slug", "required"))
        if errors:
            raise InstitutionValidationError(errors)

    @classmethod
    def from_dict(cls, data: Mapping | None) -> Institution:
        """Build from a decoded document; keys match case-insensitively, nulls are skipped."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("institution must be an object")
        folded = {k.lower(): v for k, v in data.items() if isinstance(k, str)}
        values = {}
        for attr, key, kind in _SCHEMA:
            raw = data.get(key, folded.get(key.lower()))
            if raw is not None:
                values[attr] = _convert(key, kind, raw)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the document form, leaving out empty fields."""
        document = {}
        for attr, key, kind in _SCHEMA:
            value = _plain(getattr(self, attr))
            if value:
                if kind == "floats":
                    value = [float(v) for v in value]
                elif kind == "strs":
                    value = list(value)
                document[key] = value
        return document