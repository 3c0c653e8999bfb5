"""Data transfer objects for student records.

Structs use camelCase field names on the wire so the students API and the
report service's HTTP client share one JSON shape.
"""

from __future__ import annotations

import dataclasses
import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

from .errors import StudentValidationError

MAX_SQL_INTEGER = 2**63 - 1

SqlInteger = typ.Annotated[int, msgspec.Meta(ge=0, le=MAX_SQL_INTEGER)]


class StudentSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Student fields returned by list endpoints."""

    id: int
    first_name: str
    last_name: str
    middle_name: str | None = None
    email: str | None = None
    class_name: str | None = None
    section: str | None = None
    roll: int | None = None
    system_access: bool = False

    def format_name(self) -> str:
        """Return first, middle and last names joined by single spaces."""
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(part.strip() for part in parts if part and part.strip())


class StudentRecord(StudentSummary, kw_only=True, frozen=True, rename="camel"):
    """Full student profile as served by ``GET /students/{id}``."""

    phone: str | None = None
    gender: str | None = None
    dob: dt.date | None = None
    admission_date: dt.date | None = None
    father_name: str | None = None
    mother_name: str | None = None
    guardian_name: str | None = None
    guardian_phone: str | None = None
    current_address: str | None = None
    permanent_address: str | None = None
    reviewer_id: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class StudentInput(msgspec.Struct, kw_only=True, rename="camel"):
    """Writable student fields; unset fields are left untouched on update."""

    first_name: str | msgspec.UnsetType = msgspec.UNSET
    middle_name: str | None | msgspec.UnsetType = msgspec.UNSET
    last_name: str | msgspec.UnsetType = msgspec.UNSET
    email: str | msgspec.UnsetType = msgspec.UNSET
    phone: str | None | msgspec.UnsetType = msgspec.UNSET
    gender: str | None | msgspec.UnsetType = msgspec.UNSET
    dob: dt.date | None | msgspec.UnsetType = msgspec.UNSET
    class_name: str | None | msgspec.UnsetType = msgspec.UNSET
    section: str | None | msgspec.UnsetType = msgspec.UNSET
    roll: SqlInteger | None | msgspec.UnsetType = msgspec.UNSET
    admission_date: dt.date | None | msgspec.UnsetType = msgspec.UNSET
    father_name: str | None | msgspec.UnsetType = msgspec.UNSET
    mother_name: str | None | msgspec.UnsetType = msgspec.UNSET
    guardian_name: str | None | msgspec.UnsetType = msgspec.UNSET
    guardian_phone: str | None | msgspec.UnsetType = msgspec.UNSET
    current_address: str | None | msgspec.UnsetType = msgspec.UNSET
    permanent_address: str | None | msgspec.UnsetType = msgspec.UNSET

    def supplied_fields(self) -> dict[str, typ.Any]:
        """Return the fields that were explicitly provided."""
        return {
            name: getattr(self, name)
            for name in self.__struct_fields__
            if getattr(self, name) is not msgspec.UNSET
        }


_FILTER_KEYS: dict[str, str] = {
    "name": "name",
    "className": "class_name",
    "class_name": "class_name",
    "section": "section",
    "roll": "roll",
}


@dataclasses.dataclass(frozen=True, slots=True)
class StudentFilters:
    """Optional list filters; ``None`` means no filter on that field."""

    name: str | None = None
    class_name: str | None = None
    section: str | None = None
    roll: int | None = None

    @classmethod
    def from_mapping(cls, values: typ.Mapping[str, str]) -> StudentFilters:
        """Build filters from query-string style keys, ignoring blanks.

        Raises
        ------
        StudentValidationError
            If ``roll`` is present but not an integer in the storable range.

        """
        fields: dict[str, typ.Any] = {}
        for key, raw in values.items():
            target = _FILTER_KEYS.get(key)
            if target is None or raw is None or not str(raw).strip():
                continue
            fields[target] = str(raw).strip()

        if "roll" in fields:
            try:
                fields["roll"] = int(fields["roll"])
            except ValueError as exc:
                raise StudentValidationError(
                    "must be an integer", field="roll"
                ) from exc
            if not 0 <= fields["roll"] <= MAX_SQL_INTEGER:
                raise StudentValidationError("out of range", field="roll")
        return cls(**fields)
