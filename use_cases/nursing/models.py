"""
Nursing Calendar Data Model.

Reference entities (Nurse, Service), the stored Appointment and the
transient shapes a form works with while an appointment is edited.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from core.domain import to_local_naive

# Wire format of stored timestamps: local wall-clock, seconds, no offset
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


# =============================================================================
# REFERENCE ENTITIES
# =============================================================================

class Nurse(BaseModel):
    """A member of the nursing staff."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    picture_path: Optional[str] = None


class Service(BaseModel):
    """A bookable consultation type."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    duration_minutes: int = Field(gt=0, description="Exact length of every appointment")


class ColorTag(str, Enum):
    """Calendar colors an appointment can be tagged with."""
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"

    @property
    def label(self) -> str:
        return COLOR_LABELS[self]

    @classmethod
    def coerce(cls, value: Any) -> "ColorTag":
        """Return the matching tag, falling back to blue for unknown values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.BLUE


COLOR_LABELS = {
    ColorTag.BLUE: "Azul",
    ColorTag.GREEN: "Verde",
    ColorTag.RED: "Vermelho",
    ColorTag.YELLOW: "Amarelo",
    ColorTag.PURPLE: "Roxo",
    ColorTag.ORANGE: "Laranja",
}


# =============================================================================
# STORED APPOINTMENT
# =============================================================================

class Owner(BaseModel):
    """The person an appointment is shown under (the attending nurse)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    picture_path: Optional[str] = None

    @classmethod
    def from_nurse(cls, nurse: Nurse) -> "Owner":
        return cls(id=nurse.id, name=nurse.name, picture_path=nurse.picture_path)


class Appointment(BaseModel):
    """
    A committed calendar entry.

    Immutable: edits produce a modified copy (model_copy) that replaces
    the stored one by id.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    title: str
    nurse_name: str
    service_name: str
    start_date_time: datetime
    end_date_time: datetime
    color_tag: ColorTag = ColorTag.BLUE
    notes: str = ""
    owner: Owner

    @field_validator("color_tag", mode="before")
    @classmethod
    def _coerce_color(cls, value: Any) -> ColorTag:
        return ColorTag.coerce(value)

    @field_validator("start_date_time", "end_date_time", mode="after")
    @classmethod
    def _local_seconds(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    @field_validator("title", "notes", mode="before")
    @classmethod
    def _trimmed_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_serializer("start_date_time", "end_date_time")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.strftime(TIMESTAMP_FORMAT)

    @property
    def duration_minutes(self) -> float:
        return (self.end_date_time - self.start_date_time).total_seconds() / 60

    def to_record(self) -> dict:
        """Plain dict with ISO-local timestamps, as a calendar view consumes it."""
        return self.model_dump(mode="json")


# =============================================================================
# FORM SHAPES
# =============================================================================

@dataclass
class AppointmentDraft:
    """
    An in-progress appointment held by a form.

    Field values are kept as the UI produced them (strings, datetimes or
    None) until the validator normalizes them.
    """
    nurse_id: Optional[str] = None
    nurse_name: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    title: Optional[str] = None
    color_tag: Any = ColorTag.BLUE.value
    start_date_time: Any = None
    end_date_time: Any = None
    notes: Optional[str] = None

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentDraft":
        """Populate a draft from a stored appointment (edit dialog)."""
        return cls(
            nurse_id=appointment.owner.id,
            nurse_name=appointment.nurse_name,
            service_name=appointment.service_name,
            title=appointment.title,
            color_tag=appointment.color_tag.value,
            start_date_time=appointment.start_date_time,
            end_date_time=appointment.end_date_time,
            notes=appointment.notes,
        )


@dataclass(frozen=True)
class NormalizedAppointment:
    """A draft that passed validation, with every field in canonical form."""
    nurse: Nurse
    service: Service
    title: str
    color_tag: ColorTag
    start_date_time: datetime
    end_date_time: datetime
    notes: str = ""

    @property
    def nurse_name(self) -> str:
        return self.nurse.name

    @property
    def service_name(self) -> str:
        return self.service.name

    def to_appointment(
        self,
        id: Optional[int] = None,
        owner: Optional[Owner] = None,
    ) -> Appointment:
        """
        Build the storable appointment.

        Args:
            id: Existing id when editing, None to let the store mint one
            owner: Existing owner when editing, defaults to the nurse
        """
        return Appointment(
            id=id,
            title=self.title,
            nurse_name=self.nurse.name,
            service_name=self.service.name,
            start_date_time=self.start_date_time,
            end_date_time=self.end_date_time,
            color_tag=self.color_tag,
            notes=self.notes,
            owner=owner or Owner.from_nurse(self.nurse),
        )
