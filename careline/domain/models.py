"""
Domain models for the careline doctor chat and booking core.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation; enumerations are closed, so every match over
them is exhaustive and there are no "unknown" fallbacks.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Specialty(str, Enum):
    """Medical practice areas a doctor or appointment belongs to."""

    CARDIOLOGY = "cardiology"
    NEUROLOGY = "neurology"
    PRIMARY_CARE = "primary_care"
    DERMATOLOGY = "dermatology"
    PEDIATRICS = "pediatrics"
    ORTHOPEDICS = "orthopedics"
    PSYCHIATRY = "psychiatry"
    UROLOGY = "urology"

    @property
    def display_name(self) -> str:
        return _SPECIALTY_DISPLAY[self][0]

    @property
    def short_description(self) -> str:
        return _SPECIALTY_DISPLAY[self][1]


_SPECIALTY_DISPLAY: dict[Specialty, tuple[str, str]] = {
    Specialty.CARDIOLOGY: ("Cardiology", "Heart & circulation"),
    Specialty.NEUROLOGY: ("Neurology", "Brain & nerves"),
    Specialty.PRIMARY_CARE: ("Primary Care", "General medical support"),
    Specialty.DERMATOLOGY: ("Dermatology", "Skin & diseases"),
    Specialty.PEDIATRICS: ("Pediatrics", "Children's health"),
    Specialty.ORTHOPEDICS: ("Orthopedics", "Bones & joints"),
    Specialty.PSYCHIATRY: ("Psychiatry", "Mental health"),
    Specialty.UROLOGY: ("Urology", "Kidneys & urinary system"),
}


class FacilityType(str, Enum):
    """Kinds of medical facility shown on the map filter."""

    ALL = "all"
    HOSPITAL = "hospital"
    CLINIC = "clinic"
    PHARMACY = "pharmacy"

    @property
    def search_query(self) -> str:
        """Query string handed to a local point-of-interest search."""
        if self is FacilityType.ALL:
            return "hospital OR pharmacy OR clinic"
        return self.value


class AppointmentStatus(str, Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Sender(str, Enum):
    USER = "user"
    DOCTOR = "doctor"


class Doctor(BaseModel):
    """A doctor persona that appointments and chat threads are attached to."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    specialty: Specialty
    image_name: str = ""


class DoctorProfile(BaseModel):
    """Directory entry shown when browsing doctors of a specialty."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    specialty: Specialty
    rating: float = Field(ge=0.0, le=5.0)
    languages: tuple[str, ...] = ()
    address: str
    image_name: str = ""

    def to_doctor(self) -> Doctor:
        """Doctor identity used for booking and chat, sharing this profile's id."""
        return Doctor(id=self.id, name=self.name, specialty=self.specialty, image_name=self.image_name)


class Appointment(BaseModel):
    """A booked visit with a doctor."""

    id: UUID = Field(default_factory=uuid4)
    doctor: Doctor
    date: datetime
    location_address: str
    city: str
    country: str
    status: AppointmentStatus = AppointmentStatus.UPCOMING
    image: str = ""


class ChatMessage(BaseModel):
    """Single message in a chat thread."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    sender: Sender
    text: str
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ChatThread(BaseModel):
    """Conversation with one doctor. Mutable: messages are appended in place."""

    id: UUID = Field(default_factory=uuid4)
    doctor: Doctor
    messages: list[ChatMessage] = Field(default_factory=list)
    is_typing: bool = False


class ClinicalDomain(BaseModel):
    """
    Medical category used by the symptom engine.

    Symptom keywords are scored; red flags mark urgency; the three statement
    lists are pooled into the reply when the domain ranks among the top domains.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    symptoms: tuple[str, ...]
    red_flags: tuple[str, ...]
    home_care: tuple[str, ...]
    monitor: tuple[str, ...]
    likely: tuple[str, ...] = ()

    def score(self, text: str) -> int:
        """Count symptom keywords present in already-lowercased text."""
        return sum(1 for keyword in self.symptoms if keyword in text)

    def has_red_flag(self, text: str) -> bool:
        return any(flag in text for flag in self.red_flags)


class ExtractedContext(BaseModel):
    """Best-effort context pulled out of a message."""

    model_config = ConfigDict(frozen=True)

    duration: str | None = None
    severity: str | None = None
    is_child: bool = False
    is_pregnant: bool = False
    comorbidities: tuple[str, ...] = ()


class DomainScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: ClinicalDomain
    score: int = Field(gt=0)


class ClassificationResult(BaseModel):
    """Everything the symptom engine derived from one message, plus the reply."""

    model_config = ConfigDict(frozen=True)

    ranked: tuple[DomainScore, ...]
    top_domains: tuple[ClinicalDomain, ...]
    has_red_flags: bool
    critical_red_flag: bool
    context: ExtractedContext
    reply: str = Field(min_length=1)

    @property
    def escalated(self) -> bool:
        return self.has_red_flags or self.critical_red_flag


class LabTest(BaseModel):
    """Bookable diagnostic test from the lab catalog."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    description: str
    price: str = Field(description="Display price label, e.g. '€25'")
    image_name: str = ""
