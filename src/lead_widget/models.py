from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class WidgetState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    ACKNOWLEDGED = "acknowledged"


class PreferredContact(str, Enum):
    EMAIL = "email"
    PHONE = "phone"

    @property
    def display_label(self) -> str:
        return self.value.capitalize()


@dataclass
class ContactFormData:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    preferred_contact: PreferredContact = PreferredContact.EMAIL
    message: str = ""


FORM_FIELDS: Tuple[str, ...] = tuple(item.name for item in fields(ContactFormData))

# Keys that can ever appear in a validation error map.
VALIDATED_FIELDS: Tuple[str, ...] = ("first_name", "last_name", "email", "phone")


@dataclass(frozen=True)
class DealerIdentity:
    id: str
    name: str

    def to_payload(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}


DEFAULT_DEALER = DealerIdentity(id="dealer123", name="Example Dealer")


@dataclass(frozen=True)
class VehicleSpecs:
    engine: str
    horsepower: str
    transmission: str
    fuel_economy: str
    acceleration: str


@dataclass(frozen=True)
class VehicleContext:
    """Read-only listing data shown by the widget."""

    make: str
    model: str
    year: str
    trim: str
    price: str
    specs: VehicleSpecs

    @property
    def title(self) -> str:
        return f"{self.year} {self.make} {self.model}"


DEFAULT_VEHICLE = VehicleContext(
    make="Example Make",
    model="Example Model",
    year="2024",
    trim="Luxury Edition",
    price="$45,999",
    specs=VehicleSpecs(
        engine="3.0L V6 Twin-Turbo",
        horsepower="400 hp",
        transmission="8-Speed Automatic",
        fuel_economy="22 city / 30 highway",
        acceleration="0-60 mph in 4.5s",
    ),
)


@dataclass(frozen=True)
class ConversionEvent:
    email: str
    phone: str
    first_name: str
    last_name: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "phone_number": self.phone,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }


@dataclass(frozen=True)
class ContactSubmissionEvent:
    dealer: DealerIdentity
    first_name: str
    last_name: str
    preferred_contact: PreferredContact
    contact_type: str = "detailed_inquiry"

    name = "contact_form_submission"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "contact_type": self.contact_type,
            "dealer": self.dealer.to_payload(),
            "customer": {
                "firstName": self.first_name,
                "lastName": self.last_name,
                "preferredContact": self.preferred_contact.value,
            },
        }


@dataclass(frozen=True)
class TestDriveEvent:
    vehicle: VehicleContext
    dealer: DealerIdentity

    name = "test_drive_request"
    # Keeps pytest from collecting this class.
    __test__ = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "vehicle": {
                "make": self.vehicle.make,
                "model": self.vehicle.model,
                "year": self.vehicle.year,
                "trim": self.vehicle.trim,
            },
            "dealer": self.dealer.to_payload(),
        }


@dataclass
class FormSnapshot:
    values: ContactFormData
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class SubmissionResult:
    accepted: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass
class WidgetSnapshot:
    state: WidgetState
    values: ContactFormData
    errors: Dict[str, str]
    dialog_open: bool
    notification: Optional[str] = None
