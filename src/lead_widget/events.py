"""Builders turning form data or listing data into analytics events."""

from __future__ import annotations

from .models import (
    ContactFormData,
    ContactSubmissionEvent,
    ConversionEvent,
    DealerIdentity,
    TestDriveEvent,
    VehicleContext,
)


def build_conversion_event(data: ContactFormData) -> ConversionEvent:
    return ConversionEvent(
        email=data.email,
        phone=data.phone,
        first_name=data.first_name,
        last_name=data.last_name,
    )


def build_contact_submission_event(
    data: ContactFormData, dealer: DealerIdentity
) -> ContactSubmissionEvent:
    return ContactSubmissionEvent(
        dealer=dealer,
        first_name=data.first_name,
        last_name=data.last_name,
        preferred_contact=data.preferred_contact,
    )


def build_test_drive_event(
    vehicle: VehicleContext, dealer: DealerIdentity
) -> TestDriveEvent:
    return TestDriveEvent(vehicle=vehicle, dealer=dealer)
