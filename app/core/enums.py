"""Core enums used across modules."""

from enum import StrEnum


class AppointmentStatusEnum(StrEnum):
    """Appointment lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"
    COMPLETED = "completed"


class AvailabilityQueryKindEnum(StrEnum):
    """Availability query entry point, used as a metrics label."""

    DAY = "day"
    MONTH = "month"
