# offer_calendar/schemas/calendar.py
"""
Pydantic schemas for the offer calendar.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CalendarRequest(BaseModel):
    """
    Loose request envelope.

    Only the container shape is checked here; individual records stay raw
    and are coerced one by one by the normalizer.
    """
    timeslots: list[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("timeslots", "offer_timeslot"),
    )
    bookings: list[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("bookings", "book"),
    )
    date_from: Any = Field(None, validation_alias=AliasChoices("from", "date_from"))
    date_to: Any = Field(None, validation_alias=AliasChoices("to", "date_to"))
    default_capacity: Any = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("timeslots", "bookings", mode="before")
    @classmethod
    def records_or_empty(cls, value: Any) -> list:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []


class AvailableDay(BaseModel):
    """Day with free capacity."""
    date: str = Field(description="UTC calendar day, YYYY-MM-DD")
    available: bool = True
    remaining_slots: int = Field(gt=0)


class CalendarReport(BaseModel):
    """Days with free capacity, ascending by date."""
    available_days: list[AvailableDay] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """JSON-ready response body."""
        return self.model_dump(mode="json")
