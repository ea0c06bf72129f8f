"""Offer calendar: day-by-day availability for bookable offers."""

__version__ = "0.1.0"
