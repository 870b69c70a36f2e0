"""Pydantic schemas for API request bodies and error payloads.

Responses reuse the domain models directly (they are pydantic already).
A request without a config falls back to the default schedule.
"""

from datetime import date

from pydantic import BaseModel

from teesheet.models import ScheduleConfig, TeeTimeBooking

# --- Schedule ---


class ScheduleQuery(BaseModel):
    config: ScheduleConfig | None = None
    date: date


class ScheduleRangeQuery(BaseModel):
    config: ScheduleConfig | None = None
    start_date: date
    end_date: date


class ValidateRequest(BaseModel):
    config: ScheduleConfig


# --- Tee sheet ---


class TeeSheetQuery(BaseModel):
    config: ScheduleConfig | None = None
    date: date
    bookings: list[TeeTimeBooking] = []


# --- Errors ---


class ViolationOut(BaseModel):
    rule: str
    message: str


class ValidationReport(BaseModel):
    valid: bool
    violations: list[ViolationOut]
