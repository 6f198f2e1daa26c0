"""Habit data models."""

from __future__ import annotations

import datetime as dt
import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

Frequency = Literal["daily", "monthly", "yearly"]
MilestoneType = Literal["7-day", "30-day", "100-day"]

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str | date) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a date.

    Args:
        value: Date string or date object

    Returns:
        date object

    Raises:
        ValueError: If the string is not a real ``YYYY-MM-DD`` calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    return date.fromisoformat(value)


class Task(BaseModel):
    """Task model representing a recurring habit.

    Attributes:
        id: Unique identifier for the task
        title: Habit title
        description: Optional detailed description
        time: Scheduled time of day (HH:MM, 24-hour)
        frequency: Recurrence kind ("daily", "monthly", "yearly")
        day_of_month: Day of month for monthly habits (1-31)
        month_of_year: Month for yearly habits (1-12)
        day_of_year: Day within month_of_year for yearly habits (1-31)
        is_active: Whether the habit is currently tracked
        created_at: Creation timestamp
    """

    id: str
    title: str
    description: str | None = None
    time: str
    frequency: str
    day_of_month: int | None = None
    month_of_year: int | None = None
    day_of_year: int | None = None
    is_active: bool = True
    created_at: datetime


class TaskCreate(BaseModel):
    """Model for creating or fully replacing a task.

    Recurrence parameters are validated against the frequency: monthly
    habits need ``day_of_month``, yearly habits need both ``month_of_year``
    and ``day_of_year``.
    """

    title: str = Field(min_length=1)
    description: str | None = None
    time: str
    frequency: Frequency
    day_of_month: int | None = Field(default=None, ge=1, le=31)
    month_of_year: int | None = Field(default=None, ge=1, le=12)
    day_of_year: int | None = Field(default=None, ge=1, le=31)
    is_active: bool = True

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Task title is required")
        return v.strip()

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not TIME_PATTERN.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @model_validator(mode="after")
    def validate_recurrence(self) -> TaskCreate:
        if self.frequency == "monthly" and self.day_of_month is None:
            raise ValueError("Day of month is required for monthly habits")
        if self.frequency == "yearly" and (
            self.month_of_year is None or self.day_of_year is None
        ):
            raise ValueError("Month and day are required for yearly habits")
        return self


class Completion(BaseModel):
    """A record that a task was performed on a calendar date."""

    id: str
    task_id: str
    date: dt.date
    completed_at: datetime


class CompletionCreate(BaseModel):
    """Model for recording a completion.

    Attributes:
        task_id: Owning task ID
        date: Calendar date, accepted as ``YYYY-MM-DD`` text or a date
    """

    task_id: str = Field(min_length=1)
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return parse_iso_date(v)


class Achievement(BaseModel):
    """A streak milestone earned by a task."""

    id: str
    task_id: str
    type: MilestoneType
    streak_count: int
    earned_at: datetime


class AchievementCreate(BaseModel):
    task_id: str
    type: MilestoneType
    streak_count: int = Field(ge=0)
