"""Study planner models: exams in, day-by-day sessions out."""
from datetime import date
from typing import Literal, Optional

from pydantic import Field, field_validator

from studyflow.models.base import FlowModel

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
LearningPace = Literal["relaxed", "moderate", "intensive"]


def _check_iso_date(v: str) -> str:
    try:
        date.fromisoformat(v)
    except ValueError:
        raise ValueError("date must be in YYYY-MM-DD format")
    return v


class Exam(FlowModel):
    """An upcoming exam or deadline the plan must prepare for."""
    id: str = Field(..., description="Unique ID for the exam entry.")
    subject: str = Field(..., min_length=1, description="The subject of the exam or deadline.")
    date: str = Field(..., description="The date of the exam/deadline (YYYY-MM-DD).")
    type: Optional[str] = Field(
        "Exam",
        description='Type of event, e.g., "Final Exam", "Midterm", "Assignment Due". Default to "Exam".',
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_iso_date(v)


class StudyPlanRequest(FlowModel):
    """Input of the study plan flow."""
    exams: list[Exam] = Field(
        ..., min_length=1, description="A list of upcoming exams, tests, or assignment deadlines."
    )
    weak_areas: Optional[list[str]] = Field(
        None, description="A list of subjects or topics the student feels weak in."
    )
    learning_pace: LearningPace = Field(..., description="The desired intensity of the study plan.")
    study_hours_per_week: Optional[float] = Field(
        None, ge=1, le=70, description="Preferred number of study hours per week."
    )
    preferred_study_days: Optional[list[Weekday]] = Field(
        None, description="Preferred days of the week for studying."
    )
    notes: Optional[str] = Field(
        None, description="Any additional notes or preferences for the study plan."
    )

    @field_validator("weak_areas")
    @classmethod
    def drop_blank_weak_areas(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Remove empty entries and duplicates, keeping first-seen order."""
        if v is None:
            return v
        seen = []
        for area in v:
            if area and area not in seen:
                seen.append(area)
        return seen


class StudySession(FlowModel):
    """A single study block or break."""
    date: str = Field(..., description="The date for this study session (YYYY-MM-DD).")
    start_time: str = Field(..., description='The suggested start time for the session (e.g., "09:00 AM").')
    end_time: str = Field(..., description='The suggested end time for the session (e.g., "11:00 AM").')
    subject: str = Field(..., description="The subject or topic to focus on during this session.")
    activity: str = Field(..., description='A brief description of the study activity (e.g., "Review Chapter 3").')
    is_break: bool = Field(False, description="Indicates if this session is a scheduled break.")


class DailySessions(FlowModel):
    """All sessions scheduled on one day."""
    date: str = Field(..., description="The date for these sessions (YYYY-MM-DD).")
    sessions: list[StudySession] = Field(
        default_factory=list, description="A list of study sessions or breaks scheduled for this day."
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_iso_date(v)


class StudyPlanResult(FlowModel):
    """Generated study plan, organized by day."""
    plan_title: Optional[str] = Field(None, description="A suggested title for the study plan.")
    daily_sessions: list[DailySessions] = Field(
        ..., description="The study plan, organized by day, with a list of sessions for each day."
    )
    summary_notes: Optional[str] = Field(
        None, description="Any overall advice or summary notes regarding the plan."
    )
