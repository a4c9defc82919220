# taskflow/schemas.py
"""
Request schemas for the JSON API.

Each model validates one request body (or query string). Wire names are
camelCase; snake_case is accepted as well. Routes call ``parse()`` and get
back a typed model or a ValidationError carrying a field-level error list.
"""
import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ValidationError

TaskCategory = Literal["Personal", "Work", "Fitness", "Home"]
TaskPriority = Literal["Low", "Medium", "High"]
RecurrenceType = Literal["none", "daily", "weekly", "monthly", "custom"]
HabitType = Literal["workout", "water", "reading", "meditation", "custom"]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def _blank_to_none(v):
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def _reject_null(v):
    if v is None:
        raise ValueError("may not be null")
    return v


def _iso_date_string(v):
    if v is None:
        return v
    try:
        dt.date.fromisoformat(v)
    except (TypeError, ValueError):
        raise ValueError("must be a date in YYYY-MM-DD format")
    return v


# -------- Tasks --------
class TaskCreate(ApiModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: TaskCategory = "Personal"
    priority: TaskPriority = "Medium"
    due_date: Optional[str] = None
    completed: bool = False
    order: int = 0
    parent_task_id: Optional[int] = None
    recurrence_type: RecurrenceType = "none"
    recurrence_interval: int = Field(1, ge=1)
    recurrence_end_date: Optional[str] = None
    is_recurring: bool = False
    depends_on_task_id: Optional[int] = None
    completed_at: Optional[dt.datetime] = None

    blank_to_none = field_validator(
        "description", "due_date", "recurrence_end_date", mode="before"
    )(_blank_to_none)
    check_dates = field_validator("due_date", "recurrence_end_date")(_iso_date_string)


class TaskUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None
    completed: Optional[bool] = None
    order: Optional[int] = None
    parent_task_id: Optional[int] = None
    recurrence_type: Optional[RecurrenceType] = None
    recurrence_interval: Optional[int] = Field(None, ge=1)
    recurrence_end_date: Optional[str] = None
    is_recurring: Optional[bool] = None
    depends_on_task_id: Optional[int] = None
    completed_at: Optional[dt.datetime] = None

    blank_to_none = field_validator(
        "description", "due_date", "recurrence_end_date", mode="before"
    )(_blank_to_none)
    check_dates = field_validator("due_date", "recurrence_end_date")(_iso_date_string)
    reject_null = field_validator(
        "title", "category", "priority", "completed", "order", mode="before"
    )(_reject_null)


class TaskQuery(ApiModel):
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    completed: Optional[bool] = None


class TaskReorder(ApiModel):
    task_ids: List[StrictInt]


# -------- Subtasks --------
class SubtaskCreate(ApiModel):
    title: str = Field(..., min_length=1)
    completed: bool = False
    order: int


class SubtaskUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    completed: Optional[bool] = None
    order: Optional[int] = None

    reject_null = field_validator("title", "completed", "order", mode="before")(_reject_null)


# -------- Notes / time tracking --------
class NoteCreate(ApiModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Note content is required")
        return v


class TimeTrackingStart(ApiModel):
    description: Optional[str] = None

    blank_to_none = field_validator("description", mode="before")(_blank_to_none)


# -------- Habits --------
class HabitCreate(ApiModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    habit_type: HabitType
    target_value: int = Field(1, ge=1)
    unit: str = "times"
    is_active: bool = True


class HabitUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    habit_type: Optional[HabitType] = None
    target_value: Optional[int] = Field(None, ge=1)
    unit: Optional[str] = None
    is_active: Optional[bool] = None

    reject_null = field_validator("title", "habit_type", mode="before")(_reject_null)


class HabitEntryCreate(ApiModel):
    habit_id: int
    date: dt.date
    value: int = Field(0, ge=0)
    # derived from value > 0 when omitted
    completed: Optional[bool] = None


class HabitEntryUpdate(ApiModel):
    habit_id: Optional[int] = None
    date: Optional[dt.date] = None
    value: Optional[int] = Field(None, ge=0)
    completed: Optional[bool] = None

    reject_null = field_validator("habit_id", "date", "value", "completed", mode="before")(
        _reject_null
    )


class HabitEntryQuery(ApiModel):
    date: Optional[dt.date] = None


# -------- Stats --------
class BadgeIn(ApiModel):
    type: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class StatsUpdate(ApiModel):
    # no ``level``: it follows total_points
    total_points: Optional[int] = Field(None, ge=0)
    current_streak: Optional[int] = Field(None, ge=0)
    longest_streak: Optional[int] = Field(None, ge=0)
    last_activity_date: Optional[dt.date] = None
    tasks_completed: Optional[int] = Field(None, ge=0)
    habits_completed: Optional[int] = Field(None, ge=0)
    badges: Optional[List[BadgeIn]] = None

    reject_null = field_validator(
        "total_points",
        "current_streak",
        "longest_streak",
        "tasks_completed",
        "habits_completed",
        "badges",
        mode="before",
    )(_reject_null)


class PointsAward(ApiModel):
    points: StrictInt = Field(..., gt=0)


# ------- Helpers -------
def format_errors(exc: PydanticValidationError) -> List[dict]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        errors.append({"field": field, "message": err.get("msg", "invalid value")})
    return errors


def parse(schema, data, message="Invalid request data"):
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(message, errors=format_errors(e)) from e
