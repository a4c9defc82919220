# taskflow/models/__init__.py
from .task import Task, Subtask, TaskNote
from .time_tracking import TimeTrackingSession
from .habit import Habit, HabitEntry
from .user_stats import UserStats

__all__ = [
    "Task",
    "Subtask",
    "TaskNote",
    "TimeTrackingSession",
    "Habit",
    "HabitEntry",
    "UserStats",
]
