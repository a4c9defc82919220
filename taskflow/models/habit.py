# taskflow/models/habit.py
from datetime import datetime
from .. import db


class Habit(db.Model):
    __tablename__ = "habits"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    habit_type = db.Column(
        db.Enum("workout", "water", "reading", "meditation", "custom", name="habit_type"),
        nullable=False,
    )
    target_value = db.Column(db.Integer, default=1)   # e.g. 8 glasses of water
    unit = db.Column(db.String(50), default="times")  # "glasses", "minutes", ...
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    entries = db.relationship(
        "HabitEntry", back_populates="habit", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "habitType": self.habit_type,
            "targetValue": self.target_value,
            "unit": self.unit,
            "isActive": bool(self.is_active),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class HabitEntry(db.Model):
    """
    One habit's recorded value for one calendar day.

    At most one row per (habit_id, date). Writers look up the pair first and
    update the existing row rather than inserting a second one for the day.
    """
    __tablename__ = "habit_entries"

    id = db.Column(db.Integer, primary_key=True)
    habit_id = db.Column(db.Integer, db.ForeignKey("habits.id"), nullable=False)
    date = db.Column(db.Date, nullable=False)
    value = db.Column(db.Integer, default=0)
    completed = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    habit = db.relationship("Habit", back_populates="entries")

    __table_args__ = (
        db.UniqueConstraint("habit_id", "date", name="uq_habit_entries_habit_date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "date": self.date.isoformat() if self.date else None,
            "value": self.value or 0,
            "completed": bool(self.completed),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
