# taskflow/models/task.py
from datetime import datetime
from .. import db


def _dt_iso(dt):
    return dt.isoformat() if dt else None


# -----------------------------
# Tasks
# -----------------------------
class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(
        db.Enum("Personal", "Work", "Fitness", "Home", name="task_category"),
        nullable=False,
        default="Personal",
    )
    priority = db.Column(
        db.Enum("Low", "Medium", "High", name="task_priority"),
        nullable=False,
        default="Medium",
    )
    due_date = db.Column(db.String(32))             # "YYYY-MM-DD"
    completed = db.Column(db.Boolean, nullable=False, default=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    parent_task_id = db.Column(db.Integer, db.ForeignKey("tasks.id"))
    recurrence_type = db.Column(
        db.Enum("none", "daily", "weekly", "monthly", "custom", name="task_recurrence_type"),
        default="none",
    )
    recurrence_interval = db.Column(db.Integer, default=1)
    recurrence_end_date = db.Column(db.String(32))
    time_spent = db.Column(db.Integer, default=0)   # minutes
    is_recurring = db.Column(db.Boolean, default=False)
    depends_on_task_id = db.Column(db.Integer, db.ForeignKey("tasks.id"))
    completed_at = db.Column(db.DateTime)

    subtasks = db.relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Subtask.order",
    )
    notes = db.relationship("TaskNote", back_populates="task", cascade="all, delete-orphan")
    time_sessions = db.relationship(
        "TimeTrackingSession", back_populates="task", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "dueDate": self.due_date,
            "completed": bool(self.completed),
            "order": self.order or 0,
            "createdAt": _dt_iso(self.created_at),
            "parentTaskId": self.parent_task_id,
            "recurrenceType": self.recurrence_type,
            "recurrenceInterval": self.recurrence_interval,
            "recurrenceEndDate": self.recurrence_end_date,
            "timeSpent": self.time_spent or 0,
            "isRecurring": bool(self.is_recurring),
            "dependsOnTaskId": self.depends_on_task_id,
            "completedAt": _dt_iso(self.completed_at),
        }


class Subtask(db.Model):
    __tablename__ = "subtasks"

    id = db.Column(db.Integer, primary_key=True)
    task_id = db.Column(db.Integer, db.ForeignKey("tasks.id"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    completed = db.Column(db.Boolean, default=False)
    order = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    task = db.relationship("Task", back_populates="subtasks")

    def to_dict(self):
        return {
            "id": self.id,
            "taskId": self.task_id,
            "title": self.title,
            "completed": bool(self.completed),
            "order": self.order,
            "createdAt": _dt_iso(self.created_at),
        }


# -----------------------------
# Notes
# -----------------------------
class TaskNote(db.Model):
    __tablename__ = "task_notes"

    id = db.Column(db.Integer, primary_key=True)
    task_id = db.Column(db.Integer, db.ForeignKey("tasks.id"), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    task = db.relationship("Task", back_populates="notes")

    def to_dict(self):
        return {
            "id": self.id,
            "taskId": self.task_id,
            "content": self.content,
            "createdAt": _dt_iso(self.created_at),
        }
