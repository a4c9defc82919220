# taskflow/models/time_tracking.py
from datetime import datetime
from .. import db


class TimeTrackingSession(db.Model):
    __tablename__ = "time_tracking_sessions"

    id = db.Column(db.Integer, primary_key=True)
    task_id = db.Column(db.Integer, db.ForeignKey("tasks.id"), nullable=False)
    start_time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    end_time = db.Column(db.DateTime)
    duration = db.Column(db.Integer, default=0)  # minutes
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    task = db.relationship("Task", back_populates="time_sessions")

    @property
    def is_running(self):
        return self.end_time is None

    def to_dict(self):
        return {
            "id": self.id,
            "taskId": self.task_id,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "duration": self.duration or 0,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
