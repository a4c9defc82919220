# taskflow/models/user_stats.py
from datetime import datetime
from .. import db
from ..gamification import (
    Badge,
    StatsSnapshot,
    next_level_points,
    progress_in_level,
)


class UserStats(db.Model):
    """
    Single gamification row for the deployment.

    Only the stats service writes to it; ``level`` is always derived from
    ``total_points`` by the engine before it lands here.
    """
    __tablename__ = "user_stats"

    id = db.Column(db.Integer, primary_key=True)
    total_points = db.Column(db.Integer, nullable=False, default=0)
    level = db.Column(db.Integer, nullable=False, default=1)
    current_streak = db.Column(db.Integer, nullable=False, default=0)
    longest_streak = db.Column(db.Integer, nullable=False, default=0)
    last_activity_date = db.Column(db.Date)
    tasks_completed = db.Column(db.Integer, nullable=False, default=0)
    habits_completed = db.Column(db.Integer, nullable=False, default=0)
    badges = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            total_points=int(self.total_points or 0),
            level=int(self.level or 1),
            current_streak=int(self.current_streak or 0),
            longest_streak=int(self.longest_streak or 0),
            last_activity_date=self.last_activity_date,
            tasks_completed=int(self.tasks_completed or 0),
            habits_completed=int(self.habits_completed or 0),
            badges=tuple(Badge.from_dict(b) for b in (self.badges or [])),
        )

    def apply_snapshot(self, snapshot: StatsSnapshot) -> None:
        self.total_points = snapshot.total_points
        self.level = snapshot.level
        self.current_streak = snapshot.current_streak
        self.longest_streak = snapshot.longest_streak
        self.last_activity_date = snapshot.last_activity_date
        self.tasks_completed = snapshot.tasks_completed
        self.habits_completed = snapshot.habits_completed
        # new list so the JSON column registers the change
        self.badges = [b.to_dict() for b in snapshot.badges]

    def to_dict(self):
        total_points = int(self.total_points or 0)
        level = int(self.level or 1)
        return {
            "id": self.id,
            "totalPoints": total_points,
            "level": level,
            "currentStreak": int(self.current_streak or 0),
            "longestStreak": int(self.longest_streak or 0),
            "lastActivityDate": self.last_activity_date.isoformat()
            if self.last_activity_date
            else None,
            "tasksCompleted": int(self.tasks_completed or 0),
            "habitsCompleted": int(self.habits_completed or 0),
            "badges": list(self.badges or []),
            "nextLevelPoints": next_level_points(level),
            "pointsInLevel": progress_in_level(total_points),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
