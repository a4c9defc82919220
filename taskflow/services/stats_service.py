# taskflow/services/stats_service.py
import logging
from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import StorageError
from ..gamification import (
    HABIT_COMPLETION_POINTS,
    StatsSnapshot,
    apply_stats_edit,
    award_points,
    record_habit_completion,
    record_task_completion,
)
from ..models.user_stats import UserStats

logger = logging.getLogger(__name__)

TASK_COMPLETION_POINTS = 10
STATS_ROW_ID = 1


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


class StatsService:
    """
    Owns the single UserStats row.

    Every mutation loads the row under a row lock, runs one engine function
    over its snapshot and commits once, so two concurrent completions cannot
    both write back the same stale totals.
    """

    def __init__(
        self,
        session,
        timezone: str = "UTC",
        clock: Optional[Callable[[], date]] = None,
        habit_points: int = HABIT_COMPLETION_POINTS,
        task_points: int = TASK_COMPLETION_POINTS,
    ):
        self.session = session
        self.timezone = timezone
        self.clock = clock
        self.habit_points = habit_points
        self.task_points = task_points

    def today(self) -> date:
        if self.clock is not None:
            return self.clock()
        return today_in(self.timezone)

    # ------------------------------
    # Loading
    # ------------------------------
    def _load(self, lock: bool = False) -> UserStats:
        stmt = select(UserStats).order_by(UserStats.id).limit(1)
        if lock:
            stmt = stmt.with_for_update()

        row = self.session.scalars(stmt).first()
        if row is None:
            row = self._create(stmt)
        return row

    def _create(self, stmt) -> UserStats:
        # Always id 1: a concurrent first insert fails on the key and the
        # committed row is reloaded with a locking read.
        try:
            with self.session.begin_nested():
                row = UserStats(
                    id=STATS_ROW_ID,
                    total_points=0,
                    level=1,
                    current_streak=0,
                    longest_streak=0,
                    tasks_completed=0,
                    habits_completed=0,
                    badges=[],
                )
                self.session.add(row)
        except IntegrityError:
            logger.info("User stats row created concurrently, reloading it")
            return self.session.scalars(stmt.with_for_update()).one()

        logger.info(f"Created user stats row id={row.id}")
        return row

    def _update(self, failure_message: str, change: Callable[[StatsSnapshot], StatsSnapshot]) -> UserStats:
        try:
            row = self._load(lock=True)
            row.apply_snapshot(change(row.to_snapshot()))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(failure_message) from e
        return row

    def get_stats(self) -> UserStats:
        try:
            row = self._load()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to fetch user stats") from e
        return row

    # ------------------------------
    # Events
    # ------------------------------
    def on_habit_completed(self, habit_id: int, entry_date: Optional[date] = None) -> UserStats:
        """
        Award habit points and fold today's completion into the streak.

        The streak uses the service clock's "today", not ``entry_date``.
        Un-completing an entry has no counterpart here: it never touches stats.
        """
        today = self.today()
        row = self._update(
            "Failed to update stats for habit completion",
            lambda s: record_habit_completion(s, today, self.habit_points),
        )
        logger.info(
            f"Habit {habit_id} completed (entry {entry_date}, today {today}): "
            f"points={row.total_points} level={row.level} "
            f"streak={row.current_streak}/{row.longest_streak}"
        )
        return row

    def on_task_completed(self, task_id: int) -> UserStats:
        row = self._update(
            "Failed to update stats for task completion",
            lambda s: record_task_completion(s, self.task_points),
        )
        logger.info(
            f"Task {task_id} completed: points={row.total_points} "
            f"level={row.level} tasks_completed={row.tasks_completed}"
        )
        return row

    def add_points(self, points: int) -> UserStats:
        row = self._update("Failed to add points", lambda s: award_points(s, points))
        logger.info(f"Added {points} points: total={row.total_points} level={row.level}")
        return row

    def update_stats(self, changes: dict) -> UserStats:
        row = self._update("Failed to update user stats", lambda s: apply_stats_edit(s, changes))
        logger.info(f"User stats edited: fields={sorted(changes)}")
        return row


def stats_service_for(app, session) -> StatsService:
    """Build a StatsService from the app's config."""
    return StatsService(
        session,
        timezone=app.config.get("STATS_TIMEZONE", "UTC"),
        habit_points=app.config.get("HABIT_COMPLETION_POINTS", HABIT_COMPLETION_POINTS),
        task_points=app.config.get("TASK_COMPLETION_POINTS", TASK_COMPLETION_POINTS),
    )
