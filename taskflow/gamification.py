# taskflow/gamification.py
"""
Points, levels and daily streaks.

Everything here is a pure function over a ``StatsSnapshot``: no database,
no clock. Callers load the stats row, pass "today" in explicitly and persist
whatever comes back.

Rules:
  - level = total_points // 100 + 1, recomputed on every points change
  - a completion on the same day as the last one leaves the streak alone
  - a completion the day after the last one extends the streak by one
  - anything else (a gap, or no history at all) starts a new streak at 1
  - longest_streak never drops below current_streak
"""
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Optional, Tuple

POINTS_PER_LEVEL = 100
HABIT_COMPLETION_POINTS = 5


@dataclass(frozen=True)
class Badge:
    type: str
    name: str
    description: Optional[str] = None

    def to_dict(self):
        return {"type": self.type, "name": self.name, "description": self.description}

    @classmethod
    def from_dict(cls, data):
        return cls(
            type=data.get("type", ""),
            name=data.get("name", ""),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class StatsSnapshot:
    total_points: int = 0
    level: int = 1
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: Optional[date] = None
    tasks_completed: int = 0
    habits_completed: int = 0
    badges: Tuple[Badge, ...] = field(default_factory=tuple)


def level_for_points(total_points: int) -> int:
    return total_points // POINTS_PER_LEVEL + 1


def yesterday(today: date) -> date:
    return today - timedelta(days=1)


def award_points(stats: StatsSnapshot, delta: int) -> StatsSnapshot:
    """Add ``delta`` points and re-derive the level. Never clamped."""
    total_points = stats.total_points + delta
    return replace(stats, total_points=total_points, level=level_for_points(total_points))


def apply_streak_event(stats: StatsSnapshot, today: date) -> StatsSnapshot:
    """Fold one qualifying completion on ``today`` into the streak fields."""
    last = stats.last_activity_date

    if last == today:
        return stats

    if last is not None and last == yesterday(today):
        current = stats.current_streak + 1
    else:
        current = 1

    return replace(
        stats,
        current_streak=current,
        longest_streak=max(stats.longest_streak, current),
        last_activity_date=today,
    )


def apply_non_completion_event(stats: StatsSnapshot) -> StatsSnapshot:
    # A missed or un-completed day is not recorded; the next completion after
    # a gap resets the streak instead.
    return stats


def record_habit_completion(
    stats: StatsSnapshot,
    today: date,
    points: int = HABIT_COMPLETION_POINTS,
) -> StatsSnapshot:
    """
    Composite update for a habit entry written as completed.

    Points are awarded on every completion, including repeats on the same day;
    only the streak is deduplicated by day. Both steps work on the same
    in-memory snapshot.
    """
    stats = award_points(stats, points)
    stats = apply_streak_event(stats, today)
    return replace(stats, habits_completed=stats.habits_completed + 1)


def record_task_completion(stats: StatsSnapshot, points: int) -> StatsSnapshot:
    # Tasks feed points and the counter only, never the streak.
    stats = award_points(stats, points)
    return replace(stats, tasks_completed=stats.tasks_completed + 1)


def add_badge(stats: StatsSnapshot, badge: Badge) -> StatsSnapshot:
    """Append ``badge`` unless one with the same type and name is already held."""
    for held in stats.badges:
        if (held.type, held.name) == (badge.type, badge.name):
            return stats
    return replace(stats, badges=stats.badges + (badge,))


def next_level_points(level: int) -> int:
    """Total points needed to reach the level after ``level``."""
    if level < 1:
        level = 1
    return level * POINTS_PER_LEVEL


def progress_in_level(total_points: int) -> int:
    return total_points % POINTS_PER_LEVEL


def apply_stats_edit(stats: StatsSnapshot, changes: dict) -> StatsSnapshot:
    """
    Explicit edit / reset of the stats row.

    ``changes`` maps snapshot field names to new values. The level is
    re-derived from the resulting points, longest_streak is raised to
    current_streak if needed, and badges are appended rather than replaced.
    """
    changes = dict(changes)
    badges = changes.pop("badges", None) or []
    changes.pop("level", None)

    stats = replace(stats, **changes)
    stats = replace(
        stats,
        level=level_for_points(stats.total_points),
        longest_streak=max(stats.longest_streak, stats.current_streak),
    )
    for badge in badges:
        if isinstance(badge, dict):
            badge = Badge.from_dict(badge)
        stats = add_badge(stats, badge)
    return stats
