# taskflow/routes/habit_routes.py
from flask import Blueprint, current_app, jsonify, request

from .. import db
from ..errors import ValidationError
from ..models.habit import Habit, HabitEntry
from ..schemas import (
    HabitCreate,
    HabitEntryCreate,
    HabitEntryQuery,
    HabitEntryUpdate,
    HabitUpdate,
    parse,
)
from ..services.stats_service import stats_service_for
from ..storage import commit, get_or_404, json_body

habits_bp = Blueprint("habits", __name__)


def _save_entry(entry: HabitEntry, failure_message: str) -> None:
    """
    Persist ``entry``; if it is completed, award points and update the streak
    in the same commit. A non-completed entry has no stats side effect.
    """
    if entry.completed:
        db.session.flush()
        stats_service_for(current_app, db.session).on_habit_completed(
            entry.habit_id, entry.date
        )
    else:
        commit(failure_message)


# ------------------------------
# Habits
# ------------------------------
@habits_bp.route("", methods=["GET"])
def list_habits():
    rows = Habit.query.filter(Habit.is_active.is_(True)).order_by(Habit.id.asc()).all()
    return jsonify([h.to_dict() for h in rows]), 200


@habits_bp.route("/<int:habit_id>", methods=["GET"])
def get_habit(habit_id: int):
    habit = get_or_404(Habit, habit_id, "Habit not found")
    return jsonify(habit.to_dict()), 200


@habits_bp.route("", methods=["POST"])
def create_habit():
    data = parse(HabitCreate, json_body(), "Invalid habit data")

    habit = Habit(**data.model_dump())
    db.session.add(habit)
    commit("Failed to create habit")

    current_app.logger.info(f"[habits] created habit id={habit.id} type={habit.habit_type}")
    return jsonify(habit.to_dict()), 201


@habits_bp.route("/<int:habit_id>", methods=["PATCH"])
def update_habit(habit_id: int):
    updates = parse(HabitUpdate, json_body(), "Invalid update data").changes()
    habit = get_or_404(Habit, habit_id, "Habit not found")

    for field, value in updates.items():
        setattr(habit, field, value)
    commit("Failed to update habit")

    return jsonify(habit.to_dict()), 200


@habits_bp.route("/<int:habit_id>", methods=["DELETE"])
def delete_habit(habit_id: int):
    habit = get_or_404(Habit, habit_id, "Habit not found")

    # entries go with it (cascade)
    db.session.delete(habit)
    commit("Failed to delete habit")

    return "", 204


# ------------------------------
# GET /api/habits/<habit_id>/entries?date=YYYY-MM-DD
# ------------------------------
@habits_bp.route("/<int:habit_id>/entries", methods=["GET"])
def list_habit_entries(habit_id: int):
    query = parse(HabitEntryQuery, request.args.to_dict(), "Invalid entry filters")

    q = HabitEntry.query.filter(HabitEntry.habit_id == habit_id)
    if query.date is not None:
        q = q.filter(HabitEntry.date == query.date)

    rows = q.order_by(HabitEntry.date.desc(), HabitEntry.id.desc()).all()
    return jsonify([e.to_dict() for e in rows]), 200


# ------------------------------
# POST /api/habits/entries
# ------------------------------
@habits_bp.route("/entries", methods=["POST"])
def create_habit_entry():
    """
    Record a habit's value for one day.

    Body: {"habitId": 1, "date": "2024-03-11", "value": 1, "completed": true}

    If the habit already has an entry for that date it is updated in place.
    ``completed`` defaults to ``value > 0``. Every write that leaves the entry
    completed awards points; the streak only moves once per day.
    """
    data = parse(HabitEntryCreate, json_body(), "Invalid entry data")
    get_or_404(Habit, data.habit_id, "Habit not found")

    completed = data.completed if data.completed is not None else data.value > 0

    entry = HabitEntry.query.filter_by(habit_id=data.habit_id, date=data.date).first()
    created = entry is None
    if created:
        entry = HabitEntry(habit_id=data.habit_id, date=data.date)
        db.session.add(entry)

    entry.value = data.value
    entry.completed = completed

    _save_entry(entry, "Failed to create habit entry")

    if created:
        current_app.logger.info(f"[habits] created entry id={entry.id} habit_id={entry.habit_id} date={entry.date}")
    return jsonify(entry.to_dict()), 201


# ------------------------------
# PATCH /api/habits/entries/<entry_id>
# ------------------------------
@habits_bp.route("/entries/<int:entry_id>", methods=["PATCH"])
def update_habit_entry(entry_id: int):
    updates = parse(HabitEntryUpdate, json_body(), "Invalid update data").changes()
    entry = get_or_404(HabitEntry, entry_id, "Habit entry not found")

    if "habit_id" in updates:
        get_or_404(Habit, updates["habit_id"], "Habit not found")

    if "habit_id" in updates or "date" in updates:
        target_habit = updates.get("habit_id", entry.habit_id)
        target_date = updates.get("date", entry.date)
        clash = HabitEntry.query.filter(
            HabitEntry.habit_id == target_habit,
            HabitEntry.date == target_date,
            HabitEntry.id != entry.id,
        ).first()
        if clash is not None:
            raise ValidationError(
                "Invalid update data",
                errors=[{"field": "date", "message": f"habit already has an entry for {target_date.isoformat()}"}],
            )

    for field, value in updates.items():
        setattr(entry, field, value)

    # Only an explicit completion in this request counts as a completion event.
    if updates.get("completed") is True:
        _save_entry(entry, "Failed to update habit entry")
    else:
        commit("Failed to update habit entry")

    return jsonify(entry.to_dict()), 200
