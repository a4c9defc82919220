# taskflow/routes/task_routes.py
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from .. import db
from ..models.task import Task, Subtask, TaskNote
from ..schemas import (
    NoteCreate,
    SubtaskCreate,
    SubtaskUpdate,
    TaskCreate,
    TaskQuery,
    TaskReorder,
    TaskUpdate,
    parse,
)
from ..services.stats_service import stats_service_for
from ..storage import commit, get_or_404, json_body

tasks_bp = Blueprint("tasks", __name__)
subtasks_bp = Blueprint("subtasks", __name__)
notes_bp = Blueprint("notes", __name__)


# ------------------------------
# GET /api/tasks?category=&priority=&completed=
# ------------------------------
@tasks_bp.route("", methods=["GET"])
def list_tasks():
    filters = parse(TaskQuery, request.args.to_dict(), "Invalid task filters")

    q = Task.query
    if filters.category:
        q = q.filter(Task.category == filters.category)
    if filters.priority:
        q = q.filter(Task.priority == filters.priority)
    if filters.completed is not None:
        q = q.filter(Task.completed.is_(filters.completed))

    rows = q.order_by(Task.order.asc(), Task.id.asc()).all()
    return jsonify([t.to_dict() for t in rows]), 200


@tasks_bp.route("/<int:task_id>", methods=["GET"])
def get_task(task_id: int):
    task = get_or_404(Task, task_id, "Task not found")
    return jsonify(task.to_dict()), 200


@tasks_bp.route("", methods=["POST"])
def create_task():
    data = parse(TaskCreate, json_body(), "Invalid task data")

    task = Task(**data.model_dump())
    if task.completed and task.completed_at is None:
        task.completed_at = datetime.utcnow()

    db.session.add(task)
    commit("Failed to create task")

    current_app.logger.info(f"[tasks] created task id={task.id} category={task.category}")
    return jsonify(task.to_dict()), 201


@tasks_bp.route("/<int:task_id>", methods=["PATCH"])
def update_task(task_id: int):
    updates = parse(TaskUpdate, json_body(), "Invalid update data").changes()
    task = get_or_404(Task, task_id, "Task not found")

    was_completed = bool(task.completed)
    for field, value in updates.items():
        setattr(task, field, value)

    if updates.get("completed") is True and not updates.get("completed_at"):
        task.completed_at = datetime.utcnow()

    if not was_completed and task.completed:
        # Points + counter only; tasks never feed the streak.
        db.session.flush()
        stats_service_for(current_app, db.session).on_task_completed(task.id)
    else:
        commit("Failed to update task")

    return jsonify(task.to_dict()), 200


@tasks_bp.route("/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int):
    task = get_or_404(Task, task_id, "Task not found")

    # subtasks, notes and time sessions go with it (cascade)
    db.session.delete(task)
    commit("Failed to delete task")

    return "", 204


@tasks_bp.route("/reorder", methods=["POST"])
def reorder_tasks():
    data = parse(TaskReorder, json_body(), "taskIds must be an array of task ids")

    tasks = {t.id: t for t in Task.query.filter(Task.id.in_(data.task_ids)).all()}
    for index, task_id in enumerate(data.task_ids):
        task = tasks.get(task_id)
        if task is not None:
            task.order = index

    commit("Failed to reorder tasks")
    return "", 204


# ------------------------------
# Subtasks
# ------------------------------
@tasks_bp.route("/<int:task_id>/subtasks", methods=["GET"])
def list_subtasks(task_id: int):
    rows = (
        Subtask.query.filter_by(task_id=task_id)
        .order_by(Subtask.order.asc(), Subtask.id.asc())
        .all()
    )
    return jsonify([s.to_dict() for s in rows]), 200


@tasks_bp.route("/<int:task_id>/subtasks", methods=["POST"])
def create_subtask(task_id: int):
    data = parse(SubtaskCreate, json_body(), "Invalid subtask data")
    get_or_404(Task, task_id, "Task not found")

    subtask = Subtask(task_id=task_id, **data.model_dump())
    db.session.add(subtask)
    commit("Failed to create subtask")

    return jsonify(subtask.to_dict()), 201


@subtasks_bp.route("/<int:subtask_id>", methods=["PATCH"])
def update_subtask(subtask_id: int):
    updates = parse(SubtaskUpdate, json_body(), "Invalid update data").changes()
    subtask = get_or_404(Subtask, subtask_id, "Subtask not found")

    for field, value in updates.items():
        setattr(subtask, field, value)
    commit("Failed to update subtask")

    return jsonify(subtask.to_dict()), 200


@subtasks_bp.route("/<int:subtask_id>", methods=["DELETE"])
def delete_subtask(subtask_id: int):
    subtask = get_or_404(Subtask, subtask_id, "Subtask not found")
    db.session.delete(subtask)
    commit("Failed to delete subtask")
    return "", 204


# ------------------------------
# Notes
# ------------------------------
@tasks_bp.route("/<int:task_id>/notes", methods=["GET"])
def list_notes(task_id: int):
    rows = (
        TaskNote.query.filter_by(task_id=task_id)
        .order_by(TaskNote.created_at.desc(), TaskNote.id.desc())
        .all()
    )
    return jsonify([n.to_dict() for n in rows]), 200


@tasks_bp.route("/<int:task_id>/notes", methods=["POST"])
def create_note(task_id: int):
    data = parse(NoteCreate, json_body(), "Note content is required")
    get_or_404(Task, task_id, "Task not found")

    note = TaskNote(task_id=task_id, content=data.content)
    db.session.add(note)
    commit("Failed to create task note")

    return jsonify(note.to_dict()), 201


@notes_bp.route("/<int:note_id>", methods=["DELETE"])
def delete_note(note_id: int):
    note = get_or_404(TaskNote, note_id, "Note not found")
    db.session.delete(note)
    commit("Failed to delete note")
    return "", 204
