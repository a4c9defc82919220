# taskflow/routes/time_tracking_routes.py
from datetime import datetime

from flask import Blueprint, current_app, jsonify

from .. import db
from ..errors import NotFoundError
from ..models.task import Task
from ..models.time_tracking import TimeTrackingSession
from ..schemas import TimeTrackingStart, parse
from ..storage import commit, get_or_404, json_body
from .task_routes import tasks_bp

time_sessions_bp = Blueprint("time_sessions", __name__)


def _elapsed_minutes(start: datetime, end: datetime) -> int:
    return max(0, round((end - start).total_seconds() / 60))


# ------------------------------
# GET /api/tasks/<task_id>/time-sessions
# ------------------------------
@tasks_bp.route("/<int:task_id>/time-sessions", methods=["GET"])
def list_time_sessions(task_id: int):
    rows = (
        TimeTrackingSession.query.filter_by(task_id=task_id)
        .order_by(TimeTrackingSession.created_at.desc(), TimeTrackingSession.id.desc())
        .all()
    )
    return jsonify([s.to_dict() for s in rows]), 200


# ------------------------------
# POST /api/tasks/<task_id>/time-tracking/start
# ------------------------------
@tasks_bp.route("/<int:task_id>/time-tracking/start", methods=["POST"])
def start_time_tracking(task_id: int):
    data = parse(TimeTrackingStart, json_body(), "Invalid time tracking data")
    get_or_404(Task, task_id, "Task not found")

    session = TimeTrackingSession(
        task_id=task_id,
        start_time=datetime.utcnow(),
        description=data.description,
    )
    db.session.add(session)
    commit("Failed to start time tracking")

    current_app.logger.info(f"[time] started session id={session.id} task_id={task_id}")
    return jsonify(session.to_dict()), 201


# ------------------------------
# PATCH /api/time-sessions/<session_id>/stop
# ------------------------------
@time_sessions_bp.route("/<int:session_id>/stop", methods=["PATCH"])
def stop_time_tracking(session_id: int):
    session = db.session.get(TimeTrackingSession, session_id)
    if session is None or not session.is_running:
        raise NotFoundError("Time tracking session not found")

    end_time = datetime.utcnow()
    duration = _elapsed_minutes(session.start_time, end_time)

    session.end_time = end_time
    session.duration = duration

    task = db.session.get(Task, session.task_id)
    if task is not None:
        task.time_spent = int(task.time_spent or 0) + duration

    commit("Failed to stop time tracking")

    current_app.logger.info(
        f"[time] stopped session id={session.id} duration={duration}min"
    )
    return jsonify(session.to_dict()), 200
