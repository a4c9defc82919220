# taskflow/routes/stats_routes.py
from flask import Blueprint, current_app, jsonify

from .. import db
from ..schemas import PointsAward, StatsUpdate, parse
from ..services.stats_service import stats_service_for
from ..storage import json_body

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("", methods=["GET"])
def get_stats():
    """
    Returns:
    {
      "id": 1,
      "totalPoints": 120,
      "level": 2,
      "currentStreak": 3,
      "longestStreak": 5,
      "lastActivityDate": "2024-03-11",
      "tasksCompleted": 4,
      "habitsCompleted": 9,
      "badges": [{"type": "streak", "name": "On Fire", "description": "..."}],
      "nextLevelPoints": 200,
      "pointsInLevel": 20,
      "createdAt": "2024-03-01T09:00:00"
    }
    """
    stats = stats_service_for(current_app, db.session).get_stats()
    return jsonify(stats.to_dict()), 200


@stats_bp.route("", methods=["PATCH"])
def update_stats():
    # Explicit edit / reset. ``level`` in the body is ignored; it follows points.
    changes = parse(StatsUpdate, json_body(), "Invalid stats data").changes()
    stats = stats_service_for(current_app, db.session).update_stats(changes)
    return jsonify(stats.to_dict()), 200


@stats_bp.route("/points", methods=["POST"])
def add_points():
    data = parse(PointsAward, json_body(), "Points must be a positive integer")
    stats = stats_service_for(current_app, db.session).add_points(data.points)
    return jsonify(stats.to_dict()), 200
