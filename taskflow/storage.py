# taskflow/storage.py
from flask import request
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .errors import NotFoundError, StorageError, ValidationError


def commit(failure_message: str) -> None:
    """Commit the request's unit of work or roll back and raise StorageError."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError(failure_message) from e


def get_or_404(model, object_id, message: str):
    obj = db.session.get(model, object_id)
    if obj is None:
        raise NotFoundError(message)
    return obj


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            errors=[{"field": "body", "message": "expected a JSON object"}],
        )
    return data
