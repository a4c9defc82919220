# taskflow/errors.py


class TaskFlowError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {"message": self.message}


class ValidationError(TaskFlowError):
    """Malformed or missing input. Carries a field-level error list."""

    status_code = 400
    message = "Invalid request data"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self):
        return {"message": self.message, "errors": self.errors}


class NotFoundError(TaskFlowError):
    status_code = 404
    message = "Not found"


class StorageError(TaskFlowError):
    """The store failed. The message is safe to show; the cause is only logged."""

    status_code = 500
    message = "Storage failure"
