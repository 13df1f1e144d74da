class AppError(Exception):
    """Base for errors that are rendered to the client as {success: false, message}."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, fields: list[str] | None = None):
        self.fields = list(fields or [])
        super().__init__(message)


class NotFoundError(AppError):
    # Also used when the record exists but belongs to someone else, so the
    # caller cannot probe for other providers' reservations.
    status_code = 404
    default_message = "Not found"


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Forbidden"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


def missing_fields_error(fields: list[str]) -> ValidationError:
    return ValidationError(f"Missing required fields: {', '.join(fields)}", fields=fields)
