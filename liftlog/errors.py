# liftlog/errors.py


class LiftLogError(Exception):
    """Base error; create_app renders these as {"error": message} JSON."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Unauthenticated(LiftLogError):
    status_code = 401
    message = "Unauthorized"


class InvalidRequest(LiftLogError):
    status_code = 400
    message = "Invalid request."


class NotFound(LiftLogError):
    status_code = 404
    message = "Not Found"


class SessionConflict(LiftLogError):
    status_code = 409
    message = "Session is already completed."


class MalformedPlan(LiftLogError):
    status_code = 502
    message = "Failed to generate plan"


class ExternalServiceFailure(LiftLogError):
    status_code = 502
    message = "Failed to generate plan"


class PersistenceFailure(LiftLogError):
    status_code = 500
    message = "Failed to access storage."
