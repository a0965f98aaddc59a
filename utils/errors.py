"""
Domain errors. Raised anywhere below the routes and turned into a JSON
response with the matching status by the handler registered in create_app.
"""


class AppError(Exception):
    """Base class for errors that are safe to show to the client"""
    status_code = 500
    default_message = "Something went wrong. Please try again later."

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "error": self.message}


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid input."


class NotFound(AppError):
    status_code = 404
    default_message = "Not found."


class Expired(AppError):
    status_code = 400
    default_message = "OTP expired. Please request a new one."


class Mismatch(AppError):
    status_code = 400
    default_message = "Incorrect OTP."


class Conflict(AppError):
    status_code = 409
    default_message = "Email already registered."


class InvalidCredentials(AppError):
    # Same status and message for unknown email and wrong password
    status_code = 401
    default_message = "Invalid credentials"


class DeliveryError(AppError):
    status_code = 502
    default_message = "Unable to send verification code. Please try again later."


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(Unauthorized):
    status_code = 403
    default_message = "Access denied."
