"""
API Errors

Domain errors raised by the services and turned into JSON responses by the
application's error handlers.
"""


class ApiError(Exception):
    status_code = 400
    message = 'Bad request'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'ok': False, 'message': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request.'


class AuthError(ApiError):
    status_code = 401
    message = 'Not authenticated'


class ConflictError(ApiError):
    status_code = 409
    message = 'Conflict'
