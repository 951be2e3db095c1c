"""
Exceptions raised by the driving compliance services.

Views translate these into HTTP responses; services never
retry on their own.
"""


class DrivingComplianceError(Exception):
    """Base exception for driving compliance failures."""

    pass


class SessionConflictError(DrivingComplianceError):
    """Raised when a driver starts a session while one is already active."""

    def __init__(self, message="Active session already exists", session_id=None):
        super().__init__(message)
        self.session_id = session_id


class SessionNotFoundError(DrivingComplianceError):
    """Raised when a driver stops driving without an active session."""

    def __init__(self, message="No active session found"):
        super().__init__(message)


class CollaboratorUnavailable(DrivingComplianceError):
    """Raised when the session store or the parking lookup fails."""

    pass
