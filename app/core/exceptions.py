from typing import Optional, Any

class NightListError(Exception):
    """
    Base exception for NightList application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ResourceNotFoundError(NightListError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class AuthenticationError(NightListError):
    """
    Raised when authentication fails.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)

class ValidationError(NightListError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)

class InvalidTransitionError(NightListError):
    """
    Raised when an action is not allowed from the current state.
    """
    def __init__(self, message: str = "Action not allowed in current state", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_TRANSITION", status_code=409, details=details)

class StoreError(NightListError):
    """
    Raised when the record store rejects or cannot complete an operation.
    """
    def __init__(self, message: str = "Record store error", details: Optional[Any] = None):
        super().__init__(message, code="STORE_ERROR", status_code=503, details=details)

class ExternalServiceError(NightListError):
    """
    Raised when an external service (e.g., Twilio) fails.
    """
    def __init__(self, message: str = "External service error", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", status_code=502, details=details)

class NotificationError(ExternalServiceError):
    """
    Raised when the notification sender cannot be reached or answers garbage.
    A provider-level refusal (success=false) is a result, not this error.
    """
    def __init__(self, message: str = "Notification service error", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "NOTIFICATION_ERROR"
