from __future__ import annotations


class CustomBaseException(Exception):
    """
    Base exception class.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MeasurementDecodeError(CustomBaseException):
    """Raised when a measurement value is not valid JSON."""

    def __init__(self, value: str, reason: str = ''):
        self.value = value
        msg = f'Measurement value {value!r} is not valid JSON'
        if reason:
            msg = f'{msg}: {reason}'
        super().__init__(msg)


class InvalidAnalysisRun(CustomBaseException):
    """Raised when an analysis run document fails validation."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(message)
