"""
Exception types raised by the service layer.

Validation errors are raised before any state is touched; callers show
`message` to the operator.
"""

from __future__ import annotations


class ValidationError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CrewValidationError(ValidationError):
    pass


class ProductValidationError(ValidationError):
    pass


class CheckoutValidationError(ValidationError):
    pass


class SettingsValidationError(ValidationError):
    pass


class BackupFormatError(Exception):
    """Backup document is malformed or incompatible; nothing was restored."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
