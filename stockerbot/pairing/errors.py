"""Exception classes for owner pairing."""

from typing import Any


class PairingError(Exception):
    """Base exception for pairing failures."""

    def __init__(
        self, message: str, recoverable: bool = True, details: dict[str, Any] | None = None
    ):
        """
        Initialize pairing error.

        Args:
            message: Error message
            recoverable: Whether the caller can start a fresh session
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


class ProbeFailed(PairingError):
    """The getMe identity lookup failed. Never fatal to a session."""

    def __init__(self, message: str = "Bot identity probe failed", status_code: int | None = None):
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, recoverable=True, details=details)
        self.status_code = status_code


class PairingTimeout(PairingError):
    """No matching code arrived before the session deadline."""

    def __init__(self, message: str = "Pairing timed out", timeout: float | None = None):
        details = {"timeout": timeout} if timeout is not None else {}
        super().__init__(message, recoverable=True, details=details)
        self.timeout = timeout


class MalformedCode(PairingError):
    """A code-shaped message that does not match the session OTP."""

    def __init__(self, received: str):
        super().__init__(f"Wrong pairing code: {received}", recoverable=True, details={"received": received})
        self.received = received


class ChannelShutdownError(PairingError):
    """Tearing down the messaging connection failed."""

    def __init__(self, message: str = "Channel shutdown failed"):
        super().__init__(message, recoverable=True)
