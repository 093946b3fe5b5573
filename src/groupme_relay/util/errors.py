from typing import Any


class ServiceError(Exception):
    error_code: int
    emoji: str

    def __init__(self, message: str, error_code: int, emoji: str = "⚠️"):
        super().__init__(message)
        self.error_code = error_code
        self.emoji = emoji

    def __str__(self) -> str:
        return self.to_log_string()

    def to_log_string(self) -> str:
        cause_str = f" # Caused by: {self.__cause__}" if self.__cause__ else ""
        return f"[{self.emoji} E{self.error_code}] {super().__str__()}{cause_str}"


class ValidationError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "✏️"):
        super().__init__(message, error_code, emoji = emoji)


class ExternalServiceError(ServiceError):
    def __init__(self, message: str, error_code: int, emoji: str = "🌐"):
        super().__init__(message, error_code, emoji = emoji)


class ParseError(ValidationError):
    """An inbound JSON object does not fit the shape a parser maps it into."""

    def __init__(self, message: str, error_code: int):
        super().__init__(message, error_code, emoji = "🧩")


class ProtocolError(ExternalServiceError):
    """The GroupMe API answered with a status or meta code other than the documented one."""
    expected: Any
    actual: Any

    def __init__(self, message: str, error_code: int, expected: Any = None, actual: Any = None):
        super().__init__(message, error_code, emoji = "📡")
        self.expected = expected
        self.actual = actual
