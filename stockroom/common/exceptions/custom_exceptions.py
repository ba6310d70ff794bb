"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class DatabaseError(ApplicationError):
    """Exception raised for errors during database operations."""

    def __init__(self, message: str = "Database operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Database Error: {message}"


class ValidationError(ApplicationError):
    """Exception raised when user input is incomplete or malformed."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class BusinessRuleError(ApplicationError):
    """Exception raised when an operation is rejected before any write is attempted."""

    def __init__(self, message: str = "Operation not allowed", title: str = "Error") -> None:
        super().__init__(message)
        self.title = title


class ImportFileError(ApplicationError):
    """Exception raised when an uploaded spreadsheet cannot be read."""

    def __init__(self, message: str = "Upload file could not be read", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Import Error: {message}"
