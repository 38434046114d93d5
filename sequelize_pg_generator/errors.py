"""Error types for sequelize-pg-generator."""

from typing import Optional, Dict, Any


class GeneratorError(Exception):
    """Base exception for generation errors."""

    def __init__(self, message: str, code: str = "GENERATOR_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnrecognizedTypeError(GeneratorError):
    """A catalog data type has no mapping to a Sequelize data type."""

    def __init__(self, data_type: Optional[str], column: Optional[str] = None):
        details = {"data_type": data_type}
        if column:
            details["column"] = column
        super().__init__(
            f"Unhandled data type: {data_type}",
            code="UNRECOGNIZED_TYPE",
            details=details,
        )
        self.data_type = data_type


class DatabaseConnectionError(GeneratorError):
    """Error connecting to the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class IntrospectionError(GeneratorError):
    """Error while running a catalog query."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INTROSPECTION_ERROR", details=details)


class ConfigurationError(GeneratorError):
    """Missing or invalid generator options."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class OutputError(GeneratorError):
    """Error writing a generated file."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot write {path}: {reason}",
            code="OUTPUT_ERROR",
            details={"path": path, "reason": reason},
        )
        self.path = path
