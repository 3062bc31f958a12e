"""Custom exceptions for the application.

Every error carries a machine-readable code and an HTTP status so the API
layer can render it without knowing the concrete type.

Exception Hierarchy:
- AppError (base)
  ├── NotFoundError
  │   └── ScenarioNotFoundError
  ├── ValidationError
  │   ├── MissingFieldError
  │   ├── InvalidDifficultyError
  │   ├── InvalidScenarioTypeError
  │   └── SessionStateError
  ├── ConfigurationError
  ├── ProviderError
  │   ├── GenerationParseError
  │   ├── SpeechSynthesisError
  │   └── DocumentExtractionError
  ├── UnsupportedDocumentError
  └── DocumentTooLargeError

Empty inputs to the response composer (no talking points, no history, no
salient keywords) are normal states and never raise.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Additional context for debugging
        retryable: Whether the operation can be retried
        timestamp: When the error occurred
    """

    code: str = "APP_ERROR"
    message: str = "An unexpected error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        self.message = message or self.message
        self.details = details or {}
        self.retryable = retryable
        self.timestamp = datetime.now(UTC)
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "retryable": self.retryable,
                "timestamp": self.timestamp.isoformat(),
            }
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NotFoundError(AppError):
    """Base exception for resource not found errors."""

    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = 404

    def __init__(
        self,
        resource: str,
        identifier: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.resource = resource
        self.identifier = identifier
        full_details = {"resource": resource, "identifier": str(identifier)}
        if details:
            full_details.update(details)
        super().__init__(
            message=f"{resource} not found: {identifier}",
            details=full_details,
        )


class ScenarioNotFoundError(NotFoundError):
    """Raised when a scenario id is not in the catalog."""

    code = "SCENARIO_NOT_FOUND"

    def __init__(self, scenario_id: str) -> None:
        self.scenario_id = scenario_id
        super().__init__(resource="Scenario", identifier=scenario_id)


class ValidationError(AppError):
    """Base exception for invalid input values."""

    code = "VALIDATION_ERROR"
    message = "Invalid value"
    status_code = 422

    def __init__(
        self,
        field: str,
        value: Any,
        valid_values: list[str] | None = None,
        message: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.valid_values = valid_values or []
        details: dict[str, Any] = {"field": field, "value": str(value)}
        if self.valid_values:
            details["valid_values"] = self.valid_values
        super().__init__(
            message=message or f"Invalid {field}: {value}",
            details=details,
        )


class MissingFieldError(ValidationError):
    """Raised when a required request field is absent or blank."""

    code = "MISSING_FIELD"
    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(field=field, value="", message=f"'{field}' is required")


class InvalidDifficultyError(ValidationError):
    """Raised for a difficulty outside easy/medium/hard."""

    code = "INVALID_DIFFICULTY"

    def __init__(self, value: Any, valid_values: list[str]) -> None:
        super().__init__(field="difficulty", value=value, valid_values=valid_values)


class InvalidScenarioTypeError(ValidationError):
    """Raised for a scenario type outside the closed enumeration."""

    code = "INVALID_SCENARIO_TYPE"

    def __init__(self, value: Any, valid_values: list[str]) -> None:
        super().__init__(field="scenario_type", value=value, valid_values=valid_values)


class SessionStateError(ValidationError):
    """Raised when a practice session operation is not allowed in its state."""

    code = "SESSION_STATE_INVALID"
    status_code = 409

    def __init__(self, state: str, operation: str) -> None:
        super().__init__(
            field="state",
            value=state,
            message=f"Cannot {operation} a session that is {state}",
        )


class ConfigurationError(AppError):
    """Raised when a required setting is missing or a feature is disabled."""

    code = "CONFIGURATION_ERROR"
    message = "Service is not configured"
    status_code = 503


class ProviderError(AppError):
    """Raised when an external provider call fails."""

    code = "PROVIDER_ERROR"
    message = "External provider failed"
    status_code = 502

    def __init__(
        self,
        provider: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = True,
    ) -> None:
        self.provider = provider
        full_details = {"provider": provider}
        if details:
            full_details.update(details)
        super().__init__(message=message, details=full_details, retryable=retryable)


class GenerationParseError(ProviderError):
    """Raised when model output cannot be parsed into the expected shape."""

    code = "GENERATION_PARSE_ERROR"
    message = "Failed to parse model output"


class SpeechSynthesisError(ProviderError):
    """Raised when speech synthesis fails."""

    code = "SPEECH_SYNTHESIS_ERROR"
    message = "Speech synthesis failed"


class DocumentExtractionError(ProviderError):
    """Raised when document text extraction fails."""

    code = "DOCUMENT_EXTRACTION_ERROR"
    message = "Failed to extract text from document"


class UnsupportedDocumentError(AppError):
    """Raised for uploads the extractor cannot handle."""

    code = "UNSUPPORTED_DOCUMENT"
    message = "Unsupported document type"
    status_code = 415


class DocumentTooLargeError(AppError):
    """Raised for uploads above the configured size limit."""

    code = "DOCUMENT_TOO_LARGE"
    message = "File is too large for processing"
    status_code = 413

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(details={"size": size, "limit": limit})
