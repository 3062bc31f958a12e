"""Tests for the application error hierarchy."""

from rehearsal.exceptions import (
    AppError,
    ConfigurationError,
    DocumentTooLargeError,
    InvalidDifficultyError,
    MissingFieldError,
    ProviderError,
    ScenarioNotFoundError,
    SessionStateError,
    SpeechSynthesisError,
)


class TestAppError:
    """Test AppError serialization."""

    def test_to_dict(self):
        """Errors render as a single error object."""
        error = ScenarioNotFoundError("wedding")

        body = error.to_dict()["error"]

        assert body["code"] == "SCENARIO_NOT_FOUND"
        assert body["message"] == "Scenario not found: wedding"
        assert body["details"] == {"resource": "Scenario", "identifier": "wedding"}
        assert body["retryable"] is False
        assert "timestamp" in body

    def test_str_includes_code(self):
        """str() is prefixed with the code."""
        assert str(ConfigurationError()) == "[CONFIGURATION_ERROR] Service is not configured"

    def test_default_message(self):
        """The class message is used when none is given."""
        assert AppError().message == "An unexpected error occurred"


class TestStatusCodes:
    """Test HTTP status mapping."""

    def test_status_codes(self):
        """Each error family maps to its HTTP status."""
        assert ScenarioNotFoundError("x").status_code == 404
        assert MissingFieldError("context").status_code == 400
        assert InvalidDifficultyError("x", ["easy"]).status_code == 422
        assert SessionStateError("ended", "end").status_code == 409
        assert ConfigurationError().status_code == 503
        assert ProviderError("gemini").status_code == 502
        assert DocumentTooLargeError(10, 5).status_code == 413


class TestDetails:
    """Test error details."""

    def test_missing_field(self):
        """MissingFieldError names the field."""
        error = MissingFieldError("file")
        assert error.message == "'file' is required"
        assert error.details["field"] == "file"

    def test_provider_error_details(self):
        """Provider errors carry the provider name and are retryable by default."""
        error = SpeechSynthesisError("fish_audio", "down", details={"status_code": 503})
        assert error.details == {"provider": "fish_audio", "status_code": 503}
        assert error.retryable is True

    def test_session_state_message(self):
        """SessionStateError describes the refused operation."""
        assert SessionStateError("ended", "start").message == "Cannot start a session that is ended"
