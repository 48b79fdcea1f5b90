"""Actionable error tests.

Tests that the error factory methods produce correct, structured,
recoverable errors for settings and CLI input failures.
"""

from __future__ import annotations

from textfold.errors import ActionableError, AIGuidance, ErrorType


class TestErrorFactoryMethods:
    """REQUIREMENT: Factory methods produce structured errors with embedded guidance.

    WHO: Settings loading and CLI input handling
    WHAT: Each factory produces the correct error_type; suggestion is always populated;
          ai_guidance is present; to_dict() excludes None values
    WHY: Opaque errors leave the operator guessing which setting to fix
    """

    def test_config_error_names_the_field(self) -> None:
        """config() embeds the offending field name so the operator knows which setting to fix."""
        err = ActionableError.config("urlify.max_length", "must be positive")
        assert err.error_type == ErrorType.CONFIG
        assert "urlify.max_length" in err.error

    def test_parse_error_names_the_source(self) -> None:
        """parse() names the unreadable source so the operator knows which file to open."""
        err = ActionableError.parse("textfold.toml", "Expected ']' at line 1")
        assert err.error_type == ErrorType.PARSE
        assert "textfold.toml" in err.error
        assert "line 1" in err.error

    def test_validation_factory_produces_validation_type(self) -> None:
        """validation() produces an error typed VALIDATION carrying field and reason."""
        err = ActionableError.validation("shortify.length", "must be > 0")
        assert err.error_type == ErrorType.VALIDATION
        assert "shortify.length" in err.error
        assert "must be > 0" in err.error

    def test_every_factory_populates_suggestion_and_guidance(self) -> None:
        """Each factory fills suggestion and ai_guidance even when the caller gives none."""
        errors = [
            ActionableError.config("f", "r"),
            ActionableError.parse("s", "r"),
            ActionableError.validation("f", "r"),
            ActionableError.unexpected("svc", "op", "boom"),
        ]
        for err in errors:
            assert err.suggestion, f"{err.error_type} has no suggestion"
            assert err.ai_guidance is not None, f"{err.error_type} has no ai_guidance"

    def test_to_dict_excludes_none_values(self) -> None:
        """to_dict() omits None-valued keys so serialized output is clean for logging."""
        err = ActionableError.config("weight", "too high")
        d = err.to_dict()
        assert None not in d.values()
        assert d["error_type"] == "config"

    def test_all_factories_set_success_false(self) -> None:
        """Every factory marks success=False so callers never treat an error as a success."""
        err = ActionableError.unexpected("test", "op", "boom")
        assert err.success is False

    def test_error_is_a_real_exception_with_message(self) -> None:
        """The error can be raised and its str() is the error message."""
        err = ActionableError.validation("f", "bad")
        assert isinstance(err, Exception)
        assert str(err) == err.error


class TestSuggestionPreservation:
    """REQUIREMENT: Custom suggestions are always preserved.

    WHO: Callers providing operation-specific context
    WHAT: Custom suggestions flow through factory methods and from_exception()
    WHY: Callers have context that generic classifiers cannot infer
    """

    def test_config_preserves_custom_suggestion(self) -> None:
        """A caller-provided suggestion is preserved verbatim, overriding the generic default."""
        err = ActionableError.config("settings_path", "missing", suggestion="Omit --config")
        assert err.suggestion == "Omit --config"

    def test_from_exception_preserves_caller_suggestion(self) -> None:
        """from_exception() forwards the caller's suggestion rather than generating a generic one."""
        err = ActionableError.from_exception(
            RuntimeError("boom"),
            "stdin",
            "read input",
            suggestion="Custom hint",
        )
        assert err.suggestion == "Custom hint"


class TestAIGuidanceToDict:
    """REQUIREMENT: AIGuidance.to_dict() includes only non-None optional fields.

    WHO: Logging and --verbose consumers deserializing error guidance
    WHAT: Optional fields (command, checks) appear only when populated;
          action_required is always present
    WHY: Including None values creates noisy output
    """

    def test_to_dict_includes_command_and_checks_when_set(self) -> None:
        """GIVEN AIGuidance with command and checks THEN to_dict includes both."""
        g = AIGuidance(action_required="fix it", command="run fix", checks=["c1"])
        d = g.to_dict()
        assert d["command"] == "run fix"
        assert d["checks"] == ["c1"]

    def test_to_dict_excludes_none_optional_fields(self) -> None:
        """GIVEN AIGuidance with only action_required THEN to_dict has no extra keys."""
        g = AIGuidance(action_required="fix it")
        assert g.to_dict() == {"action_required": "fix it"}


class TestActionableErrorToDict:
    """REQUIREMENT: ActionableError.to_dict() includes troubleshooting and context when set.

    WHO: --verbose CLI output and log consumers
    WHAT: troubleshooting and context keys appear only when populated
    WHY: Structured errors enable automated recovery by downstream agents
    """

    def test_to_dict_includes_troubleshooting_when_set(self) -> None:
        """GIVEN an error with troubleshooting steps THEN to_dict includes them."""
        err = ActionableError.parse("textfold.toml", "bad")
        d = err.to_dict()
        assert "steps" in d["troubleshooting"]

    def test_to_dict_includes_context_when_set(self) -> None:
        """GIVEN an error with context populated THEN to_dict includes the context dict."""
        err = ActionableError(
            error="test error",
            error_type=ErrorType.UNEXPECTED,
            service="test",
            context={"key": "value"},
        )
        assert err.to_dict()["context"] == {"key": "value"}


class TestFromExceptionClassifier:
    """REQUIREMENT: from_exception() classifies exceptions by type and keywords.

    WHO: The CLI wrapping failures while reading input
    WHAT: Unicode errors and decode/TOML keywords -> PARSE; missing files -> CONFIG;
          anything else -> UNEXPECTED
    WHY: The classification decides which recovery steps are shown
    """

    def test_unicode_error_is_classified_as_parse(self) -> None:
        """A UnicodeDecodeError becomes a PARSE error."""
        exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        err = ActionableError.from_exception(exc, "stdin", "read input")
        assert err.error_type == ErrorType.PARSE

    def test_missing_file_is_classified_as_config(self) -> None:
        """A FileNotFoundError becomes a CONFIG error."""
        err = ActionableError.from_exception(FileNotFoundError("no such file"), "settings", "load")
        assert err.error_type == ErrorType.CONFIG

    def test_unmatched_error_is_classified_as_unexpected(self) -> None:
        """Anything without a known pattern becomes UNEXPECTED and names the operation."""
        err = ActionableError.from_exception(RuntimeError("boom"), "cli", "urlify")
        assert err.error_type == ErrorType.UNEXPECTED
        assert "urlify" in err.error
