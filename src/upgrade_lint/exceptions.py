"""Centralized exception hierarchy for upgrade-lint.

All custom exceptions inherit from UpgradeLintError, making it easy to catch
every engine error in one place (the CLI does exactly that to pick the exit
code).

Exception Hierarchy:
    UpgradeLintError (base)
     ConfigurationError - Settings file or kubeconfig problems
     InputValidationError - Rejected before any cluster access
        InvalidSelectorError - Empty selector set or bad glob pattern
        InvalidOutputFormatError - Unknown output format
        InvalidTimeoutError - Non-positive timeout
        InvalidVersionError - Unparseable version string
     VersionTransitionError - Unsupported version transition
        DowngradeNotSupportedError - Target older than installed version
     VersionDetectionError - Installed version cannot be determined
     ClusterError - Cluster API access errors
        ClusterConnectionError - Transport failures
        ClusterUnavailableError - 5xx responses
        ClusterAccessDeniedError - 401/403 responses
        ResourceNotFoundError - 404 responses
        ClusterTimeoutError - Single request timed out
     RunAbortedError - Run stopped early, carries completed group results
        CheckExecutionError - A check failed to execute
           ApplicabilityError - can_apply raised
           CheckValidationError - validate raised
           InvalidCheckResultError - validate returned a bad result
        RunTimeoutError - Run-wide deadline elapsed

Usage Examples:
    try:
        outcome = command.run()
    except InputValidationError as e:
        console.print(f"Invalid input: {e.message}")
    except UpgradeLintError as e:
        logger.error("lint_failed", **e.to_dict())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .error_codes import ErrorCode

if TYPE_CHECKING:
    from .check.base import CheckExecution, CheckGroup


class UpgradeLintError(Exception):
    """Base exception for all upgrade-lint errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., check ids, versions)
    """

    default_error_code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "INP-SELECTOR-001")
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        if error_code is None and self.default_error_code is not None:
            error_code = self.default_error_code.value
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(UpgradeLintError):
    """Configuration loading or validation errors.

    Raised when:
    - Settings file is malformed YAML or fails validation
    - Kubeconfig cannot be found or has no usable context
    """

    default_error_code = ErrorCode.CFG_INVALID


# Input Validation Errors


class InputValidationError(UpgradeLintError):
    """Invalid user input, detected before any cluster access."""


class InvalidSelectorError(InputValidationError):
    """Check selector errors.

    Raised when:
    - No selectors were supplied
    - A selector is an empty string
    - A glob pattern has a syntax error (e.g. unterminated "[")
    """

    default_error_code = ErrorCode.INP_SELECTOR_INVALID

    def __init__(
        self,
        message: str,
        *,
        selector: str | None = None,
        suggestion: str | None = None,
        error_code: str | None = None,
    ):
        """Initialize selector error.

        Args:
            message: Human-readable error message
            selector: The offending selector, when there is one
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code override
        """
        self.selector = selector
        super().__init__(
            message,
            suggestion,
            error_code=error_code,
            context={"selector": selector} if selector is not None else None,
        )


class InvalidOutputFormatError(InputValidationError):
    """Output format is not one of the supported formats."""

    default_error_code = ErrorCode.INP_OUTPUT_FORMAT


class InvalidTimeoutError(InputValidationError):
    """Timeout must be greater than zero."""

    default_error_code = ErrorCode.INP_TIMEOUT


class InvalidVersionError(InputValidationError):
    """A version string could not be parsed."""

    default_error_code = ErrorCode.INP_VERSION


# Version Errors


class VersionTransitionError(UpgradeLintError):
    """Base class for unsupported version transitions."""


class DowngradeNotSupportedError(VersionTransitionError):
    """Target version is older than the installed version.

    Attributes:
        current_version: Installed version string
        target_version: Requested target version string
    """

    default_error_code = ErrorCode.VER_DOWNGRADE

    def __init__(
        self,
        message: str,
        *,
        current_version: str,
        target_version: str,
        suggestion: str | None = None,
    ):
        self.current_version = current_version
        self.target_version = target_version
        super().__init__(
            message,
            suggestion,
            context={
                "current_version": current_version,
                "target_version": target_version,
            },
        )


class VersionDetectionError(UpgradeLintError):
    """The installed platform version could not be detected."""

    default_error_code = ErrorCode.VER_DETECT_FAILED


# Cluster Errors


class ClusterError(UpgradeLintError):
    """Base class for cluster API access errors."""


class ClusterConnectionError(ClusterError):
    """Cannot connect to the cluster API server.

    Raised when:
    - DNS resolution or TCP connection fails
    - TLS handshake fails
    """

    default_error_code = ErrorCode.CLU_CONNECTION_FAILED


class ClusterUnavailableError(ClusterError):
    """API server is unavailable or overloaded (5xx)."""

    default_error_code = ErrorCode.CLU_UNAVAILABLE


class ClusterAccessDeniedError(ClusterError):
    """Credentials are missing, expired, or lack permissions (401/403)."""

    default_error_code = ErrorCode.CLU_ACCESS_DENIED


class ResourceNotFoundError(ClusterError):
    """Requested resource does not exist (404).

    Checks usually translate this into a ResourceNotFound condition instead of
    letting it propagate.
    """

    default_error_code = ErrorCode.CLU_NOT_FOUND


class ClusterTimeoutError(ClusterError):
    """A single cluster request timed out before the run deadline."""

    default_error_code = ErrorCode.CLU_TIMEOUT


# Run Errors


class RunAbortedError(UpgradeLintError):
    """The run stopped before all check groups finished.

    Attributes:
        completed: Results of groups that finished before the abort, keyed by
            group, in canonical order
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.completed: dict[CheckGroup, list[CheckExecution]] = {}
        super().__init__(message, suggestion, error_code, context)


class CheckExecutionError(RunAbortedError):
    """A check failed to execute; aborts the rest of its group.

    Attributes:
        check_id: Identifier of the failing check
        group: Group the failing check belongs to
    """

    def __init__(
        self,
        message: str,
        *,
        check_id: str,
        group: str,
        suggestion: str | None = None,
    ):
        self.check_id = check_id
        self.group = group
        super().__init__(
            message,
            suggestion,
            context={"check_id": check_id, "group": group},
        )


class ApplicabilityError(CheckExecutionError):
    """A check's can_apply raised an error."""

    default_error_code = ErrorCode.CHK_APPLY_FAILED


class CheckValidationError(CheckExecutionError):
    """A check's validate raised an error."""

    default_error_code = ErrorCode.CHK_VALIDATE_FAILED


class InvalidCheckResultError(CheckExecutionError):
    """A check returned no result or a malformed one."""

    default_error_code = ErrorCode.CHK_RESULT_INVALID


class RunTimeoutError(RunAbortedError):
    """The run-wide timeout elapsed.

    Attributes:
        timeout: Configured timeout in seconds, when known
    """

    default_error_code = ErrorCode.RUN_TIMEOUT

    def __init__(
        self,
        message: str = "check execution timed out",
        *,
        timeout: float | None = None,
        suggestion: str | None = None,
    ):
        self.timeout = timeout
        super().__init__(
            message,
            suggestion,
            context={"timeout_seconds": timeout} if timeout is not None else None,
        )


def get_exception_hierarchy() -> dict[str, list[str]]:
    """Get the exception hierarchy as a dictionary.

    Returns:
        Dictionary mapping base exceptions to their subclasses
    """
    return {
        "UpgradeLintError": [
            "ConfigurationError",
            "InputValidationError",
            "VersionTransitionError",
            "VersionDetectionError",
            "ClusterError",
            "RunAbortedError",
        ],
        "InputValidationError": [
            "InvalidSelectorError",
            "InvalidOutputFormatError",
            "InvalidTimeoutError",
            "InvalidVersionError",
        ],
        "VersionTransitionError": ["DowngradeNotSupportedError"],
        "ClusterError": [
            "ClusterConnectionError",
            "ClusterUnavailableError",
            "ClusterAccessDeniedError",
            "ResourceNotFoundError",
            "ClusterTimeoutError",
        ],
        "RunAbortedError": ["CheckExecutionError", "RunTimeoutError"],
        "CheckExecutionError": [
            "ApplicabilityError",
            "CheckValidationError",
            "InvalidCheckResultError",
        ],
    }
