"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    INP - Input validation errors (selectors, output format, timeout, versions)
    VER - Version transition and detection errors
    CHK - Check execution errors (applicability, validation, invalid results)
    CLU - Cluster access errors
    RUN - Run-level errors (timeouts)
    CFG - Configuration errors

Usage:
    from upgrade_lint.error_codes import ErrorCode

    logger.error(
        "check_group_failed",
        error_code=ErrorCode.CHK_VALIDATE_FAILED.value,
        group="component",
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    Format: {DOMAIN}-{CATEGORY}-{NUMBER}
    """

    # =========================================================================
    # Input Validation Errors (INP-xxx-xxx)
    # =========================================================================
    INP_SELECTOR_INVALID = "INP-SELECTOR-001"
    """Check selector pattern has invalid syntax."""

    INP_SELECTOR_EMPTY = "INP-SELECTOR-002"
    """No check selector given, or an empty selector string."""

    INP_OUTPUT_FORMAT = "INP-OUTPUT-001"
    """Output format is not one of table, json, yaml."""

    INP_TIMEOUT = "INP-TIMEOUT-001"
    """Timeout is not greater than zero."""

    INP_VERSION = "INP-VERSION-001"
    """Version string cannot be parsed."""

    INP_THROTTLE = "INP-THROTTLE-001"
    """Client throttling parameters are not positive."""

    # =========================================================================
    # Version Errors (VER-xxx-xxx)
    # =========================================================================
    VER_DOWNGRADE = "VER-DOWNGRADE-001"
    """Requested target version is older than the installed version."""

    VER_DETECT_FAILED = "VER-DETECT-001"
    """Installed platform version could not be detected."""

    # =========================================================================
    # Check Execution Errors (CHK-xxx-xxx)
    # =========================================================================
    CHK_APPLY_FAILED = "CHK-APPLY-001"
    """A check's applicability predicate raised an error."""

    CHK_VALIDATE_FAILED = "CHK-VALIDATE-001"
    """A check's validation raised an error."""

    CHK_RESULT_INVALID = "CHK-RESULT-001"
    """A check returned a missing or malformed diagnostic result."""

    # =========================================================================
    # Cluster Errors (CLU-xxx-xxx)
    # =========================================================================
    CLU_CONNECTION_FAILED = "CLU-CONN-001"
    """Cannot reach the cluster API server."""

    CLU_UNAVAILABLE = "CLU-UNAVAIL-001"
    """API server is unavailable or overloaded."""

    CLU_ACCESS_DENIED = "CLU-AUTH-001"
    """Credentials are missing, expired, or lack permissions."""

    CLU_NOT_FOUND = "CLU-NOTFOUND-001"
    """Requested resource does not exist."""

    CLU_TIMEOUT = "CLU-TIMEOUT-001"
    """A single cluster request timed out."""

    # =========================================================================
    # Run Errors (RUN-xxx-xxx)
    # =========================================================================
    RUN_TIMEOUT = "RUN-TIMEOUT-001"
    """The run-wide timeout elapsed."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration validation failed."""

    CFG_PARSE = "CFG-PARSE-001"
    """Configuration file could not be parsed."""

    CFG_KUBECONFIG = "CFG-KUBE-001"
    """Kubeconfig is missing or unusable."""


def get_error_domain(code: ErrorCode) -> str:
    """Extract the domain from an error code.

    Args:
        code: The error code

    Returns:
        The domain prefix (e.g., "INP", "CHK", "CLU")
    """
    return code.value.split("-")[0]


def is_input_error_code(code: ErrorCode) -> bool:
    """Check if an error code is raised before any cluster access."""
    return get_error_domain(code) in {"INP", "CFG"}
