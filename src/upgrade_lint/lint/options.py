"""Per-invocation lint options and their validation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from packaging.version import Version

from ..check.selector import WILDCARD, SelectorSet
from ..cluster.client import DEFAULT_BURST, DEFAULT_QPS
from ..error_codes import ErrorCode
from ..exceptions import InputValidationError, InvalidTimeoutError
from ..output.formats import OutputFormat, parse_output_format
from ..utils.version import parse_tolerant

DEFAULT_TIMEOUT_SECONDS = 300.0


@dataclass
class LintOptions:
    """Raw options as given on the command line or in settings."""

    target_version: str | None = None
    output_format: str | OutputFormat = OutputFormat.TABLE
    checks: list[str] = field(default_factory=lambda: [WILDCARD])
    verbose: bool = False
    debug: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    qps: float = DEFAULT_QPS
    burst: int = DEFAULT_BURST
    fail_on_blocking: bool = True
    fail_on_advisory: bool = False

    def validate(self) -> ValidatedOptions:
        """Validate everything that can be checked without a cluster.

        Returns:
            Parsed options

        Raises:
            InvalidOutputFormatError: Unknown output format
            InvalidSelectorError: Empty or malformed check selectors
            InvalidTimeoutError: Timeout not a finite number greater than zero
            InvalidVersionError: Unparseable target version
            InputValidationError: Non-finite or non-positive qps, or burst below 1
        """
        output_format = parse_output_format(self.output_format)
        selectors = SelectorSet.parse(self.checks)

        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise InvalidTimeoutError(
                "timeout must be a finite number greater than 0, "
                f"got {self.timeout_seconds}",
                suggestion="Pass --timeout with a positive number of seconds",
            )
        if not math.isfinite(self.qps) or self.qps <= 0 or self.burst < 1:
            raise InputValidationError(
                "qps must be a finite number greater than 0 and burst at least 1",
                error_code=ErrorCode.INP_THROTTLE.value,
            )

        target = parse_tolerant(self.target_version) if self.target_version else None

        return ValidatedOptions(
            target_version=target,
            target_version_raw=self.target_version,
            output_format=output_format,
            selectors=selectors,
            verbose=self.verbose,
            debug=self.debug,
            timeout_seconds=float(self.timeout_seconds),
            qps=float(self.qps),
            burst=int(self.burst),
            fail_on_blocking=self.fail_on_blocking,
            fail_on_advisory=self.fail_on_advisory,
        )


@dataclass(frozen=True)
class ValidatedOptions:
    """Options after validation; safe to build a client from."""

    target_version: Version | None
    target_version_raw: str | None
    output_format: OutputFormat
    selectors: SelectorSet
    verbose: bool
    debug: bool
    timeout_seconds: float
    qps: float
    burst: int
    fail_on_blocking: bool
    fail_on_advisory: bool
