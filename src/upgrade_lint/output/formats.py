"""Supported report formats."""

from enum import Enum

from ..exceptions import InvalidOutputFormatError


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def parse_output_format(value: str | OutputFormat) -> OutputFormat:
    """Parse a format name, case-insensitively.

    Raises:
        InvalidOutputFormatError: If the name is not table, json or yaml
    """
    if isinstance(value, OutputFormat):
        return value
    try:
        return OutputFormat((value or "").strip().lower())
    except ValueError as e:
        choices = ", ".join(f.value for f in OutputFormat)
        raise InvalidOutputFormatError(
            f"invalid output format {value!r}",
            suggestion=f"Use one of: {choices}",
        ) from e
