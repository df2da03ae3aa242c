"""Config file loading for the lint tool."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config_settings import ENV_PREFIX, Settings
from .exceptions import ConfigurationError
from .error_codes import ErrorCode
from .utils.logging import get_logger

CONFIG_ENV_VAR = "UPGRADE_LINT_CONFIG"
DEFAULT_CONFIG_NAME = "upgrade-lint.yaml"


def candidate_config_paths(config_path: Path | None = None) -> list[Path]:
    """Paths searched for a config file, in order."""
    if config_path:
        return [config_path.expanduser()]

    candidates: list[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / DEFAULT_CONFIG_NAME)
    return candidates


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to parse config file: {path}"
        suggestion = (
            "Check YAML syntax (indentation, colons, quotes) and that the file "
            f"is UTF-8 encoded. Original error: {e}"
        )
        raise ConfigurationError(
            msg, suggestion=suggestion, error_code=ErrorCode.CFG_PARSE
        ) from e

    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping at the top level"
        raise ConfigurationError(
            msg,
            suggestion="Write settings as 'key: value' pairs, e.g. 'output_format: json'",
            error_code=ErrorCode.CFG_PARSE,
        )
    return data


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from the config file and the environment.

    An explicit ``config_path`` must exist. Otherwise ``$UPGRADE_LINT_CONFIG``
    and ``./upgrade-lint.yaml`` are tried and a missing file is not an error.
    Environment variables win over values from the file.

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values.
    """
    logger = get_logger(__name__)

    candidates = candidate_config_paths(config_path)
    resolved: Path | None = None
    for candidate in candidates:
        if candidate.exists():
            resolved = candidate
            break

    if config_path and resolved is None:
        msg = f"Config file not found: {config_path}"
        raise ConfigurationError(
            msg,
            suggestion="Check the --config path or drop the flag to use defaults",
        )

    yaml_data: dict[str, Any] = {}
    if resolved is not None:
        yaml_data = _read_yaml(resolved)
        logger.debug(
            "config_yaml_loaded", config_path=str(resolved), keys_count=len(yaml_data)
        )
    else:
        logger.debug(
            "config_file_not_found", searched_paths=[str(p) for p in candidates]
        )

    # Init kwargs outrank the environment in pydantic-settings, so drop the
    # file's value for any key the environment already sets.
    kwargs = {
        key: value
        for key, value in yaml_data.items()
        if os.getenv(f"{ENV_PREFIX}{str(key).upper()}") in (None, "")
    }

    try:
        settings = Settings(**kwargs)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        source = str(resolved) if resolved else "environment"
        msg = f"Invalid configuration ({source}): {problems}"
        raise ConfigurationError(
            msg,
            suggestion="Fix the listed keys in the config file or UPGRADE_LINT_* variables",
            context={"config_path": str(resolved) if resolved else None},
        ) from e

    logger.debug(
        "config_loaded",
        config_path=str(resolved) if resolved else None,
        output_format=settings.output_format,
    )
    return settings
