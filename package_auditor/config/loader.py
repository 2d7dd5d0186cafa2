"""Audit policy loading.

A policy file lives in the solution root next to the projects it governs.
An explicit path (``--config``) overrides discovery.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from package_auditor.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from package_auditor.exceptions import ConfigurationError
from package_auditor.models.config import AuditorConfig

logger = logging.getLogger(__name__)


def find_config_file(solution_root: Path) -> Optional[Path]:
    """Return the first policy file present in the solution root.

    Names are tried in DEFAULT_CONFIG_NAMES order, so `.yaml` wins over
    `.yml`. Parent directories are not searched.
    """
    for name in DEFAULT_CONFIG_NAMES:
        candidate = solution_root / name
        if candidate.is_file():
            return candidate
    return None


def _read_policy_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML policy file into a mapping; blank files give {}."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read policy file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid policy in '{path}': expected a mapping of policy keys, "
            f"got {type(data).__name__}"
        )
    return data


def _describe_errors(error: ValidationError) -> str:
    # e.g. "pinned_packages.0.package_id: Field required"
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config_file(path: Path) -> AuditorConfig:
    """Load and validate an audit policy file.

    Args:
        path: YAML policy file.

    Returns:
        Validated AuditorConfig; defaults for a blank or comment-only file.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid YAML,
            or declares unknown or malformed policy keys.
    """
    logger.debug("Loading audit policy from %s", path)
    data = _read_policy_mapping(path)
    if not data:
        return get_default_config()

    try:
        return AuditorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid policy in '{path}': {_describe_errors(e)}") from e


def load_config(
    solution_root: Path, config_path: Optional[Path] = None
) -> AuditorConfig:
    """Resolve the audit policy for a solution.

    Args:
        solution_root: Solution being audited; searched for a policy file.
        config_path: Explicit policy file, used instead of discovery.

    Returns:
        AuditorConfig from the selected file, or defaults if none exists.

    Raises:
        ConfigurationError: If the selected policy file is invalid.
    """
    path = config_path if config_path is not None else find_config_file(solution_root)
    if path is None:
        logger.debug("No audit policy in %s, using defaults", solution_root)
        return get_default_config()
    return load_config_file(path)
