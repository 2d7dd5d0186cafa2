"""Configuration handling for package-auditor."""
from __future__ import annotations

from package_auditor.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from package_auditor.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from package_auditor.models.config import AuditorConfig, PinnedPackage, RestrictedProjects

__all__ = [
    "AuditorConfig",
    "DEFAULT_CONFIG_NAMES",
    "PinnedPackage",
    "RestrictedProjects",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
