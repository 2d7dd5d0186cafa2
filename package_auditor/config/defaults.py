"""Default configuration values for package-auditor."""

from __future__ import annotations

from package_auditor.models.config import AuditorConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".package-auditor.yaml", ".package-auditor.yml"]


def get_default_config() -> AuditorConfig:
    """Get the default configuration.

    Returns:
        AuditorConfig with all defaults.
    """
    return AuditorConfig()
