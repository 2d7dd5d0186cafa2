"""Constants for package-auditor."""

# Exit codes
EXIT_SUCCESS = 0  # No violations found
EXIT_VIOLATIONS = 1  # At least one rule failed
EXIT_ERROR = 2  # Audit aborted due to error

NUGET_SERVICE_INDEX_URL = "https://api.nuget.org/v3/index.json"

DEFAULT_MANIFEST_PATTERN = "*.csproj"

DEFAULT_ALLOWED_LICENSES = ["MIT", "Apache-2.0", "Microsoft"]

# Tag the registry uses to mark deprecated packages
DEPRECATED_TAG = "Deprecated"
