"""NuGet dependency policy auditor for multi-project .NET solutions."""

__version__ = "0.1.0"
