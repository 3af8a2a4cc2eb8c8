"""Exception hierarchy for licensekit."""


class LicenseKitError(Exception):
    """Base class for all licensekit errors."""

    pass


class ConfigurationError(LicenseKitError):
    """Raised when the build configuration is invalid.

    Covers duplicate configuration registration, task-name collisions,
    unresolvable property bindings and phase violations. Always raised
    during configuration, before any task executes.
    """

    pass


class ComplianceViolation(LicenseKitError):
    """Raised by a header check action when a file has a missing or wrong header."""

    def __init__(self, message: str, files=None):
        super().__init__(message)
        self.files = list(files or [])


class ReportGenerationError(LicenseKitError):
    """Raised by a report action when dependency license metadata cannot be parsed."""

    pass
