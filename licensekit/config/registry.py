"""Registry of the two build-wide configuration singletons.

The registry is the configuration context handed to the task defaults
configurator and the task graph builder. Each kind may be registered once
per project; the created object is also attached to the project's
extensions under the kind's name.

Example
-------
>>> registry = ConfigRegistry(project)
>>> license_config = registry.register(LICENSE)
>>> license_config.strict_check
False
"""

import logging
from typing import Any, Callable, Dict, List

from ..exceptions import ConfigurationError
from .extension import (
    DEFAULT_HEADER_FILE,
    DownloadLicensesExtension,
    LicenseExtension,
    LicensesReport,
    ReportFormats,
)

logger = logging.getLogger(__name__)

LICENSE = "license"
DOWNLOAD_LICENSES = "downloadLicenses"


def _create_license_extension(project: Any) -> LicenseExtension:
    return LicenseExtension(header=project.file(DEFAULT_HEADER_FILE))


def _create_download_licenses_extension(project: Any) -> DownloadLicensesExtension:
    def destination():
        return project.reporting_base_dir / "license"

    return DownloadLicensesExtension(
        report=ReportFormats(
            html=LicensesReport(enabled=True, destination=destination),
            xml=LicensesReport(enabled=True, destination=destination),
            json=LicensesReport(enabled=True, destination=destination),
        )
    )


FACTORIES: Dict[str, Callable[[Any], Any]] = {
    LICENSE: _create_license_extension,
    DOWNLOAD_LICENSES: _create_download_licenses_extension,
}


class ConfigRegistry:
    """Owns the license and report configuration singletons of one project.

    Parameters
    ----------
    project : Project
        Project whose extensions receive the registered singletons
    """

    def __init__(self, project: Any):
        self.project = project
        self._configs: Dict[str, Any] = {}

    def register(self, kind: str) -> Any:
        """Create the singleton for ``kind`` with its default values.

        Parameters
        ----------
        kind : str
            "license" or "downloadLicenses"

        Returns
        -------
        LicenseExtension or DownloadLicensesExtension
            The new singleton

        Raises
        ------
        ConfigurationError
            If ``kind`` is unknown or already registered
        """
        if kind not in FACTORIES:
            raise ConfigurationError(
                f"Unknown configuration kind '{kind}'. Available: {sorted(FACTORIES)}"
            )
        if kind in self._configs:
            raise ConfigurationError(f"Configuration '{kind}' is already registered")

        config = FACTORIES[kind](self.project)
        self.project.extensions.add(kind, config)
        self._configs[kind] = config
        logger.info("Adding %s extension", kind)
        return config

    def get(self, kind: str) -> Any:
        """Get a registered singleton.

        Raises
        ------
        ConfigurationError
            If ``kind`` has not been registered
        """
        if kind not in self._configs:
            raise ConfigurationError(f"Configuration '{kind}' is not registered")
        return self._configs[kind]

    @property
    def license(self) -> LicenseExtension:
        return self.get(LICENSE)

    @property
    def download_licenses(self) -> DownloadLicensesExtension:
        return self.get(DOWNLOAD_LICENSES)

    def kinds(self) -> List[str]:
        return list(self._configs.keys())
