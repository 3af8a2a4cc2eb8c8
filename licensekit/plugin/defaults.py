"""Convention wiring of license and report tasks to the build-wide configuration."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config.registry import ConfigRegistry
from ..tasks import DownloadLicenses, LicenseCheck, TaskContainer
from ..tasks.download import REPORT_FORMATS

logger = logging.getLogger(__name__)


def _as_path(value: Any) -> Optional[Path]:
    if value is None:
        return None
    return Path(str(value))


class TaskDefaultsConfigurator:
    """Makes every license and report task fall back to the configuration.

    The fallbacks read the registry's singletons at the moment a property is
    read, so changes made after a task is created are still observed.
    Values assigned on a task always win. Configuring a task twice rebinds
    the same fallbacks and leaves explicit values alone.

    Parameters
    ----------
    registry : ConfigRegistry
        Registry holding the license and report configuration
    """

    def __init__(self, registry: ConfigRegistry):
        self.registry = registry

    def install(self, tasks: TaskContainer) -> None:
        """Configure existing and future tasks of both kinds in ``tasks``."""
        tasks.configure_each(LicenseCheck, self.configure_license_task)
        tasks.configure_each(DownloadLicenses, self.configure_download_task)

    def license_fallbacks(self) -> Dict[str, Callable[[], Any]]:
        registry = self.registry
        return {
            "header": lambda: registry.license.header,
            "header_uri": lambda: registry.license.header_uri,
            "ignore_failures": lambda: registry.license.ignore_failures,
            "dry_run": lambda: registry.license.dry_run,
            "skip_existing_headers": lambda: registry.license.skip_existing_headers,
            "use_default_mappings": lambda: registry.license.use_default_mappings,
            "strict_check": lambda: registry.license.strict_check,
            "inherited_properties": lambda: registry.license.ext,
            "inherited_mappings": lambda: registry.license.internal_mappings,
            "excludes": lambda: registry.license.exclude_patterns,
            "includes": lambda: registry.license.include_patterns,
            "encoding": lambda: registry.license.encoding,
            "header_definitions": lambda: registry.license.header_definitions,
        }

    def download_fallbacks(self) -> Dict[str, Callable[[], Any]]:
        registry = self.registry
        fallbacks = {
            "report_by_dependency": lambda: registry.download_licenses.report_by_dependency,
            "report_by_license_type": lambda: registry.download_licenses.report_by_license_type,
            "report_by_dependency_file_name": lambda: registry.download_licenses.report_by_dependency_file_name,
            "report_by_license_file_name": lambda: registry.download_licenses.report_by_license_file_name,
            "include_project_dependencies": lambda: registry.download_licenses.include_project_dependencies,
            "ignore_fatal_parse_errors": lambda: registry.download_licenses.ignore_fatal_parse_errors,
            "licenses": lambda: registry.download_licenses.licenses,
            "aliases": lambda: registry.download_licenses.aliases,
            "exclude_dependencies": lambda: registry.download_licenses.exclude_dependencies,
            "dependency_configuration": lambda: registry.download_licenses.dependency_configuration,
        }
        for fmt in REPORT_FORMATS:
            fallbacks[fmt] = self._report_enabled(fmt)
            fallbacks[f"{fmt}_destination"] = self._report_destination(fmt)
        return fallbacks

    def _report_enabled(self, fmt: str) -> Callable[[], bool]:
        return lambda: self.registry.download_licenses.report.get(fmt).enabled

    def _report_destination(self, fmt: str) -> Callable[[], Optional[Path]]:
        return lambda: _as_path(self.registry.download_licenses.report.get(fmt).resolve_destination())

    def configure_license_task(self, task: LicenseCheck) -> None:
        logger.info("Applying license defaults to task: %s", task.path)
        task.convention_mapping.map_all(self.license_fallbacks())
        if task.group is None:
            task.group = "License"

    def configure_download_task(self, task: DownloadLicenses) -> None:
        logger.info("Applying defaults to download task: %s", task.path)
        task.convention_mapping.map_all(self.download_fallbacks())
        if task.group is None:
            task.group = "License"
