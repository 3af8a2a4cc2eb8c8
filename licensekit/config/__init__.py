"""Build-wide configuration for licensekit.

This module provides the license and report configuration singletons,
the registry that creates them with their defaults, and the YAML build
description loader.

Example
-------
>>> from licensekit.config import ConfigRegistry, LICENSE
>>> registry = ConfigRegistry(project)
>>> config = registry.register(LICENSE)
>>> config.use_default_mappings
True
"""

from .extension import (
    DEFAULT_DEPENDENCY_CONFIGURATION_TO_HANDLE,
    DEFAULT_FILE_NAME_FOR_REPORTS_BY_DEPENDENCY,
    DEFAULT_FILE_NAME_FOR_REPORTS_BY_LICENSE,
    DEFAULT_HEADER_FILE,
    DownloadLicensesExtension,
    HeaderDefinition,
    HeaderDefinitionContainer,
    LicenseExtension,
    LicenseMetadata,
    LicensesReport,
    ReportFormats,
    platform_encoding,
)
from .registry import DOWNLOAD_LICENSES, LICENSE, ConfigRegistry
from .loader import BuildDescription, load_project

__all__ = [
    # Defaults
    "DEFAULT_DEPENDENCY_CONFIGURATION_TO_HANDLE",
    "DEFAULT_FILE_NAME_FOR_REPORTS_BY_DEPENDENCY",
    "DEFAULT_FILE_NAME_FOR_REPORTS_BY_LICENSE",
    "DEFAULT_HEADER_FILE",
    # Configuration objects
    "DownloadLicensesExtension",
    "HeaderDefinition",
    "HeaderDefinitionContainer",
    "LicenseExtension",
    "LicenseMetadata",
    "LicensesReport",
    "ReportFormats",
    "platform_encoding",
    # Registry
    "ConfigRegistry",
    "DOWNLOAD_LICENSES",
    "LICENSE",
    # Loader
    "BuildDescription",
    "load_project",
]
