"""Dependency license report task."""

import logging
from pathlib import Path
from typing import Any, Dict

from ..exceptions import ReportGenerationError
from .base import Task
from .convention import ConventionProperty

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("html", "xml", "json")


class DownloadLicenses(Task):
    """Generates dependency-by-license and license-by-dependency reports.

    Report writing is done by attached actions. Every property falls back to
    the build-wide report configuration unless assigned on the task.
    """

    report_by_dependency = ConventionProperty(default=True)
    report_by_license_type = ConventionProperty(default=True)
    report_by_dependency_file_name = ConventionProperty()
    report_by_license_file_name = ConventionProperty()
    include_project_dependencies = ConventionProperty(default=False)
    ignore_fatal_parse_errors = ConventionProperty(default=False)
    licenses = ConventionProperty(default_factory=dict)
    aliases = ConventionProperty(default_factory=dict)
    xml = ConventionProperty(default=True)
    html = ConventionProperty(default=True)
    json = ConventionProperty(default=True)
    exclude_dependencies = ConventionProperty(default_factory=list)
    xml_destination = ConventionProperty()
    html_destination = ConventionProperty()
    json_destination = ConventionProperty()
    dependency_configuration = ConventionProperty(default="runtime")

    def enabled_reports(self) -> Dict[str, Path]:
        """Map each enabled report format to its destination directory."""
        reports = {}
        for fmt in REPORT_FORMATS:
            if getattr(self, fmt):
                reports[fmt] = getattr(self, f"{fmt}_destination")
        return reports

    def execute(self) -> None:
        """Run report actions; parse errors fail the task unless ignore_fatal_parse_errors."""
        logger.info(
            "Generating license reports for configuration '%s'", self.dependency_configuration
        )
        try:
            super().execute()
        except ReportGenerationError as e:
            if not self.ignore_fatal_parse_errors:
                raise
            logger.warning("Ignoring license metadata parse error in %s: %s", self.name, e)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["reports"] = {fmt: str(dest) for fmt, dest in self.enabled_reports().items()}
        return data
