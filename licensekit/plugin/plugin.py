"""License plugin entry point."""

import logging
from typing import Any, Optional

from ..config.registry import DOWNLOAD_LICENSES, LICENSE, ConfigRegistry
from ..host.facility import FacilityDefinition
from ..tasks import AggregateTask, DownloadLicenses, Task
from .defaults import TaskDefaultsConfigurator
from .detector import SOURCE_FACILITIES, FacilityDetector, SourceFacility
from .graph import FORMAT_TASK_BASE_NAME, LICENSE_TASK_BASE_NAME, TaskGraphBuilder

logger = logging.getLogger(__name__)

DOWNLOAD_LICENSES_TASK_NAME = "downloadLicenses"
TASK_GROUP = "License"


class LicensePlugin:
    """Adds license configuration and tasks to a project.

    On ``apply``:

    1. registers the ``license`` and ``downloadLicenses`` configuration
    2. creates the ``license``/``licenseFormat`` aggregates and the
       ``downloadLicenses`` report task
    3. makes every license and report task fall back to the configuration
    4. for every source facility the host knows, subscribes a reaction
       that tracks the project's source sets and, at ``finalize()``,
       synthesizes per-source-set tasks

    Example
    -------
    >>> project = Project("/work/demo")
    >>> plugin = project.apply_plugin(LicensePlugin)
    >>> project.facilities.apply("java-base")
    >>> project.source_sets.create("main", java=["src/main/java"])
    >>> project.finalize()
    >>> project.tasks["check"].dependencies
    ['license']
    """

    def __init__(self):
        self.project: Any = None
        self.registry: Optional[ConfigRegistry] = None
        self.base_check_task: Optional[Task] = None
        self.base_format_task: Optional[Task] = None
        self.download_license_task: Optional[DownloadLicenses] = None
        self.graph_builder: Optional[TaskGraphBuilder] = None

    def apply(self, project: Any) -> None:
        self.project = project

        # Single tasks running all license checks and reformattings
        self.base_check_task = project.tasks.create(LICENSE_TASK_BASE_NAME, AggregateTask)
        self.base_format_task = project.tasks.create(FORMAT_TASK_BASE_NAME, AggregateTask)
        self.download_license_task = project.tasks.create(
            DOWNLOAD_LICENSES_TASK_NAME, DownloadLicenses
        )

        for task in (self.base_check_task, self.base_format_task, self.download_license_task):
            task.group = TASK_GROUP
        self.base_check_task.description = "Checks for header consistency."
        self.base_format_task.description = (
            "Applies the license found in the header file in files missing the header."
        )
        self.download_license_task.description = "Generates reports on your runtime dependencies."

        self.registry = ConfigRegistry(project)
        self.registry.register(LICENSE)
        self.registry.register(DOWNLOAD_LICENSES)

        TaskDefaultsConfigurator(self.registry).install(project.tasks)

        self.graph_builder = TaskGraphBuilder(
            project, self.registry, self.base_check_task, self.base_format_task
        )
        detector = FacilityDetector(project)
        for facility in SOURCE_FACILITIES:
            detector.with_optional_facility(facility.facility_id, self._reaction(facility))

    def _reaction(self, facility: SourceFacility):
        def on_activate(definition: FacilityDefinition) -> None:
            self.configure_extension_rule()
            # The graph needs the source sets the build script declares later
            self.project.after_evaluate(lambda project: self.graph_builder.build(facility))

        return on_activate

    def configure_extension_rule(self) -> None:
        """Track all of the project's source sets by default."""
        project = self.project
        self.registry.license.convention_mapping.map("source_sets", lambda: project.source_sets)
        logger.info("Adding license extension rule")
