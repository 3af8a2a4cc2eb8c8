"""Synthesis of per-source-set license tasks at the finalize barrier."""

import logging
from typing import Any, List

from ..config.registry import ConfigRegistry
from ..exceptions import ConfigurationError
from ..host.facility import CHECK_TASK_NAME
from ..host.source_set import FileCollection, SourceSet
from ..tasks import LicenseCheck, Task
from .detector import SourceFacility

logger = logging.getLogger(__name__)

LICENSE_TASK_BASE_NAME = "license"
FORMAT_TASK_BASE_NAME = "licenseFormat"


def capitalize(name: str) -> str:
    """Upper-case the first character only ("mainDebug" -> "MainDebug")."""
    return name[:1].upper() + name[1:]


def task_name(base: str, infix: str, source_set_name: str) -> str:
    """Deterministic task name: base + infix + capitalized source set name."""
    return f"{base}{infix}{capitalize(source_set_name)}"


class TaskGraphBuilder:
    """Creates one check and one format task per tracked source set.

    Parameters
    ----------
    project : Project
        Project the tasks are created in
    registry : ConfigRegistry
        Configuration context; its license ``source_sets`` are snapshotted
    check_task : Task
        Aggregate every check task is added to
    format_task : Task
        Aggregate every format task is added to
    """

    def __init__(self, project: Any, registry: ConfigRegistry, check_task: Task, format_task: Task):
        self.project = project
        self.registry = registry
        self.check_task = check_task
        self.format_task = format_task

    def build(self, facility: SourceFacility) -> List[LicenseCheck]:
        """Synthesize tasks for every source set tracked right now.

        Source sets added after this call get no tasks.

        Returns
        -------
        List[LicenseCheck]
            Created tasks, check then format for each source set

        Raises
        ------
        ConfigurationError
            On a task name collision or a missing ``check`` task
        """
        source_sets = list(self.registry.license.source_sets)
        created: List[LicenseCheck] = []

        for source_set in source_sets:
            check_name = task_name(LICENSE_TASK_BASE_NAME, facility.task_infix, source_set.name)
            logger.info("Adding %s task for source set %s", check_name, source_set.name)
            check = self.project.tasks.create(check_name, LicenseCheck)
            check.check = True
            self._configure_for_source_set(source_set, check, facility)
            self.check_task.depends_on(check)

            format_name = task_name(FORMAT_TASK_BASE_NAME, facility.task_infix, source_set.name)
            fmt = self.project.tasks.create(format_name, LicenseCheck)
            fmt.check = False
            self._configure_for_source_set(source_set, fmt, facility)
            self.format_task.depends_on(fmt)

            created.extend([check, fmt])

        verification = self.project.tasks.find(CHECK_TASK_NAME)
        if verification is None:
            raise ConfigurationError(
                f"Facility '{facility.facility_id}' is active but the project has no "
                f"'{CHECK_TASK_NAME}' task"
            )
        verification.depends_on(self.check_task)

        return created

    def _configure_for_source_set(
        self, source_set: SourceSet, task: LicenseCheck, facility: SourceFacility
    ) -> None:
        task.description = f"Scanning license on {source_set.name} files"
        task.source = FileCollection(lambda: facility.source_files(source_set))
