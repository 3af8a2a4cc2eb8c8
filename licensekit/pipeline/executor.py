"""Task execution engine."""

import time
from typing import Any, List, Optional

from ..exceptions import ConfigurationError
from .logger import BuildLogger


class TaskExecutor:
    """Executes requested tasks and their dependencies in order.

    Task properties are resolved while the task runs, so configuration
    changes made between ``finalize()`` and execution are observed.

    Parameters
    ----------
    project : Project
        Finalized project
    logger : BuildLogger, optional
        Logger instance. Default: console BuildLogger

    Attributes
    ----------
    executed_tasks : List[str]
        Names of tasks that ran successfully, in order

    Example
    -------
    >>> executor = TaskExecutor(project)
    >>> executor.run(["check"])
    ['licenseMain', 'license', 'check']
    """

    def __init__(self, project: Any, logger: Optional[BuildLogger] = None):
        self.project = project
        self.logger = logger or BuildLogger()
        self.executed_tasks: List[str] = []

    def plan(self, task_names: List[str]) -> List[str]:
        """Compute the execution order for ``task_names``.

        Raises
        ------
        ConfigurationError
            If the project is not finalized, a task is unknown, or
            dependencies are circular
        """
        if not self.project.finalized:
            raise ConfigurationError(
                f"Project '{self.project.name}' must be finalized before tasks run"
            )
        return self.project.tasks.execution_order(list(task_names))

    def run(self, task_names: List[str], dry_run: bool = False) -> List[str]:
        """Execute tasks in dependency order.

        Parameters
        ----------
        task_names : List[str]
            Tasks requested on the command line
        dry_run : bool
            If True, only log the execution plan

        Returns
        -------
        List[str]
            Execution order (tasks run, or that would run in dry-run mode)

        Raises
        ------
        Exception
            Whatever the failing task raised, after logging it
        """
        order = self.plan(task_names)
        self.logger.log_info(f"Execution plan: {' -> '.join(order)}")

        if dry_run:
            self.logger.log_info("DRY RUN MODE - No tasks will be executed")
            return order

        for name in order:
            task = self.project.tasks[name]
            if not task.enabled:
                self.logger.log_task_skipped(name, "disabled")
                continue

            self.logger.log_task_start(name, task.description)
            start_time = time.time()
            try:
                task.execute()
            except Exception as e:
                self.logger.log_task_error(name, str(e))
                raise

            self.executed_tasks.append(name)
            self.logger.log_task_complete(name, time.time() - start_time)

        self.logger.log_info("BUILD SUCCESSFUL")
        return order
