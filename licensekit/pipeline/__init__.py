"""Task execution and build logging.

Example Usage
-------------
>>> from licensekit.pipeline import BuildLogger, TaskExecutor
>>> logger = BuildLogger("build/logs")
>>> logger.setup()
>>> executor = TaskExecutor(project, logger)
>>> executor.run(["license"])
"""

# Logging
from .logger import (
    BuildLogger,
    ColoredFormatter,
)

# Execution
from .executor import TaskExecutor

__all__ = [
    # Logging
    "BuildLogger",
    "ColoredFormatter",
    # Execution
    "TaskExecutor",
]
