"""Task records, lazily resolved task properties and the task container.

Example Usage
-------------
>>> from licensekit.tasks import TaskContainer, LicenseCheck
>>> tasks = TaskContainer()
>>> task = tasks.create("licenseMain", LicenseCheck)
>>> task.convention_mapping.map("header", lambda: "LICENSE")
>>> task.header
'LICENSE'
"""

# Lazy properties
from .convention import (
    ConventionAware,
    ConventionMapping,
    ConventionProperty,
)

# Task records
from .base import AggregateTask, Task
from .license import LicenseCheck
from .download import REPORT_FORMATS, DownloadLicenses

# Container
from .container import TaskContainer

__all__ = [
    # Conventions
    "ConventionAware",
    "ConventionMapping",
    "ConventionProperty",
    # Tasks
    "AggregateTask",
    "DownloadLicenses",
    "LicenseCheck",
    "REPORT_FORMATS",
    "Task",
    # Container
    "TaskContainer",
]
