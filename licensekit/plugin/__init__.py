"""License plugin: configuration wiring, facility detection and task synthesis.

Example Usage
-------------
>>> from licensekit.host import Project
>>> from licensekit.plugin import LicensePlugin
>>> project = Project("/work/demo")
>>> project.apply_plugin(LicensePlugin)
>>> project.facilities.apply("java-base")
>>> project.source_sets.create("main", java=["src/main/java"])
>>> project.finalize()
>>> sorted(project.tasks["license"].dependencies)
['licenseMain']
"""

from .defaults import TaskDefaultsConfigurator
from .detector import (
    ANDROID_APP,
    ANDROID_LIB,
    JAVA,
    SOURCE_FACILITIES,
    FacilityDetector,
    SourceFacility,
)
from .graph import (
    FORMAT_TASK_BASE_NAME,
    LICENSE_TASK_BASE_NAME,
    TaskGraphBuilder,
    capitalize,
    task_name,
)
from .plugin import DOWNLOAD_LICENSES_TASK_NAME, TASK_GROUP, LicensePlugin

__all__ = [
    # Defaults
    "TaskDefaultsConfigurator",
    # Facilities
    "ANDROID_APP",
    "ANDROID_LIB",
    "JAVA",
    "SOURCE_FACILITIES",
    "FacilityDetector",
    "SourceFacility",
    # Graph
    "FORMAT_TASK_BASE_NAME",
    "LICENSE_TASK_BASE_NAME",
    "TaskGraphBuilder",
    "capitalize",
    "task_name",
    # Plugin
    "DOWNLOAD_LICENSES_TASK_NAME",
    "TASK_GROUP",
    "LicensePlugin",
]
