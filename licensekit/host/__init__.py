"""Host build model: project, facilities and source sets.

Example Usage
-------------
>>> from licensekit.host import Project
>>> project = Project("/work/demo")
>>> project.facilities.apply("java-base")
>>> project.source_sets.create("main", java=["src/main/java"])
>>> project.finalize()
"""

from .facility import (
    ANDROID_APPLICATION,
    ANDROID_LIBRARY,
    CHECK_TASK_NAME,
    JAVA_BASE,
    FacilityDefinition,
    FacilityRegistry,
    builtin_facilities,
)
from .project import ExtensionContainer, Project
from .source_set import (
    FileCollection,
    SourceDirectorySet,
    SourceSet,
    SourceSetContainer,
)

__all__ = [
    # Facilities
    "ANDROID_APPLICATION",
    "ANDROID_LIBRARY",
    "CHECK_TASK_NAME",
    "JAVA_BASE",
    "FacilityDefinition",
    "FacilityRegistry",
    "builtin_facilities",
    # Project
    "ExtensionContainer",
    "Project",
    # Source sets
    "FileCollection",
    "SourceDirectorySet",
    "SourceSet",
    "SourceSetContainer",
]
