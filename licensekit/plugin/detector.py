"""Detection of optional source-producing facilities."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List

from ..host.facility import ANDROID_APPLICATION, ANDROID_LIBRARY, JAVA_BASE, FacilityDefinition
from ..host.source_set import SourceSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFacility:
    """How license tasks are derived from the source sets of one facility.

    Attributes
    ----------
    facility_id : str
        Host facility identifier
    task_infix : str
        Inserted between the task base name and the source set name
    source_files : Callable[[SourceSet], List[Path]]
        Enumerates the files of a source set that get checked
    """

    facility_id: str
    task_infix: str
    source_files: Callable[[SourceSet], List[Path]]


def _all_source(source_set: SourceSet) -> List[Path]:
    return source_set.all_source()


def _android_source(source_set: SourceSet) -> List[Path]:
    return source_set.files("java", "res")


JAVA = SourceFacility(JAVA_BASE, "", _all_source)
ANDROID_APP = SourceFacility(ANDROID_APPLICATION, "Android", _android_source)
ANDROID_LIB = SourceFacility(ANDROID_LIBRARY, "Android", _android_source)

SOURCE_FACILITIES = [JAVA, ANDROID_APP, ANDROID_LIB]


class FacilityDetector:
    """Subscribes reactions to facilities that may or may not exist in the host.

    Parameters
    ----------
    project : Project
        Project whose facility registry is probed
    """

    def __init__(self, project: Any):
        self.project = project

    def with_optional_facility(
        self, facility_id: str, action: Callable[[FacilityDefinition], None]
    ) -> bool:
        """Run ``action`` when the facility activates, if the host knows it.

        Returns
        -------
        bool
            True if a reaction was subscribed, False if the facility is absent
        """
        if not self.project.facilities.is_known(facility_id):
            logger.debug("Facility %s not available, skipping", facility_id)
            return False

        self.project.facilities.with_facility(facility_id, action)
        return True
