"""Optional host facilities and the registry that activates them.

A facility is an optional build capability, such as a plain module system
or a platform-variant module system. The registry knows which facilities
can exist in this host (``register``), which ones the build actually uses
(``apply``), and notifies subscribers when a facility becomes active.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from ..tasks.base import AggregateTask

logger = logging.getLogger(__name__)

JAVA_BASE = "java-base"
ANDROID_APPLICATION = "android-application"
ANDROID_LIBRARY = "android-library"

CHECK_TASK_NAME = "check"

FacilityAction = Callable[["FacilityDefinition"], None]


@dataclass(frozen=True)
class FacilityDefinition:
    """A facility the host knows how to activate.

    Attributes
    ----------
    facility_id : str
        Identifier (e.g., "java-base")
    description : str
        Human-readable description
    on_apply : Callable[[Project], None], optional
        Host-side setup run when the facility is activated, before
        subscribers are notified
    conflicts_with : Tuple[str, ...]
        Facilities that cannot be active in the same project
    """

    facility_id: str
    description: str = ""
    on_apply: Optional[Callable[[Any], None]] = None
    conflicts_with: Tuple[str, ...] = ()


def _add_verification_task(project: Any) -> None:
    check = project.tasks.maybe_create(CHECK_TASK_NAME, AggregateTask)
    check.group = "Verification"
    check.description = "Runs all checks."


def builtin_facilities() -> List[FacilityDefinition]:
    """Facilities every project knows about.

    Each of them provides the standard ``check`` verification task.
    """
    return [
        FacilityDefinition(JAVA_BASE, "Plain source modules", _add_verification_task),
        FacilityDefinition(
            ANDROID_APPLICATION,
            "Platform application variants",
            _add_verification_task,
            conflicts_with=(ANDROID_LIBRARY,),
        ),
        FacilityDefinition(
            ANDROID_LIBRARY,
            "Platform library variants",
            _add_verification_task,
            conflicts_with=(ANDROID_APPLICATION,),
        ),
    ]


class FacilityRegistry:
    """Registry of known facilities, their activation state and subscribers.

    Parameters
    ----------
    project : Project, optional
        Project handed to each facility's ``on_apply`` hook
    """

    def __init__(self, project: Any = None):
        self.project = project
        self._definitions: Dict[str, FacilityDefinition] = {}
        self._active: List[str] = []
        self._subscribers: Dict[str, List[FacilityAction]] = {}

    def register(self, definition: FacilityDefinition) -> None:
        """Make a facility known to this host.

        Raises
        ------
        ConfigurationError
            If a facility with the same identifier is already registered
        """
        if definition.facility_id in self._definitions:
            raise ConfigurationError(
                f"Facility '{definition.facility_id}' is already registered"
            )
        self._definitions[definition.facility_id] = definition

    def is_known(self, facility_id: str) -> bool:
        return facility_id in self._definitions

    def is_active(self, facility_id: str) -> bool:
        return facility_id in self._active

    def definition(self, facility_id: str) -> Optional[FacilityDefinition]:
        return self._definitions.get(facility_id)

    def active(self) -> List[str]:
        """Identifiers of active facilities, in activation order."""
        return list(self._active)

    def known(self) -> List[str]:
        return sorted(self._definitions.keys())

    def apply(self, facility_id: str) -> FacilityDefinition:
        """Activate a facility and notify its subscribers.

        Applying an already active facility is a no-op. If the host setup or
        a subscriber fails, the facility is left inactive.

        Raises
        ------
        ConfigurationError
            If the facility is not known to this host, or a conflicting
            facility is already active
        """
        definition = self._definitions.get(facility_id)
        if definition is None:
            raise ConfigurationError(
                f"Unknown facility '{facility_id}'. Available: {self.known()}"
            )
        if facility_id in self._active:
            return definition

        conflicts = [f for f in definition.conflicts_with if f in self._active]
        if conflicts:
            raise ConfigurationError(
                f"Facility '{facility_id}' cannot be applied together with "
                f"'{conflicts[0]}': both contribute tasks with the same names"
            )

        self._active.append(facility_id)
        logger.info("Activating facility %s", facility_id)
        try:
            if definition.on_apply is not None:
                definition.on_apply(self.project)
            for action in self._subscribers.get(facility_id, []):
                action(definition)
        except Exception:
            self._active.remove(facility_id)
            raise
        return definition

    def with_facility(self, facility_id: str, action: FacilityAction) -> None:
        """Run ``action`` when the facility is activated.

        Runs immediately if the facility is already active.

        Raises
        ------
        ConfigurationError
            If the facility is not known to this host
        """
        definition = self._definitions.get(facility_id)
        if definition is None:
            raise ConfigurationError(f"Unknown facility '{facility_id}'")

        self._subscribers.setdefault(facility_id, []).append(action)
        if facility_id in self._active:
            action(definition)
