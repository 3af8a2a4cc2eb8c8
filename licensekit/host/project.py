"""In-process host build model.

A :class:`Project` goes through two phases. During ``declare`` build
scripts (and plugins) mutate configuration, activate facilities and add
source sets. :meth:`Project.finalize` closes that phase exactly once and
runs the after-evaluate actions in registration order.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, Union

from ..exceptions import ConfigurationError
from ..tasks.container import TaskContainer
from .facility import FacilityRegistry, builtin_facilities
from .source_set import SourceSetContainer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DECLARE = "declare"
FINALIZED = "finalized"


class ExtensionContainer:
    """Named build-wide configuration objects attached to a project."""

    def __init__(self):
        self._extensions: Dict[str, Any] = {}

    def add(self, name: str, extension: Any) -> Any:
        """Attach an extension.

        Raises
        ------
        ConfigurationError
            If an extension with that name already exists
        """
        if name in self._extensions:
            raise ConfigurationError(f"Extension '{name}' already exists")
        self._extensions[name] = extension
        return extension

    def find(self, name: str) -> Optional[Any]:
        return self._extensions.get(name)

    def __getitem__(self, name: str) -> Any:
        if name not in self._extensions:
            raise ConfigurationError(f"Extension '{name}' not found")
        return self._extensions[name]

    def __contains__(self, name: str) -> bool:
        return name in self._extensions

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._extensions.keys()))


class Project:
    """A build: tasks, facilities, source sets and configuration.

    Parameters
    ----------
    project_dir : str or Path
        Project root directory
    name : str, optional
        Project name. Default: name of ``project_dir``
    builtin : bool
        Register the builtin facilities (java-base, android-application,
        android-library). Default: True

    Example
    -------
    >>> project = Project("/work/demo")
    >>> project.facilities.apply("java-base")
    >>> project.source_sets.create("main", java=["src/main/java"])
    >>> project.finalize()
    """

    def __init__(self, project_dir: PathLike = ".", name: Optional[str] = None, builtin: bool = True):
        self.project_dir = Path(project_dir).resolve()
        self.name = name or self.project_dir.name
        self.build_dir = self.project_dir / "build"
        self.tasks = TaskContainer(self)
        self.facilities = FacilityRegistry(self)
        self.source_sets = SourceSetContainer(self.project_dir)
        self.extensions = ExtensionContainer()
        self.phase = DECLARE
        self._after_evaluate: List[Callable[["Project"], None]] = []
        self._plugins: Dict[type, Any] = {}

        if builtin:
            for definition in builtin_facilities():
                self.facilities.register(definition)

    def __repr__(self) -> str:
        return f"Project({self.name!r})"

    @property
    def reporting_base_dir(self) -> Path:
        return self.build_dir / "reports"

    @property
    def finalized(self) -> bool:
        return self.phase == FINALIZED

    def file(self, path: PathLike) -> Path:
        """Resolve a path against the project directory."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.project_dir / path

    def apply_plugin(self, plugin_type: Type[Any]) -> Any:
        """Apply a plugin class once; applying it again returns the first instance."""
        if plugin_type in self._plugins:
            logger.debug("Plugin %s already applied", plugin_type.__name__)
            return self._plugins[plugin_type]

        plugin = plugin_type()
        self._plugins[plugin_type] = plugin
        plugin.apply(self)
        return plugin

    def after_evaluate(self, action: Callable[["Project"], None]) -> None:
        """Register an action to run at the finalize barrier.

        Raises
        ------
        ConfigurationError
            If the project is already finalized
        """
        if self.finalized:
            raise ConfigurationError(
                f"Cannot register an after-evaluate action: project '{self.name}' is already finalized"
            )
        self._after_evaluate.append(action)

    def finalize(self) -> None:
        """Close the declare phase and run after-evaluate actions.

        Raises
        ------
        ConfigurationError
            If called more than once
        """
        if self.finalized:
            raise ConfigurationError(f"Project '{self.name}' is already finalized")

        self.phase = FINALIZED
        logger.info(
            "Finalizing project %s (%d after-evaluate action(s))",
            self.name,
            len(self._after_evaluate),
        )
        for action in self._after_evaluate:
            action(self)
