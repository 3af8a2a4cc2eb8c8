"""Task records for the host build graph."""

from typing import Any, Callable, Dict, List, Optional, Union

from .convention import ConventionAware

TaskAction = Callable[["Task"], Any]


class Task(ConventionAware):
    """A named unit of work with dependencies on other tasks.

    Parameters
    ----------
    name : str
        Unique task name within the project
    project : Project, optional
        Owning project

    Attributes
    ----------
    group : str
        Group label used when listing tasks (e.g., "License")
    description : str
        Human-readable description
    enabled : bool
        Disabled tasks are skipped by the executor
    actions : List[Callable[[Task], Any]]
        Actions run in order when the task executes

    Example
    -------
    >>> check = Task("check")
    >>> check.depends_on("license")
    >>> check.dependencies
    ['license']
    """

    def __init__(self, name: str, project: Any = None):
        self.name = name
        self.project = project
        self.group: Optional[str] = None
        self.description: Optional[str] = None
        self.enabled = True
        self.actions: List[TaskAction] = []
        self._depends_on: Dict[str, None] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @property
    def path(self) -> str:
        return f":{self.name}"

    @property
    def dependencies(self) -> List[str]:
        """Names of tasks this task depends on, in insertion order."""
        return list(self._depends_on.keys())

    def depends_on(self, *tasks: Union["Task", str]) -> "Task":
        """Add dependencies. Adding an existing dependency again is a no-op."""
        for task in tasks:
            name = task.name if isinstance(task, Task) else str(task)
            self._depends_on[name] = None
        return self

    def do_first(self, action: TaskAction) -> "Task":
        self.actions.insert(0, action)
        return self

    def do_last(self, action: TaskAction) -> "Task":
        self.actions.append(action)
        return self

    def execute(self) -> None:
        """Run all actions against this task."""
        for action in self.actions:
            action(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to dictionary for listing and serialization."""
        return {
            "name": self.name,
            "type": type(self).__name__,
            "group": self.group,
            "description": self.description,
            "depends_on": self.dependencies,
            "enabled": self.enabled,
        }


class AggregateTask(Task):
    """A task with no behavior of its own, used to group other tasks."""

    pass
