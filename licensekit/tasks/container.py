"""Task container: the single creation path for every task in a project."""

import logging
from collections import deque
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type

from ..exceptions import ConfigurationError
from .base import Task

logger = logging.getLogger(__name__)

TaskRule = Callable[[Task], None]


class TaskContainer:
    """Creates, stores and orders the tasks of a project.

    Every task is created through :meth:`create`, which applies the rules
    registered with :meth:`configure_each` to the new task before returning
    it. A rule therefore reaches tasks created by a plugin, by a build
    description, or by user code alike.

    Parameters
    ----------
    project : Project, optional
        Owning project, handed to every created task

    Example
    -------
    >>> tasks = TaskContainer()
    >>> tasks.configure_each(Task, lambda t: setattr(t, "group", "Demo"))
    >>> tasks.create("hello").group
    'Demo'
    """

    def __init__(self, project: Any = None):
        self.project = project
        self._tasks: Dict[str, Task] = {}
        self._rules: List[Tuple[Type[Task], TaskRule]] = []

    def create(self, name: str, task_type: Type[Task] = Task, **attrs: Any) -> Task:
        """Create and register a task.

        Parameters
        ----------
        name : str
            Task name, unique within the project
        task_type : Type[Task]
            Task class to instantiate
        **attrs
            Attributes assigned after the rules ran (explicit values)

        Raises
        ------
        ConfigurationError
            If a task with that name already exists
        """
        if name in self._tasks:
            existing = self._tasks[name]
            raise ConfigurationError(
                f"Cannot add task '{name}': a {type(existing).__name__} with that name already exists"
            )

        task = task_type(name, project=self.project)
        self._tasks[name] = task

        for rule_type, rule in self._rules:
            if isinstance(task, rule_type):
                rule(task)

        for key, value in attrs.items():
            setattr(task, key, value)

        logger.debug("Created task %s (%s)", name, task_type.__name__)
        return task

    def maybe_create(self, name: str, task_type: Type[Task] = Task) -> Task:
        """Return the existing task of that name, or create it."""
        task = self._tasks.get(name)
        if task is None:
            return self.create(name, task_type)
        if not isinstance(task, task_type):
            raise ConfigurationError(
                f"Task '{name}' exists but is a {type(task).__name__}, not a {task_type.__name__}"
            )
        return task

    def configure_each(self, task_type: Type[Task], rule: TaskRule) -> None:
        """Apply ``rule`` to every existing and future task of ``task_type``."""
        self._rules.append((task_type, rule))
        for task in self.with_type(task_type):
            rule(task)

    def with_type(self, task_type: Type[Task]) -> List[Task]:
        return [t for t in self._tasks.values() if isinstance(t, task_type)]

    def find(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def __getitem__(self, name: str) -> Task:
        if name not in self._tasks:
            raise ConfigurationError(f"Task '{name}' not found")
        return self._tasks[name]

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __len__(self) -> int:
        return len(self._tasks)

    def names(self) -> List[str]:
        return list(self._tasks.keys())

    def validate_dependencies(self) -> Tuple[bool, List[str]]:
        """Validate task dependencies.

        Checks that every dependency names an existing task and that there
        are no circular dependencies.

        Returns
        -------
        Tuple[bool, List[str]]
            (valid, errors) where valid is True if all dependencies are valid
        """
        errors = []

        for name, task in self._tasks.items():
            for dep in task.dependencies:
                if dep not in self._tasks:
                    errors.append(f"Task '{name}' depends on unknown task '{dep}'")

        if len(errors) == 0:
            try:
                self.execution_order(self.names())
            except ConfigurationError as e:
                errors.append(str(e))

        return (len(errors) == 0, errors)

    def execution_order(self, names: List[str]) -> List[str]:
        """Compute execution order for the requested tasks and their dependencies.

        Uses Kahn's algorithm over the transitive closure of ``names``.
        Ties are broken by task creation order, so the result is
        deterministic.

        Raises
        ------
        ConfigurationError
            If a task is unknown or dependencies are circular
        """
        selected: Dict[str, Task] = {}
        pending = deque(names)
        while pending:
            name = pending.popleft()
            if name in selected:
                continue
            task = self[name]
            selected[name] = task
            pending.extend(task.dependencies)

        ordered = [n for n in self._tasks if n in selected]
        in_degree = {name: len(selected[name].dependencies) for name in ordered}

        queue = deque([name for name in ordered if in_degree[name] == 0])
        order = []

        while queue:
            name = queue.popleft()
            order.append(name)

            for other in ordered:
                if name in selected[other].dependencies:
                    in_degree[other] -= 1
                    if in_degree[other] == 0:
                        queue.append(other)

        if len(order) != len(ordered):
            raise ConfigurationError(
                "Circular dependency detected - cannot compute execution order"
            )

        return order
