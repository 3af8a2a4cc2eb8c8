"""YAML build descriptions.

A build description declares a project, the facilities it uses, its source
sets, license and report settings, and task-level overrides:

```yaml
project:
  name: demo
facilities: [java-base]
source_sets:
  main:
    java: [src/main/java]
    resources: [src/main/resources]
license:
  header: HEADER.txt
  strict_check: true
  mapping: {kt: JAVADOC_STYLE}
  excludes: ["*.json"]
  ext: {year: 2024}
downloadLicenses:
  dependency_configuration: compile
  report:
    html: {enabled: false}
tasks:
  licenseMain: {header: OTHER.txt}
  licenseDocs:
    type: license
    check: true
    source: [docs]
```

Tasks with a ``type`` are created during the declare phase; entries without
one are explicit overrides applied to existing tasks after ``finalize()``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..exceptions import ConfigurationError
from ..host.project import Project
from ..host.source_set import FileCollection
from ..tasks import AggregateTask, DownloadLicenses, LicenseCheck, Task
from .extension import DownloadLicensesExtension, LicenseExtension, LicenseMetadata
from .registry import DOWNLOAD_LICENSES, LICENSE

logger = logging.getLogger(__name__)

TASK_TYPES = {
    "license": LicenseCheck,
    "downloadLicenses": DownloadLicenses,
    "aggregate": AggregateTask,
    "task": Task,
}

PATH_PROPERTIES = ("header",)
TASK_ATTRIBUTES = ("group", "description", "enabled")


class BuildDescription:
    """Loads a YAML build description and applies it to a project.

    Parameters
    ----------
    config_path : str
        Path to the YAML build description

    Attributes
    ----------
    raw_config : Dict[str, Any]
        Raw configuration dictionary loaded from YAML

    Example
    -------
    >>> description = BuildDescription("build.yaml")
    >>> description.load()
    >>> project = description.create_project()
    >>> project.apply_plugin(LicensePlugin)
    >>> description.declare(project)
    >>> project.finalize()
    >>> description.apply_task_overrides(project)
    """

    SECTIONS = ("project", "facilities", "source_sets", LICENSE, DOWNLOAD_LICENSES, "tasks")

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.raw_config: Dict[str, Any] = {}

    def load(self) -> None:
        """Load the YAML build description.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist
        ConfigurationError
            If the YAML is malformed or has unknown sections
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Build description not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Malformed YAML in {self.config_path}: {e}"
                ) from e

        self.raw_config = data or {}
        if not isinstance(self.raw_config, dict):
            raise ConfigurationError(f"Build description {self.config_path} must be a mapping")

        unknown = [k for k in self.raw_config if k not in self.SECTIONS]
        if unknown:
            raise ConfigurationError(
                f"Unknown section(s) in {self.config_path}: {', '.join(unknown)}"
            )
        logger.info("Loaded build description: %s", self.config_path)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], base_dir: str = ".") -> "BuildDescription":
        """Create a description from a dictionary, as if read from ``base_dir``."""
        description = cls(str(Path(base_dir) / "build.yaml"))
        description.raw_config = dict(config_dict)
        return description

    def create_project(self) -> Project:
        """Create the project declared in the ``project`` section.

        ``project.dir`` is resolved relative to the description file.
        """
        section = self.raw_config.get("project", {}) or {}
        project_dir = self.config_path.parent / section.get("dir", ".")
        return Project(project_dir, name=section.get("name"))

    def declare(self, project: Project) -> None:
        """Apply facilities, source sets, configuration and typed tasks."""
        for facility_id in self.raw_config.get("facilities", []) or []:
            project.facilities.apply(facility_id)

        for name, dirs in (self.raw_config.get("source_sets", {}) or {}).items():
            dirs = dirs or {}
            project.source_sets.create(name, **{k: _as_list(v) for k, v in dirs.items()})

        if LICENSE in self.raw_config:
            configure_license(project, project.extensions[LICENSE], self.raw_config[LICENSE] or {})
        if DOWNLOAD_LICENSES in self.raw_config:
            configure_download_licenses(
                project.extensions[DOWNLOAD_LICENSES], self.raw_config[DOWNLOAD_LICENSES] or {}
            )

        for name, spec in self._task_specs(typed=True):
            spec = dict(spec)
            task_type = TASK_TYPES.get(spec.pop("type"))
            if task_type is None:
                raise ConfigurationError(
                    f"Task '{name}' has unknown type. Available: {sorted(TASK_TYPES)}"
                )
            task = project.tasks.create(name, task_type)
            apply_task_settings(project, task, spec)

    def apply_task_overrides(self, project: Project) -> None:
        """Assign explicit values to existing tasks (after ``finalize()``)."""
        for name, spec in self._task_specs(typed=False):
            apply_task_settings(project, project.tasks[name], spec)

    def _task_specs(self, typed: bool) -> List[Tuple[str, Dict[str, Any]]]:
        specs = []
        for name, spec in (self.raw_config.get("tasks", {}) or {}).items():
            spec = spec or {}
            if ("type" in spec) == typed:
                specs.append((name, spec))
        return specs


def load_project(config_path: str, plugins: Optional[List[type]] = None) -> Project:
    """Build a finalized project from a YAML build description.

    Parameters
    ----------
    config_path : str
        Path to the build description
    plugins : List[type], optional
        Plugin classes to apply before the description. Default: LicensePlugin
    """
    if plugins is None:
        from ..plugin import LicensePlugin

        plugins = [LicensePlugin]

    description = BuildDescription(config_path)
    description.load()
    project = description.create_project()
    for plugin in plugins:
        project.apply_plugin(plugin)
    description.declare(project)
    project.finalize()
    description.apply_task_overrides(project)
    return project


def configure_license(project: Project, extension: LicenseExtension, data: Dict[str, Any]) -> None:
    """Apply a ``license`` section to the license configuration."""
    for key, value in data.items():
        if key == "mapping":
            extension.mapping(dict(value))
        elif key in ("includes", "include_patterns"):
            extension.includes(_as_list(value))
        elif key in ("excludes", "exclude_patterns"):
            extension.excludes(_as_list(value))
        elif key == "ext":
            extension.ext.update(value)
        elif key == "header_definitions":
            for name, fields in value.items():
                extension.header_definition(name, **(fields or {}))
        elif key == "source_sets":
            extension.source_sets = [project.source_sets[n] for n in _as_list(value)]
        elif key in PATH_PROPERTIES:
            setattr(extension, key, project.file(value))
        elif key in vars(extension) and not key.startswith("_"):
            setattr(extension, key, value)
        else:
            raise ConfigurationError(f"Unknown license setting '{key}'")


def configure_download_licenses(extension: DownloadLicensesExtension, data: Dict[str, Any]) -> None:
    """Apply a ``downloadLicenses`` section to the report configuration."""
    for key, value in data.items():
        if key == "report":
            for fmt, settings in value.items():
                report = extension.report.get(fmt)
                for field_name, field_value in (settings or {}).items():
                    if field_name not in ("enabled", "destination"):
                        raise ConfigurationError(f"Unknown report setting '{fmt}.{field_name}'")
                    setattr(report, field_name, field_value)
        elif key == "licenses":
            extension.licenses.update({dep: _license(lic) for dep, lic in value.items()})
        elif key == "aliases":
            for name, aliases in value.items():
                extension.aliases[_license(name)] = [_license(a) for a in _as_list(aliases)]
        elif key in vars(extension):
            setattr(extension, key, value)
        else:
            raise ConfigurationError(f"Unknown downloadLicenses setting '{key}'")


def apply_task_settings(project: Project, task: Task, settings: Dict[str, Any]) -> None:
    """Assign settings to a task as explicit values.

    Raises
    ------
    ConfigurationError
        If a key is not a setting of this task's type
    """
    properties = task.convention_mapping.properties()
    for key, value in settings.items():
        if key == "depends_on":
            task.depends_on(*_as_list(value))
        elif key in ("source", "check") and isinstance(task, LicenseCheck):
            if key == "source":
                paths = [project.file(p) for p in _as_list(value)]
                value = FileCollection(lambda paths=paths: _expand_files(paths))
            setattr(task, key, value)
        elif key in properties:
            if key in PATH_PROPERTIES and value is not None:
                value = project.file(value)
            setattr(task, key, value)
        elif key in TASK_ATTRIBUTES:
            setattr(task, key, value)
        else:
            raise ConfigurationError(f"Unknown setting '{key}' for task '{task.name}'")


def _license(value: Any) -> Any:
    if isinstance(value, dict):
        return LicenseMetadata(value["name"], value.get("url"))
    return value


def _expand_files(paths: List[Path]) -> List[Path]:
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.is_file()))
        else:
            files.append(path)
    return files


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]
