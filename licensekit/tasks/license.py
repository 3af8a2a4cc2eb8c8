"""License header check/format task."""

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import ComplianceViolation
from ..host.source_set import FileCollection
from .base import Task
from .convention import ConventionProperty

logger = logging.getLogger(__name__)


class LicenseCheck(Task):
    """Checks (``check=True``) or formats (``check=False``) license headers.

    The header matching and insertion itself is done by actions attached to
    the task; this class only carries the resolved configuration and the
    input files. Every property below falls back to the build-wide license
    configuration unless assigned on the task.

    Attributes
    ----------
    check : bool
        True for pure verification, False for verification plus header insertion
    source : FileCollection
        Input files
    """

    header = ConventionProperty()
    header_uri = ConventionProperty()
    ignore_failures = ConventionProperty(default=False)
    dry_run = ConventionProperty(default=False)
    skip_existing_headers = ConventionProperty(default=False)
    use_default_mappings = ConventionProperty(default=True)
    strict_check = ConventionProperty(default=False)
    inherited_properties = ConventionProperty(default_factory=dict)
    inherited_mappings = ConventionProperty(default_factory=dict)
    excludes = ConventionProperty(default_factory=set)
    includes = ConventionProperty(default_factory=set)
    encoding = ConventionProperty()
    header_definitions = ConventionProperty(default_factory=dict)

    def __init__(self, name: str, project: Any = None):
        super().__init__(name, project)
        self.check = True
        self._source = FileCollection([])

    @property
    def source(self) -> FileCollection:
        return self._source

    @source.setter
    def source(self, value) -> None:
        if not isinstance(value, FileCollection):
            value = FileCollection(value)
        self._source = value

    def matched_files(self) -> List[Path]:
        """Enumerate source files after applying include/exclude patterns.

        An empty include set includes everything. Patterns are matched with
        :func:`fnmatch.fnmatch` against the path relative to the project
        directory and against the bare file name.
        """
        includes = list(self.includes or [])
        excludes = list(self.excludes or [])
        base_dir = getattr(self.project, "project_dir", None)

        matched = []
        for path in self.source:
            candidates = [path.name, _relative_posix(path, base_dir)]
            if includes and not _matches_any(candidates, includes):
                continue
            if excludes and _matches_any(candidates, excludes):
                continue
            matched.append(path)
        return matched

    def execute(self) -> None:
        """Run header actions; a violation fails the task unless ignore_failures."""
        mode = "check" if self.check else "format"
        logger.info(
            "Running license %s on %d file(s) for task %s", mode, len(self.source), self.name
        )
        try:
            super().execute()
        except ComplianceViolation as e:
            if not self.ignore_failures:
                raise
            logger.warning("License violations in %s (ignored): %s", self.name, e)
            for path in e.files:
                logger.warning("  - %s", path)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["check"] = self.check
        return data


def _relative_posix(path: Path, base_dir: Optional[Path]) -> str:
    if base_dir is not None:
        try:
            return path.relative_to(base_dir).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def _matches_any(candidates: Iterable[str], patterns: Iterable[str]) -> bool:
    patterns = list(patterns)
    return any(fnmatch(c, p) for c in candidates for p in patterns)
