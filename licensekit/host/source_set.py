"""Source sets: named groups of source files owned by the host build."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileCollection:
    """Lazily enumerated collection of files.

    Parameters
    ----------
    provider : Callable[[], Iterable[Path]] or Iterable[PathLike]
        Either a callable evaluated on every iteration, or a fixed iterable

    Example
    -------
    >>> files = FileCollection(lambda: source_set.all_source())
    >>> sorted(files)
    [PosixPath('src/main/java/A.java')]
    """

    def __init__(self, provider: Union[Callable[[], Iterable[PathLike]], Iterable[PathLike]]):
        if callable(provider):
            self._provider = provider
        else:
            fixed = [Path(p) for p in provider]
            self._provider = lambda: fixed

    def __iter__(self) -> Iterator[Path]:
        seen = set()
        for path in self._provider():
            path = Path(path)
            if path not in seen:
                seen.add(path)
                yield path

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def files(self) -> List[Path]:
        """Enumerate the collection now."""
        return [path for path in self]


@dataclass
class SourceDirectorySet:
    """A set of source directories of one kind (java, resources, res, ...).

    Attributes
    ----------
    name : str
        Kind of source (e.g., "java", "resources")
    src_dirs : List[Path]
        Source directories, resolved against the project directory
    """

    name: str
    src_dirs: List[Path] = field(default_factory=list)

    def src_dir(self, path: PathLike) -> "SourceDirectorySet":
        """Add a source directory."""
        self.src_dirs.append(Path(path))
        return self

    def source_files(self) -> List[Path]:
        """Enumerate regular files below every source directory, sorted."""
        files: List[Path] = []
        for directory in self.src_dirs:
            if not directory.is_dir():
                continue
            files.extend(sorted(p for p in directory.rglob("*") if p.is_file()))
        return files


class SourceSet:
    """A named grouping of source files processed as a unit.

    Parameters
    ----------
    name : str
        Source set name (e.g., "main", "test")
    base_dir : Path
        Directory relative source directories are resolved against
    """

    def __init__(self, name: str, base_dir: PathLike = "."):
        self.name = name
        self.base_dir = Path(base_dir)
        self._dirs: Dict[str, SourceDirectorySet] = {}

    def __repr__(self) -> str:
        return f"SourceSet({self.name!r})"

    def directory_set(self, kind: str) -> SourceDirectorySet:
        """Get (creating if needed) the directory set of the given kind."""
        if kind not in self._dirs:
            self._dirs[kind] = SourceDirectorySet(kind)
        return self._dirs[kind]

    def add_dirs(self, kind: str, dirs: Iterable[PathLike]) -> None:
        directory_set = self.directory_set(kind)
        for d in dirs:
            directory_set.src_dir(self.base_dir / Path(d))

    @property
    def kinds(self) -> List[str]:
        return list(self._dirs.keys())

    def files(self, *kinds: str) -> List[Path]:
        """Enumerate files of the given kinds, in the order requested."""
        files: List[Path] = []
        for kind in kinds:
            if kind in self._dirs:
                files.extend(self._dirs[kind].source_files())
        return files

    def all_source(self) -> List[Path]:
        """Enumerate files of every kind in this source set."""
        return self.files(*self.kinds)


class SourceSetContainer:
    """Ordered, named collection of source sets.

    Parameters
    ----------
    base_dir : Path
        Project directory used for resolving relative source directories
    """

    def __init__(self, base_dir: PathLike = "."):
        self.base_dir = Path(base_dir)
        self._source_sets: Dict[str, SourceSet] = {}

    def create(self, name: str, **dirs: Iterable[PathLike]) -> SourceSet:
        """Create a source set.

        Parameters
        ----------
        name : str
            Source set name
        **dirs
            Map of source kind to directories, e.g. ``java=["src/main/java"]``

        Raises
        ------
        ConfigurationError
            If a source set with that name already exists
        """
        if name in self._source_sets:
            raise ConfigurationError(f"Source set '{name}' already exists")

        source_set = SourceSet(name, self.base_dir)
        for kind, paths in dirs.items():
            source_set.add_dirs(kind, paths)

        self._source_sets[name] = source_set
        logger.debug("Added source set %s", name)
        return source_set

    def find(self, name: str) -> Optional[SourceSet]:
        return self._source_sets.get(name)

    def __getitem__(self, name: str) -> SourceSet:
        if name not in self._source_sets:
            raise ConfigurationError(f"Source set '{name}' not found")
        return self._source_sets[name]

    def __contains__(self, name: str) -> bool:
        return name in self._source_sets

    def __iter__(self) -> Iterator[SourceSet]:
        return iter(list(self._source_sets.values()))

    def __len__(self) -> int:
        return len(self._source_sets)

    def names(self) -> List[str]:
        return list(self._source_sets.keys())
