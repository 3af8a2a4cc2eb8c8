"""Build-wide license and report configuration objects.

Provides:
- HeaderDefinition / HeaderDefinitionContainer: per-file-type comment syntax
- LicenseExtension: header compliance settings
- LicenseMetadata, LicensesReport, ReportFormats: report building blocks
- DownloadLicensesExtension: dependency license report settings
"""

import locale
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Union

from ..exceptions import ConfigurationError
from ..tasks.convention import ConventionAware, ConventionProperty

DEFAULT_HEADER_FILE = "LICENSE"
DEFAULT_FILE_NAME_FOR_REPORTS_BY_DEPENDENCY = "dependency-license"
DEFAULT_FILE_NAME_FOR_REPORTS_BY_LICENSE = "license-dependency"
DEFAULT_DEPENDENCY_CONFIGURATION_TO_HANDLE = "runtime"


def platform_encoding() -> str:
    """Preferred text encoding of the running platform."""
    return locale.getpreferredencoding(False)


# =============================================================================
# Header definitions
# =============================================================================


@dataclass
class HeaderDefinition:
    """Comment syntax used to write a license header into one file type.

    Attributes
    ----------
    name : str
        Header type name (e.g., "JAVADOC_STYLE")
    first_line : str
        Line opening the comment block
    before_each_line : str
        Prefix of each header line
    end_line : str
        Line closing the comment block
    after_each_line : str
        Suffix of each header line
    skip_line_pattern : str, optional
        Regex for leading lines to keep above the header (e.g., shebangs)
    first_line_detection_pattern : str
        Regex recognising the first line of an existing header
    last_line_detection_pattern : str
        Regex recognising the last line of an existing header
    allow_blank_lines : bool
        Whether blank lines may appear inside the header
    is_multiline : bool
        Whether the comment style is a block comment
    pad_lines : bool
        Whether to pad lines to the longest line
    """

    name: str
    first_line: Optional[str] = None
    before_each_line: Optional[str] = None
    end_line: Optional[str] = None
    after_each_line: str = ""
    skip_line_pattern: Optional[str] = None
    first_line_detection_pattern: Optional[str] = None
    last_line_detection_pattern: Optional[str] = None
    allow_blank_lines: bool = False
    is_multiline: bool = False
    pad_lines: bool = False

    REQUIRED = (
        "first_line",
        "before_each_line",
        "end_line",
        "first_line_detection_pattern",
        "last_line_detection_pattern",
    )

    def validate(self) -> None:
        """Check that all required syntax fields are set.

        Raises
        ------
        ConfigurationError
            If any required field is missing
        """
        missing = [f for f in self.REQUIRED if getattr(self, f) is None]
        if missing:
            raise ConfigurationError(
                f"Header definition '{self.name}' is missing: {', '.join(missing)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first_line": self.first_line,
            "before_each_line": self.before_each_line,
            "end_line": self.end_line,
            "after_each_line": self.after_each_line,
            "skip_line_pattern": self.skip_line_pattern,
            "first_line_detection_pattern": self.first_line_detection_pattern,
            "last_line_detection_pattern": self.last_line_detection_pattern,
            "allow_blank_lines": self.allow_blank_lines,
            "is_multiline": self.is_multiline,
            "pad_lines": self.pad_lines,
        }


class HeaderDefinitionContainer:
    """Named collection of header definitions keyed by header type."""

    def __init__(self):
        self._definitions: Dict[str, HeaderDefinition] = {}

    def create(self, name: str, **fields: Any) -> HeaderDefinition:
        """Create and validate a header definition.

        Raises
        ------
        ConfigurationError
            If the name is taken, a field is unknown or required fields are missing
        """
        if name in self._definitions:
            raise ConfigurationError(f"Header definition '{name}' already exists")
        try:
            definition = HeaderDefinition(name=name, **fields)
        except TypeError as e:
            raise ConfigurationError(f"Invalid header definition '{name}': {e}") from e
        definition.validate()
        self._definitions[name] = definition
        return definition

    def find(self, name: str) -> Optional[HeaderDefinition]:
        return self._definitions.get(name)

    def __getitem__(self, name: str) -> HeaderDefinition:
        return self._definitions[name]

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[HeaderDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: d.to_dict() for name, d in self._definitions.items()}


# =============================================================================
# License extension
# =============================================================================


class LicenseExtension(ConventionAware):
    """Build-wide header compliance settings.

    ``source_sets`` is itself convention-mapped: it resolves to an empty list
    until a source facility maps it to the project's source sets.

    Parameters
    ----------
    header : Path
        License header template file
    """

    source_sets = ConventionProperty(default_factory=list)

    def __init__(self, header: Optional[Path] = None):
        self.header = header
        self.header_uri: Optional[str] = None
        self.ignore_failures = False
        self.dry_run = False
        self.skip_existing_headers = False
        self.use_default_mappings = True
        self.strict_check = False
        self.encoding = platform_encoding()
        self.header_definitions = HeaderDefinitionContainer()
        self.include_patterns: Set[str] = set()
        self.exclude_patterns: Set[str] = set()
        self.ext: Dict[str, Any] = {}
        self.internal_mappings: Dict[str, str] = {}

    def mapping(self, file_type: Union[str, Dict[str, str]], header_type: Optional[str] = None) -> None:
        """Map a file extension to a header type.

        Accepts either ``mapping("kt", "JAVADOC_STYLE")`` or a dict of
        several mappings.
        """
        if isinstance(file_type, dict):
            for ext, style in file_type.items():
                self.mapping(ext, style)
            return
        if header_type is None:
            raise ConfigurationError(f"No header type given for file type '{file_type}'")
        self.internal_mappings[file_type] = header_type

    def include(self, pattern: str) -> None:
        self.include_patterns.add(pattern)

    def includes(self, patterns: Iterable[str]) -> None:
        self.include_patterns.update(patterns)

    def exclude(self, pattern: str) -> None:
        self.exclude_patterns.add(pattern)

    def excludes(self, patterns: Iterable[str]) -> None:
        self.exclude_patterns.update(patterns)

    def header_definition(self, name: str, **fields: Any) -> HeaderDefinition:
        return self.header_definitions.create(name, **fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the resolved settings to plain data."""
        return {
            "header": str(self.header) if self.header is not None else None,
            "header_uri": self.header_uri,
            "ignore_failures": self.ignore_failures,
            "dry_run": self.dry_run,
            "skip_existing_headers": self.skip_existing_headers,
            "use_default_mappings": self.use_default_mappings,
            "strict_check": self.strict_check,
            "encoding": self.encoding,
            "source_sets": [ss.name for ss in self.source_sets],
            "header_definitions": self.header_definitions.to_dict(),
            "includes": sorted(self.include_patterns),
            "excludes": sorted(self.exclude_patterns),
            "ext": dict(self.ext),
            "mappings": dict(self.internal_mappings),
        }


# =============================================================================
# Download licenses extension
# =============================================================================


@dataclass(frozen=True)
class LicenseMetadata:
    """A license declared by name, with an optional text URL."""

    license_name: str
    license_text_url: Optional[str] = None

    def __str__(self) -> str:
        return self.license_name


@dataclass
class LicensesReport:
    """One report output format.

    Attributes
    ----------
    enabled : bool
        Whether this format is written
    destination : str, Path or Callable[[], Any]
        Output directory; a callable is evaluated each time it is resolved
    """

    enabled: bool = True
    destination: Union[str, Path, Callable[[], Any], None] = None

    def resolve_destination(self) -> Optional[Path]:
        destination = self.destination
        if callable(destination):
            destination = destination()
        if destination is None:
            return None
        return Path(str(destination))


@dataclass
class ReportFormats:
    """The three report output formats."""

    html: LicensesReport = field(default_factory=LicensesReport)
    xml: LicensesReport = field(default_factory=LicensesReport)
    json: LicensesReport = field(default_factory=LicensesReport)

    def get(self, fmt: str) -> LicensesReport:
        if fmt not in ("html", "xml", "json"):
            raise ConfigurationError(f"Unknown report format '{fmt}'")
        return getattr(self, fmt)


@dataclass
class DownloadLicensesExtension:
    """Build-wide dependency license report settings."""

    report_by_dependency: bool = True
    report_by_license_type: bool = True
    include_project_dependencies: bool = False
    ignore_fatal_parse_errors: bool = False
    report_by_dependency_file_name: str = DEFAULT_FILE_NAME_FOR_REPORTS_BY_DEPENDENCY
    report_by_license_file_name: str = DEFAULT_FILE_NAME_FOR_REPORTS_BY_LICENSE
    exclude_dependencies: List[str] = field(default_factory=list)
    licenses: Dict[str, Any] = field(default_factory=dict)
    aliases: Dict[Any, List[Any]] = field(default_factory=dict)
    report: ReportFormats = field(default_factory=ReportFormats)
    dependency_configuration: str = DEFAULT_DEPENDENCY_CONFIGURATION_TO_HANDLE

    def license(self, name: str, url: Optional[str] = None) -> LicenseMetadata:
        """Build license metadata for use in ``licenses`` and ``aliases``."""
        return LicenseMetadata(name, url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_by_dependency": self.report_by_dependency,
            "report_by_license_type": self.report_by_license_type,
            "include_project_dependencies": self.include_project_dependencies,
            "ignore_fatal_parse_errors": self.ignore_fatal_parse_errors,
            "report_by_dependency_file_name": self.report_by_dependency_file_name,
            "report_by_license_file_name": self.report_by_license_file_name,
            "exclude_dependencies": list(self.exclude_dependencies),
            "licenses": {dep: str(lic) for dep, lic in self.licenses.items()},
            "aliases": {
                str(name): [str(a) for a in aliases] for name, aliases in self.aliases.items()
            },
            "report": {
                fmt: {
                    "enabled": self.report.get(fmt).enabled,
                    "destination": str(self.report.get(fmt).resolve_destination()),
                }
                for fmt in ("html", "xml", "json")
            },
            "dependency_configuration": self.dependency_configuration,
        }
