"""Unit tests for YAML build descriptions."""

import pytest

from licensekit.config import BuildDescription, load_project
from licensekit.exceptions import ConfigurationError
from licensekit.tasks import LicenseCheck

from tests.fixtures import create_java_tree, write_build_description


@pytest.fixture
def java_tree(tmp_path):
    create_java_tree(tmp_path)
    return tmp_path


def _java_build(**sections):
    data = {
        "project": {"name": "demo"},
        "facilities": ["java-base"],
        "source_sets": {
            "main": {"java": ["src/main/java"], "resources": ["src/main/resources"]},
            "test": {"java": "src/test/java"},
        },
    }
    data.update(sections)
    return data


class TestBuildDescription:
    """Tests for BuildDescription loading."""

    def test_missing_file(self, tmp_path):
        """Test loading a file that does not exist."""
        with pytest.raises(FileNotFoundError):
            BuildDescription(str(tmp_path / "build.yaml")).load()

    def test_malformed_yaml(self, tmp_path):
        """Test that YAML syntax errors become configuration errors."""
        path = tmp_path / "build.yaml"
        path.write_text("facilities: [java-base\n")
        with pytest.raises(ConfigurationError, match="Malformed YAML"):
            BuildDescription(str(path)).load()

    def test_not_a_mapping(self, tmp_path):
        """Test a description that is not a mapping."""
        path = tmp_path / "build.yaml"
        path.write_text("- java-base\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            BuildDescription(str(path)).load()

    def test_unknown_section(self, tmp_path):
        """Test that unknown top-level sections are rejected."""
        path = write_build_description(tmp_path, {"plugins": ["license"]})
        with pytest.raises(ConfigurationError, match="Unknown section"):
            BuildDescription(str(path)).load()

    def test_empty_file(self, tmp_path):
        """Test that an empty description is an empty build."""
        path = tmp_path / "build.yaml"
        path.write_text("")
        description = BuildDescription(str(path))
        description.load()
        assert description.raw_config == {}

    def test_project_section(self, tmp_path):
        """Test project name and directory resolution."""
        (tmp_path / "module").mkdir()
        description = BuildDescription.from_dict(
            {"project": {"name": "demo", "dir": "module"}}, base_dir=str(tmp_path)
        )
        project = description.create_project()
        assert project.name == "demo"
        assert project.project_dir == (tmp_path / "module").resolve()


class TestLoadProject:
    """Tests for building finalized projects from YAML."""

    def test_synthesized_tasks(self, java_tree):
        """Test a plain module description."""
        path = write_build_description(java_tree, _java_build())
        project = load_project(str(path))

        assert project.finalized
        assert project.tasks["license"].dependencies == ["licenseMain", "licenseTest"]
        assert project.tasks["check"].dependencies == ["license"]

    def test_license_section(self, java_tree):
        """Test license settings flowing to the tasks."""
        path = write_build_description(
            java_tree,
            _java_build(
                license={
                    "header": "HEADER.txt",
                    "strict_check": True,
                    "mapping": {"kt": "JAVADOC_STYLE"},
                    "excludes": ["*.json"],
                    "ext": {"year": 2024},
                }
            ),
        )
        project = load_project(str(path))
        task = project.tasks["licenseMain"]

        assert task.header == project.project_dir / "HEADER.txt"
        assert task.strict_check is True
        assert task.inherited_mappings == {"kt": "JAVADOC_STYLE"}
        assert task.inherited_properties == {"year": 2024}
        assert [p.name for p in task.matched_files()] == ["App.java", "app.properties"]

    def test_license_source_sets(self, java_tree):
        """Test restricting tracked source sets by name."""
        path = write_build_description(java_tree, _java_build(license={"source_sets": ["test"]}))
        project = load_project(str(path))
        assert project.tasks["license"].dependencies == ["licenseTest"]

    def test_header_definitions(self, java_tree):
        """Test declaring a header definition."""
        definition = {
            "first_line": "/*",
            "before_each_line": " * ",
            "end_line": " */",
            "first_line_detection_pattern": "(\\s|\\t)*/\\*.*$",
            "last_line_detection_pattern": ".*\\*/(\\s|\\t)*$",
        }
        path = write_build_description(
            java_tree, _java_build(license={"header_definitions": {"custom": definition}})
        )
        project = load_project(str(path))
        assert "custom" in project.tasks["licenseMain"].header_definitions

    def test_download_licenses_section(self, java_tree):
        """Test report settings flowing to the report task."""
        path = write_build_description(
            java_tree,
            _java_build(
                downloadLicenses={
                    "dependency_configuration": "compile",
                    "report": {"html": {"enabled": False}, "json": {"destination": "out/json"}},
                    "licenses": {"org.example:lib:1.0": {"name": "MIT", "url": "https://mit-license.org"}},
                }
            ),
        )
        project = load_project(str(path))
        task = project.tasks["downloadLicenses"]

        assert task.dependency_configuration == "compile"
        assert task.html is False
        assert str(task.json_destination) == "out/json"
        assert task.licenses["org.example:lib:1.0"].license_name == "MIT"

    def test_task_override_is_explicit(self, java_tree):
        """Test that task entries without a type override synthesized tasks."""
        path = write_build_description(
            java_tree,
            _java_build(
                license={"header": "HEADER.txt"},
                tasks={"licenseMain": {"header": "OTHER.txt", "ignore_failures": True}},
            ),
        )
        project = load_project(str(path))
        project.extensions["license"].header = project.file("CHANGED.txt")

        assert project.tasks["licenseMain"].header == project.file("OTHER.txt")
        assert project.tasks["licenseMain"].ignore_failures is True
        assert project.tasks["licenseTest"].header == project.file("CHANGED.txt")

    def test_typed_task(self, java_tree):
        """Test declaring an extra license task."""
        (java_tree / "docs").mkdir()
        (java_tree / "docs" / "index.md").write_text("# Docs\n")
        path = write_build_description(
            java_tree,
            _java_build(
                tasks={
                    "licenseDocs": {"type": "license", "check": True, "source": ["docs"]},
                }
            ),
        )
        project = load_project(str(path))
        task = project.tasks["licenseDocs"]

        assert isinstance(task, LicenseCheck)
        assert task.group == "License"
        assert [p.name for p in task.source] == ["index.md"]
        assert task.header == project.file("LICENSE")

    def test_unknown_task_type(self, java_tree):
        """Test an unsupported task type."""
        path = write_build_description(java_tree, _java_build(tasks={"x": {"type": "compile"}}))
        with pytest.raises(ConfigurationError, match="unknown type"):
            load_project(str(path))

    def test_unknown_license_key(self, java_tree):
        """Test an unsupported license setting."""
        path = write_build_description(java_tree, _java_build(license={"colour": "red"}))
        with pytest.raises(ConfigurationError, match="Unknown license setting"):
            load_project(str(path))

    def test_unknown_task_key(self, java_tree):
        """Test an unsupported task setting."""
        path = write_build_description(java_tree, _java_build(tasks={"licenseMain": {"colour": "red"}}))
        with pytest.raises(ConfigurationError, match="Unknown setting 'colour'"):
            load_project(str(path))

    def test_header_on_report_task_rejected(self, java_tree):
        """Test that header settings only apply to license tasks."""
        path = write_build_description(
            java_tree, _java_build(tasks={"downloadLicenses": {"header": "OTHER.txt"}})
        )
        with pytest.raises(ConfigurationError, match="Unknown setting 'header'"):
            load_project(str(path))

    def test_check_on_aggregate_rejected(self, java_tree):
        """Test that the check flag only applies to license tasks."""
        path = write_build_description(java_tree, _java_build(tasks={"license": {"check": False}}))
        with pytest.raises(ConfigurationError, match="Unknown setting 'check'"):
            load_project(str(path))

    def test_common_task_attributes(self, java_tree):
        """Test group, description and enabled on any task type."""
        path = write_build_description(
            java_tree,
            _java_build(tasks={"downloadLicenses": {"enabled": False, "group": "Reports"}}),
        )
        project = load_project(str(path))
        assert project.tasks["downloadLicenses"].enabled is False
        assert project.tasks["downloadLicenses"].group == "Reports"

    def test_override_of_missing_task(self, java_tree):
        """Test overriding a task that was never created."""
        path = write_build_description(java_tree, _java_build(tasks={"licenseDocs": {"header": "X"}}))
        with pytest.raises(ConfigurationError, match="not found"):
            load_project(str(path))

    def test_unknown_facility(self, java_tree):
        """Test activating a facility the host does not know."""
        path = write_build_description(java_tree, {"facilities": ["kotlin"]})
        with pytest.raises(ConfigurationError, match="Unknown facility"):
            load_project(str(path))
