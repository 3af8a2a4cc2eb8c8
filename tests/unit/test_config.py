"""Unit tests for configuration singletons and their registry."""

import pytest

from licensekit.config import (
    DOWNLOAD_LICENSES,
    LICENSE,
    ConfigRegistry,
    DownloadLicensesExtension,
    LicenseExtension,
    LicenseMetadata,
    LicensesReport,
    platform_encoding,
)
from licensekit.exceptions import ConfigurationError


class TestConfigRegistry:
    """Tests for ConfigRegistry."""

    def test_register_license_defaults(self, project):
        """Test documented defaults of the license configuration."""
        config = ConfigRegistry(project).register(LICENSE)

        assert isinstance(config, LicenseExtension)
        assert config.header == project.project_dir / "LICENSE"
        assert config.header_uri is None
        assert config.ignore_failures is False
        assert config.dry_run is False
        assert config.skip_existing_headers is False
        assert config.use_default_mappings is True
        assert config.strict_check is False
        assert config.encoding == platform_encoding()
        assert list(config.source_sets) == []

    def test_register_download_licenses_defaults(self, project):
        """Test documented defaults of the report configuration."""
        config = ConfigRegistry(project).register(DOWNLOAD_LICENSES)

        assert isinstance(config, DownloadLicensesExtension)
        assert config.report_by_dependency is True
        assert config.report_by_license_type is True
        assert config.include_project_dependencies is False
        assert config.ignore_fatal_parse_errors is False
        assert config.report_by_dependency_file_name == "dependency-license"
        assert config.report_by_license_file_name == "license-dependency"
        assert config.dependency_configuration == "runtime"
        for fmt in ("html", "xml", "json"):
            report = config.report.get(fmt)
            assert report.enabled is True
            assert report.resolve_destination() == project.reporting_base_dir / "license"

    def test_register_attaches_extension(self, project):
        """Test that registered singletons are exposed on the project."""
        registry = ConfigRegistry(project)
        config = registry.register(LICENSE)
        assert project.extensions[LICENSE] is config
        assert registry.license is config

    def test_duplicate_registration_raises(self, project):
        """Test that registering a kind twice is a configuration error."""
        registry = ConfigRegistry(project)
        registry.register(LICENSE)
        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(LICENSE)

    def test_unknown_kind_raises(self, project):
        """Test registering an unknown kind."""
        with pytest.raises(ConfigurationError, match="Unknown configuration kind"):
            ConfigRegistry(project).register("checkstyle")

    def test_get_unregistered_raises(self, project):
        """Test reading a kind that was never registered."""
        with pytest.raises(ConfigurationError, match="not registered"):
            ConfigRegistry(project).get(DOWNLOAD_LICENSES)

    def test_destination_follows_build_dir(self, project):
        """Test that report destinations are evaluated lazily."""
        config = ConfigRegistry(project).register(DOWNLOAD_LICENSES)
        project.build_dir = project.project_dir / "out"
        assert config.report.html.resolve_destination() == project.project_dir / "out" / "reports" / "license"


class TestLicenseExtension:
    """Tests for LicenseExtension helpers."""

    def test_mapping_single_and_dict(self):
        """Test file-type to header-type mappings."""
        ext = LicenseExtension()
        ext.mapping("kt", "JAVADOC_STYLE")
        ext.mapping({"gradle": "SLASHSTAR_STYLE", "sh": "SCRIPT_STYLE"})
        assert ext.internal_mappings == {
            "kt": "JAVADOC_STYLE",
            "gradle": "SLASHSTAR_STYLE",
            "sh": "SCRIPT_STYLE",
        }

    def test_mapping_without_header_type_raises(self):
        """Test that a single mapping needs a header type."""
        with pytest.raises(ConfigurationError):
            LicenseExtension().mapping("kt")

    def test_include_exclude_patterns(self):
        """Test include/exclude pattern helpers."""
        ext = LicenseExtension()
        ext.include("**/*.java")
        ext.excludes(["*.json", "*.xml"])
        ext.exclude("*.json")
        assert ext.include_patterns == {"**/*.java"}
        assert ext.exclude_patterns == {"*.json", "*.xml"}

    def test_header_definition(self):
        """Test registering a complete header definition."""
        ext = LicenseExtension()
        definition = ext.header_definition(
            "custom",
            first_line="/*",
            before_each_line=" * ",
            end_line=" */",
            first_line_detection_pattern=r"(\s|\t)*/\*.*$",
            last_line_detection_pattern=r".*\*/(\s|\t)*$",
            is_multiline=True,
        )
        assert "custom" in ext.header_definitions
        assert definition.is_multiline is True

    def test_incomplete_header_definition_raises(self):
        """Test that missing syntax fields are rejected."""
        with pytest.raises(ConfigurationError, match="missing"):
            LicenseExtension().header_definition("broken", first_line="#")

    def test_unknown_header_definition_field_raises(self):
        """Test that unknown syntax fields are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid header definition"):
            LicenseExtension().header_definition("broken", colour="red")

    def test_source_sets_explicit(self, project):
        """Test that source_sets can be set explicitly."""
        main = project.source_sets.create("main")
        ext = LicenseExtension()
        ext.source_sets = [main]
        assert ext.source_sets == [main]

    def test_to_dict(self, project):
        """Test plain-data conversion."""
        ext = LicenseExtension(header=project.file("LICENSE"))
        ext.exclude("*.json")
        data = ext.to_dict()
        assert data["header"] == str(project.project_dir / "LICENSE")
        assert data["excludes"] == ["*.json"]
        assert data["source_sets"] == []


class TestDownloadLicensesExtension:
    """Tests for report configuration helpers."""

    def test_license_helper(self):
        """Test building license metadata."""
        ext = DownloadLicensesExtension()
        apache = ext.license("Apache License, Version 2.0", "http://www.apache.org/licenses/LICENSE-2.0")
        assert apache == LicenseMetadata(
            "Apache License, Version 2.0", "http://www.apache.org/licenses/LICENSE-2.0"
        )
        assert str(apache) == "Apache License, Version 2.0"

    def test_licenses_and_aliases(self):
        """Test override and alias maps."""
        ext = DownloadLicensesExtension()
        apache = ext.license("Apache 2")
        ext.licenses["org.example:lib:1.0"] = apache
        ext.aliases[apache] = ["The Apache Software License, Version 2.0", "Apache-2.0"]
        data = ext.to_dict()
        assert data["licenses"] == {"org.example:lib:1.0": "Apache 2"}
        assert data["aliases"]["Apache 2"] == ["The Apache Software License, Version 2.0", "Apache-2.0"]

    def test_unknown_report_format_raises(self):
        """Test that only html, xml and json exist."""
        with pytest.raises(ConfigurationError):
            DownloadLicensesExtension().report.get("pdf")

    def test_report_destination_static(self, tmp_path):
        """Test a static destination."""
        report = LicensesReport(enabled=False, destination=str(tmp_path / "out"))
        assert report.resolve_destination() == tmp_path / "out"
        assert LicensesReport().resolve_destination() is None
