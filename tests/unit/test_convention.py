"""Unit tests for lazily resolved convention properties."""

import pytest

from licensekit.exceptions import ConfigurationError
from licensekit.tasks import ConventionAware, ConventionProperty


class Settings:
    """Mutable stand-in for a build-wide configuration object."""

    def __init__(self):
        self.header = "A"
        self.excludes = ["*.json"]
        self.ext = {"year": 2020}


class Sample(ConventionAware):
    header = ConventionProperty(default="LICENSE")
    excludes = ConventionProperty(default_factory=list)
    ext = ConventionProperty(default_factory=dict)
    strict = ConventionProperty(default=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def sample(settings) -> Sample:
    sample = Sample()
    sample.convention_mapping.map_all(
        {
            "header": lambda: settings.header,
            "excludes": lambda: settings.excludes,
            "ext": lambda: settings.ext,
        }
    )
    return sample


class TestConventionResolution:
    """Tests for the explicit -> fallback -> default order."""

    def test_unmapped_returns_declared_default(self):
        """Test that a property without a fallback returns its default."""
        sample = Sample()
        assert sample.header == "LICENSE"
        assert sample.strict is False

    def test_mutable_defaults_not_shared(self):
        """Test that default factories give each read its own object."""
        first = Sample()
        second = Sample()
        first.excludes.append("x")
        assert second.excludes == []

    def test_fallback_used(self, sample):
        """Test that a mapped property reads its fallback."""
        assert sample.header == "A"

    def test_fallback_reevaluated_on_every_read(self, sample, settings):
        """Test that later configuration changes are observed."""
        assert sample.header == "A"
        settings.header = "B"
        assert sample.header == "B"

    def test_explicit_wins_over_later_config_change(self, sample, settings):
        """Test that an explicit value is never overridden by the configuration."""
        sample.header = "explicit"
        settings.header = "B"
        assert sample.header == "explicit"

    def test_explicit_none_is_explicit(self, sample):
        """Test that assigning None is an explicit override too."""
        sample.header = None
        assert sample.header is None
        assert sample.convention_mapping.is_explicit("header")

    def test_delete_clears_override(self, sample, settings):
        """Test that deleting the attribute restores the fallback."""
        sample.header = "explicit"
        del sample.header
        settings.header = "C"
        assert sample.header == "C"

    def test_list_and_map_properties(self, sample, settings):
        """Test that list and map typed properties resolve the same way."""
        settings.excludes = ["*.xml"]
        settings.ext = {"year": 2024}
        assert sample.excludes == ["*.xml"]
        assert sample.ext == {"year": 2024}

    def test_in_place_mutation_observed(self, sample, settings):
        """Test that mutating the config's collection in place is observed."""
        settings.excludes.append("*.txt")
        assert "*.txt" in sample.excludes


class TestConventionMapping:
    """Tests for ConventionMapping bookkeeping."""

    def test_properties_in_declaration_order(self):
        """Test listing declared properties."""
        assert Sample().convention_mapping.properties() == ["header", "excludes", "ext", "strict"]

    def test_properties_include_inherited(self):
        """Test that subclasses see their parent's properties."""

        class Child(Sample):
            extra = ConventionProperty()

        assert Child().convention_mapping.properties()[-1] == "extra"
        assert "header" in Child().convention_mapping.properties()

    def test_map_unknown_property_raises(self):
        """Test that binding an undeclared property is a configuration error."""
        with pytest.raises(ConfigurationError, match="unknown property"):
            Sample().convention_mapping.map("nope", lambda: 1)

    def test_map_non_callable_raises(self):
        """Test that a fallback must be callable."""
        with pytest.raises(ConfigurationError):
            Sample().convention_mapping.map("header", "A")

    def test_remap_replaces_fallback(self, sample):
        """Test that mapping twice replaces rather than layers."""
        sample.convention_mapping.map("header", lambda: "second")
        assert sample.header == "second"

    def test_remap_keeps_explicit_value(self, sample):
        """Test that remapping does not touch explicit values."""
        sample.header = "explicit"
        sample.convention_mapping.map("header", lambda: "second")
        assert sample.header == "explicit"

    def test_convention_values(self, sample):
        """Test resolving every property at once."""
        values = sample.convention_values()
        assert values["header"] == "A"
        assert values["strict"] is False

    def test_mappings_are_per_instance(self, settings):
        """Test that two instances keep separate bindings."""
        first = Sample()
        second = Sample()
        first.convention_mapping.map("header", lambda: settings.header)
        assert first.header == "A"
        assert second.header == "LICENSE"
