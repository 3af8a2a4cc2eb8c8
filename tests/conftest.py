"""Pytest configuration and shared fixtures for licensekit tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from licensekit.host import Project
from licensekit.plugin import LicensePlugin

from tests.fixtures import create_android_tree, create_java_tree


# ============================================================================
# Project Fixtures
# ============================================================================


@pytest.fixture
def project(tmp_path) -> Project:
    """Empty project with the builtin facilities registered."""
    return Project(tmp_path, name="demo")


@pytest.fixture
def licensed_project(project) -> Project:
    """Project with the license plugin applied."""
    project.apply_plugin(LicensePlugin)
    return project


@pytest.fixture
def java_project(licensed_project, tmp_path) -> Project:
    """Licensed project with java-base active and main/test source sets."""
    create_java_tree(tmp_path)
    licensed_project.facilities.apply("java-base")
    licensed_project.source_sets.create(
        "main", java=["src/main/java"], resources=["src/main/resources"]
    )
    licensed_project.source_sets.create("test", java=["src/test/java"])
    return licensed_project


@pytest.fixture
def android_project(licensed_project, tmp_path) -> Project:
    """Licensed project with android-application active and a main source set."""
    create_android_tree(tmp_path)
    licensed_project.facilities.apply("android-application")
    licensed_project.source_sets.create(
        "main",
        java=["src/main/java"],
        res=["src/main/res"],
        assets=["src/main/assets"],
    )
    return licensed_project


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")
