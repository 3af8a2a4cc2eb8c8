"""Test fixtures for licensekit.

Provides source tree and build description generators.
"""

from .source_tree import (
    create_android_tree,
    create_java_tree,
    write_build_description,
)

__all__ = [
    "create_android_tree",
    "create_java_tree",
    "write_build_description",
]
