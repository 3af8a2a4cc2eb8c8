"""licensekit: License header compliance and dependency report orchestration.

This package provides:
- A build-wide license configuration and a dependency report configuration
- Lazily resolved task properties that fall back to those configurations
- Detection of optional source-producing facilities in the host build
- Synthesis of per-source-set check/format tasks wired into ``check``

Example usage:
    >>> from licensekit.host import Project
    >>> from licensekit.plugin import LicensePlugin
    >>>
    >>> project = Project("/path/to/project")
    >>> project.apply_plugin(LicensePlugin)
    >>> project.facilities.apply("java-base")
    >>> project.source_sets.create("main", java=["src/main/java"])
    >>> project.finalize()
    >>> project.tasks["licenseMain"].header
    PosixPath('/path/to/project/LICENSE')
"""

__version__ = "0.1.0"
