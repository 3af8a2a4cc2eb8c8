"""Allow ``python -m licensekit``."""

from .cli import main

main()
