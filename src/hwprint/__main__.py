"""Allow ``python -m hwprint``."""

from hwprint.cli import main

main()
