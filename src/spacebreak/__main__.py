"""Allow ``python -m spacebreak``."""

from spacebreak.main import main

main()
