"""Allow ``python -m wifimenu``."""

from wifimenu.cli import main

main()
