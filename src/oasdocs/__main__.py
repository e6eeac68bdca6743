"""Allow ``python -m oasdocs``."""

from oasdocs.cli.main import main

main()
