"""Allow ``python -m newsrag.cli`` execution."""

from newsrag.cli.ingest import main

main()
