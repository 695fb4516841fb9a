"""`tooltool` command-line interface."""
