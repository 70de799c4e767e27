"""svrender command line interface."""
