"""Command line interface for aoj-verify."""
