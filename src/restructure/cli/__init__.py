"""Command line interface for restructure."""
