"""
restructure - layered solution migration tool

Splits a single flat project into a multi-project layered layout with
backup, scaffolding, file relocation, namespace rewriting, reference
wiring and build verification.
"""

try:
    from importlib.metadata import version, PackageNotFoundError
    __version__ = version("restructure")
except PackageNotFoundError:
    # Package is not installed, use development version
    __version__ = "0.0.0+dev"

__author__ = "Restructure Development Team"
