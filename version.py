"""
Version information for PartSpec.

This is the single source of truth for the application version.
Used by: CLI and packaging.
"""

__version__ = "0.3.0"
APP_NAME = "PartSpec"
