"""Exceptions raised by build-order."""

from __future__ import annotations


class BuildOrderError(Exception):
    """Base class for all build-order errors."""


class InvalidUnitError(BuildOrderError, ValueError):
    """A unit handed to the plan builder is malformed (e.g. empty id)."""


class ProjectDiscoveryError(BuildOrderError):
    def __init__(self, root: str, message: str):
        super().__init__(message)
        self.root = root


class ProjectParsingError(BuildOrderError):
    def __init__(self, project_path: str, message: str):
        super().__init__(message)
        self.project_path = project_path


class AnalysisError(BuildOrderError):
    """Unrecoverable failure during analysis; maps to exit code 2."""


class ConfigurationError(AnalysisError):
    """A configuration value (flag or environment variable) is invalid."""
