from __future__ import annotations


class VisualizerError(Exception):
    """Base class for visualizer errors."""


class ConfigurationError(VisualizerError, ValueError):
    """Raised when a caller passes invalid configuration (canvas, iterations, ...).

    Malformed *data* never raises; it degrades to empty output instead.
    """


class LayoutConfigError(ConfigurationError):
    """Invalid arguments to the layout engine."""
