"""Engine for multi-step terminal forms: flows, focus, validation, overlays, events and fuzzy search."""

__version__ = "0.1.0"