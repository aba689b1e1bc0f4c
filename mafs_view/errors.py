from __future__ import annotations


class ViewConfigError(ValueError):
    """Raised eagerly when a canvas, view box or zoom configuration is invalid."""
