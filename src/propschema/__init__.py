from __future__ import annotations

"""
propschema: static prop-schema extraction for TSX components.

Derives a serialisable description of each component's accepted props
from its TypeScript declarations, keyed by the component's source path.
"""

__version__ = "0.3.0"
