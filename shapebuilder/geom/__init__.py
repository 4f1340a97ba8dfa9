"""Geometry helpers.

Path compiler, flattener, normalizer and shape transforms. Only the mapper
touches Qt (QTransform); everything else is plain Python + svgelements.
"""

from __future__ import annotations
