"""Engineering knowledge bases (ISO 286 tolerances and fits)."""
