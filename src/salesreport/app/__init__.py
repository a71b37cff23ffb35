"""Application bootstrap package."""
