"""Console and file helpers."""
