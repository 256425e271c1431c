"""DataLens services."""
