"""Filter state and value helpers."""
