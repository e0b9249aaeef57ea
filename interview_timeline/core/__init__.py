"""Data models, boundary schemas and text/timestamp helpers."""
