"""Task Board API."""
