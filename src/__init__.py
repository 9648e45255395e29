"""Point engine package root."""
