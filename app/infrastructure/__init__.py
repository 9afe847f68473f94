"""Infrastructure: SQL catalog persistence."""
