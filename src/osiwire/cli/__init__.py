"""Command-line interface for osiwire."""
