"""Command-line interface for treeclip."""
