"""Theme Intel command-line interface."""
