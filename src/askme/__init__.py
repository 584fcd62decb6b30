"""Command-line quiz drills over YAML question sets."""
