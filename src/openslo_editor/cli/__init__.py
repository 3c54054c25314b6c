"""Command-line interface for openslo-editor."""
