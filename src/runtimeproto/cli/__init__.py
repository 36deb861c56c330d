"""Command-line interface for runtimeproto."""
