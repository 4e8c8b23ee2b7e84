"""Command-line interface for cargo-quality."""
