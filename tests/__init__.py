"""
Test package for cargo-quality.

This package contains:
- Unit tests for individual components
- Integration tests for the workflow and the command line
- Property-based tests using Hypothesis
"""
