"""Command-line interface for Fingerscan."""
