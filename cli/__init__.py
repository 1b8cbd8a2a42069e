"""Command line interface for mlpnet."""
