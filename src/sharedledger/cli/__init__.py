"""Command line interface for sharedledger."""
