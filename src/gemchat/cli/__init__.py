"""Command line interface for gemchat."""
