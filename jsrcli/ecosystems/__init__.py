"""Ecosystem specific manifest readers."""
