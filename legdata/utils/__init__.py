"""Utility functions for legdata."""
