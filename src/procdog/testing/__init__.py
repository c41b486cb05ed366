"""Helpers for testing code built on procdog actors."""
