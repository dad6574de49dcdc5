"""Logging setup for the promotion widget generator."""
