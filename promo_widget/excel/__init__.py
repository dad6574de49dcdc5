"""Spreadsheet reading and header normalization."""
