"""Inspection record evaluation and workflow engine."""
