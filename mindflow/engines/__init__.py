"""Engines - pure checks over generated content."""
