"""Taskboard API and domain core."""
