# tracker_service/__init__.py
"""Task Tracker Service - projects, teams, tags, tasks and reports."""

__version__ = "1.0.0"
__author__ = "Task Manager Team"
