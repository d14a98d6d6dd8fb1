# tracker_service/core/__init__.py
"""Core modules for Task Tracker Service."""
