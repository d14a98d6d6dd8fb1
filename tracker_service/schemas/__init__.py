# tracker_service/schemas/__init__.py
"""Pydantic schemas for Task Tracker Service."""
