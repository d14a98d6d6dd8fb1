# tracker_service/routers/__init__.py
"""API routers for Task Tracker Service."""
