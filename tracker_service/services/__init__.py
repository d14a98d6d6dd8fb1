# tracker_service/services/__init__.py
"""Reference resolution, task queries and reporting."""
