# noticeboard/services/__init__.py
"""
Service modules used by the route handlers.
"""
