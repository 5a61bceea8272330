# noticeboard/__init__.py
"""
Digital Notice Board backend: role-based accounts and notices on MongoDB,
served with FastAPI.
"""
