# noticeboard/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- accounts: Account store used by the startup seed
- bootstrap: Startup sequence (connect, seed default accounts, listen)
- db: MongoDB connection and Beanie model registration
- security: Password hashing and JWT access tokens
- server: uvicorn listener activation
"""
