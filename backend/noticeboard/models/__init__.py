# noticeboard/models/__init__.py
"""
Document models module initialization.

Models exported:
- User: login account with a role
- Notice: a notice posted on the board
"""
from .user import User, Role
from .notice import Notice, Audience

# Registered with Beanie when the database connection is established
DOCUMENT_MODELS = [User, Notice]
