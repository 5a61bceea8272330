# noticeboard/core/accounts.py
"""
Account store used by the startup seed.
Wraps the two capabilities the seed needs (lookup by role, insert) so the seed
routine can be handed an in-memory store in tests.
"""
from noticeboard.models.user import Role, User


class AccountStore:
    """
    Beanie-backed account store over the "users" collection.
    """

    async def find_by_role(self, role: Role) -> User | None:
        return await User.find_one(User.role == role)

    async def insert(self, username: str, password_hash: str, role: Role) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        await user.insert()
        return user
