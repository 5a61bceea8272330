import os
import uuid

os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from noticeboard.config import Settings
from noticeboard.core.db import init_db
from noticeboard.core.security import hash_password
from noticeboard.main import create_app
from noticeboard.models.user import Role, User


TEST_DB_URI = "mongodb://localhost:27017/notice_board_test"


class InMemoryAccountStore:
    """
    Account store kept in a list; same interface as core.accounts.AccountStore.
    """

    def __init__(self, accounts=None):
        self.accounts = list(accounts or [])

    async def find_by_role(self, role):
        for a in self.accounts:
            if a["role"] == role:
                return a
        return None

    async def insert(self, username, password_hash, role):
        account = {"username": username, "password_hash": password_hash, "role": role}
        self.accounts.append(account)
        return account

    def usernames(self):
        return [a["username"] for a in self.accounts]

    def count(self, role):
        return sum(1 for a in self.accounts if a["role"] == role)


@pytest.fixture
def memory_store():
    return InMemoryAccountStore()


@pytest.fixture
def settings(tmp_path):
    """
    Settings pointing uploads and the frontend at temporary directories.
    """
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html>login</html>")
    return Settings(
        mongodb_uri=TEST_DB_URI,
        port=5000,
        public_dir=str(public),
        upload_dir=str(tmp_path / "uploads"),
        max_upload_mb=1,
    )


@pytest_asyncio.fixture
async def db():
    """
    Fresh in-memory MongoDB with the Beanie models registered.
    """
    uri = f"mongodb://localhost:27017/notice_board_{uuid.uuid4().hex[:8]}"
    database = await init_db(uri, client=AsyncMongoMockClient())
    yield database
    database.close()


@pytest_asyncio.fixture
async def client(settings, db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    app = create_app(settings, db=db)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_account(db):
    """
    Factory fixture to create accounts directly through Beanie.
    """

    async def _create_account(username: str, role: Role, password: str = "Pass#1234") -> tuple[User, str]:
        user = User(username=username, password_hash=hash_password(password), role=role)
        await user.insert()
        return user, password

    return _create_account


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
