# noticeboard/core/bootstrap.py
"""
Bootstrap module for application startup.

Runs the startup sequence in a fixed order:
  connect to MongoDB -> seed default accounts -> start the HTTP listener

A failed connection is fatal (exit status 1). A failed seed is logged, recorded
on the Bootstrap and reported by /healthz, but the listener still starts.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI

from noticeboard.config import Settings
from noticeboard.core.accounts import AccountStore
from noticeboard.core.db import Database, close_db, init_db
from noticeboard.core.security import hash_password
from noticeboard.core.server import serve
from noticeboard.main import create_app
from noticeboard.models.user import Role

logger = logging.getLogger("uvicorn.error")


class BootState(str, Enum):
    START = "start"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    SEEDING = "seeding"
    LISTENING = "listening"
    FAILED = "failed"
    TERMINATED = "terminated"


class SeedStatus(str, Enum):
    SEEDED = "seeded"      # default accounts inserted
    SKIPPED = "skipped"    # an admin already exists
    DISABLED = "disabled"  # SEED_DEMO_USERS is off
    FAILED = "failed"      # lookup or insert raised


@dataclass(frozen=True)
class SeedAccount:
    username: str
    password: str
    role: Role


# Demo accounts inserted on first start, in this order
DEMO_ACCOUNTS = (
    SeedAccount("admin1", "admin123", Role.ADMIN),
    SeedAccount("faculty1", "faculty123", Role.FACULTY),
    SeedAccount("student1", "student123", Role.STUDENT),
)


@dataclass
class SeedResult:
    status: SeedStatus
    usernames: list[str] = field(default_factory=list)  # accounts inserted by this run
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status is SeedStatus.FAILED


async def seed_default_users(store, accounts=DEMO_ACCOUNTS) -> SeedResult:
    """
    Insert the default accounts unless an admin account already exists.

    Only the admin check guards the insert. A store that has, say, faculty1 but
    no admin gets a second faculty1; usernames are not unique in the database.

    Args:
        store: Object providing `find_by_role(role)` and
            `insert(username, password_hash, role)` (see core.accounts.AccountStore)
        accounts: Accounts to insert, in order

    Returns:
        SeedResult; errors are logged and reported as SeedStatus.FAILED, never raised
    """
    inserted: list[str] = []
    try:
        existing = await store.find_by_role(Role.ADMIN)
        if existing:
            return SeedResult(SeedStatus.SKIPPED)

        for account in accounts:
            await store.insert(account.username, hash_password(account.password), account.role)
            inserted.append(account.username)
    except Exception as exc:
        logger.error("[bootstrap] Error seeding users: %r", exc)
        return SeedResult(SeedStatus.FAILED, usernames=inserted, error=str(exc) or repr(exc))

    logger.warning("[bootstrap] Seeded default users: %s", ", ".join(inserted))
    logger.warning("[bootstrap]    Passwords: %s", ", ".join(a.password for a in accounts))
    return SeedResult(SeedStatus.SEEDED, usernames=inserted)


ConnectFn = Callable[[str], Awaitable[Database]]
ListenFn = Callable[[FastAPI, Settings, Callable[[], None]], Awaitable[None]]


class Bootstrap:
    """
    Drives START -> CONNECTING -> CONNECTED -> SEEDING -> LISTENING,
    or CONNECTING -> FAILED -> TERMINATED when the database is unreachable.

    Collaborators are injectable so tests can substitute an in-memory store and
    a listener that does not bind a socket.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        connect: ConnectFn = init_db,
        listen: ListenFn = serve,
        store=None,
        accounts=DEMO_ACCOUNTS,
        app_factory=create_app,
    ):
        self.settings = settings
        self.transitions: list[BootState] = []  # every state entered, in order
        self._enter(BootState.START)
        self.db: Optional[Database] = None
        self.app: Optional[FastAPI] = None
        self.seed_result: Optional[SeedResult] = None
        self._connect = connect
        self._listen = listen
        self._store = store if store is not None else AccountStore()
        self._accounts = accounts
        self._app_factory = app_factory

    @property
    def state(self) -> BootState:
        return self.transitions[-1]

    def _enter(self, state: BootState) -> None:
        self.transitions.append(state)
        logger.debug("[bootstrap] state -> %s", state.value)

    @property
    def degraded(self) -> bool:
        """True when the listener came up after a failed seed."""
        return self.seed_result is not None and self.seed_result.failed

    async def connect(self) -> Database:
        self._enter(BootState.CONNECTING)
        try:
            self.db = await self._connect(self.settings.mongodb_uri)
        except Exception as exc:
            self._enter(BootState.FAILED)
            logger.error("[bootstrap] MongoDB connection error: %r", exc)
            self._enter(BootState.TERMINATED)
            raise SystemExit(1) from exc
        self._enter(BootState.CONNECTED)
        logger.info("[bootstrap] Connected to MongoDB")
        return self.db

    async def seed(self) -> SeedResult:
        self._enter(BootState.SEEDING)
        if self.settings.seed_demo_users:
            self.seed_result = await seed_default_users(self._store, self._accounts)
        else:
            self.seed_result = SeedResult(SeedStatus.DISABLED)
        return self.seed_result

    def _on_listening(self) -> None:
        self._enter(BootState.LISTENING)
        logger.info("[bootstrap] Server running on http://localhost:%d", self.settings.port)

    async def run(self) -> None:
        """
        Run the whole startup sequence and serve until shutdown.

        Raises:
            SystemExit(1): the database connection could not be established
        """
        await self.connect()
        try:
            await self.seed()
            self.app = self._app_factory(self.settings, db=self.db, boot=self)
            await self._listen(self.app, self.settings, self._on_listening)
        finally:
            await close_db(self.db)
