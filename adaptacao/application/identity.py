"""Default accounts and the fixed credential table of the local variant.

Passwords are compared in plain text here; the remote variant keeps hashed
credentials in the key-value store instead.
"""
import structlog

from ..domain.entities import Role, User
from .repositories import UserRepository

logger = structlog.get_logger()

DEFAULT_ACCOUNTS = (
    {"email": "coordenador@escola.com", "password": "coord123", "name": "Maria Silva", "role": Role.COORDINATOR},
    {"email": "professor@escola.com", "password": "prof123", "name": "João Santos", "role": Role.TEACHER},
)


class FixedCredentialTable:
    def __init__(self, accounts=DEFAULT_ACCOUNTS):
        self._passwords = {a["email"]: a["password"] for a in accounts}

    def verify(self, email: str, password: str) -> bool:
        return email in self._passwords and self._passwords[email] == password


def initialize_default_users(users: UserRepository) -> list[User]:
    """Create the default profiles when the user collection is empty."""
    existing = users.list()
    if existing:
        return existing
    created = [users.create(email=a["email"], name=a["name"], role=a["role"]) for a in DEFAULT_ACCOUNTS]
    logger.info("default_users_created", count=len(created))
    return created


def seed_default_accounts(register) -> int:
    """Sign up the default accounts that do not exist yet; returns how many were created."""
    created = 0
    for account in DEFAULT_ACCOUNTS:
        if register.users.get_by_email(account["email"]) is not None:
            continue
        register.execute({**account, "role": account["role"].value})
        created += 1
    if created:
        logger.info("default_accounts_seeded", count=created)
    return created
