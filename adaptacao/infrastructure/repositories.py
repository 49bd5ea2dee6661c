from ..application.ports import IKeyValueStore, ICredentialVerifier
from ..application.use_cases.register_user import ICredentialRepository
from .security import PasswordHasher


class KvCredentialRepository(ICredentialRepository, ICredentialVerifier):
    """Hashed passwords of signed-up accounts, one ``credential:{email}`` key each."""

    def __init__(self, kv: IKeyValueStore, hasher: PasswordHasher | None = None):
        self.kv = kv
        self.hasher = hasher or PasswordHasher()

    def get_by_email(self, email: str) -> dict | None:
        return self.kv.get(f"credential:{email}")

    def create(self, email: str, password_hash: str, user_id: str) -> None:
        self.kv.set(f"credential:{email}", {"userId": user_id, "passwordHash": password_hash})

    def verify(self, email: str, password: str) -> bool:
        row = self.get_by_email(email)
        return bool(row) and self.hasher.verify(password, row["passwordHash"])
