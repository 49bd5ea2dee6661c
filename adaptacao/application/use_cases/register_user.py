from typing import Any, Mapping

from ...domain.entities import User
from ...domain.errors import ValidationFailed
from ..dto import SignupInput
from ..records import parse_input
from ..repositories import UserRepository


class ICredentialRepository:
    def get_by_email(self, email: str) -> dict | None: ...
    def create(self, email: str, password_hash: str, user_id: str) -> None: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...


class RegisterUser:
    def __init__(self, users: UserRepository, credentials: ICredentialRepository, hasher: IPasswordHasher):
        self.users = users
        self.credentials = credentials
        self.hasher = hasher

    def execute(self, payload: Mapping[str, Any]) -> User:
        data: SignupInput = parse_input(SignupInput, payload)
        email = str(data.email)
        if self.credentials.get_by_email(email) or self.users.get_by_email(email):
            raise ValidationFailed("Email already registered")
        user = self.users.create(email=email, name=data.name, role=data.role)
        self.credentials.create(email, self.hasher.hash(data.password), user.id)
        return user
