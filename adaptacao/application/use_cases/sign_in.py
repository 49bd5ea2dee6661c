from ...domain.entities import User
from ...domain.errors import Unauthorized
from ..ports import ICredentialVerifier
from ..repositories import UserRepository


class SignIn:
    def __init__(self, users: UserRepository, verifier: ICredentialVerifier):
        self.users = users
        self.verifier = verifier

    def execute(self, email: str, password: str) -> User:
        if not self.verifier.verify(email, password):
            raise Unauthorized("Invalid email or password")
        user = self.users.get_by_email(email)
        if user is None:
            raise Unauthorized("Invalid email or password")
        return user
