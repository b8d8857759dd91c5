from ...domain.entities import User
from ...domain.results import Result, StoreFailure

class IUserRepository:
    def get_by_email(self, email: str) -> Result[User | None]: ...
    def find_credentials(self, email: str) -> Result[tuple[User, str] | None]: ...

class IPasswordHasher:
    def verify(self, plain: str, hashed: str) -> bool: ...

class AuthenticateUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, email: str, password: str) -> User:
        found = self.repo.find_credentials(email)
        if not found.ok:
            raise StoreFailure(found.error)
        if found.value is None:
            raise ValueError("Invalid credentials")
        user, password_hash = found.value
        if not self.hasher.verify(password, password_hash):
            raise ValueError("Invalid credentials")
        return user
