from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cartshop.errors import AuthError, ValidationError
from cartshop.models.user import User
from cartshop.repositories.user_repo import UserRepository
from cartshop.utils.logging import get_logger
from cartshop.utils.security import hash_password, new_token, parse_bearer, verify_password

log = get_logger(__name__)


class UserService:
    def __init__(self, db: Session, bcrypt_rounds: int):
        self.db = db
        self.repo = UserRepository(db)
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, username: str, password: str) -> User:
        username = (username or "").strip()
        password = (password or "").strip()
        if not username or not password:
            raise ValidationError("username and password required")

        if len(password.encode("utf-8")) > 72:
            raise ValidationError("password too long")

        if self.repo.get_by_username(username):
            raise ValidationError("username already exists")

        try:
            user = self.repo.create(username, hash_password(password, self.bcrypt_rounds))
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise ValidationError("username already exists")
        self.db.refresh(user)
        log.info("registered user %s (id=%s)", user.username, user.id)
        return user

    def list_users(self) -> List[User]:
        return self.repo.list()

    def login(self, username: str, password: str) -> str:
        """Check credentials and issue a fresh token, replacing any previous one."""
        username = (username or "").strip()
        password = (password or "").strip()

        user = self.repo.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            log.info("failed login for %r", username)
            raise AuthError("invalid username/password")

        token = new_token()
        self.repo.set_token(user, token)
        self.db.commit()
        log.info("user %s logged in", user.id)
        return token

    def logout(self, user: User):
        self.repo.set_token(user, None)
        self.db.commit()
        log.info("user %s logged out", user.id)

    def authenticate(self, authorization: Optional[str]) -> User:
        """Resolve an Authorization header to a user."""
        token = parse_bearer(authorization)
        if not token:
            raise AuthError("missing token")
        user = self.repo.get_by_token(token)
        if not user:
            raise AuthError("invalid token")
        return user
