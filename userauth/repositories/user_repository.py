"""
User Repository

Handles all database operations for the users table.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userauth.models.user import User, UserRole

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    """Raised when an insert violates the username uniqueness constraint"""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class UserRepository:
    """Repository for user data access, bound to one request's session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        return self.db.query(User).filter(User.username == username).first()

    def find_by_email(self, email: str) -> Optional[User]:
        """Get the oldest user registered with *email*"""
        return (
            self.db.query(User)
            .filter(User.email == email)
            .order_by(User.id.asc())
            .first()
        )

    def find_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def count(self) -> int:
        return self.db.query(User).count()

    def insert(
        self,
        username: str,
        password: str,
        mobile: Optional[str],
        email: str,
        role: UserRole = UserRole.USER
    ) -> User:
        """
        Insert a new user.

        The UNIQUE constraint on username is the final arbiter when two
        requests race past the existence check; the loser gets
        DuplicateUserError.
        """
        user = User(
            username=username,
            password=password,
            mobile=mobile,
            email=email,
            role=role
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Insert rejected by uniqueness constraint for username={username}")
            raise DuplicateUserError(username)
        self.db.refresh(user)
        return user

    def delete_by_id(self, user_id: int) -> bool:
        """Delete a user; returns False when no such user exists"""
        user = self.find_by_id(user_id)
        if user is None:
            return False
        self.db.delete(user)
        self.db.commit()
        return True
