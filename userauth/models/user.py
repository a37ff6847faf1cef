"""User model with role-based access control"""
from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from enum import Enum
from userauth.db.base import Base


class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User account record

    The password column holds whatever the password context produced; with the
    default ``plaintext`` scheme that is the submitted password verbatim.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    mobile = Column(String(32), nullable=True)
    email = Column(String(255), nullable=False, index=True)

    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
