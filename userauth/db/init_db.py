"""Initialize database tables and create initial data if needed"""
import logging
from userauth.db.base import Base
from userauth.db.session import engine, SessionLocal
from userauth.models.user import UserRole
from userauth.repositories.user_repository import UserRepository
from userauth.core.security import hash_password
from userauth.core.config import settings

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all database tables"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
        raise


def create_initial_data() -> None:
    """Create the initial admin from .env configuration when no users exist"""
    db = SessionLocal()
    try:
        users = UserRepository(db)
        if users.count() == 0:
            users.insert(
                username=settings.INITIAL_ADMIN_USERNAME,
                password=hash_password(settings.INITIAL_ADMIN_PASSWORD),
                mobile=settings.INITIAL_ADMIN_MOBILE or None,
                email=settings.INITIAL_ADMIN_EMAIL,
                role=UserRole.ADMIN
            )
            logger.info(f"Initial admin created: {settings.INITIAL_ADMIN_USERNAME}")
            logger.warning("Change default admin credentials in .env file!")
    finally:
        db.close()
