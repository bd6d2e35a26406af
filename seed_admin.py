"""
Create the initial back-office admin
Usage: python seed_admin.py [email] [password] [name]

Defaults come from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME, falling back to
admin@laundry.com / admin123 / Admin User. Change the password after first login.
"""
import os
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from laundry.config import DATABASE_URL
from laundry.database import Base, create_db_engine, create_session_factory
from laundry.domain.auth.service import AdminAuthService
from laundry.errors import ConflictError

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def seed_admin(email: str, password: str, name: str):
    engine = create_db_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    session = create_session_factory(engine)()

    try:
        admin = AdminAuthService(session).create_admin(email, password, name)
        logger.info("✅ Admin created successfully!")
        logger.info("====================================")
        logger.info(f"Email: {admin.email}")
        logger.info(f"Name: {admin.name}")
        logger.info("====================================")
    except ConflictError:
        logger.info(f"Admin {email} already exists - login with the existing password")
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    args = sys.argv[1:]
    email = args[0] if len(args) > 0 else os.getenv("ADMIN_EMAIL", "admin@laundry.com")
    password = args[1] if len(args) > 1 else os.getenv("ADMIN_PASSWORD", "admin123")
    name = args[2] if len(args) > 2 else os.getenv("ADMIN_NAME", "Admin User")

    try:
        seed_admin(email, password, name)
    except Exception as e:
        logger.error(f"❌ Seeding admin failed: {e}")
        sys.exit(1)
