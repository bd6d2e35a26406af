"""
Seed the default laundry service catalog
Usage: python seed_services.py [--reset]

Services that already exist (by name) are left untouched unless --reset is
given, which deletes the whole catalog first.
"""
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from laundry.config import DATABASE_URL
from laundry.database import Base, create_db_engine, create_session_factory
from laundry.models import Service

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    {
        "name": "Wash & Iron",
        "description": "Complete washing and ironing service for your clothes. Get fresh and crisp clothes delivered to your doorstep.",
        "price": 150,
        "icon": "👕",
        "image": "https://images.unsplash.com/photo-1582735689369-4fe89db7114c?w=400",
        "estimated_days": 2,
    },
    {
        "name": "Dry Clean",
        "description": "Professional dry cleaning for delicate fabrics and formal wear. Perfect for suits, dresses, and special garments.",
        "price": 250,
        "icon": "🧥",
        "image": "https://images.unsplash.com/photo-1567401893414-76b7b1e5a7a5?w=400",
        "estimated_days": 3,
    },
    {
        "name": "Ironing Only",
        "description": "Expert ironing service for perfectly pressed clothes. Save time and get professional results.",
        "price": 80,
        "icon": "🔥",
        "image": "https://images.unsplash.com/photo-1558317374-067fb5f30001?w=400",
        "estimated_days": 1,
    },
    {
        "name": "Premium Laundry",
        "description": "Premium laundry service with special care for expensive and delicate fabrics. Includes washing, drying, and careful pressing.",
        "price": 350,
        "icon": "⭐",
        "image": "https://images.unsplash.com/photo-1610557892470-55d9e80c0bce?w=400",
        "estimated_days": 3,
    },
    {
        "name": "Express Service",
        "description": "Super fast laundry service for urgent needs. Get your clothes washed and delivered within 24 hours.",
        "price": 200,
        "icon": "⚡",
        "image": "https://images.unsplash.com/photo-1604335399105-a0c585fd81a1?w=400",
        "estimated_days": 1,
    },
]


def seed_services(reset: bool = False):
    engine = create_db_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    session = create_session_factory(engine)()

    try:
        if reset:
            deleted = session.query(Service).delete()
            logger.info(f"🗑️ {deleted} existing services deleted")

        created = []
        for data in DEFAULT_SERVICES:
            if session.query(Service).filter(Service.name == data["name"]).first():
                logger.info(f"⏭️ {data['name']} already exists")
                continue
            service = Service(is_active=True, **data)
            session.add(service)
            created.append(service)

        session.commit()
        logger.info(f"✅ {len(created)} services created")
        for service in created:
            logger.info(f"- {service.name}: ₹{service.price:g}")
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    try:
        seed_services(reset="--reset" in sys.argv[1:])
    except Exception as e:
        logger.error(f"❌ Seeding services failed: {e}")
        sys.exit(1)
