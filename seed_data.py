"""Seed initial data for development

Run this script to create:
- The demo company (verified, so it shows up in public listings)
- A few sample services for it
- The default currencies

Usage:
    python seed_data.py
"""
from zootel.core.database import SessionLocal, init_db
from zootel.core.json_fields import BUSINESS_HOURS, IMAGES
from zootel.models.models import Company, Service
from zootel.services.currency_service import CurrencyService

DEMO_COMPANY_ID = "company_1"


def seed_demo_company(db):
    if db.query(Company).filter(Company.id == DEMO_COMPANY_ID).first():
        print("Demo company already exists. Skipping.")
        return

    company = Company(
        id=DEMO_COMPANY_ID,
        name="Pawsome Pet Services",
        email="demo@pawsome.com",
        phone="(555) 123-4567",
        address="123 Pet Street",
        city="Pet City",
        state="PC",
        zip_code="12345",
        description="Professional pet grooming and care services",
        business_hours=BUSINESS_HOURS.dump({
            "monday": {"open": "09:00", "close": "18:00"},
            "tuesday": {"open": "09:00", "close": "18:00"},
            "wednesday": {"open": "09:00", "close": "18:00"},
            "thursday": {"open": "09:00", "close": "18:00"},
            "friday": {"open": "09:00", "close": "18:00"},
            "saturday": {"open": "10:00", "close": "16:00"},
            "sunday": {"closed": True},
        }),
        images=IMAGES.dump([]),
        verified=True,
        subscription_plan="premium",
        subscription_status="active",
    )
    db.add(company)
    db.flush()
    print(f"✓ Created company: {company.name} (ID: {company.id})")

    services = [
        Service(company_id=company.id, name="Full Grooming", description="Bath, haircut, nail trim and ear cleaning",
                price=65.00, duration=90, category="Grooming"),
        Service(company_id=company.id, name="Bath & Brush", description="Shampoo, conditioner and brush out",
                price=35.00, duration=45, category="Grooming"),
        Service(company_id=company.id, name="Nail Trim", description="Nail clipping and filing",
                price=15.00, duration=15, category="Grooming"),
        Service(company_id=company.id, name="Wellness Check", description="General health examination",
                price=80.00, duration=30, category="Veterinary"),
        Service(company_id=company.id, name="Overnight Boarding", description="Overnight stay with evening walk",
                price=50.00, duration=720, category="Boarding"),
    ]
    db.add_all(services)
    db.commit()
    print(f"✓ Created {len(services)} services")


def seed_data():
    init_db()
    db = SessionLocal()

    try:
        seed_demo_company(db)

        added = CurrencyService(db).seed_defaults()
        print(f"✓ Added {added} currencies")

        print("\n" + "="*50)
        print("✅ Seed data created successfully!")
        print("="*50)

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding data: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    print("Seeding database with initial data...")
    seed_data()
