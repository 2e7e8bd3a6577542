"""Bootstrap the storefront database: create an admin account and seed the catalog.

    python populate_db.py --admin-email owner@example.com --admin-password secret
    python populate_db.py --seed-products
"""
import argparse
import os
import sys

from sqlalchemy import func

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from models.product import Product
from models.users import User
from utils.hashing import get_password_hash
from utils.logging_config import setup_logging
from utils.sample_data import seed_sample_products


def ensure_admin(db, email: str, password: str) -> User:
    email = email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user:
        user.password_hash = get_password_hash(password)
        user.role = "admin"
        print(f"Updated password for admin {email}")
    else:
        user = User(email=email, password_hash=get_password_hash(password), role="admin")
        db.add(user)
        print(f"Created admin {email}")
    db.commit()
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialise the storefront database.")
    parser.add_argument("--admin-email", default=None)
    parser.add_argument("--admin-password", default=None)
    parser.add_argument("--seed-products", action="store_true", default=False,
                        help="Import the sample vegetable catalog.")
    args = parser.parse_args(argv)

    setup_logging()
    init_db()

    db = SessionLocal()
    try:
        if args.admin_email:
            if not args.admin_password:
                parser.error("--admin-password is required with --admin-email")
            ensure_admin(db, args.admin_email, args.admin_password)

        if args.seed_products:
            existing = db.query(Product).count()
            if existing:
                print(f"Catalog already has {existing} products, skipping seed.")
            else:
                created = seed_sample_products(db)
                print(f"Imported {len(created)} sample products.")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
