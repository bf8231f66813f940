#!/usr/bin/env python
"""
Database setup for the local (SQL) sales backend

Usage:
    python scripts/init_db.py init          # Create tables and the default admin
    python scripts/init_db.py create-user   # Create a report user
    python scripts/init_db.py seed-sales [YYYY-MM-DD]  # Add sample sales for a day (development only)
"""
import os
import sys
from datetime import date, datetime, time, timezone
from decimal import Decimal
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

SAMPLE_SALES = [
    # (local time, customer, product, variant, qty, unit, layout, source, employee email)
    (time(9, 12), 'Ana Reyes', 'Tarpaulin 3x5', 'Matte', 1, '350.00', '100.00', 'walk-in', 'jane@nva.ph'),
    (time(10, 40), 'Ben Cruz', 'Calling Cards', None, 2, '250.00', '0.00', 'web', None),
    (time(13, 5), 'Carla Santos', 'Sticker Sheet', 'Glossy', 5, '45.00', '50.00', 'web', 'mark@nva.ph'),
    (time(16, 55), 'Dino Uy', 'Mug Print', 'White 11oz', 3, '180.00', '0.00', 'walk-in', None),
]


def init_database():
    """Create tables (the app factory also seeds the admin account)"""
    from app import create_app
    from app.extensions import db

    app = create_app()
    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("✓ Database tables created successfully")


def create_user():
    """Create a new user"""
    from app import create_app
    from app.models.user import User
    from app.extensions import db

    app = create_app()
    with app.app_context():
        username = input("Username: ").strip()
        if not username:
            print("❌ Username cannot be empty")
            return

        if User.query.filter_by(username=username).first():
            print(f"❌ User '{username}' already exists")
            return

        full_name = input("Full Name: ").strip()
        password = input("Password: ").strip()
        if not password:
            print("❌ Password cannot be empty")
            return

        role_choice = input("Role - 1. ADMIN, 2. SALES [default: 2]: ").strip()
        role = {'1': 'ADMIN', '2': 'SALES'}.get(role_choice, 'SALES')

        user = User(username=username, full_name=full_name or username, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        print(f"✓ User '{username}' created successfully with role '{role}'")


def seed_sales(day_arg=None):
    """Insert a handful of sales on one report day"""
    from app import create_app
    from app.extensions import db
    from app.models.sales import SaleRecord
    from app.services.report_dates import report_zone, today_in

    if os.environ.get('FLASK_ENV', 'development') == 'production':
        print("❌ Refusing to seed sample sales in production!")
        sys.exit(1)

    app = create_app()
    tz = report_zone(app.config.get('REPORT_TIMEZONE'))
    day = date.fromisoformat(day_arg) if day_arg else today_in(tz)

    with app.app_context():
        for i, (at, customer, product, variant, qty, unit, layout, source, email) in enumerate(SAMPLE_SALES):
            local_dt = datetime.combine(day, at, tzinfo=tz)
            unit_price = Decimal(unit)
            subtotal = unit_price * qty
            layout_fee = Decimal(layout)
            db.session.add(SaleRecord(
                sale_date=local_dt.astimezone(timezone.utc).replace(tzinfo=None),
                order_id=f"{day.strftime('%Y%m%d')}{i:04d}-sample",
                customer_name=customer,
                product_name=product,
                variant=variant,
                quantity=qty,
                unit_price=unit_price,
                subtotal=subtotal,
                layout_fee=layout_fee,
                total_amount=subtotal + layout_fee,
                order_source=source,
                employee_email=email,
            ))
        db.session.commit()
        print(f"✓ Added {len(SAMPLE_SALES)} sample sales for {day.isoformat()}")


def main():
    """Main entry point"""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1].lower()

    if command == 'init':
        init_database()
    elif command == 'create-user':
        create_user()
    elif command == 'seed-sales':
        seed_sales(sys.argv[2] if len(sys.argv) > 2 else None)
    else:
        print(f"❌ Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


if __name__ == '__main__':
    main()
