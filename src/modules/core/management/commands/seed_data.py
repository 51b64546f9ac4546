from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.accounts.models import UserRole
from modules.products.models import Product

DEMO_USERS = [
    ("root", "Root Admin", UserRole.SUPERADMIN),
    ("admin", "Office Admin", UserRole.ADMIN),
    ("manager1", "Maria Manager", UserRole.MANAGER),
    ("manager2", "Marco Manager", UserRole.MANAGER),
    ("staff", "Sam Staff", UserRole.USER),
]

DEMO_PRODUCTS = [
    ("Widget", "manager1", Decimal("9.00"), {"color": "blue"}),
    ("Laptop Pro 14", "root", Decimal("1899.00"), {"ram": "16GB", "cpu": "8-core"}),
    ("USB-C Hub", "manager2", Decimal("39.90"), None),
    ("Desk Lamp", "staff", Decimal("24.50"), {"watts": "9"}),
]


class Command(BaseCommand):
    help = "Seed database with demo users of every role and a few products."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users = self._seed_users()
        products_created = self._seed_products(users)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: users={len(users)}, products={products_created}"
            )
        )

    def _seed_users(self) -> dict:
        User = get_user_model()
        users = {}
        for username, name, role in DEMO_USERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "name": name,
                    "email": f"{username}@example.com",
                    "role": role,
                    "is_staff": role in (UserRole.SUPERADMIN, UserRole.ADMIN),
                    "is_superuser": role == UserRole.SUPERADMIN,
                },
            )
            if created:
                user.set_password(f"{username}123")
                user.save(update_fields=["password"])
            users[username] = user
        return users

    def _seed_products(self, users: dict) -> int:
        created = 0
        for name, owner, price, specs in DEMO_PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "price": price,
                    "specs": specs,
                    "created_by": users[owner],
                },
            )
            created += int(was_created)
        return created
