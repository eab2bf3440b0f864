# core/management/commands/ensure_demo_users.py
import os

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from core.models import User

DEMO_SET = [
    ("admin", User.ROLE_ADMIN),
    ("specialist", User.ROLE_SPECIALIST),
    ("receptionist", User.ROLE_RECEPTIONIST),
]


class Command(BaseCommand):
    help = "Ensure one demo user per role exists (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default=os.getenv("DEMO_USER_PASSWORD", "optica123"))

    def handle(self, *args, **opts):
        password = make_password(opts["password"])
        for username, role in DEMO_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={"role": role, "password": password, "is_active": True},
            )
            if not created:
                # reset password, role and activation
                u.password = password
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All demo users ensured."))
