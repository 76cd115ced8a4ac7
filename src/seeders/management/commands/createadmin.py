"""
Management command: createadmin

Creates the platform's system Admin user document. Supports both interactive
prompts and environment variables for automated (Docker/CI) deployments.

Environment variables:
  ADMIN_EMAIL     (required with --no-input)
  ADMIN_PASSWORD  (required with --no-input)
  ADMIN_NAME      (optional, default: "Administrator")

Usage:
  # Interactive
  python manage.py createadmin

  # Automated (Docker entrypoint)
  ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=secret \
    python manage.py createadmin --no-input
"""

import getpass

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from src.apps.users.selectors import get_user_by_email
from src.apps.users.services import create_user, set_user_role
from src.common.exceptions import ApplicationError
from src.common.types import UserRole
from src.config.env import env


class Command(BaseCommand):
    help = "Create the platform Admin user."

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-input",
            action="store_true",
            dest="no_input",
            help="Read credentials from environment variables instead of prompts.",
        )
        parser.add_argument("--email", type=str, help="Admin email (overrides env var).")
        parser.add_argument("--password", type=str, help="Admin password (overrides env var).")
        parser.add_argument("--name", type=str, help="Admin display name (overrides env var).")

    @transaction.atomic
    def handle(self, *args, **options):
        # Resolve credentials: CLI args > env vars > interactive prompts
        email = (options.get("email") or env.ADMIN_EMAIL).strip()
        password = (options.get("password") or env.ADMIN_PASSWORD).strip()
        name = (options.get("name") or env.ADMIN_NAME).strip()

        if options["no_input"]:
            if not email:
                raise CommandError("ADMIN_EMAIL environment variable is required with --no-input.")
            if not password:
                raise CommandError("ADMIN_PASSWORD environment variable is required with --no-input.")
            name = name or "Administrator"
        else:
            email = email or input("Email: ").strip()
            if not email:
                raise CommandError("Email is required.")

            name = name or input("Name [Administrator]: ").strip() or "Administrator"

            if not password:
                password = getpass.getpass("Password: ")
                if password != getpass.getpass("Confirm password: "):
                    raise CommandError("Passwords do not match.")
            if not password:
                raise CommandError("Password is required.")

        existing = get_user_by_email(email=email)
        if existing:
            if existing.get("role") == UserRole.ADMIN:
                self.stdout.write(self.style.WARNING(f"Admin '{email}' already exists. Skipping."))
                return

            set_user_role(user_id=existing["id"], role=UserRole.ADMIN)
            self.stdout.write(self.style.SUCCESS(f"Existing user '{email}' promoted to Admin."))
            return

        try:
            create_user(name=name, email=email, password=password, role=UserRole.ADMIN)
        except ApplicationError as e:
            raise CommandError(f"{e.message} {e.extra.get('errors', '')}".strip())

        self.stdout.write(self.style.SUCCESS(f"Admin '{email}' created successfully."))
