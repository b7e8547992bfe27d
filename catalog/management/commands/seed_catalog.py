from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from catalog.seed_data import DEMO_USERS, SERVICES
from catalog.utils import WorkbookError, load_services_workbook, reset_catalog
from users.models import User


class Command(BaseCommand):
    help = "Replace the service catalog with the built-in data (or an .xlsx file) and optionally create demo users."

    def add_arguments(self, parser):
        parser.add_argument("--file", help="Path to an .xlsx workbook with service rows")
        parser.add_argument("--with-users", action="store_true", help="Also (re)create the demo admin and user accounts")

    def handle(self, *args, **options):
        rows = SERVICES
        if options["file"]:
            try:
                with open(options["file"], "rb") as fh:
                    rows, errors = load_services_workbook(fh)
            except (OSError, WorkbookError) as e:
                raise CommandError(str(e)) from e
            for error in errors:
                self.stderr.write(self.style.WARNING(error))
            if not rows:
                raise CommandError("No valid service rows found")

        summary = reset_catalog(rows)
        self.stdout.write(self.style.SUCCESS(
            f"Seeded {summary['count']} services "
            f"({summary['created']} created, {summary['updated']} updated, "
            f"{summary['deactivated']} deactivated, {summary['deleted']} deleted)"
        ))

        counts = {}
        for row in rows:
            counts[row["category"]] = counts.get(row["category"], 0) + 1
        for category, count in counts.items():
            self.stdout.write(f"  {category.replace('-', ' ').upper()}: {count} services")

        if options["with_users"]:
            self._seed_users()

    @transaction.atomic
    def _seed_users(self):
        for data in DEMO_USERS:
            data = dict(data)
            email = data.pop("email")
            password = data.pop("password")
            user, created = User.objects.update_or_create(email=email, defaults=data)
            user.is_staff = user.role == User.Role.ADMIN
            user.set_password(password)
            user.save()
            verb = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(f"{verb} {user.role} account {email} / {password}"))
