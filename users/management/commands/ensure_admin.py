from django.core.management.base import BaseCommand

from users.bootstrap import ensure_admin


class Command(BaseCommand):
    help = 'Create the admin account from ADMIN_NAME / ADMIN_MAIL / ADMIN_PASSWORD if it does not exist.'

    def handle(self, *args, **options):
        result = ensure_admin()
        if result is None:
            self.stdout.write('Admin credentials not provided. Skipping admin initialization.')
            return

        user, created = result
        if created:
            self.stdout.write(self.style.SUCCESS(f'Admin user created successfully: {user.email}'))
        else:
            self.stdout.write(f'Admin user already exists: {user.email}')
