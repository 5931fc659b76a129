"""
Management command to ensure the fixed portal roles exist.

Usage:
    python manage.py ensure_roles
    python manage.py ensure_roles --assign admin@hospital.in=admin

This command is idempotent and safe to run multiple times.
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from apps.authz.models import Role, UserRole, RoleChoices


class Command(BaseCommand):
    help = 'Ensure portal roles exist and optionally assign them to users'

    def add_arguments(self, parser):
        parser.add_argument(
            '--assign',
            action='append',
            default=[],
            metavar='EMAIL=ROLE',
            help='Assign ROLE to the existing user EMAIL (repeatable)',
        )

    def handle(self, *args, **options):
        self.stdout.write("Ensuring roles exist...")
        for role_choice in RoleChoices:
            role, created = Role.objects.get_or_create(name=role_choice)
            if created:
                self.stdout.write(self.style.SUCCESS(f'  ✓ Created role: {role.name}'))
            else:
                self.stdout.write(f'  - Role exists: {role.name}')

        User = get_user_model()
        for assignment in options['assign']:
            email, sep, role_name = assignment.partition('=')
            if not sep or role_name not in RoleChoices.values:
                raise CommandError(f'Invalid assignment "{assignment}", expected EMAIL=ROLE')

            try:
                user = User.objects.get(email=email)
            except User.DoesNotExist:
                raise CommandError(f'User not found: {email}')

            role = Role.objects.get(name=role_name)
            _, created = UserRole.objects.get_or_create(user=user, role=role)
            if created:
                self.stdout.write(self.style.SUCCESS(f'  ✓ Assigned {role_name} to {email}'))
            else:
                self.stdout.write(f'  - {email} already has {role_name}')
