from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from complaints.choices import District, Role
from complaints.models import StaffMember

User = get_user_model()

STAFF_DEFINITIONS = [
    {"username": "muktar_ahmed", "name": "Ahmed Al-Muktar", "role": Role.MUKTAR, "district": District.DISTRICT_1},
    {"username": "muktar_sami", "name": "Sami Al-Muktar", "role": Role.MUKTAR, "district": District.DISTRICT_2},
    {"username": "muktar_khaled", "name": "Khaled Al-Muktar", "role": Role.MUKTAR, "district": District.DISTRICT_3},
    {"username": "district_admin", "name": "District Admin", "role": Role.ADMIN, "district": ""},
    {"username": "district_manager", "name": "District Manager", "role": Role.MANAGER, "district": ""},
]
DEFAULT_PASSWORD = "StaffPass123!"


class Command(BaseCommand):
    help = "Seed the staff directory with demo Muktars, an admin and a manager."

    def handle(self, *args, **options):
        created_count = 0
        for item in STAFF_DEFINITIONS:
            user, created_user = User.objects.get_or_create(
                username=item["username"],
                defaults={"email": f"{item['username']}@example.com"},
            )
            if created_user:
                user.set_password(DEFAULT_PASSWORD)
                user.save()

            _, created = StaffMember.objects.get_or_create(
                user=user,
                defaults={
                    "name": item["name"],
                    "role": item["role"],
                    "district": item["district"],
                },
            )
            if created:
                created_count += 1

        self.stdout.write(self.style.SUCCESS("Seed complete."))
        self.stdout.write(self.style.WARNING(f"Staff password for every seeded account: {DEFAULT_PASSWORD}"))
        self.stdout.write(self.style.SUCCESS(f"New staff members registered: {created_count}"))
