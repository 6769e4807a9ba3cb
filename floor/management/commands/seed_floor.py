from django.core.management.base import BaseCommand, CommandError

from floor.models import Table


class Command(BaseCommand):
    help = "Seed the floor with numbered tables (existing table numbers are left untouched)"

    def add_arguments(self, parser):
        parser.add_argument("--tables", type=int, default=8, help="Number of tables to ensure exist.")
        parser.add_argument("--capacity", type=int, default=4, help="Seats for newly created tables.")

    def handle(self, *args, **options):
        count = options["tables"]
        capacity = options["capacity"]
        if count < 1 or capacity < 1:
            raise CommandError("--tables and --capacity must be positive.")

        created = 0
        for number in range(1, count + 1):
            _, was_created = Table.objects.get_or_create(
                table_number=number,
                defaults={"capacity": capacity, "status": Table.Status.AVAILABLE},
            )
            if was_created:
                created += 1
                self.stdout.write(f"Creating Table: table_number={number}, capacity={capacity}, status='available'")

        self.stdout.write(self.style.SUCCESS(f"Floor seeded: {created} new table(s), {Table.objects.count()} total."))
