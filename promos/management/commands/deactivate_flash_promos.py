from django.core.management.base import BaseCommand

from promos.service import deactivate_ended_flash_promos


class Command(BaseCommand):
    help = "Mark flash promos whose end date has passed as inactive"

    def handle(self, *args, **kwargs):
        n = deactivate_ended_flash_promos()
        self.stdout.write(self.style.SUCCESS(f"Deactivated {n} flash promos"))
