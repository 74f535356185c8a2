from django.core.management.base import BaseCommand

from promos.models import PromoCode
from promos.service import purge_promo_codes


class Command(BaseCommand):
    help = "Bulk delete promo codes (redemption history on users is kept)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--redeemed-only",
            action="store_true",
            help="Delete only codes that have been redeemed",
        )
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Skip the confirmation prompt",
        )

    def handle(self, *args, **options):
        redeemed_only = options["redeemed_only"]
        qs = PromoCode.objects.all()
        if redeemed_only:
            qs = qs.filter(redemption__isnull=False)
        target = qs.count()

        if not target:
            self.stdout.write("Nothing to delete")
            return

        if not options["yes"]:
            answer = input(f"Delete {target} promo codes? [y/N] ")
            if answer.strip().lower() != "y":
                self.stdout.write(self.style.WARNING("Aborted"))
                return

        deleted = purge_promo_codes(redeemed_only=redeemed_only)
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} promo codes"))
