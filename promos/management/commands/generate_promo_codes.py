from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from promos.service import generate_promo_codes
from promos.utils import make_promo_code


class Command(BaseCommand):
    help = "Generate random single-use promo codes"

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=10)
        parser.add_argument("--points", type=int, default=None)
        parser.add_argument("--prefix", type=str, default="")
        parser.add_argument("--length", type=int, default=10)
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print sample codes without saving",
        )

    def handle(self, *args, **options):
        count = options["count"]
        if options["dry_run"]:
            self.stdout.write(self.style.WARNING("=== DRY-RUN: nothing saved ==="))
            for _ in range(count):
                self.stdout.write(make_promo_code(options["length"], prefix=options["prefix"]))
            return

        try:
            codes = generate_promo_codes(
                count,
                points=options["points"],
                prefix=options["prefix"],
                length=options["length"],
            )
        except ValidationError as exc:
            raise CommandError(exc.messages[0])

        for code in codes:
            self.stdout.write(code)
        self.stdout.write(self.style.SUCCESS(f"Generated {len(codes)} promo codes"))
