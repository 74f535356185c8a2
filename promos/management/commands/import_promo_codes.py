"""
스프레드시트(.xlsx / .csv)에서 프로모 코드를 일괄 등록하는 명령어
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from promos.service import import_promo_codes, read_codes_from_spreadsheet


class Command(BaseCommand):
    help = "Import promo codes from every non-empty cell of a spreadsheet."

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to a .xlsx or .csv file")
        parser.add_argument(
            "--points",
            type=int,
            default=None,
            help="Points for newly created codes (default: PROMO_DEFAULT_POINTS)",
        )

    def handle(self, *args, **options):
        path = options["path"]
        try:
            with open(path, "rb") as fh:
                codes = read_codes_from_spreadsheet(fh, path)
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")
        except ValidationError as exc:
            raise CommandError(exc.messages[0])

        results = import_promo_codes(codes, points=options["points"])

        self.stdout.write(f"Total codes in file: {results['total']}")
        self.stdout.write(self.style.SUCCESS(f"  added: {results['added']}"))
        self.stdout.write(f"  updated: {results['updated']}")
        self.stdout.write(f"  duplicates: {results['duplicates']}")
        if results["errors"]:
            self.stdout.write(self.style.ERROR(f"  errors: {results['errors']}"))
            for detail in results["error_details"]:
                self.stdout.write(f"    - {detail['code']}: {detail['error']}")
