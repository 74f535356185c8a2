"""
프로모 코드 사용량 통계를 확인하는 명령어

전체 코드 사용률과 매장(shop)별 사용량을 조회합니다.
"""

from django.core.management.base import BaseCommand
from django.db.models import Count, Sum

from promos.models import PromoCode, PromoCodeRedemption


class Command(BaseCommand):
    help = "Show promo code usage: overall redemption rate and usage per shop."

    def add_arguments(self, parser):
        parser.add_argument(
            "--by-shop",
            action="store_true",
            help="Show redemptions grouped by shop name",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=20,
            help="Number of shops to list with --by-shop (default: 20)",
        )

    def handle(self, *args, **options):
        total_count = PromoCode.objects.count()
        redeemed_count = PromoCode.objects.filter(redemption__isnull=False).count()
        unused_count = total_count - redeemed_count
        points_total = (
            PromoCodeRedemption.objects.aggregate(total=Sum("points"))["total"] or 0
        )

        self.stdout.write(self.style.SUCCESS("\n=== Promo code usage ===\n"))
        self.stdout.write(f"Total codes: {total_count:,}")
        percentage = (redeemed_count / total_count * 100) if total_count > 0 else 0
        self.stdout.write(f"  - redeemed: {redeemed_count:,} ({percentage:.1f}%)")
        self.stdout.write(f"  - unused: {unused_count:,}")
        self.stdout.write(f"Points credited through codes: {points_total:,}")

        if not options["by_shop"]:
            return

        shop_stats = (
            PromoCodeRedemption.objects.values("shop_name")
            .annotate(count=Count("id"), points=Sum("points"))
            .order_by("-count")[: options["limit"]]
        )

        self.stdout.write("\nRedemptions by shop:")
        if not shop_stats:
            self.stdout.write("  (none)")
        for item in shop_stats:
            self.stdout.write(
                f"  - {item['shop_name']}: {item['count']:,} codes, {item['points'] or 0:,} points"
            )
