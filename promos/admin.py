from django.contrib import admin
from .models import (
    PromoCode,
    PromoCodeRedemption,
    FlashPromo,
    FlashPromoParticipant,
)


class PromoCodeRedemptionInline(admin.StackedInline):
    model = PromoCodeRedemption
    extra = 0
    can_delete = False
    readonly_fields = ("user", "code", "points", "shop_name", "redeemed_at")


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ("code", "points", "is_redeemed", "created_at")
    search_fields = ("code",)
    inlines = (PromoCodeRedemptionInline,)

    @admin.display(boolean=True, description="redeemed")
    def is_redeemed(self, obj):
        return obj.is_redeemed


@admin.register(PromoCodeRedemption)
class PromoCodeRedemptionAdmin(admin.ModelAdmin):
    list_display = ("code", "user", "shop_name", "points", "redeemed_at")
    list_filter = ("shop_name",)
    search_fields = ("code", "shop_name", "user__email")
    raw_id_fields = ("promo_code", "user")


class FlashPromoParticipantInline(admin.TabularInline):
    model = FlashPromoParticipant
    extra = 0
    raw_id_fields = ("user",)


@admin.register(FlashPromo)
class FlashPromoAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "start_date",
        "end_date",
        "current_participants",
        "max_participants",
        "multiplier",
        "is_active",
    )
    list_filter = ("is_active",)
    search_fields = ("name", "prize")
    inlines = (FlashPromoParticipantInline,)
