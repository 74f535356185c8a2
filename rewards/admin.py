from django.contrib import admin
from .models import Reward, RewardClaim


class RewardClaimInline(admin.TabularInline):
    model = RewardClaim
    extra = 0
    can_delete = False
    readonly_fields = ("user", "user_name", "claimed_at")
    fields = ("user", "user_name", "claimed_at")


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "points_required", "stock_available", "claim_count")
    list_filter = ("type",)
    search_fields = ("name",)
    inlines = (RewardClaimInline,)

    @admin.display(description="claims")
    def claim_count(self, obj):
        return obj.claims.count()


@admin.register(RewardClaim)
class RewardClaimAdmin(admin.ModelAdmin):
    list_display = ("reward_name", "user", "claimed_at")
    search_fields = ("reward_name", "user__email", "user_name")
    raw_id_fields = ("user", "reward")
