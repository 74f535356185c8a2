from django.conf import settings
from django.db import models


class Reward(models.Model):
    DISCOUNTS = "Discounts"
    VOUCHERS = "Vouchers"
    PRODUCTS = "Products"
    TYPES = (
        (DISCOUNTS, "Discounts"),
        (VOUCHERS, "Vouchers"),
        (PRODUCTS, "Products"),
    )

    name = models.CharField(max_length=255, unique=True)
    points_required = models.PositiveIntegerField()
    stock_available = models.PositiveIntegerField(default=0)
    type = models.CharField(max_length=16, choices=TYPES)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("points_required", "id")

    @property
    def in_stock(self) -> bool:
        return self.stock_available > 0

    def __str__(self):
        return f"{self.name}({self.points_required}p, stock={self.stock_available})"


class RewardClaim(models.Model):
    """One row per (user, reward); read as both the user's and the reward's claim list."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reward_claims",
    )
    reward = models.ForeignKey(
        Reward,
        on_delete=models.CASCADE,
        related_name="claims",
    )
    # 리워드 이름/사용자 이름 스냅샷
    reward_name = models.CharField(max_length=255)
    user_name = models.CharField(max_length=255, blank=True, default="")
    claimed_at = models.DateTimeField()

    class Meta:
        ordering = ("-claimed_at", "id")
        constraints = [
            models.UniqueConstraint(fields=["user", "reward"], name="uq_reward_claim_user_reward"),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.reward_name}"
