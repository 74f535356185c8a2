from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


def default_promo_points():
    return settings.PROMO_DEFAULT_POINTS


def normalize_code(code) -> str:
    return str(code).strip().upper()


class PromoCode(models.Model):
    code = models.CharField(max_length=64, unique=True)
    points = models.PositiveIntegerField(default=default_promo_points)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "id")

    def save(self, *args, **kwargs):
        self.code = normalize_code(self.code)
        super().save(*args, **kwargs)

    @property
    def redeemed_by(self):
        """The redemption record, or None while the code is unused."""
        try:
            return self.redemption
        except PromoCodeRedemption.DoesNotExist:
            return None

    @property
    def is_redeemed(self) -> bool:
        return self.redeemed_by is not None

    def __str__(self):
        return f"{self.code}({self.points}p)"


class PromoCodeRedemption(models.Model):
    # 코드 삭제(purge) 후에도 사용자 적립 이력은 남긴다
    promo_code = models.OneToOneField(
        PromoCode,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="redemption",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="redeemed_promo_codes",
    )
    code = models.CharField(max_length=64)
    points = models.PositiveIntegerField()
    shop_name = models.CharField(max_length=255)
    redeemed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("-redeemed_at", "-id")

    def __str__(self):
        return f"{self.code} by {self.user_id} @ {self.shop_name}"


class FlashPromo(models.Model):
    name = models.CharField(max_length=120)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    max_participants = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    current_participants = models.PositiveIntegerField(default=0)
    multiplier = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    prize = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-is_active", "-start_date")
        indexes = [
            models.Index(fields=["is_active", "start_date", "end_date"], name="flash_active_window_idx"),
        ]

    def is_currently_active(self, now=None) -> bool:
        now = now or timezone.now()
        return self.is_active and self.start_date <= now <= self.end_date

    @property
    def has_available_slots(self) -> bool:
        return self.current_participants < self.max_participants

    def __str__(self):
        return f"{self.name} ({self.current_participants}/{self.max_participants})"


class FlashPromoParticipant(models.Model):
    flash_promo = models.ForeignKey(
        FlashPromo,
        on_delete=models.CASCADE,
        related_name="participants",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="flash_promo_entries",
    )
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("joined_at", "id")
        constraints = [
            models.UniqueConstraint(
                fields=["flash_promo", "user"], name="uq_flash_promo_participant"
            )
        ]

    def __str__(self):
        return f"FlashPromo:{self.flash_promo_id} user={self.user_id}"
