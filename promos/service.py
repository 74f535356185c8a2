import csv
import io
import os
import logging
from datetime import datetime
from zipfile import BadZipFile

import pandas as pd
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from utils.db_locks import locked_get
from utils.events import emit_on_commit, user_room

from .models import (
    FlashPromo,
    FlashPromoParticipant,
    PromoCode,
    PromoCodeRedemption,
    normalize_code,
)
from .utils import make_promo_code, redis_lock


User = get_user_model()

logger = logging.getLogger(__name__)


SPREADSHEET_EXTENSIONS = {".xlsx", ".csv"}
GENERATE_MAX_ATTEMPTS = 32


# ---- Daily redemption quota ----

def daily_redemption_limit() -> int:
    return settings.PROMO_DAILY_REDEMPTION_LIMIT


def is_new_redemption_day(last_redemption: datetime | None, now: datetime) -> bool:
    """True when ``last_redemption`` falls on an earlier calendar day (TIME_ZONE)."""
    if last_redemption is None:
        return True
    return timezone.localdate(last_redemption) != timezone.localdate(now)


def remaining_redemptions(user, now: datetime | None = None) -> int:
    now = now or timezone.now()
    if is_new_redemption_day(user.last_redemption_date, now):
        return daily_redemption_limit()
    return user.redemption_count


def check_remaining_redemptions(user_id, now: datetime | None = None) -> dict:
    """Read-only view of today's quota; the reset is persisted on the next redemption."""
    user = User.objects.get(pk=user_id)
    remaining = remaining_redemptions(user, now)
    return {
        "remaining_redemptions": remaining,
        "daily_limit_reached": remaining <= 0,
    }


# ---- Promo code redemption ----

@transaction.atomic
def redeem_promo_code(
    *,
    code: str,
    user_id,
    shop_name: str,
    emitter=None,
    now: datetime | None = None,
) -> dict:
    """Redeem a single-use code for ``user_id`` and credit its points.

    Code, redemption row and user balance are written in one transaction
    with the code and user rows locked, so a code is credited exactly once.
    """
    now = now or timezone.now()
    promo = locked_get(PromoCode.objects, code=normalize_code(code))

    if PromoCodeRedemption.objects.filter(promo_code=promo).exists():
        raise ValidationError("Code already redeemed", code="already_redeemed")

    user = locked_get(User.objects, pk=user_id)

    if is_new_redemption_day(user.last_redemption_date, now):
        user.redemption_count = daily_redemption_limit()

    if user.redemption_count <= 0:
        raise ValidationError("Daily redemption limit reached", code="daily_limit_reached")

    try:
        with transaction.atomic():
            redemption = PromoCodeRedemption.objects.create(
                promo_code=promo,
                user=user,
                code=promo.code,
                points=promo.points,
                shop_name=shop_name,
                redeemed_at=now,
            )
    except IntegrityError:
        raise ValidationError("Code already redeemed", code="already_redeemed")

    user.points += promo.points
    user.redemption_count -= 1
    user.last_redemption_date = now
    user.daily_limit_reached = user.redemption_count <= 0
    user.save(
        update_fields=[
            "points",
            "redemption_count",
            "last_redemption_date",
            "daily_limit_reached",
            "updated_at",
        ]
    )

    logger.info(
        "Promo code redeemed code=%s user=%s shop=%s points=%s remaining=%s",
        promo.code,
        user.id,
        shop_name,
        promo.points,
        user.redemption_count,
    )

    emit_on_commit(
        emitter,
        "pointsUpdate",
        {
            "userId": user.id,
            "newPoints": user.points,
            "pointsAdded": promo.points,
            "actionType": "promoCode",
        },
        room=user_room(user.id),
    )
    emit_on_commit(
        emitter,
        "promoCodeRedeemed",
        {
            "code": promo.code,
            "shopName": shop_name,
            "userId": user.id,
            "timestamp": now,
        },
    )

    return {
        "points": promo.points,
        "user_points": user.points,
        "remaining_redemptions": user.redemption_count,
        "daily_limit_reached": user.daily_limit_reached,
        "promo_code": promo,
        "redemption": redemption,
    }


# ---- Promo code administration ----

def _read_ragged_csv(fileobj) -> pd.DataFrame:
    """Rows may have different widths, so columns are sized to the widest row."""
    raw = fileobj.read()
    text = raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw
    width = max((len(row) for row in csv.reader(io.StringIO(text))), default=0)
    if not width:
        raise pd.errors.EmptyDataError("No columns to parse from file")
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=range(width),
        dtype=str,
        keep_default_na=False,
        engine="python",
    )


def read_codes_from_spreadsheet(fileobj, filename: str) -> list[str]:
    """Every non-empty cell of the first sheet, normalised, duplicates removed."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in SPREADSHEET_EXTENSIONS:
        raise ValidationError("Only Excel (.xlsx) or CSV files are allowed", code="invalid_file")

    try:
        if ext == ".csv":
            frame = _read_ragged_csv(fileobj)
        else:
            frame = pd.read_excel(fileobj, header=None, dtype=str, sheet_name=0)
    except pd.errors.EmptyDataError:
        raise ValidationError("Excel file has no data", code="empty_file")
    except (pd.errors.ParserError, csv.Error, BadZipFile, ValueError) as exc:
        raise ValidationError(f"Could not read spreadsheet: {exc}", code="invalid_file")

    if frame.empty:
        raise ValidationError("Excel file has no data", code="empty_file")

    codes = []
    for value in frame.to_numpy().ravel():
        if value is None or pd.isna(value):
            continue
        code = normalize_code(value)
        if code:
            codes.append(code)

    unique_codes = list(dict.fromkeys(codes))
    if not unique_codes:
        raise ValidationError("No valid promo codes found in file", code="no_codes")
    return unique_codes


def import_promo_codes(codes, points: int | None = None) -> dict:
    points = points or settings.PROMO_DEFAULT_POINTS
    results = {
        "total": len(codes),
        "added": 0,
        "updated": 0,
        "duplicates": 0,
        "errors": 0,
        "error_details": [],
    }

    for code in codes:
        try:
            with transaction.atomic():
                existing = PromoCode.objects.filter(code=code).first()
                if existing is None:
                    PromoCode.objects.create(code=code, points=points)
                    results["added"] += 1
                elif not existing.points:
                    existing.points = points
                    existing.save(update_fields=["points", "updated_at"])
                    results["updated"] += 1
                else:
                    results["duplicates"] += 1
        except (IntegrityError, DatabaseError) as exc:
            results["errors"] += 1
            results["error_details"].append({"code": code, "error": str(exc)})

    logger.info(
        "Promo codes imported total=%s added=%s updated=%s duplicates=%s errors=%s",
        results["total"],
        results["added"],
        results["updated"],
        results["duplicates"],
        results["errors"],
    )
    return results


def generate_promo_codes(
    count: int,
    *,
    points: int | None = None,
    prefix: str = "",
    length: int = 10,
) -> list[str]:
    if count < 1:
        raise ValidationError("count must be at least 1", code="invalid_count")
    points = points or settings.PROMO_DEFAULT_POINTS

    created: list[str] = []
    for _ in range(count):
        for attempt in range(GENERATE_MAX_ATTEMPTS):
            code = make_promo_code(length, prefix=prefix)
            try:
                with transaction.atomic():
                    PromoCode.objects.create(code=code, points=points)
            except IntegrityError:
                continue
            created.append(code)
            break
        else:
            raise ValidationError("could not generate a unique promo code", code="generate_failed")

    logger.info("Generated %s promo codes prefix=%s points=%s", len(created), prefix, points)
    return created


def purge_promo_codes(*, redeemed_only: bool = False) -> int:
    qs = PromoCode.objects.all()
    if redeemed_only:
        qs = qs.filter(redemption__isnull=False)
    deleted, _ = qs.delete()
    logger.info("Purged promo codes count=%s redeemed_only=%s", deleted, redeemed_only)
    return deleted


def list_consumer_redemptions() -> list[PromoCodeRedemption]:
    """Consumer redemptions, newest first, each with ``retailer`` resolved by shop name.

    ``retailer`` is None when no retailer account carries that shop name.
    """
    redemptions = list(
        PromoCodeRedemption.objects.select_related("user")
        .filter(user__user_type=User.CONSUMER)
        .order_by("-redeemed_at", "-id")
    )
    shop_names = {r.shop_name for r in redemptions}
    retailers = {}
    for retailer in User.objects.retailers().filter(shop_name__in=shop_names).order_by("id"):
        # 같은 매장명이 여러 개면 먼저 가입한 계정
        retailers.setdefault(retailer.shop_name, retailer)

    for redemption in redemptions:
        redemption.retailer = retailers.get(redemption.shop_name)
    return redemptions


# ---- Flash promos ----

def list_flash_promos(*, active_only: bool = False, now: datetime | None = None):
    qs = FlashPromo.objects.prefetch_related("participants")
    if active_only:
        now = now or timezone.now()
        qs = qs.filter(is_active=True, start_date__lte=now, end_date__gte=now)
    return qs


def set_flash_promo_status(promo_id, is_active: bool) -> FlashPromo:
    promo = FlashPromo.objects.get(pk=promo_id)
    promo.is_active = is_active
    promo.save(update_fields=["is_active", "updated_at"])
    logger.info("Flash promo status changed id=%s active=%s", promo.id, is_active)
    return promo


def delete_flash_promo(promo_id) -> None:
    promo = FlashPromo.objects.get(pk=promo_id)
    promo.delete()
    logger.info("Flash promo deleted id=%s", promo_id)


def join_flash_promo(promo_id, user_id, *, emitter=None, now: datetime | None = None) -> FlashPromo:
    """Add ``user_id`` to the promo; the Redis lock is held until the join commits."""
    with redis_lock(f"lock:flash-promo:{promo_id}", ttl=5):
        return _join_flash_promo(promo_id, user_id, emitter=emitter, now=now)


@transaction.atomic
def _join_flash_promo(promo_id, user_id, *, emitter=None, now: datetime | None = None) -> FlashPromo:
    now = now or timezone.now()
    promo = locked_get(FlashPromo.objects, pk=promo_id)
    user = User.objects.get(pk=user_id)

    if promo.participants.filter(user=user).exists():
        raise ValidationError(
            "You have already joined this flash promo", code="already_joined"
        )
    if not promo.has_available_slots:
        raise ValidationError("This flash promo is full", code="promo_full")
    if not promo.is_currently_active(now):
        raise ValidationError("This flash promo is not active", code="not_active")

    try:
        with transaction.atomic():
            FlashPromoParticipant.objects.create(flash_promo=promo, user=user, joined_at=now)
    except IntegrityError:
        raise ValidationError(
            "You have already joined this flash promo", code="already_joined"
        )

    promo.current_participants += 1
    if not promo.has_available_slots:
        promo.is_active = False
    promo.save(update_fields=["current_participants", "is_active", "updated_at"])

    logger.info(
        "Flash promo joined id=%s user=%s participants=%s/%s",
        promo.id,
        user.id,
        promo.current_participants,
        promo.max_participants,
    )
    emit_on_commit(
        emitter,
        "flashPromoJoined",
        {
            "flashPromoId": promo.id,
            "userId": user.id,
            "currentParticipants": promo.current_participants,
            "maxParticipants": promo.max_participants,
            "isActive": promo.is_active,
        },
    )
    return promo


@transaction.atomic
def leave_flash_promo(promo_id, user_id, *, emitter=None, now: datetime | None = None) -> FlashPromo:
    now = now or timezone.now()
    promo = locked_get(FlashPromo.objects, pk=promo_id)
    was_full = not promo.has_available_slots

    deleted, _ = promo.participants.filter(user_id=user_id).delete()
    if not deleted:
        raise ValidationError("User is not a participant", code="not_participant")

    promo.current_participants = max(promo.current_participants - 1, 0)
    # 정원 초과로 자동 종료된 프로모는 기간 안이면 다시 연다
    if was_full and not promo.is_active and promo.start_date <= now <= promo.end_date:
        promo.is_active = True
    promo.save(update_fields=["current_participants", "is_active", "updated_at"])
    logger.info(
        "Flash promo left id=%s user=%s participants=%s/%s active=%s",
        promo.id,
        user_id,
        promo.current_participants,
        promo.max_participants,
        promo.is_active,
    )

    emit_on_commit(
        emitter,
        "flashPromoLeft",
        {
            "flashPromoId": promo.id,
            "userId": user_id,
            "currentParticipants": promo.current_participants,
            "isActive": promo.is_active,
        },
    )
    return promo


def deactivate_ended_flash_promos(now: datetime | None = None) -> int:
    now = now or timezone.now()
    n = FlashPromo.objects.filter(is_active=True, end_date__lt=now).update(
        is_active=False, updated_at=now
    )
    if n:
        logger.info("Deactivated %s ended flash promos", n)
    return n
