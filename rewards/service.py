import logging
from datetime import datetime

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from utils.db_locks import locked_get
from utils.events import emit_on_commit, user_room

from .models import Reward, RewardClaim


User = get_user_model()

logger = logging.getLogger(__name__)


def list_rewards():
    return Reward.objects.all()


def format_redemption_date(value: datetime) -> str:
    """US short date (M/D/YYYY) in the local time zone."""
    d = timezone.localdate(value)
    return f"{d.month}/{d.day}/{d.year}"


def create_reward(*, name, points_required, reward_type, stock_available=0, emitter=None) -> Reward:
    name = name.strip()
    if Reward.objects.filter(name=name).exists():
        raise ValidationError(
            "A reward with this name already exists. Please choose a different name.",
            code="duplicate_name",
        )
    try:
        with transaction.atomic():
            reward = Reward.objects.create(
                name=name,
                points_required=points_required,
                stock_available=stock_available or 0,
                type=reward_type,
            )
    except IntegrityError:
        raise ValidationError(
            "A reward with this name already exists. Please choose a different name.",
            code="duplicate_name",
        )

    logger.info("Reward created id=%s name=%s", reward.id, reward.name)
    emit_on_commit(
        emitter,
        "rewardCreated",
        {
            "reward": {
                "id": reward.id,
                "name": reward.name,
                "pointsRequired": reward.points_required,
                "stockAvailable": reward.stock_available,
                "type": reward.type,
            },
            "message": "New reward has been added!",
            "timestamp": timezone.now(),
        },
    )
    return reward


def delete_reward(reward_id, *, emitter=None) -> None:
    reward = Reward.objects.get(pk=reward_id)
    name = reward.name
    reward.delete()
    logger.info("Reward deleted id=%s name=%s", reward_id, name)
    emit_on_commit(
        emitter,
        "rewardDeleted",
        {
            "rewardId": reward_id,
            "rewardName": name,
            "message": "Reward has been deleted",
            "timestamp": timezone.now(),
        },
    )


@transaction.atomic
def redeem_reward(user_id, reward_id, *, emitter=None, now: datetime | None = None) -> dict:
    """Exchange ``points_required`` of the user's points for one unit of stock.

    User and reward rows are locked (always in that order) so the balance
    and stock checks hold until the claim is written.
    """
    now = now or timezone.now()
    user = locked_get(User.objects, pk=user_id)
    reward = locked_get(Reward.objects, pk=reward_id)

    if RewardClaim.objects.filter(user=user, reward=reward).exists():
        raise ValidationError("You have already claimed this reward.", code="already_claimed")
    if user.points < reward.points_required:
        raise ValidationError(
            "Not enough points to redeem this reward.", code="insufficient_points"
        )
    if reward.stock_available <= 0:
        raise ValidationError("This reward is out of stock.", code="out_of_stock")

    try:
        with transaction.atomic():
            RewardClaim.objects.create(
                user=user,
                reward=reward,
                reward_name=reward.name,
                user_name=user.display_name,
                claimed_at=now,
            )
    except IntegrityError:
        raise ValidationError("You have already claimed this reward.", code="already_claimed")

    user.points -= reward.points_required
    user.save(update_fields=["points", "updated_at"])
    reward.stock_available -= 1
    reward.save(update_fields=["stock_available", "updated_at"])

    logger.info(
        "Reward redeemed reward=%s user=%s cost=%s balance=%s stock=%s",
        reward.id,
        user.id,
        reward.points_required,
        user.points,
        reward.stock_available,
    )

    emit_on_commit(
        emitter,
        "rewardRedeemed",
        {
            "userId": user.id,
            "userName": user.name,
            "rewardId": reward.id,
            "rewardName": reward.name,
            "timestamp": now,
            "remainingStock": reward.stock_available,
        },
    )
    emit_on_commit(
        emitter,
        "pointsUpdate",
        {
            "userId": user.id,
            "newPoints": user.points,
            "pointsAdded": -reward.points_required,
            "actionType": "reward",
        },
        room=user_room(user.id),
    )

    return {
        "reward": reward,
        "user_points": user.points,
        "redemption_date": format_redemption_date(now),
    }
