import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from utils.db_locks import locked_get
from utils.events import emit_on_commit, user_room

from .models import User


logger = logging.getLogger(__name__)


def top_retailers(limit: int | None = None):
    limit = limit or settings.TOP_RETAILERS_LIMIT
    return User.objects.retailers().order_by("-points", "id")[:limit]


def verified_retailers():
    return User.objects.retailers().filter(verified=True).order_by("shop_name", "id")


@transaction.atomic
def adjust_points(user_id: int, delta: int, *, emitter=None) -> User:
    """Add (delta > 0) or deduct (delta < 0) points under a row lock."""
    user = locked_get(User.objects, pk=user_id)
    if delta < 0 and user.points < -delta:
        raise ValidationError("Insufficient points", code="insufficient_points")

    user.points += delta
    user.save(update_fields=["points", "updated_at"])
    logger.info("Points adjusted user=%s delta=%s balance=%s", user.id, delta, user.points)

    emit_on_commit(
        emitter,
        "pointsUpdate",
        {"userId": user.id, "newPoints": user.points, "pointsAdded": delta},
        room=user_room(user.id),
    )
    return user
