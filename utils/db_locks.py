from django.db import connections, router
from django.db.transaction import TransactionManagementError
from django.db.utils import NotSupportedError


def _for_update(queryset, alias):
    conn = connections[alias]
    qs = queryset.using(alias)
    if getattr(conn.features, "has_select_for_update", False):
        try:
            qs = qs.select_for_update()
        except (NotSupportedError, TransactionManagementError):
            pass
    return qs


def locked_get(queryset, *, using_alias=None, for_update=True, **filters):
    """Fetch a row with optional select_for_update, falling back gracefully.

    Must be called inside ``transaction.atomic`` for the lock to hold until
    commit. Backends without row locks (SQLite) get a plain read.
    """
    alias = using_alias or router.db_for_write(queryset.model) or "default"
    qs = _for_update(queryset, alias) if for_update else queryset.using(alias)

    try:
        return qs.get(**filters)
    except (NotSupportedError, TransactionManagementError):
        if for_update:
            return queryset.using(alias).get(**filters)
        raise
