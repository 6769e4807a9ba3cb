import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Table
from .realtime import ChangeEvent, publish

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

RELATION = Table._meta.db_table


def table_payload(instance):
    return {
        "id": instance.pk,
        "table_number": instance.table_number,
        "capacity": instance.capacity,
        "status": instance.status,
    }


def broadcast_table_change(event):
    try:
        publish(event)
    except Exception as exc:
        logger.error(f"Table change broadcast failed: {exc}", exc_info=True)


# -----------------------------------------------------------------------------
# Notify board subscribers once the write is committed
# -----------------------------------------------------------------------------
@receiver(post_save, sender=Table)
def notify_on_table_save(sender, instance, created, **kwargs):
    event = ChangeEvent(
        operation="INSERT" if created else "UPDATE",
        table=RELATION,
        payload={"new": table_payload(instance), "old": {"id": instance.pk}},
    )
    transaction.on_commit(partial(broadcast_table_change, event))


@receiver(post_delete, sender=Table)
def notify_on_table_delete(sender, instance, **kwargs):
    event = ChangeEvent(
        operation="DELETE",
        table=RELATION,
        payload={"new": {}, "old": {"id": instance.pk}},
    )
    transaction.on_commit(partial(broadcast_table_change, event))
