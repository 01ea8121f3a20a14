"""Django signals for cache invalidation and payment notices."""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from bookings.caching import invalidate_session
from bookings.models import Session, Slot

logger = logging.getLogger(__name__)

# Sent by BookingService after a session is finalized and stored.
# Arguments: session (domain Session), notices (list[PaymentNotice]).
session_finalized = Signal()


@receiver([post_save, post_delete], sender=Session)
def invalidate_session_cache(sender, instance, **kwargs):
    """Invalidate caches when a session is saved or deleted."""
    invalidate_session(str(instance.pk))


@receiver([post_save, post_delete], sender=Slot)
def invalidate_slot_cache(sender, instance, **kwargs):
    """Invalidate caches when a slot is saved or deleted."""
    invalidate_session(str(instance.session_id))


@receiver(session_finalized)
def log_payment_notices(sender, session, notices, **kwargs):
    """Record the payment notices a mailer would send; nothing is delivered."""
    for notice in notices:
        logger.info(
            "Payment notice for session %s: %s <%s> owes %.2f",
            session.id,
            notice.player_name,
            notice.email,
            notice.amount,
        )
