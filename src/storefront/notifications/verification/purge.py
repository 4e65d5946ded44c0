"""Purge of expired, never-used verification codes."""

from protean import handle
from protean.fields import DateTime
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notifications.verification.verification import MailVerification
from storefront.utils.clock import as_utc, utcnow
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="MailVerification")
class PurgeExpiredVerifications:
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=MailVerification)
class PurgeExpiredVerificationsHandler:
    @handle(PurgeExpiredVerifications)
    def purge_expired(self, command):
        now = as_utc(command.as_of) if command.as_of else utcnow()
        repo = current_domain.repository_for(MailVerification)

        purged = 0
        for verification in repo._dao.query.limit(None).all().items:
            if verification.is_expired(now):
                repo._dao.delete(verification)
                purged += 1

        logger.info("Expired verifications purged", purged_count=purged)
        return purged
