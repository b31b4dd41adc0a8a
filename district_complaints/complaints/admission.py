"""Per-submitter cooldown between accepted complaint submissions."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .domain import AdmissionWindow
from .locks import KeyedLock

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = timedelta(hours=24)

# Shared by every AdmissionControl in the process so that two requests for the
# same contact wait on the same mutex whichever coordinator serves them.
CONTACT_LOCKS = KeyedLock()


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    remaining: timedelta = timedelta(0)
    last_submission_at: Optional[datetime] = None


ALLOWED = AdmissionDecision(allowed=True)


def normalize_contact(contact) -> str:
    return (contact or "").strip()


class AdmissionControl:
    """Accept/deny gate keyed on the submitter's contact.

    ``check_and_reserve`` only reads; the window moves forward when the
    caller reports a finished submission through ``commit``. Callers that
    need the read and the commit to be atomic wrap both in ``serialized``.
    ``commit`` is also a compare-and-set against the window that was read,
    so a writer in another process cannot slip a second acceptance in.
    """

    def __init__(self, store, cooldown=DEFAULT_COOLDOWN, locks=None):
        if cooldown <= timedelta(0):
            raise ValueError("cooldown must be a positive duration")
        self.store = store
        self.cooldown = cooldown
        self._locks = CONTACT_LOCKS if locks is None else locks

    def serialized(self, contact):
        return self._locks.hold(normalize_contact(contact))

    def check_and_reserve(self, contact, now, for_update=False) -> AdmissionDecision:
        window = self.store.load_admission_window(normalize_contact(contact), for_update=for_update)
        if window is None:
            return ALLOWED
        elapsed = now - window.last_submission_at
        if elapsed >= self.cooldown:
            return AdmissionDecision(allowed=True, last_submission_at=window.last_submission_at)
        remaining = self.cooldown - elapsed
        logger.info("Submission from %s denied, cooldown has %s left", contact, remaining)
        return AdmissionDecision(allowed=False, remaining=remaining, last_submission_at=window.last_submission_at)

    def commit(self, contact, now, previous=None) -> Optional[AdmissionWindow]:
        """Move the window to ``now``.

        ``previous`` is the ``last_submission_at`` seen by the check (``None``
        when there was no window). Returns ``None`` without writing when the
        stored window no longer matches it.
        """
        window = AdmissionWindow(contact=normalize_contact(contact), last_submission_at=now)
        if not self.store.save_admission_window(window, previous_at=previous):
            logger.warning("Admission window for %s changed under a submission", window.contact)
            return None
        return window
