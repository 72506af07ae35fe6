"""In-memory registry of wizard sessions.

Sessions are independent and never persisted; a discarded or lost session
simply disappears along with its draft. Open drafts expire after
``idle_ttl`` without access, and the oldest are evicted beyond
``max_sessions``. A submitted wizard leaves the open set at once but stays
readable for ``submitted_ttl``, so a retried submit returns the same
property instead of creating another.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from listings.models import ErrorCode, ListingError, SubmissionStatus
from listings.utils.logging import get_logger, log_listing_operation

from .auth_session import AuthSession
from .dynamodb import DynamoDBService
from .storage import ObjectStorageService
from .submission import SubmissionAdapter
from .wizard import ListingWizard

logger = get_logger(__name__)

DEFAULT_IDLE_TTL = timedelta(hours=24)
DEFAULT_SUBMITTED_TTL = timedelta(minutes=15)
DEFAULT_MAX_SESSIONS = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WizardStore:
    """Creates wizards for signed-in users and looks them up by id."""

    def __init__(
        self,
        db: DynamoDBService,
        storage: ObjectStorageService,
        idle_ttl: timedelta = DEFAULT_IDLE_TTL,
        submitted_ttl: timedelta = DEFAULT_SUBMITTED_TTL,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.db = db
        self.storage = storage
        self.idle_ttl = idle_ttl
        self.submitted_ttl = submitted_ttl
        self.max_sessions = max_sessions
        self._clock = clock
        # Insertion order is least recently used first
        self._wizards: dict[str, ListingWizard] = {}
        self._last_seen: dict[str, datetime] = {}
        self._submitted: dict[str, tuple[ListingWizard, datetime]] = {}

    def __len__(self) -> int:
        """Number of open (not yet submitted) sessions."""
        return len(self._wizards)

    def create(
        self,
        owner_id: str,
        defaults: dict[str, Any] | None = None,
        email: str | None = None,
    ) -> ListingWizard:
        """Open a new wizard owned by ``owner_id``.

        Args:
            owner_id: Signed-in user's ID
            defaults: Initial field values (e.g. unit_preference)
            email: Owner's email, kept on the wizard's session

        Raises:
            ListingError: UNKNOWN_FIELD for an unknown default
        """
        auth = AuthSession.for_user(owner_id, email)
        wizard = ListingWizard(
            submitter=SubmissionAdapter(self.db, auth),
            storage=self.storage,
            auth=auth,
        )
        if defaults:
            wizard.update(**defaults)

        self.prune()
        while len(self._wizards) >= self.max_sessions:
            oldest = next(iter(self._wizards))
            self._drop(oldest, reason="evicted")

        self._touch(wizard)
        return wizard

    def get(self, wizard_id: str, owner_id: str) -> ListingWizard:
        """Look up a wizard for its owner.

        Raises:
            ListingError: WIZARD_NOT_FOUND, or FORBIDDEN for another user's wizard
        """
        self.prune()
        wizard = self._wizards.get(wizard_id)
        if wizard is None and wizard_id in self._submitted:
            wizard = self._submitted[wizard_id][0]
        if wizard is None:
            raise ListingError(ErrorCode.WIZARD_NOT_FOUND, details={"wizard_id": wizard_id})
        if wizard.owner_id != owner_id:
            raise ListingError(ErrorCode.FORBIDDEN, details={"wizard_id": wizard_id})

        if wizard_id in self._wizards:
            self._touch(wizard)
        return wizard

    def complete(self, wizard: ListingWizard) -> None:
        """Close a successfully submitted wizard.

        The wizard stops counting as an open session and is kept only until
        ``submitted_ttl`` has passed. Wizards that have not succeeded are left
        open so their submission can be retried.
        """
        if wizard.status is not SubmissionStatus.SUCCESS:
            return
        if self._wizards.pop(wizard.wizard_id, None) is None:
            return
        self._last_seen.pop(wizard.wizard_id, None)
        self._submitted[wizard.wizard_id] = (wizard, self._clock() + self.submitted_ttl)

    def discard(self, wizard_id: str, owner_id: str) -> None:
        self.get(wizard_id, owner_id)
        self._wizards.pop(wizard_id, None)
        self._last_seen.pop(wizard_id, None)
        self._submitted.pop(wizard_id, None)

    def prune(self) -> int:
        """Drop idle drafts and submitted wizards past retention.

        Returns:
            Number of sessions removed
        """
        now = self._clock()
        idle = [wid for wid, seen in self._last_seen.items() if now - seen >= self.idle_ttl]
        for wizard_id in idle:
            self._drop(wizard_id, reason="expired")

        done = [wid for wid, (_, until) in self._submitted.items() if now >= until]
        for wizard_id in done:
            del self._submitted[wizard_id]

        return len(idle) + len(done)

    def _touch(self, wizard: ListingWizard) -> None:
        self._wizards.pop(wizard.wizard_id, None)
        self._wizards[wizard.wizard_id] = wizard
        self._last_seen[wizard.wizard_id] = self._clock()

    def _drop(self, wizard_id: str, reason: str) -> None:
        wizard = self._wizards.pop(wizard_id)
        self._last_seen.pop(wizard_id, None)
        log_listing_operation(
            logger, "wizard_dropped", wizard_id=wizard_id, user_id=wizard.owner_id, reason=reason
        )
