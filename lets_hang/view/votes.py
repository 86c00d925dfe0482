"""Single-shot vote lock per client session.

The lock lives only in this process's memory. Restarting the server, or a
client dropping its cookie, clears it. The store itself never refuses a vote.
"""
import time
from collections import OrderedDict
from uuid import UUID


class VoteLedger:
    """Remember which suggestions each client has voted on.

    Bounded like ``ViewStateStore``: a client's entry expires after ``ttl``
    seconds without use, and the least recently used client is dropped once
    more than ``maxsize`` are tracked.
    """

    def __init__(self, maxsize: int = 1024, ttl: int = 60 * 60 * 24) -> None:
        self.maxsize = maxsize
        self.ttl = ttl
        self._voted: "OrderedDict[str, tuple[set[UUID], float]]" = OrderedDict()

    def _evict_expired(self) -> None:
        now = time.time()
        expired = [cid for cid, (_, ts) in self._voted.items() if now - ts > self.ttl]
        for cid in expired:
            self._voted.pop(cid, None)

    def _touch(self, client_id: str) -> set[UUID]:
        """Return the client's voted set, creating it, and mark it recently used."""
        self._evict_expired()
        voted = self._voted[client_id][0] if client_id in self._voted else set()
        self._voted[client_id] = (voted, time.time())
        self._voted.move_to_end(client_id)
        if len(self._voted) > self.maxsize:
            self._voted.popitem(last=False)
        return voted

    def _peek(self, client_id: str) -> set[UUID]:
        self._evict_expired()
        item = self._voted.get(client_id)
        return item[0] if item else set()

    def has_voted(self, client_id: str, suggestion_id: UUID) -> bool:
        return suggestion_id in self._peek(client_id)

    def try_lock(self, client_id: str, suggestion_id: UUID) -> bool:
        """Claim the client's one vote on a suggestion. False if already used."""
        voted = self._touch(client_id)
        if suggestion_id in voted:
            return False
        voted.add(suggestion_id)
        return True

    def release(self, client_id: str, suggestion_id: UUID) -> None:
        """Give the vote back, for when the store write did not happen."""
        self._peek(client_id).discard(suggestion_id)

    def voted_by(self, client_id: str) -> set[UUID]:
        return set(self._peek(client_id))

    def clear(self) -> None:
        self._voted.clear()

    def __len__(self) -> int:
        return len(self._voted)
