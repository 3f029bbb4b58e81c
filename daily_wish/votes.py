import logging
from dataclasses import dataclass
from enum import Enum

from .kv_store import KVStore, KVStoreError
from .selection import Identity, VotePercentages, vote_percentages

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "dw:vote"


class Choice(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


BUTTON_CHOICES = {1: Choice.LIKE, 2: Choice.DISLIKE}


def choice_from_button(button_index: int | None) -> Choice | None:
    return BUTTON_CHOICES.get(button_index)


def vote_key(day: str, index: int, field: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}:{day}:{index}:{field}"


@dataclass(frozen=True)
class VoteStats:
    likes: int = 0
    dislikes: int = 0

    @property
    def percentages(self) -> VotePercentages:
        return vote_percentages(self.likes, self.dislikes)

    @property
    def summary(self) -> str:
        pct = self.percentages
        if pct.total_votes == 0:
            return "Be the first to vote!"
        return f"Likes {pct.likes_pct}% • Dislikes {pct.dislikes_pct}% • {pct.total_votes} votes"


class VoteOutcome(str, Enum):
    RECORDED = "recorded"
    ALREADY_VOTED = "already_voted"
    NO_IDENTITY = "no_identity"
    INVALID_CHOICE = "invalid_choice"


def read_stats(store: KVStore, day: str, index: int, namespace: str = DEFAULT_NAMESPACE) -> VoteStats:
    try:
        likes = store.get_int(vote_key(day, index, "likes", namespace))
        dislikes = store.get_int(vote_key(day, index, "dislikes", namespace))
    except KVStoreError as e:
        logger.warning("Could not read vote counts for %s #%d: %s", day, index, e)
        return VoteStats()
    return VoteStats(likes=likes, dislikes=dislikes)


def has_voted(
    store: KVStore, day: str, index: int, identity: Identity | None, namespace: str = DEFAULT_NAMESPACE
) -> bool:
    if identity is None:
        return False
    try:
        return store.sismember(vote_key(day, index, "voters", namespace), str(identity))
    except KVStoreError as e:
        logger.warning("Could not check voter %s for %s #%d: %s", identity, day, index, e)
        return False


def record_vote(
    store: KVStore,
    day: str,
    index: int,
    identity: Identity | None,
    choice: Choice | None,
    namespace: str = DEFAULT_NAMESPACE,
) -> VoteOutcome:
    """
    Count one vote per identity per day per wish.

    The voters-set insert is the gate: the counter only moves when SADD
    reports a new member, so a replayed or concurrent vote is a no-op.
    A failed increment removes the voter again before KVStoreError
    propagates, so the caller can retry.
    """
    if identity is None:
        return VoteOutcome.NO_IDENTITY
    if choice is None:
        return VoteOutcome.INVALID_CHOICE

    voters = vote_key(day, index, "voters", namespace)
    if not store.sadd(voters, str(identity)):
        logger.info("Duplicate vote from %s for %s #%d ignored", identity, day, index)
        return VoteOutcome.ALREADY_VOTED

    counter = "likes" if choice is Choice.LIKE else "dislikes"
    try:
        total = store.incr(vote_key(day, index, counter, namespace))
    except KVStoreError:
        logger.warning("Counting vote from %s for %s #%d failed; releasing voter", identity, day, index)
        store.srem(voters, str(identity))
        raise
    logger.info("Vote %s from %s for %s #%d (now %d)", choice.value, identity, day, index, total)
    return VoteOutcome.RECORDED
