"""Like/dislike toggling for posts and comments.

A record's liked-by and disliked-by sets are stored as one reaction row per
identity, so the two sets can never share a member:

* no row           -> insert one with the requested kind
* row, same kind   -> delete it (un-like / un-dislike)
* row, other kind  -> flip its kind (moves the identity across sets)
"""

from __future__ import annotations

import enum
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core.errors import Conflict
from ideaboard.models import DISLIKE, LIKE, Comment, CommentReaction, Post, PostReaction

logger = logging.getLogger(__name__)

_REACTION_MODELS: dict[type, type] = {
    Post: PostReaction,
    Comment: CommentReaction,
}


class ReactionOutcome(enum.Enum):
    """What a toggle did to the caller's membership."""

    ADDED = "added"
    REMOVED = "removed"
    SWITCHED = "switched"


def toggle_reaction(
    db: Session,
    target: Post | Comment,
    user_id: int,
    kind: int,
) -> ReactionOutcome:
    """Toggle ``user_id``'s membership in the ``kind`` set of ``target`` and commit.

    Raises:
        ValueError: If ``kind`` is neither LIKE nor DISLIKE.
        Conflict: If a concurrent request by the same user inserted a row first.
    """
    if kind not in (LIKE, DISLIKE):
        raise ValueError(f"Unknown reaction kind: {kind!r}")

    # Re-read the membership rows so the decision is based on committed state.
    db.refresh(target, ["reactions"])
    existing = next((row for row in target.reactions if row.user_id == user_id), None)

    if existing is None:
        target.reactions.append(_REACTION_MODELS[type(target)](user_id=user_id, kind=kind))
        outcome = ReactionOutcome.ADDED
    elif existing.kind == kind:
        target.reactions.remove(existing)
        outcome = ReactionOutcome.REMOVED
    else:
        existing.kind = kind
        outcome = ReactionOutcome.SWITCHED

    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        logger.warning(
            "Concurrent reaction on %s %s by user %s", type(target).__name__, target.id, user_id
        )
        raise Conflict("Reaction was changed by another request, please retry") from err

    db.refresh(target)
    return outcome


def reaction_message(noun: str, kind: int, outcome: ReactionOutcome) -> str:
    """Build the acknowledgement text, e.g. ``Post liked`` or ``Comment undisliked``."""
    verb = "liked" if kind == LIKE else "disliked"
    if outcome is ReactionOutcome.REMOVED:
        verb = "un" + verb
    return f"{noun} {verb}"
