"""
Reaction summaries as seen by one viewer.
"""

from dataclasses import dataclass
from typing import Optional

from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.value_objects.user_id import UserId


@dataclass
class ReactionSummary:
    emoji: str
    count: int = 0
    has_reacted: bool = False


def summarize_reactions(
    reactions: list[Reaction], viewer_id: Optional[UserId]
) -> list[ReactionSummary]:
    """Fold reaction rows into one entry per emoji, in first-seen order."""
    by_emoji: dict[str, ReactionSummary] = {}
    for reaction in reactions:
        summary = by_emoji.setdefault(reaction.emoji, ReactionSummary(reaction.emoji))
        summary.count += 1
        if viewer_id is not None and reaction.user_id == viewer_id:
            summary.has_reacted = True
    return list(by_emoji.values())
