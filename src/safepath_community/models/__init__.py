"""SQLAlchemy models for the SafePath community service."""

from .discussion import Discussion
from .vote import DiscussionVote

__all__ = ["Discussion", "DiscussionVote"]
