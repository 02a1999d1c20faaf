"""Milestone domain model."""

from dataclasses import dataclass
from typing import Literal

MilestoneType = Literal["meals_logged", "streak", "adherence", "special"]


@dataclass(frozen=True)
class Milestone:
    """One-shot celebratory event."""

    id: str
    title: str
    description: str
    emoji: str
    type: MilestoneType
