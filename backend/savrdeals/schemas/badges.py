"""Pydantic schemas for badge and rewards API responses."""

from pydantic import BaseModel, Field

from savrdeals.domain.badges import BadgeSummary, Milestone


class MilestoneResponse(BaseModel):
    """One badge from the milestone catalog."""

    id: str = Field(..., description="Stable badge id (e.g., bronze-hunter)")
    required_coins: int = Field(..., ge=0, description="Coin balance that unlocks the badge")
    name: str
    rarity: str
    description: str
    emoji: str
    icon: str = Field(..., description="Icon key understood by the frontend")
    color: str
    border_color: str
    glow_color: str

    @classmethod
    def from_milestone(cls, milestone: Milestone) -> "MilestoneResponse":
        return cls(
            id=milestone.id,
            required_coins=milestone.required_coins,
            name=milestone.name,
            rarity=milestone.rarity,
            description=milestone.description,
            emoji=milestone.emoji,
            icon=milestone.icon,
            color=milestone.color,
            border_color=milestone.border_color,
            glow_color=milestone.glow_color,
        )


class BadgeSummaryResponse(BaseModel):
    """Rewards page payload.

    unlocked_ids defaults to an empty list (never null).
    """

    coins: float = Field(..., ge=0, description="Coin balance after normalization")
    current: MilestoneResponse | None = Field(None, description="Highest unlocked badge")
    next: MilestoneResponse | None = Field(None, description="Next badge to unlock, null at max tier")
    progress: float = Field(..., ge=0, le=100, description="Progress towards next badge (0-100)")
    coins_to_next: float | None = Field(None, description="Coins still needed for the next badge")
    unlocked_ids: list[str] = Field(default_factory=list)
    equipped_id: str | None = Field(None, description="Equipped badge, only if still unlocked")

    @classmethod
    def from_summary(cls, summary: BadgeSummary) -> "BadgeSummaryResponse":
        return cls(
            coins=summary.coins,
            current=MilestoneResponse.from_milestone(summary.current) if summary.current else None,
            next=MilestoneResponse.from_milestone(summary.next) if summary.next else None,
            progress=summary.progress,
            coins_to_next=summary.coins_to_next,
            unlocked_ids=summary.unlocked_ids,
            equipped_id=summary.equipped_id,
        )


class EquipBadgeRequest(BaseModel):
    badge_id: str = Field(..., min_length=1)
