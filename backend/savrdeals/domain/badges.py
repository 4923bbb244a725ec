"""Badge milestones and coin-based tier progression.

Pure domain logic with no external dependencies. The coin balance is owned by
the database (triggers award coins for posting deals, comments, etc.); this
module only reads it.
"""
import math
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Milestone:
    """A badge unlocked once a user's coin balance reaches required_coins."""

    id: str
    required_coins: int
    name: str
    rarity: str
    description: str
    emoji: str
    icon: str
    color: str
    border_color: str
    glow_color: str


MILESTONES: tuple[Milestone, ...] = (
    Milestone(
        id="bronze-hunter",
        required_coins=10,
        name="Bronze Hunter",
        rarity="Common",
        description="Your journey begins",
        emoji="🥉",
        icon="Award",
        color="from-orange-400 to-orange-600",
        border_color="border-orange-500",
        glow_color="shadow-orange-500/50",
    ),
    Milestone(
        id="silver-spotter",
        required_coins=25,
        name="Silver Spotter",
        rarity="Rare",
        description="Sharp eyes for deals",
        emoji="🥈",
        icon="Star",
        color="from-gray-300 to-gray-500",
        border_color="border-gray-400",
        glow_color="shadow-gray-400/50",
    ),
    Milestone(
        id="gold-master",
        required_coins=50,
        name="Gold Master",
        rarity="Epic",
        description="Elite deal hunter",
        emoji="🥇",
        icon="Trophy",
        color="from-yellow-400 to-yellow-600",
        border_color="border-yellow-500",
        glow_color="shadow-yellow-500/50",
    ),
    Milestone(
        id="diamond-elite",
        required_coins=100,
        name="Diamond Elite",
        rarity="Legendary",
        description="Legendary status achieved",
        emoji="💎",
        icon="Gem",
        color="from-cyan-400 to-blue-600",
        border_color="border-cyan-400",
        glow_color="shadow-cyan-400/50",
    ),
    Milestone(
        id="mythic-champion",
        required_coins=200,
        name="Mythic Champion",
        rarity="Mythic",
        description="Among the greatest",
        emoji="👑",
        icon="Crown",
        color="from-purple-500 to-pink-600",
        border_color="border-purple-500",
        glow_color="shadow-purple-500/50",
    ),
    Milestone(
        id="apex-predator",
        required_coins=500,
        name="Apex Predator",
        rarity="Exclusive",
        description="Top 10 only 🔥",
        emoji="⚡",
        icon="Zap",
        color="from-red-500 via-orange-500 to-yellow-500",
        border_color="border-red-500",
        glow_color="shadow-red-500/50",
    ),
)


@dataclass
class BadgeSummary:
    """Everything the rewards page needs for one coin balance."""

    coins: float
    current: Milestone | None
    next: Milestone | None
    progress: float
    coins_to_next: float | None
    unlocked_ids: list[str] = field(default_factory=list)
    equipped_id: str | None = None


def validate_catalog(catalog: Sequence[Milestone]) -> None:
    """Check the ordering invariant every lookup below relies on.

    Raises:
        ValueError: on duplicate ids, negative thresholds, or thresholds
            that are not strictly increasing
    """
    seen: set[str] = set()
    previous: int | None = None
    for milestone in catalog:
        if milestone.id in seen:
            raise ValueError(f"Duplicate milestone id '{milestone.id}'")
        seen.add(milestone.id)
        if milestone.required_coins < 0:
            raise ValueError(f"Milestone '{milestone.id}' has a negative threshold")
        if previous is not None and milestone.required_coins <= previous:
            raise ValueError(
                f"Milestone '{milestone.id}' threshold {milestone.required_coins} "
                f"is not above {previous}"
            )
        previous = milestone.required_coins


validate_catalog(MILESTONES)


def normalize_coins(coins) -> int | float:
    """Floor bad balances to 0 so badge display never fails on upstream data."""
    if isinstance(coins, bool) or not isinstance(coins, (int, float)):
        return 0
    if isinstance(coins, float) and not math.isfinite(coins):
        return 0
    if coins < 0:
        return 0
    return coins


def _unlocked_count(coins, catalog: Sequence[Milestone]) -> int:
    # catalog is sorted ascending, so thresholds <= coins form a prefix
    thresholds = [m.required_coins for m in catalog]
    return bisect_right(thresholds, normalize_coins(coins))


def get_milestone(badge_id, catalog: Sequence[Milestone] = MILESTONES) -> Milestone | None:
    """Return the milestone with this exact id, or None."""
    for milestone in catalog:
        if milestone.id == badge_id:
            return milestone
    return None


def highest_unlocked(coins, catalog: Sequence[Milestone] = MILESTONES) -> Milestone | None:
    """Return the highest milestone the balance qualifies for (inclusive threshold)."""
    count = _unlocked_count(coins, catalog)
    return catalog[count - 1] if count else None


def unlocked_milestones(coins, catalog: Sequence[Milestone] = MILESTONES) -> list[Milestone]:
    """Every milestone the balance has reached, lowest threshold first."""
    return list(catalog[: _unlocked_count(coins, catalog)])


def is_unlocked(badge_id, coins, catalog: Sequence[Milestone] = MILESTONES) -> bool:
    """True when badge_id is in the catalog and its threshold is reached. Unknown ids are False."""
    milestone = get_milestone(badge_id, catalog)
    if milestone is None:
        return False
    return milestone.required_coins <= normalize_coins(coins)


def next_milestone(coins, catalog: Sequence[Milestone] = MILESTONES) -> Milestone | None:
    """Return the first milestone strictly above the balance, or None at max tier."""
    count = _unlocked_count(coins, catalog)
    return catalog[count] if count < len(catalog) else None


def progress_to_next(coins, catalog: Sequence[Milestone] = MILESTONES) -> float:
    """Percentage (0-100) of the way from the current tier to the next one.

    Returns exactly 100 once the last milestone is unlocked. The value is not
    rounded; callers format it for display.
    """
    coins = normalize_coins(coins)
    target = next_milestone(coins, catalog)
    if target is None:
        return 100.0

    current = highest_unlocked(coins, catalog)
    base = current.required_coins if current else 0
    progress = (coins - base) / (target.required_coins - base) * 100
    return min(100.0, max(0.0, progress))


def summarize_badges(
    coins,
    equipped_badge_id: str | None = None,
    catalog: Sequence[Milestone] = MILESTONES,
) -> BadgeSummary:
    """Build the rewards view for a balance.

    The equipped badge is echoed back only while it is still unlocked at this
    balance; a stale or unknown reference comes back as None.
    """
    coins = normalize_coins(coins)
    target = next_milestone(coins, catalog)
    equipped = equipped_badge_id if is_unlocked(equipped_badge_id, coins, catalog) else None

    return BadgeSummary(
        coins=coins,
        current=highest_unlocked(coins, catalog),
        next=target,
        progress=progress_to_next(coins, catalog),
        coins_to_next=(target.required_coins - coins) if target else None,
        unlocked_ids=[m.id for m in unlocked_milestones(coins, catalog)],
        equipped_id=equipped,
    )
