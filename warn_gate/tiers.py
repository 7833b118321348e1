"""Ordered result tiers supplied by the caller."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, order=True)
class Tier:
    """One result level; tiers compare by rank only."""

    rank: int
    name: str = field(compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class TierVocabulary:
    """Closed set of result tiers, least severe first."""

    names: tuple[str, ...]
    ok_name: str
    default_warranted_name: str

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("Result tiers cannot be empty")
        folded = [name.upper() for name in self.names]
        if len(set(folded)) != len(folded):
            raise ValueError(f"Duplicate result tiers: {', '.join(self.names)}")
        # Raises for names outside the vocabulary.
        self.tier(self.ok_name)
        self.tier(self.default_warranted_name)

    @property
    def tiers(self) -> tuple[Tier, ...]:
        return tuple(Tier(rank=rank, name=name) for rank, name in enumerate(self.names))

    @property
    def ok(self) -> Tier:
        return self.tier(self.ok_name)

    @property
    def default_warranted(self) -> Tier:
        return self.tier(self.default_warranted_name)

    def tier(self, name: str) -> Tier:
        """Resolve a tier by name, ignoring case."""
        wanted = name.strip().upper()
        for rank, candidate in enumerate(self.names):
            if candidate.upper() == wanted:
                return Tier(rank=rank, name=candidate)
        choices = ", ".join(self.names)
        raise ValueError(f"Unknown result '{name}'. Expected one of: {choices}")

    def worst(self, tiers: Iterable[Tier]) -> Tier:
        """Return the most severe tier, or the ok tier when there are none."""
        return max(tiers, default=self.ok)

    def to_dict(self) -> dict[str, object]:
        return {
            "order": list(self.names),
            "ok": self.ok_name,
            "default_warranted": self.default_warranted_name,
        }


DEFAULT_TIERS = TierVocabulary(
    names=("SUCCESS", "UNSTABLE", "FAILURE"),
    ok_name="SUCCESS",
    default_warranted_name="UNSTABLE",
)
