"""
Encounter Legality - Criteria
Evolution criteria (what the candidate could have been when received) and
trait criteria (what the caller wants a synthesized entity to look like).
"""

import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .constants import NATURE_COUNT, Gender, ShinyPreference


@dataclass(frozen=True)
class EvoCriteria:
    """One stage of a candidate's lineage at the time it was received."""

    species: int
    form: int = 0
    level_min: int = 1
    level_max: int = 100


@dataclass(frozen=True)
class TraitCriteria:
    """Desired output traits. None leaves the choice to the correlation engine."""

    gender: Optional[int] = None
    nature: Optional[int] = None
    ability: Optional[int] = None  # ability number: 1, 2 or 4 (hidden)
    shiny: ShinyPreference = ShinyPreference.ANY
    ivs: Optional[Tuple[int, ...]] = None  # only honored by uncorrelated algorithms

    def get_nature(self, rng: random.Random) -> int:
        if self.nature is None:
            return rng.randrange(NATURE_COUNT)
        return self.nature

    def get_gender(self, fixed_gender: Optional[int], gender_ratio: int,
                   rng: random.Random) -> int:
        """Requested gender, the species' only gender, or a ratio-weighted pick."""
        if fixed_gender is not None:
            return fixed_gender
        if self.gender is not None:
            return self.gender
        return Gender.FEMALE if rng.randrange(256) < gender_ratio else Gender.MALE

    def get_ability(self, allowed: Sequence[int], rng: random.Random) -> int:
        if self.ability is not None:
            return self.ability
        return rng.choice(list(allowed))


UNRESTRICTED = TraitCriteria()


def get_default_evos(species: int, form: int, level: int) -> Tuple[EvoCriteria, ...]:
    """Single-stage lineage covering every level up to the current one."""
    return (EvoCriteria(species=species, form=form, level_min=1, level_max=level),)
