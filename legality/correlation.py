"""
Encounter Legality - Correlation engine
Derives (PID, nature, ability, gender, IVs, form) tuples for a template under
its historical RNG scheme, and checks whether an observed tuple could have
come out of that scheme.

Generation is constrained rejection sampling over the algorithm's seed
domain, bounded by config.MAX_CORRELATION_ATTEMPTS.
"""

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from . import config
from .constants import (
    NATURE_COUNT,
    CorrelationType,
    Gender,
    ShinyPolicy,
    ShinyPreference,
)
from .criteria import UNRESTRICTED, TraitCriteria
from .entity import Entity, get_shiny_threshold, get_shiny_xor
from .errors import PolicyUnsatisfiable
from .forms import get_pid_form, is_form_locked
from .rng import LCRNG, XDRNG, ivs_from_words
from .species import SpeciesInfo
from .templates import EncounterTemplate

# =============================================================================
# FRAME LAYOUTS
# =============================================================================

# Output positions of each value in the RNG frame that follows the origin
# seed: (pid_low, pid_high, iv1, iv2, ability) - ability None when not drawn
FRAME_LAYOUTS = {
    CorrelationType.METHOD_1: (0, 1, 2, 3, None),
    CorrelationType.METHOD_2: (0, 1, 3, 4, None),
    CorrelationType.METHOD_4: (0, 1, 2, 4, None),
    CorrelationType.METHOD_1_UNOWN: (1, 0, 2, 3, None),
    CorrelationType.CXD: (4, 3, 0, 1, 2),
}


def get_rng(correlation: CorrelationType):
    return XDRNG if correlation is CorrelationType.CXD else LCRNG


@dataclass(frozen=True)
class Frame:
    """Values produced by one origin seed."""

    seed: int
    pid: int
    ivs: Tuple[int, ...]
    ability_bit: Optional[int]


def generate_frame(correlation: CorrelationType, seed: int) -> Frame:
    low_at, high_at, iv1_at, iv2_at, ability_at = FRAME_LAYOUTS[correlation]
    count = max(p for p in (low_at, high_at, iv1_at, iv2_at, ability_at) if p is not None) + 1
    out = get_rng(correlation).outputs(seed, count)

    pid = (out[high_at] << 16) | out[low_at]
    ivs = tuple(ivs_from_words(out[iv1_at], out[iv2_at]))
    ability_bit = out[ability_at] & 1 if ability_at is not None else None
    return Frame(seed, pid, ivs, ability_bit)


def find_origin_seeds(correlation: CorrelationType, pid: int) -> Iterator[int]:
    """Every origin seed whose frame yields `pid` (IVs unchecked)."""
    low_at, high_at = FRAME_LAYOUTS[correlation][:2]
    first_at = min(low_at, high_at)
    halves = {low_at: pid & 0xFFFF, high_at: pid >> 16}
    rng = get_rng(correlation)

    for state in rng.seeds_with_output(halves[first_at], halves[first_at + 1]):
        yield rng.reverse(state, first_at + 1)


def find_seed(correlation: CorrelationType, pid: int, ivs: Sequence[int],
              ability_bit: Optional[int] = None) -> Optional[int]:
    """Origin seed producing exactly this PID/IV spread (and CXD ability bit)."""
    ivs = tuple(ivs)
    for seed in find_origin_seeds(correlation, pid):
        frame = generate_frame(correlation, seed)
        if frame.ivs != ivs:
            continue
        if frame.ability_bit is not None and ability_bit is not None:
            if frame.ability_bit != ability_bit:
                continue
        return seed
    return None


def shiny_origin_seeds(correlation: CorrelationType, tid16: int, sid16: int,
                       threshold: int, rng: random.Random,
                       max_sweeps: int) -> Iterator[int]:
    """
    Origin seeds whose PID is shiny for the trainer pair. Each sweep fixes the
    first PID half at random and walks the 65536 states behind it.
    """
    low_at, high_at = FRAME_LAYOUTS[correlation][:2]
    first_at = min(low_at, high_at)
    lcg = get_rng(correlation)
    trainer_xor = tid16 ^ sid16

    for _ in range(max_sweeps):
        upper = rng.getrandbits(16)
        for low in range(0x10000):
            state = (upper << 16) | low
            second = lcg.next(state) >> 16
            if upper ^ second ^ trainer_xor < threshold:
                yield lcg.reverse(state, first_at + 1)


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class CorrelationResult:
    pid: int
    nature: int
    ability_number: int
    gender: int
    ivs: Tuple[int, ...]
    form: int = 0
    seed: Optional[int] = None

    def is_shiny(self, tid16: int, sid16: int, generation: int) -> bool:
        return get_shiny_xor(self.pid, tid16, sid16) < get_shiny_threshold(generation)

    @classmethod
    def from_entity(cls, entity: Entity) -> "CorrelationResult":
        return cls(
            pid=entity.pid,
            nature=entity.nature,
            ability_number=entity.ability_number,
            gender=entity.gender,
            ivs=tuple(entity.ivs),
            form=entity.form,
        )


def derive_ability_number(correlation: CorrelationType, pid: int,
                          ability_bit: Optional[int]) -> int:
    """Non-hidden ability number implied by the draw."""
    if correlation is CorrelationType.CXD:
        return 1 << (ability_bit or 0)
    if correlation is CorrelationType.G5:
        return 1 << ((pid >> 16) & 1)
    return 1 << (pid & 1)


def supports_hidden_ability(correlation: CorrelationType) -> bool:
    return correlation in (CorrelationType.G5, CorrelationType.NONE)


# =============================================================================
# ENGINE
# =============================================================================


class _Plan:
    """Targets resolved from the template policy and the caller's criteria."""

    __slots__ = ("nature", "gender", "ability", "ability_pinned", "shiny",
                 "form", "flip_ability")

    def __init__(self):
        self.nature = None
        self.gender = None
        self.ability = None
        self.ability_pinned = False
        self.shiny = None  # True / False / None (either)
        self.form = None
        self.flip_ability = False


class CorrelationEngine:
    """
    Generates and validates PID/IV correlations.

    max_attempts bounds the draws made for one request and max_shiny_sweeps
    the seed sweeps of a forced-shiny request; rng is the default random
    source (pass a seeded random.Random for reproducible output).
    """

    def __init__(self, max_attempts: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 max_shiny_sweeps: Optional[int] = None):
        self.max_attempts = max_attempts or config.MAX_CORRELATION_ATTEMPTS
        self.max_shiny_sweeps = max_shiny_sweeps or config.MAX_SHINY_SWEEPS
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------ #
    #  Planning                                                           #
    # ------------------------------------------------------------------ #

    def _plan(self, template: EncounterTemplate, criteria: TraitCriteria,
              info: SpeciesInfo, rng: random.Random) -> _Plan:
        """Resolve targets, failing fast on structurally impossible requests."""
        correlation = template.correlation
        plan = _Plan()

        # Shininess
        if template.shiny is ShinyPolicy.NEVER and criteria.shiny is ShinyPreference.SHINY:
            raise PolicyUnsatisfiable(f"{template.template_id}: shiny requested but template is never shiny")
        if template.shiny is ShinyPolicy.ALWAYS and criteria.shiny is ShinyPreference.NOT_SHINY:
            raise PolicyUnsatisfiable(f"{template.template_id}: non-shiny requested but template is always shiny")
        if template.shiny is ShinyPolicy.ALWAYS or criteria.shiny is ShinyPreference.SHINY:
            plan.shiny = True
        elif template.shiny is ShinyPolicy.NEVER or criteria.shiny is ShinyPreference.NOT_SHINY:
            plan.shiny = False

        # Nature
        if criteria.nature is not None:
            if not 0 <= criteria.nature < NATURE_COUNT:
                raise PolicyUnsatisfiable(f"Invalid nature requested: {criteria.nature}")
            plan.nature = criteria.nature

        # Gender
        fixed_gender = info.fixed_gender
        if criteria.gender is not None and fixed_gender is not None and criteria.gender != fixed_gender:
            raise PolicyUnsatisfiable(
                f"{template.template_id}: gender {criteria.gender} impossible for species {template.species}"
            )
        if criteria.gender == Gender.GENDERLESS and not info.is_genderless:
            raise PolicyUnsatisfiable(f"{template.template_id}: species {template.species} is not genderless")
        plan.gender = criteria.gender

        # Ability
        allowed = [a for a in template.ability.allowed
                   if a != 4 or supports_hidden_ability(correlation)]
        if not allowed:
            raise PolicyUnsatisfiable(
                f"{template.template_id}: {correlation.name} cannot produce a hidden ability"
            )
        if criteria.ability is not None:
            if criteria.ability not in allowed:
                raise PolicyUnsatisfiable(
                    f"{template.template_id}: ability {criteria.ability} not permitted ({template.ability.name})"
                )
            plan.ability_pinned = True
        plan.ability = criteria.get_ability(allowed, rng)

        # Form lock
        if is_form_locked(template.species, correlation):
            if not 0 <= template.form < info.form_count:
                raise PolicyUnsatisfiable(f"{template.template_id}: form {template.form} unreachable")
            plan.form = template.form
            # The letter keeps the PID low bit, which is also the ability bit
            locked_ability = 1 << (template.form & 1)
            if locked_ability not in allowed or (plan.ability_pinned and plan.ability != locked_ability):
                raise PolicyUnsatisfiable(
                    f"{template.template_id}: form {template.form} requires ability {locked_ability}"
                )
            # Target slot alternates on rejection when the caller left it open
            plan.flip_ability = not plan.ability_pinned and set(allowed) >= {1, 2}

        return plan

    # ------------------------------------------------------------------ #
    #  Generation                                                         #
    # ------------------------------------------------------------------ #

    def correlate(self, template: EncounterTemplate, criteria: TraitCriteria = UNRESTRICTED,
                  tid16: int = 0, sid16: int = 0, info: Optional[SpeciesInfo] = None,
                  rng: Optional[random.Random] = None) -> CorrelationResult:
        """
        Produce a tuple satisfying the template's shiny policy, ability
        permission and form lock, plus any criteria the caller set.
        Raises PolicyUnsatisfiable when no tuple is found within the ceiling.
        """
        if info is None:
            raise ValueError("Species info is required for correlation")
        rng = rng or self.rng
        plan = self._plan(template, criteria, info, rng)

        if template.correlation in FRAME_LAYOUTS:
            return self._correlate_seeded(template, plan, tid16, sid16, info, rng)
        return self._correlate_random(template, plan, criteria, tid16, sid16, info, rng)

    def _correlate_seeded(self, template, plan, tid16, sid16, info, rng):
        correlation = template.correlation
        threshold = get_shiny_threshold(template.generation)

        if plan.shiny:
            seeds = shiny_origin_seeds(correlation, tid16, sid16, threshold, rng,
                                       max_sweeps=self.max_shiny_sweeps)
        else:
            seeds = (rng.getrandbits(32) for _ in range(self.max_attempts))

        ability = plan.ability
        attempts = 0
        for seed in seeds:
            attempts += 1
            if attempts > self.max_attempts:
                break
            frame = generate_frame(correlation, seed)
            pid = frame.pid

            derived_ability = derive_ability_number(correlation, pid, frame.ability_bit)
            form = get_pid_form(template.species, pid, correlation)
            if (
                (plan.nature is not None and pid % NATURE_COUNT != plan.nature)
                or (plan.gender is not None and info.gender_from_pid(pid) != plan.gender)
                or derived_ability != ability
                or (plan.shiny is not None
                    and (get_shiny_xor(pid, tid16, sid16) < threshold) != plan.shiny)
                or (plan.form is not None and form != plan.form)
            ):
                if plan.flip_ability:
                    ability ^= 3  # 1 <-> 2
                continue

            return CorrelationResult(
                pid=pid,
                nature=pid % NATURE_COUNT,
                ability_number=derived_ability,
                gender=info.gender_from_pid(pid),
                ivs=frame.ivs,
                form=form if form is not None else template.form,
                seed=seed,
            )

        attempts = min(attempts, self.max_attempts)
        print(f"[Correlation] {template.template_id}: no {correlation.name} frame after {attempts} draws")
        raise PolicyUnsatisfiable(
            f"{template.template_id}: no {correlation.name} result within {attempts} attempts",
            attempts=attempts,
        )

    def _correlate_random(self, template, plan, criteria, tid16, sid16, info, rng):
        """G5 and Gen 6+: PID drawn freely, other traits chosen independently."""
        correlation = template.correlation
        threshold = get_shiny_threshold(template.generation)
        ivs = self._get_ivs(template, criteria, rng)
        nature = criteria.get_nature(rng)
        ability = plan.ability

        for _ in range(self.max_attempts):
            pid = rng.getrandbits(32)
            if plan.shiny:
                low = pid & 0xFFFF
                high = low ^ tid16 ^ sid16 ^ rng.randrange(threshold)
                pid = (high << 16) | low

            if plan.shiny is False and get_shiny_xor(pid, tid16, sid16) < threshold:
                continue

            if correlation is CorrelationType.G5:
                if ability != 4 and derive_ability_number(correlation, pid, None) != ability:
                    continue
                gender = info.gender_from_pid(pid)
                if plan.gender is not None and gender != plan.gender:
                    continue
            else:
                gender = criteria.get_gender(info.fixed_gender, info.gender_ratio, rng)

            return CorrelationResult(
                pid=pid,
                nature=nature,
                ability_number=ability,
                gender=gender,
                ivs=ivs,
                form=template.form,
            )

        print(f"[Correlation] {template.template_id}: no {correlation.name} PID after {self.max_attempts} draws")
        raise PolicyUnsatisfiable(
            f"{template.template_id}: no {correlation.name} result within {self.max_attempts} attempts",
            attempts=self.max_attempts,
        )

    @staticmethod
    def _get_ivs(template, criteria, rng) -> Tuple[int, ...]:
        if criteria.ivs is not None:
            ivs = tuple(criteria.ivs)
            if len(ivs) != 6 or any(not 0 <= iv <= 31 for iv in ivs):
                raise PolicyUnsatisfiable(f"Invalid IVs requested: {ivs}")
            if sum(1 for iv in ivs if iv == 31) < template.flawless_ivs:
                raise PolicyUnsatisfiable(
                    f"{template.template_id}: requires {template.flawless_ivs} perfect IVs"
                )
            return ivs

        ivs: List[int] = [rng.randrange(32) for _ in range(6)]
        for index in rng.sample(range(6), template.flawless_ivs):
            ivs[index] = 31
        return tuple(ivs)

    # ------------------------------------------------------------------ #
    #  Validation                                                         #
    # ------------------------------------------------------------------ #

    def is_reachable(self, template: EncounterTemplate, observed: CorrelationResult,
                     tid16: int, sid16: int, info: SpeciesInfo) -> bool:
        """
        True if `observed` is a tuple the template's algorithm can produce.
        No randomness is drawn; RNG-correlated algorithms are checked by
        searching for an origin seed.
        """
        correlation = template.correlation
        pid = observed.pid

        # Ability permission
        if observed.ability_number not in template.ability.allowed:
            return False
        if observed.ability_number == 4 and not supports_hidden_ability(correlation):
            return False

        # Shiny policy
        shiny = observed.is_shiny(tid16, sid16, template.generation)
        if template.shiny is ShinyPolicy.NEVER and shiny:
            return False
        if template.shiny is ShinyPolicy.ALWAYS and not shiny:
            return False

        # Traits the algorithm derives from the PID
        if correlation.nature_from_pid and pid % NATURE_COUNT != observed.nature:
            return False
        if correlation.gender_from_pid and info.gender_from_pid(pid) != observed.gender:
            return False
        if correlation.ability_from_pid and observed.ability_number != 4:
            if derive_ability_number(correlation, pid, None) != observed.ability_number:
                return False

        # Form lock
        form = get_pid_form(template.species, pid, correlation)
        if form is not None and (form != observed.form or form != template.form):
            return False

        if correlation in FRAME_LAYOUTS:
            ability_bit = None
            if correlation is CorrelationType.CXD:
                ability_bit = 1 if observed.ability_number == 2 else 0
            return find_seed(correlation, pid, observed.ivs, ability_bit) is not None

        return sum(1 for iv in observed.ivs if iv == 31) >= template.flawless_ivs


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

_engine_instance = None


def get_correlation_engine() -> CorrelationEngine:
    """Get or create the shared engine instance."""
    global _engine_instance
    if _engine_instance is None:
        _engine_instance = CorrelationEngine()
    return _engine_instance


def correlate(template, criteria=UNRESTRICTED, tid16=0, sid16=0, info=None, rng=None):
    return get_correlation_engine().correlate(template, criteria, tid16, sid16, info, rng)


def is_reachable(template, observed, tid16, sid16, info):
    return get_correlation_engine().is_reachable(template, observed, tid16, sid16, info)
