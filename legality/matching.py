"""
Encounter Legality - Match evaluator
Exact/partial classification of a candidate entity against one template.

Which met data survives a transfer between formats is centralised in
get_transfer_rules() so the gates below stay format-agnostic.
"""

from dataclasses import dataclass
from enum import IntEnum

from .constants import LOCATION_NONE, LOCATION_NONE_8B, EntityContext
from .criteria import EvoCriteria
from .entity import Entity
from .forms import DEFAULT_FORM_INFO, FormChangeQuery
from .templates import EncounterTemplate


class MatchRating(IntEnum):
    """Higher is better."""

    NO_MATCH = 0
    PARTIAL_MATCH = 1
    EXACT_MATCH = 2


@dataclass(frozen=True)
class TransferRules:
    """What an entity from `origin` still carries while stored in `current`."""

    met_location_retained: bool
    met_level_retained: bool
    has_egg_location: bool
    egg_location_none: int


def get_transfer_rules(origin: EntityContext, current: EntityContext) -> TransferRules:
    origin_gen = EntityContext(origin).generation
    current_gen = EntityContext(current).generation

    # Pal Park / Virtual Console transfers overwrite met location and level
    retained = not (origin_gen <= 3 and current_gen != origin_gen)

    return TransferRules(
        met_location_retained=retained,
        met_level_retained=retained,
        has_egg_location=current_gen >= 4,
        egg_location_none=LOCATION_NONE_8B if current == EntityContext.GEN8b else LOCATION_NONE,
    )


# =============================================================================
# GATES
# =============================================================================


def is_match_egg_location(template: EncounterTemplate, pk: Entity, rules: TransferRules) -> bool:
    if not rules.has_egg_location:
        return True
    expect = template.egg_location if template.egg_encounter else rules.egg_location_none
    return pk.egg_location == expect


def is_match_location(template: EncounterTemplate, pk: Entity, rules: TransferRules) -> bool:
    if not rules.met_location_retained:
        return True  # transfer location is verified elsewhere
    return pk.met_location == template.location


def is_match_level(template: EncounterTemplate, pk: Entity, evo: EvoCriteria,
                   rules: TransferRules) -> bool:
    if not rules.met_level_retained:
        return evo.level_max >= template.level_min
    return template.is_level_within(pk.met_level)


def is_match_trainer_id(template: EncounterTemplate, pk: Entity) -> bool:
    # SID comes from the receiving player and is never fixed
    return template.tid16 is None or pk.tid16 == template.tid16


def is_match_form(template: EncounterTemplate, pk: Entity, evo: EvoCriteria,
                  form_info: FormChangeQuery) -> bool:
    if template.form == evo.form:
        return True
    return form_info.is_form_changeable(template.species, template.form, pk.form,
                                        template.context, pk.context)


def is_match_exact(template: EncounterTemplate, pk: Entity, evo: EvoCriteria,
                   form_info: FormChangeQuery = DEFAULT_FORM_INFO) -> bool:
    rules = get_transfer_rules(template.context, pk.context)
    if not is_match_egg_location(template, pk, rules):
        return False
    if not is_match_location(template, pk, rules):
        return False
    if not is_match_level(template, pk, evo, rules):
        return False
    if not is_match_trainer_id(template, pk):
        return False
    if not is_match_form(template, pk, evo, form_info):
        return False
    return True


def is_match_partial(template: EncounterTemplate, pk: Entity) -> bool:
    """Same encounter, altered in a way the game cannot reproduce."""
    return template.fixed_ball is not None and pk.ball != template.fixed_ball


def evaluate(template: EncounterTemplate, pk: Entity, evo: EvoCriteria,
             form_info: FormChangeQuery = DEFAULT_FORM_INFO) -> MatchRating:
    """Pure predicate: NO_MATCH if any gate fails, else PARTIAL or EXACT."""
    if not is_match_exact(template, pk, evo, form_info):
        return MatchRating.NO_MATCH
    if is_match_partial(template, pk):
        return MatchRating.PARTIAL_MATCH
    return MatchRating.EXACT_MATCH
