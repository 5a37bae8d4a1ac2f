"""
Encounter Legality - Conversion pipeline
Builds a complete, self-consistent entity from a template plus the trainer
receiving it. Feeding the result back to the match evaluator with the same
template gives EXACT_MATCH.
"""

import random
from typing import Callable, Optional, Union

from .config import DEFAULT_SECRET_ID, DEFAULT_TRAINER_ID, DEFAULT_TRAINER_NAME
from .constants import Ball, LanguageID
from .correlation import CorrelationEngine, get_correlation_engine
from .criteria import UNRESTRICTED, TraitCriteria
from .entity import Entity, TrainerInfo
from .errors import InvalidTemplateReference
from .matching import get_transfer_rules
from .naming import get_safe_language, resolve_name
from .species import SpeciesTable, calculate_stats, get_exp_for_level
from .templates import EncounterTemplate, TemplateStore

DEFAULT_TRAINER = TrainerInfo(
    ot_name=DEFAULT_TRAINER_NAME,
    tid16=DEFAULT_TRAINER_ID,
    sid16=DEFAULT_SECRET_ID,
    language=LanguageID.ENGLISH,
)

# (species, language, generation) -> default name
SpeciesNameLookup = Callable[[int, int, int], str]


class ConversionPipeline:
    """
    Synthesizes entities from templates held by `store`.

    species_name is the localization lookup for default (un-nicknamed)
    names; it defaults to the species table's bundled English names.
    """

    def __init__(self, store: TemplateStore, species: SpeciesTable,
                 engine: Optional[CorrelationEngine] = None,
                 species_name: Optional[SpeciesNameLookup] = None):
        self.store = store
        self.species = species
        self.engine = engine or get_correlation_engine()
        self.species_name = species_name or species.get_species_name

    def resolve_template(self, template: Union[EncounterTemplate, str]) -> EncounterTemplate:
        if isinstance(template, str):
            found = self.store.get(template)
            if found is None:
                raise InvalidTemplateReference(template)
            return found
        if template not in self.store:
            raise InvalidTemplateReference(template.template_id)
        return template

    def synthesize(self, template: Union[EncounterTemplate, str],
                   trainer: Optional[TrainerInfo] = None,
                   criteria: TraitCriteria = UNRESTRICTED,
                   rng: Optional[random.Random] = None) -> Entity:
        """
        Generate an entity for `template` as received by `trainer`.

        Raises InvalidTemplateReference for templates outside the store and
        PolicyUnsatisfiable when the criteria cannot be met.
        """
        template = self.resolve_template(template)
        trainer = trainer or DEFAULT_TRAINER
        generation = template.generation

        lang = get_safe_language(generation, trainer.language)
        info = self.species.get(template.species, template.form)
        level = template.level_min

        tid16 = template.tid16 if template.tid16 is not None else trainer.tid16
        sid16 = trainer.sid16

        if template.is_fixed_trainer:
            ot_name = resolve_name(template.trainer_names, lang)
        else:
            ot_name = trainer.ot_name

        if template.is_fixed_nickname:
            nickname = resolve_name(template.nicknames, lang)
        else:
            nickname = self.species_name(template.species, lang, generation)

        rules = get_transfer_rules(template.context, template.context)
        egg_location = template.egg_location if template.egg_encounter else rules.egg_location_none

        pk = Entity(
            species=template.species,
            level=level,
            exp=get_exp_for_level(info.growth_rate, level),
            friendship=info.base_friendship,
            met_location=template.location,
            met_level=level,
            egg_location=egg_location,
            version=int(template.origin_version),
            context=template.context,
            ball=int(template.fixed_ball if template.fixed_ball is not None else Ball.POKE),
            fateful=template.fateful,
            language=lang,
            ot_name=ot_name,
            ot_gender=template.ot_gender if template.ot_gender is not None else trainer.gender,
            tid16=tid16,
            sid16=sid16,
            nickname=nickname,
            is_nicknamed=template.is_fixed_nickname,
        )

        result = self.engine.correlate(template, criteria, tid16, sid16, info, rng)
        pk.pid = result.pid
        pk.nature = result.nature
        pk.ability_number = result.ability_number
        pk.gender = result.gender
        pk.ivs = list(result.ivs)
        pk.form = result.form

        if template.has_fixed_moves:
            pk.moves = [m for m in template.moves if m > 0]
        else:
            pk.moves = info.get_level_up_moves(level)

        pk.stats = calculate_stats(pk.species, info.base_stats, pk.ivs, pk.evs, level, pk.nature)
        return pk


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

_pipeline_instance = None


def get_conversion_pipeline() -> ConversionPipeline:
    """Pipeline over the bundled encounter and species tables."""
    global _pipeline_instance
    if _pipeline_instance is None:
        from .encounter_data import build_default_store
        from .species import build_default_species_table
        _pipeline_instance = ConversionPipeline(build_default_store(), build_default_species_table())
    return _pipeline_instance


def synthesize(template, trainer=None, criteria=UNRESTRICTED, rng=None):
    return get_conversion_pipeline().synthesize(template, trainer, criteria, rng)
