"""Tests for synthesizing entities from templates."""

import pytest

from legality.constants import Ball, EntityContext, GameVersion, LanguageID, ShinyPreference
from legality.criteria import EvoCriteria, TraitCriteria
from legality.entity import TrainerInfo, validate_entity
from legality.errors import InvalidTemplateReference, PolicyUnsatisfiable
from legality.matching import MatchRating, evaluate
from legality.templates import EncounterTemplate

ROUND_TRIP_TEMPLATES = [
    "e-trade-seedot",
    "e-trade-meowth",
    "e-static-rayquaza",
    "e-event-mew",
    "frlg-unown-12",
    "xd-trade-elekid",
    "xd-trade-shuckle",
    "hgss-static-lugia",
    "bw-static-reshiram",
    "x-static-xerneas",
    "bdsp-gift-turtwig",
]


@pytest.mark.parametrize("template_id", ROUND_TRIP_TEMPLATES)
def test_round_trip_is_exact(store, pipeline, finder, trainer, template_id):
    template = store.get(template_id)
    pk = pipeline.synthesize(template, trainer)

    validate_entity(pk)
    evo = EvoCriteria(pk.species, pk.form, 1, pk.level)
    assert evaluate(template, pk, evo) == MatchRating.EXACT_MATCH

    best = finder.find_best(pk)
    assert best is not None
    assert best.template is template
    assert best.rating == MatchRating.EXACT_MATCH


def test_fixed_trainer_fields(store, pipeline, trainer):
    pk = pipeline.synthesize("e-trade-seedot", trainer)
    assert pk.ot_name == "KOBE"
    assert pk.nickname == "DOTS"
    assert pk.is_nicknamed
    assert pk.tid16 == 38726
    assert pk.sid16 == trainer.sid16
    assert pk.ball == Ball.POKE
    assert pk.version == GameVersion.E


def test_trainer_fields_from_receiver(pipeline, trainer):
    pk = pipeline.synthesize("e-static-rayquaza", trainer)
    assert pk.ot_name == "MAY"
    assert pk.tid16 == trainer.tid16
    assert pk.sid16 == trainer.sid16
    assert pk.nickname == "RAYQUAZA"
    assert not pk.is_nicknamed
    assert pk.level == 70
    assert pk.met_level == 70
    assert pk.met_location == 87
    assert pk.friendship == 0
    assert pk.exp == 5 * 70 ** 3 // 4
    assert pk.moves == [242, 349, 200, 19]


def test_default_name_case_by_generation(pipeline, trainer):
    assert pipeline.synthesize("bdsp-gift-turtwig", trainer).nickname == "Turtwig"
    assert pipeline.synthesize("hgss-static-lugia", trainer).nickname == "LUGIA"


def test_xd_trade(pipeline, trainer):
    pk = pipeline.synthesize("xd-trade-shuckle", trainer)
    assert pk.version == GameVersion.CXD
    assert pk.ot_name == "HORDEL"
    assert pk.tid16 == 38198
    assert pk.fateful
    assert pk.moves == [110, 35, 111, 156]


def test_unavailable_language_falls_back_to_english(pipeline):
    korean = TrainerInfo("KIM", 1, 2, language=LanguageID.KOREAN)
    pk = pipeline.synthesize("e-trade-plusle", korean)
    assert pk.language == LanguageID.ENGLISH
    assert pk.nickname == "PLUSES"


def test_stats_are_computed(pipeline, trainer):
    pk = pipeline.synthesize("e-event-mew", trainer)
    # Mew: base 100 across the board, no EVs
    assert pk.stats[0] == (200 + pk.ivs[0]) * 30 // 100 + 30 + 10
    assert all(stat > 0 for stat in pk.stats)


def test_criteria_are_applied(pipeline, trainer):
    criteria = TraitCriteria(nature=3, shiny=ShinyPreference.SHINY)
    pk = pipeline.synthesize("e-static-rayquaza", trainer, criteria)
    assert pk.nature == 3
    assert pk.is_shiny


def test_template_outside_store(pipeline, trainer):
    stray = EncounterTemplate(
        template_id="stray",
        species=151,
        level_min=5,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=1,
    )
    with pytest.raises(InvalidTemplateReference) as excinfo:
        pipeline.synthesize(stray, trainer)
    assert excinfo.value.template_id == "stray"

    with pytest.raises(InvalidTemplateReference):
        pipeline.synthesize("no-such-template", trainer)


def test_never_shiny_request(pipeline, trainer):
    with pytest.raises(PolicyUnsatisfiable):
        pipeline.synthesize("bw-static-zekrom", trainer, TraitCriteria(shiny=ShinyPreference.SHINY))
