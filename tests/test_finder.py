"""Tests for the encounter finder."""

from dataclasses import replace

import pytest

from legality.constants import Ball, GameVersion
from legality.criteria import EvoCriteria
from legality.entity import Entity
from legality.errors import MalformedCandidate
from legality.finder import EncounterFinder
from legality.matching import MatchRating
from legality.templates import TemplateStore


def test_only_the_matching_unown_letter(pipeline, finder, trainer):
    pk = pipeline.synthesize("frlg-unown-9", trainer)
    results = finder.find_matches(pk)
    assert [m.template.template_id for m in results] == ["frlg-unown-9"]


def test_trainer_name_mismatch_downgrades_to_partial(pipeline, finder, trainer):
    pk = pipeline.synthesize("e-trade-horsea", trainer)
    pk.ot_name = "SKY"
    best = finder.find_best(pk)
    assert best.rating == MatchRating.PARTIAL_MATCH
    assert not best.trainer_ok
    assert best.nickname_ok


def test_nickname_mismatch_downgrades_to_partial(pipeline, finder, trainer):
    pk = pipeline.synthesize("e-trade-horsea", trainer)
    pk.nickname = "HORSEA"
    best = finder.find_best(pk)
    assert best.rating == MatchRating.PARTIAL_MATCH
    assert not best.nickname_ok


def test_exact_sorted_before_partial(store, species, engine, pipeline, trainer):
    pk = pipeline.synthesize("e-event-lugia", trainer)
    # A second Lugia template at the same spot, but with a fixed ball the
    # candidate does not carry
    partial = replace(store.get("e-event-lugia"), template_id="e-event-lugia-ball",
                      fixed_ball=Ball.MASTER)
    finder = EncounterFinder(TemplateStore([partial, store.get("e-event-lugia")]), species, engine)

    results = finder.find_matches(pk)
    assert [m.rating for m in results] == [MatchRating.EXACT_MATCH, MatchRating.PARTIAL_MATCH]
    assert results[0].template.template_id == "e-event-lugia"


def test_evolved_candidate_matches_through_lineage(pipeline, finder, trainer):
    pk = pipeline.synthesize("e-trade-seedot", trainer)
    pk.species = 274  # Nuzleaf
    pk.level = 20
    assert finder.find_best(pk) is None

    evos = (EvoCriteria(274, 0, 14, 20), EvoCriteria(273, 0, 4, 13))
    best = finder.find_best(pk, evos)
    assert best is not None
    assert best.template.template_id == "e-trade-seedot"
    assert best.evo.species == 273


def test_unreachable_pid_is_excluded(pipeline, finder, trainer):
    pk = pipeline.synthesize("e-static-rayquaza", trainer)
    pk.ivs = [(iv + 1) % 32 for iv in pk.ivs]
    assert finder.find_matches(pk) == []


def test_origin_generation_from_version(finder):
    assert finder.get_origin_generation(Entity(species=1, version=GameVersion.CXD)) == 3
    assert finder.get_origin_generation(Entity(species=1, version=GameVersion.SS)) == 4
    assert finder.get_origin_generation(Entity(species=1, version=0)) == 3


def test_malformed_candidate_is_rejected(finder):
    with pytest.raises(MalformedCandidate) as excinfo:
        finder.find_matches(Entity(species=384, level=70, nature=30))
    assert excinfo.value.field == "nature"
