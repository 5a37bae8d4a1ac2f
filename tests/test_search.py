"""Tests for database search filters and clone detection."""

import copy

import pytest

from legality.constants import EntityContext
from legality.search import (
    CloneDetectionMethod,
    SearchComparison,
    SearchSettings,
    get_extra_clones,
    remove_clones,
)


@pytest.fixture
def database(pipeline, trainer):
    rayquaza = pipeline.synthesize("e-static-rayquaza", trainer)
    turtwig = pipeline.synthesize("bdsp-gift-turtwig", trainer)
    clone = copy.deepcopy(rayquaza)
    relearned = copy.deepcopy(rayquaza)
    relearned.moves = [63, 19, 200, 349]
    return [rayquaza, turtwig, clone, relearned]


def test_format_comparator(database):
    settings = SearchSettings(format=4, search_format=SearchComparison.GREATER_EQUAL)
    result = settings.search(database)
    assert [pk.species for pk in result] == [387]

    settings = SearchSettings(format=3, search_format=SearchComparison.EQUAL)
    assert len(settings.search(database)) == 3

    # comparator NONE ignores the value
    assert len(SearchSettings(format=3).search(database)) == 4


def test_level_and_species(database):
    assert len(SearchSettings(level=10, search_level=SearchComparison.LESS_EQUAL).search(database)) == 1
    assert len(SearchSettings(species=384).search(database)) == 3


def test_bdsp_egg_sentinel_is_not_hatched(database):
    assert database[1].context == EntityContext.GEN8b
    assert SearchSettings(egg=True).search(database) == []
    assert len(SearchSettings(egg=False).search(database)) == 4


def test_clone_detection(database):
    assert len(remove_clones(database, CloneDetectionMethod.HASH_DETAILS)) == 3
    assert len(remove_clones(database, CloneDetectionMethod.HASH_PID)) == 2
    assert len(remove_clones(database, CloneDetectionMethod.NONE)) == 4

    extras = get_extra_clones(database, CloneDetectionMethod.HASH_DETAILS)
    assert extras == [database[2]]
    assert extras[0] is database[2]

    settings = SearchSettings(species=384, clones=CloneDetectionMethod.HASH_PID)
    assert settings.search(database) == [database[0]]


def test_legal_filter(database, finder):
    tampered = copy.deepcopy(database[0])
    tampered.ivs = [(iv + 1) % 32 for iv in tampered.ivs]
    entries = database[:2] + [tampered]

    assert SearchSettings(legal=True).search(entries, finder) == database[:2]
    assert SearchSettings(legal=False).search(entries, finder) == [tampered]
