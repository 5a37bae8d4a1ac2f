"""Tests for the entity record, its parsed-dict boundary and validation."""

import pytest

from legality.constants import EntityContext, Gender
from legality.entity import Entity, get_shiny_threshold, is_shiny_pid, validate_entity
from legality.errors import MalformedCandidate
from legality.species import (
    SpeciesTable,
    build_default_species_table,
    calculate_stats,
    get_exp_for_level,
    get_nature_modifiers,
)


def test_parsed_dict_round_trip(pipeline, trainer):
    pk = pipeline.synthesize("e-trade-meowth", trainer)
    data = pk.to_parsed()

    assert data["personality"] == pk.pid
    assert data["ot_id"] == (pk.sid16 << 16) | pk.tid16
    assert data["ivs"]["sp_defense"] == pk.ivs[5]
    assert data["ability_num"] in (0, 1)

    assert Entity.from_parsed(data) == pk


def test_from_parsed_defaults():
    pk = Entity.from_parsed({
        "species": 252,
        "personality": 0x12345678,
        "ot_id": 0x00010002,
        "ivs": {"hp": 31, "attack": 30},
        "moves": [{"id": 33, "pp": 35}, {"id": 0, "pp": 0}],
        "ability_num": 1,
    })
    assert pk.tid16 == 2
    assert pk.sid16 == 1
    assert pk.nature == 0x12345678 % 25
    assert pk.ivs == [31, 30, 0, 0, 0, 0]
    assert pk.moves == [33]
    assert pk.ability_number == 2
    assert pk.context == EntityContext.GEN3


def test_shininess():
    assert get_shiny_threshold(3) == 8
    assert get_shiny_threshold(6) == 16
    # xor of 10 is shiny from Gen 6 only
    pid = (0x000A << 16) | 0x0000
    assert not is_shiny_pid(pid, 0, 0, 5)
    assert is_shiny_pid(pid, 0, 0, 6)
    assert Entity(species=1, pid=pid, context=EntityContext.GEN7).is_shiny


@pytest.mark.parametrize("field, value", [
    ("pid", 1 << 32),
    ("tid16", 70000),
    ("level", 101),
    ("ability_number", 3),
    ("gender", 5),
    ("language", 42),
])
def test_validation_rejects_out_of_range(field, value):
    pk = Entity(species=1, level=5)
    setattr(pk, field, value)
    with pytest.raises(MalformedCandidate) as excinfo:
        validate_entity(pk)
    assert excinfo.value.field == field


def test_iv_range_depends_on_format():
    pk = Entity(species=1, level=5, ivs=[20, 0, 0, 0, 0, 0], context=EntityContext.GEN2)
    with pytest.raises(MalformedCandidate):
        validate_entity(pk)
    pk.context = EntityContext.GEN3
    validate_entity(pk)


def test_experience_curves():
    assert get_exp_for_level("medium_fast", 1) == 0
    assert get_exp_for_level("medium_fast", 100) == 1_000_000
    assert get_exp_for_level("slow", 100) == 1_250_000
    assert get_exp_for_level("fast", 100) == 800_000
    assert get_exp_for_level("medium_slow", 100) == 1_059_860
    assert get_exp_for_level("erratic", 100) == 600_000
    assert get_exp_for_level("fluctuating", 100) == 1_640_000


def test_stats():
    assert get_nature_modifiers(0) == [100] * 5
    # Adamant: +Atk -SpA
    assert get_nature_modifiers(3) == [110, 100, 100, 90, 100]
    assert calculate_stats(292, (1, 90, 45, 40, 30, 30), [31] * 6, [0] * 6, 50, 0)[0] == 1


def test_species_table(species):
    unown = species.get(201, 14)
    assert unown.species == 201
    assert unown.form_count == 28
    assert unown.gender_from_pid(0) == Gender.GENDERLESS
    assert species.get_species_name(387, 2, 8) == "Turtwig"
    with pytest.raises(KeyError):
        species.get(9999)


def test_species_table_from_dict():
    table = build_default_species_table()
    assert 384 in table

    custom = SpeciesTable.from_dict({
        "25": {"name": "Pikachu", "base_stats": [35, 55, 40, 90, 50, 50], "gender_ratio": 127,
               "learnset": [[1, 84], [6, 39]]},
    })
    info = custom.get(25)
    assert info.name == "Pikachu"
    assert info.get_level_up_moves(10) == [84, 39]
    assert info.gender_from_pid(0x00) == Gender.FEMALE
    assert info.gender_from_pid(0xFF) == Gender.MALE


@pytest.mark.parametrize("data, field", [
    ({"species": 384, "format": 99}, "format"),
    ({"personality": 0x12345678}, "species"),
])
def test_from_parsed_rejects_undecodable_records(data, field):
    with pytest.raises(MalformedCandidate) as excinfo:
        Entity.from_parsed(data)
    assert excinfo.value.field == field
