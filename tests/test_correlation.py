"""Tests for PID/IV generation and reachability checks."""

import random

import pytest

from legality.constants import (
    AbilityPermission,
    CorrelationType,
    EntityContext,
    GameVersion,
    ShinyPolicy,
    ShinyPreference,
)
from legality.correlation import (
    CorrelationEngine,
    find_origin_seeds,
    find_seed,
    generate_frame,
)
from legality.criteria import TraitCriteria
from legality.errors import PolicyUnsatisfiable
from legality.forms import get_unown_form_gen3
from legality.templates import EncounterTemplate

TID, SID = 12345, 54321


def _template(**kwargs):
    values = dict(
        template_id="test",
        species=384,
        level_min=70,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=87,
    )
    values.update(kwargs)
    return EncounterTemplate(**values)


@pytest.mark.parametrize("correlation", [
    CorrelationType.METHOD_1,
    CorrelationType.METHOD_2,
    CorrelationType.METHOD_4,
    CorrelationType.METHOD_1_UNOWN,
    CorrelationType.CXD,
])
def test_origin_seed_is_recovered(correlation):
    seed = 0x12345678
    frame = generate_frame(correlation, seed)

    assert seed in list(find_origin_seeds(correlation, frame.pid))

    found = find_seed(correlation, frame.pid, frame.ivs, frame.ability_bit)
    assert found is not None
    assert generate_frame(correlation, found).pid == frame.pid
    assert generate_frame(correlation, found).ivs == frame.ivs


def test_altered_ivs_have_no_seed():
    frame = generate_frame(CorrelationType.METHOD_1, 0x0BADF00D)
    ivs = list(frame.ivs)
    ivs[0] = (ivs[0] + 1) % 32
    assert find_seed(CorrelationType.METHOD_1, frame.pid, ivs) is None


def test_generated_tuple_is_reachable(engine, species):
    template = _template()
    info = species.get(template.species)
    result = engine.correlate(template, tid16=TID, sid16=SID, info=info)

    assert result.nature == result.pid % 25
    assert result.ability_number == 1 << (result.pid & 1)
    assert engine.is_reachable(template, result, TID, SID, info)


def test_nature_inconsistent_with_pid_is_unreachable(engine, species):
    template = _template()
    info = species.get(template.species)
    result = engine.correlate(template, tid16=TID, sid16=SID, info=info)

    altered = type(result)(
        pid=result.pid,
        nature=(result.nature + 1) % 25,
        ability_number=result.ability_number,
        gender=result.gender,
        ivs=result.ivs,
        form=result.form,
    )
    assert not engine.is_reachable(template, altered, TID, SID, info)


def test_pinned_nature_is_honored(engine, species):
    template = _template()
    info = species.get(template.species)
    result = engine.correlate(template, TraitCriteria(nature=13), TID, SID, info)
    assert result.nature == 13
    assert result.pid % 25 == 13


def test_forced_shiny_on_lcrng(engine, species):
    template = _template()
    info = species.get(template.species)
    result = engine.correlate(template, TraitCriteria(shiny=ShinyPreference.SHINY), TID, SID, info)

    assert result.is_shiny(TID, SID, 3)
    assert engine.is_reachable(template, result, TID, SID, info)


def test_never_shiny_template_rejects_shiny_request(engine, species):
    template = _template(species=643, context=EntityContext.GEN5, version=GameVersion.B,
                         correlation=CorrelationType.G5, shiny=ShinyPolicy.NEVER)
    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(template, TraitCriteria(shiny=ShinyPreference.SHINY), TID, SID,
                         species.get(643))


def test_never_shiny_template_output_is_never_shiny(engine, species):
    template = _template(species=643, context=EntityContext.GEN5, version=GameVersion.B,
                         correlation=CorrelationType.G5, shiny=ShinyPolicy.NEVER)
    info = species.get(643)
    for _ in range(200):
        result = engine.correlate(template, tid16=0, sid16=0, info=info)
        assert not result.is_shiny(0, 0, 5)


def test_ability_permission_is_respected(engine, species):
    template = _template(species=716, form=1, context=EntityContext.GEN6, version=GameVersion.X,
                         correlation=CorrelationType.NONE, ability=AbilityPermission.ONLY_FIRST,
                         flawless_ivs=3)
    info = species.get(716)
    for _ in range(20):
        result = engine.correlate(template, tid16=TID, sid16=SID, info=info)
        assert result.ability_number == 1
        assert sum(1 for iv in result.ivs if iv == 31) >= 3

    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(template, TraitCriteria(ability=2), TID, SID, info)


def test_hidden_ability_impossible_on_seeded_algorithm(engine, species):
    template = _template(ability=AbilityPermission.ONLY_HIDDEN)
    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(template, tid16=TID, sid16=SID, info=species.get(384))


def test_hidden_ability_allowed_on_gen5(engine, species):
    template = _template(species=643, context=EntityContext.GEN5, version=GameVersion.B,
                         correlation=CorrelationType.G5, ability=AbilityPermission.ONLY_HIDDEN)
    info = species.get(643)
    result = engine.correlate(template, tid16=TID, sid16=SID, info=info)
    assert result.ability_number == 4
    assert engine.is_reachable(template, result, TID, SID, info)


@pytest.mark.parametrize("form", [0, 7, 26, 27])
def test_unown_form_lock(engine, species, form):
    template = _template(species=201, form=form, level_min=25, version=GameVersion.FR,
                         location=188, correlation=CorrelationType.METHOD_1_UNOWN)
    info = species.get(201)
    result = engine.correlate(template, tid16=TID, sid16=SID, info=info)

    assert result.form == form
    assert get_unown_form_gen3(result.pid) == form
    assert result.ability_number in (1, 2)
    assert result.ability_number == 1 << (result.pid & 1)
    assert engine.is_reachable(template, result, TID, SID, info)


def test_unown_wrong_letter_is_unreachable(engine, species):
    info = species.get(201)
    source = _template(species=201, form=3, correlation=CorrelationType.METHOD_1_UNOWN)
    other = _template(species=201, form=4, correlation=CorrelationType.METHOD_1_UNOWN)
    result = engine.correlate(source, tid16=TID, sid16=SID, info=info)
    assert not engine.is_reachable(other, result, TID, SID, info)


def test_unreachable_form_fails_fast(engine, species):
    template = _template(species=201, form=30, correlation=CorrelationType.METHOD_1_UNOWN)
    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(template, tid16=TID, sid16=SID, info=species.get(201))


def test_unown_letter_fixes_the_ability_slot(engine, species):
    info = species.get(201)
    # Letter 27 keeps an odd PID, so only the second ability is possible
    template = _template(species=201, form=27, level_min=25, version=GameVersion.FR,
                         location=188, correlation=CorrelationType.METHOD_1_UNOWN)
    with pytest.raises(PolicyUnsatisfiable) as excinfo:
        engine.correlate(template, TraitCriteria(ability=1), TID, SID, info)
    assert excinfo.value.attempts == 0

    result = engine.correlate(template, TraitCriteria(ability=2), TID, SID, info)
    assert result.form == 27
    assert result.ability_number == 2

    restricted = _template(species=201, form=27, correlation=CorrelationType.METHOD_1_UNOWN,
                           ability=AbilityPermission.ONLY_FIRST)
    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(restricted, tid16=TID, sid16=SID, info=info)


def test_cxd_ability_bit_is_part_of_the_frame(engine, species):
    template = _template(species=239, level_min=20, version=GameVersion.XD, location=164,
                         correlation=CorrelationType.CXD)
    info = species.get(239)
    result = engine.correlate(template, tid16=TID, sid16=SID, info=info)
    assert engine.is_reachable(template, result, TID, SID, info)

    flipped = type(result)(
        pid=result.pid,
        nature=result.nature,
        ability_number=3 - result.ability_number,
        gender=result.gender,
        ivs=result.ivs,
    )
    assert not engine.is_reachable(template, flipped, TID, SID, info)


def test_iteration_ceiling_reports_attempts(species):
    engine = CorrelationEngine(max_attempts=1, rng=random.Random(7))
    template = _template(species=201, form=11, correlation=CorrelationType.METHOD_1_UNOWN)
    criteria = TraitCriteria(nature=4, ability=2)

    with pytest.raises(PolicyUnsatisfiable) as excinfo:
        engine.correlate(template, criteria, TID, SID, species.get(201))
    assert excinfo.value.attempts == 1


def test_gender_conflict_fails_fast(engine, species):
    # Lugia is genderless
    template = _template(species=249)
    with pytest.raises(PolicyUnsatisfiable):
        engine.correlate(template, TraitCriteria(gender=0), TID, SID, species.get(249))
