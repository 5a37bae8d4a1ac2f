"""Shared fixtures: bundled tables, seeded engine, default trainer."""

import random

import pytest

from legality.correlation import CorrelationEngine
from legality.encounter_data import build_default_store
from legality.entity import TrainerInfo
from legality.finder import EncounterFinder
from legality.pipeline import ConversionPipeline
from legality.species import build_default_species_table


@pytest.fixture(scope="session")
def store():
    return build_default_store()


@pytest.fixture(scope="session")
def species():
    return build_default_species_table()


@pytest.fixture
def rng():
    return random.Random(20240601)


@pytest.fixture
def engine(rng):
    return CorrelationEngine(rng=rng)


@pytest.fixture
def pipeline(store, species, engine):
    return ConversionPipeline(store, species, engine)


@pytest.fixture
def finder(store, species, engine):
    return EncounterFinder(store, species, engine)


@pytest.fixture
def trainer():
    return TrainerInfo(ot_name="MAY", tid16=12345, sid16=54321)
