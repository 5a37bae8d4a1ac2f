"""
Encounter Legality Package

Matches decoded creature records against historical encounter templates and
synthesizes new records that are consistent with a chosen template.

Usage:
    from legality import build_default_store, build_default_species_table
    from legality import ConversionPipeline, EncounterFinder, TrainerInfo

    store = build_default_store()
    species = build_default_species_table()
    pipeline = ConversionPipeline(store, species)
    pk = pipeline.synthesize("e-trade-seedot", TrainerInfo("MAY", 12345, 54321))

    finder = EncounterFinder(store, species)
    print(finder.find_best(pk).rating.name)
"""

# Version (defined first: the logging module reads it on import)
__version__ = "1.0.0"

# Constants (commonly used)
from .constants import (
    AbilityPermission,
    Ball,
    CorrelationType,
    EncounterKind,
    EntityContext,
    GameVersion,
    Gender,
    LanguageID,
    ShinyPolicy,
    ShinyPreference,
    NATURE_NAMES,
)

# Errors
from .errors import (
    LegalityError,
    PolicyUnsatisfiable,
    InvalidTemplateReference,
    MalformedCandidate,
)

# Data model
from .entity import Entity, TrainerInfo, validate_entity
from .criteria import EvoCriteria, TraitCriteria, UNRESTRICTED
from .templates import EncounterTemplate, TemplateStore
from .species import SpeciesInfo, SpeciesTable, build_default_species_table
from .encounter_data import build_default_store

# Core
from .naming import resolve_name, matches, get_safe_language
from .forms import FormInfo, FormChangeQuery
from .correlation import CorrelationEngine, CorrelationResult, correlate, is_reachable
from .matching import MatchRating, evaluate
from .pipeline import ConversionPipeline

# Finder / bulk
from .finder import EncounterFinder, EncounterMatch, find_matches, find_best
from .scan import scan_candidates, synthesize_batch, SynthesisRequest, SynthesisOutcome
from .search import SearchSettings, SearchComparison, CloneDetectionMethod

__all__ = [
    'AbilityPermission',
    'Ball',
    'CorrelationType',
    'EncounterKind',
    'EntityContext',
    'GameVersion',
    'Gender',
    'LanguageID',
    'ShinyPolicy',
    'ShinyPreference',
    'NATURE_NAMES',
    'LegalityError',
    'PolicyUnsatisfiable',
    'InvalidTemplateReference',
    'MalformedCandidate',
    'Entity',
    'TrainerInfo',
    'validate_entity',
    'EvoCriteria',
    'TraitCriteria',
    'UNRESTRICTED',
    'EncounterTemplate',
    'TemplateStore',
    'SpeciesInfo',
    'SpeciesTable',
    'build_default_species_table',
    'build_default_store',
    'resolve_name',
    'matches',
    'get_safe_language',
    'FormInfo',
    'FormChangeQuery',
    'CorrelationEngine',
    'CorrelationResult',
    'correlate',
    'is_reachable',
    'MatchRating',
    'evaluate',
    'ConversionPipeline',
    'EncounterFinder',
    'EncounterMatch',
    'find_matches',
    'find_best',
    'scan_candidates',
    'synthesize_batch',
    'SynthesisRequest',
    'SynthesisOutcome',
    'SearchSettings',
    'SearchComparison',
    'CloneDetectionMethod',
]
