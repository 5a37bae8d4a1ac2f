"""
Encounter Legality - Encounter finder
Scans the store partition for a candidate's origin generation and ranks every
template that could have produced it (exact before partial).
"""

import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import get_version_generation
from .correlation import CorrelationEngine, CorrelationResult, get_correlation_engine
from .criteria import EvoCriteria, get_default_evos
from .entity import Entity, validate_entity
from .forms import DEFAULT_FORM_INFO, FormChangeQuery
from .matching import MatchRating, evaluate
from .naming import get_safe_language, matches
from .species import SpeciesTable, build_default_species_table
from .templates import EncounterTemplate, TemplateStore


@dataclass(frozen=True)
class EncounterMatch:
    template: EncounterTemplate
    rating: MatchRating
    evo: EvoCriteria
    trainer_ok: bool = True
    nickname_ok: bool = True

    @property
    def is_exact(self) -> bool:
        return self.rating == MatchRating.EXACT_MATCH


class EncounterFinder:
    """
    Finds the encounter templates a candidate entity could originate from.

    The store and species table are only read, so one finder can serve any
    number of threads.
    """

    def __init__(self, store: TemplateStore, species: SpeciesTable,
                 engine: Optional[CorrelationEngine] = None,
                 form_info: FormChangeQuery = DEFAULT_FORM_INFO):
        self.store = store
        self.species = species
        self.engine = engine or get_correlation_engine()
        self.form_info = form_info

    def get_origin_generation(self, pk: Entity) -> int:
        generation = get_version_generation(pk.version)
        return generation or pk.format

    def find_matches(self, pk: Entity, evos: Optional[Sequence[EvoCriteria]] = None,
                     cancel_event: Optional[threading.Event] = None) -> List[EncounterMatch]:
        """
        All templates `pk` could originate from, best first.

        evos lists the candidate's lineage as it was when received; by default
        only its current species and level are considered. Raises
        MalformedCandidate before any template is looked at.
        """
        validate_entity(pk)
        if evos is None:
            evos = get_default_evos(pk.species, pk.form, pk.level)

        generation = self.get_origin_generation(pk)
        observed = CorrelationResult.from_entity(pk)
        results: List[EncounterMatch] = []

        for template in self.store.get_generation(generation):
            if cancel_event is not None and cancel_event.is_set():
                print(f"[Finder] Cancelled after {len(results)} match(es)")
                break

            match = self._get_match(template, pk, evos, observed)
            if match is not None:
                print(f"[Finder]   {template.long_name}: {match.rating.name}")
                results.append(match)

        results.sort(key=lambda m: m.rating, reverse=True)
        return results

    def find_best(self, pk: Entity, evos: Optional[Sequence[EvoCriteria]] = None) -> Optional[EncounterMatch]:
        results = self.find_matches(pk, evos)
        return results[0] if results else None

    def _get_match(self, template: EncounterTemplate, pk: Entity,
                   evos: Sequence[EvoCriteria],
                   observed: CorrelationResult) -> Optional[EncounterMatch]:
        best = None
        for evo in evos:
            if evo.species != template.species:
                continue
            rating = evaluate(template, pk, evo, self.form_info)
            if best is None or rating > best[0]:
                best = (rating, evo)
        if best is None or best[0] == MatchRating.NO_MATCH:
            return None
        rating, evo = best

        info = self.species.get(template.species, template.form)
        if not self.engine.is_reachable(template, observed, pk.tid16, pk.sid16, info):
            return None

        language = get_safe_language(template.generation, pk.language)
        trainer_ok = matches(template.trainer_names, pk.ot_name, language)
        nickname_ok = matches(template.nicknames, pk.nickname, language)
        if not (trainer_ok and nickname_ok):
            rating = min(rating, MatchRating.PARTIAL_MATCH)

        return EncounterMatch(template, MatchRating(rating), evo, trainer_ok, nickname_ok)


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

_finder_instance = None


def get_encounter_finder() -> EncounterFinder:
    """Finder over the bundled encounter tables."""
    global _finder_instance
    if _finder_instance is None:
        from .encounter_data import build_default_store
        _finder_instance = EncounterFinder(build_default_store(), build_default_species_table())
    return _finder_instance


def find_matches(pk, evos=None, store=None, species=None):
    finder = get_encounter_finder()
    if store is not None or species is not None:
        finder = EncounterFinder(store or finder.store, species or finder.species, finder.engine)
    return finder.find_matches(pk, evos)


def find_best(pk, evos=None, store=None, species=None):
    results = find_matches(pk, evos, store, species)
    return results[0] if results else None
