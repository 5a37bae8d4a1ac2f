"""
Encounter Legality - Database search
Filters over a collection of entities, as used by a storage/database
browser: format, species, level, shininess, egg origin, version, legality
and clone detection.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Hashable, Iterable, List, Optional

from .constants import LOCATION_NONE, LOCATION_NONE_8B
from .entity import Entity
from .errors import MalformedCandidate
from .finder import EncounterFinder, get_encounter_finder


class SearchComparison(IntEnum):
    NONE = 0
    EQUAL = 1
    GREATER_EQUAL = 2
    LESS_EQUAL = 3

    def compare(self, value: int, target: int) -> bool:
        if self is SearchComparison.EQUAL:
            return value == target
        if self is SearchComparison.GREATER_EQUAL:
            return value >= target
        if self is SearchComparison.LESS_EQUAL:
            return value <= target
        return True


class CloneDetectionMethod(IntEnum):
    NONE = 0
    HASH_PID = 1
    HASH_DETAILS = 2


def hash_pid(pk: Entity) -> Hashable:
    return (pk.species, pk.pid)


def hash_details(pk: Entity) -> Hashable:
    """Everything a copied record keeps identical."""
    return (
        pk.species, pk.form, pk.pid, pk.ot_id32, pk.ot_name, pk.nickname,
        tuple(pk.ivs), tuple(pk.evs), tuple(pk.moves), pk.exp, pk.nature,
        pk.ability_number,
    )


CLONE_HASHERS: Dict[CloneDetectionMethod, Callable[[Entity], Hashable]] = {
    CloneDetectionMethod.HASH_PID: hash_pid,
    CloneDetectionMethod.HASH_DETAILS: hash_details,
}


def get_clone_hasher(method: CloneDetectionMethod) -> Callable[[Entity], Hashable]:
    return CLONE_HASHERS[method]


def remove_clones(entities: Iterable[Entity], method: CloneDetectionMethod) -> List[Entity]:
    """Keep the first entity of each duplicate group, preserving order."""
    entities = list(entities)
    if method is CloneDetectionMethod.NONE:
        return entities
    hasher = get_clone_hasher(method)
    seen = set()
    result = []
    for pk in entities:
        key = hasher(pk)
        if key in seen:
            continue
        seen.add(key)
        result.append(pk)
    return result


def get_extra_clones(entities: Iterable[Entity], method: CloneDetectionMethod) -> List[Entity]:
    """The duplicates remove_clones() would drop."""
    entities = list(entities)
    kept = {id(pk) for pk in remove_clones(entities, method)}
    return [pk for pk in entities if id(pk) not in kept]


@dataclass
class SearchSettings:
    """
    Database filter. Unset (None) fields do not filter; comparators
    default to NONE, which also disables the paired value.
    """

    format: Optional[int] = None
    search_format: SearchComparison = SearchComparison.NONE
    species: Optional[int] = None
    level: Optional[int] = None
    search_level: SearchComparison = SearchComparison.NONE
    shiny: Optional[bool] = None
    egg: Optional[bool] = None
    version: Optional[int] = None
    legal: Optional[bool] = None
    clones: CloneDetectionMethod = CloneDetectionMethod.NONE

    def is_match(self, pk: Entity, finder: Optional[EncounterFinder] = None) -> bool:
        if self.format is not None and not self.search_format.compare(pk.format, self.format):
            return False
        if self.species is not None and pk.species != self.species:
            return False
        if self.level is not None and not self.search_level.compare(pk.level, self.level):
            return False
        if self.shiny is not None and pk.is_shiny != self.shiny:
            return False
        if self.egg is not None and self.is_hatched(pk) != self.egg:
            return False
        if self.version is not None and pk.version != self.version:
            return False
        if self.legal is not None:
            if self.is_legal(pk, finder or get_encounter_finder()) != self.legal:
                return False
        return True

    @staticmethod
    def is_legal(pk: Entity, finder: EncounterFinder) -> bool:
        try:
            return finder.find_best(pk) is not None
        except MalformedCandidate:
            return False

    @staticmethod
    def is_hatched(pk: Entity) -> bool:
        return pk.is_egg or pk.egg_location not in (LOCATION_NONE, LOCATION_NONE_8B)

    def search(self, entities: Iterable[Entity],
               finder: Optional[EncounterFinder] = None) -> List[Entity]:
        result = [pk for pk in entities if self.is_match(pk, finder)]
        result = remove_clones(result, self.clones)
        print(f"[Search] {len(result)} result(s)")
        return result
