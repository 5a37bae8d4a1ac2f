"""
Encounter Legality - Encounter templates
One immutable descriptor per historical event (static encounter, trade,
gift, wild slot...) and the generation-partitioned store holding them.

Templates are plain values. Behavior (matching, generation) lives in the
matching, correlation and pipeline modules and dispatches on the fields here.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .constants import (
    ENCOUNTER_KIND_NAMES,
    AbilityPermission,
    Ball,
    CorrelationType,
    EncounterKind,
    EntityContext,
    GameVersion,
    ShinyPolicy,
)


@dataclass(frozen=True)
class EncounterTemplate:
    template_id: str
    species: int
    level_min: int
    context: EntityContext
    version: GameVersion
    location: int
    kind: EncounterKind = EncounterKind.STATIC
    form: int = 0
    level_max: Optional[int] = None
    egg_location: int = 0
    fixed_ball: Optional[Ball] = None
    ability: AbilityPermission = AbilityPermission.ANY_12
    shiny: ShinyPolicy = ShinyPolicy.RANDOM
    correlation: CorrelationType = CorrelationType.METHOD_1
    trainer_names: Tuple[str, ...] = ()
    nicknames: Tuple[str, ...] = ()
    moves: Tuple[int, ...] = ()
    tid16: Optional[int] = None
    ot_gender: Optional[int] = None
    fateful: bool = False
    egg_encounter: bool = False
    flawless_ivs: int = 0
    # Version stored on generated entities when it differs from the tag
    # (XD/Colosseum templates store CXD)
    met_version: Optional[GameVersion] = None

    def __post_init__(self):
        if self.level_max is None:
            object.__setattr__(self, "level_max", self.level_min)
        if self.level_max < self.level_min:
            raise ValueError(f"{self.template_id}: level_max < level_min")
        if not 0 <= self.flawless_ivs <= 6:
            raise ValueError(f"{self.template_id}: flawless_ivs out of range")

    @property
    def generation(self) -> int:
        return EntityContext(self.context).generation

    @property
    def level(self) -> int:
        return self.level_min

    @property
    def is_fixed_trainer(self) -> bool:
        return len(self.trainer_names) > 0

    @property
    def is_fixed_nickname(self) -> bool:
        return len(self.nicknames) > 0

    @property
    def has_fixed_moves(self) -> bool:
        return any(m > 0 for m in self.moves)

    @property
    def is_gift(self) -> bool:
        return self.fixed_ball == Ball.POKE

    @property
    def origin_version(self) -> GameVersion:
        return self.met_version if self.met_version is not None else self.version

    @property
    def name(self) -> str:
        return ENCOUNTER_KIND_NAMES[self.kind]

    @property
    def long_name(self) -> str:
        return f"{self.name} ({self.template_id})"

    def is_level_within(self, level: int) -> bool:
        return self.level_min <= level <= self.level_max


class TemplateStore:
    """
    Read-only, generation-partitioned template collection.
    Safe for concurrent reads once constructed.
    """

    def __init__(self, templates: Iterable[EncounterTemplate]):
        by_generation: Dict[int, List[EncounterTemplate]] = {}
        by_id: Dict[str, EncounterTemplate] = {}
        for template in templates:
            if template.template_id in by_id:
                raise ValueError(f"Duplicate template id: {template.template_id}")
            by_id[template.template_id] = template
            by_generation.setdefault(template.generation, []).append(template)

        self._by_id = by_id
        self._by_generation = {gen: tuple(items) for gen, items in by_generation.items()}

    def get_generation(self, generation: int) -> Tuple[EncounterTemplate, ...]:
        return self._by_generation.get(generation, ())

    def get(self, template_id: str) -> Optional[EncounterTemplate]:
        return self._by_id.get(template_id)

    @property
    def generations(self) -> List[int]:
        return sorted(self._by_generation)

    def __contains__(self, template) -> bool:
        if isinstance(template, EncounterTemplate):
            return self._by_id.get(template.template_id) == template
        return template in self._by_id

    def __iter__(self) -> Iterator[EncounterTemplate]:
        for generation in self.generations:
            yield from self._by_generation[generation]

    def __len__(self):
        return len(self._by_id)
