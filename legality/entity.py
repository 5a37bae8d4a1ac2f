"""
Encounter Legality - Entity records
The candidate/synthesized creature record, the trainer that receives it, and
conversion to/from the parsed dict shape the save parser produces.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    MAX_LEVEL,
    NATURE_COUNT,
    STAT_KEYS,
    Ball,
    EntityContext,
    Gender,
    LanguageID,
)
from .errors import MalformedCandidate


def get_shiny_xor(pid: int, tid16: int, sid16: int) -> int:
    return (pid >> 16) ^ (pid & 0xFFFF) ^ tid16 ^ sid16


def get_shiny_threshold(generation: int) -> int:
    """Gen 3-5 use xor < 8; Gen 6 onwards widened the window to 16."""
    return 16 if generation >= 6 else 8


def is_shiny_pid(pid: int, tid16: int, sid16: int, generation: int) -> bool:
    return get_shiny_xor(pid, tid16, sid16) < get_shiny_threshold(generation)


@dataclass(frozen=True)
class TrainerInfo:
    """The trainer a synthesized entity is generated for."""

    ot_name: str
    tid16: int
    sid16: int
    language: int = LanguageID.ENGLISH
    gender: int = 0


@dataclass
class Entity:
    """
    A creature record. Shininess is never stored; it is computed from the
    PID and the trainer id pair for the entity's format.
    """

    species: int
    form: int = 0
    level: int = 1
    exp: int = 0
    met_location: int = 0
    met_level: int = 0
    egg_location: int = 0
    version: int = 0
    context: EntityContext = EntityContext.GEN3
    ball: int = Ball.POKE
    ot_name: str = ""
    ot_gender: int = 0
    tid16: int = 0
    sid16: int = 0
    language: int = LanguageID.ENGLISH
    nickname: str = ""
    is_nicknamed: bool = False
    pid: int = 0
    nature: int = 0
    ability_number: int = 1
    gender: int = Gender.MALE
    ivs: List[int] = field(default_factory=lambda: [0] * 6)
    evs: List[int] = field(default_factory=lambda: [0] * 6)
    moves: List[int] = field(default_factory=list)
    friendship: int = 70
    fateful: bool = False
    held_item: int = 0
    is_egg: bool = False
    stats: List[int] = field(default_factory=lambda: [0] * 6)

    @property
    def format(self) -> int:
        return EntityContext(self.context).generation

    @property
    def ot_id32(self) -> int:
        return (self.sid16 << 16) | self.tid16

    @property
    def is_shiny(self) -> bool:
        return is_shiny_pid(self.pid, self.tid16, self.sid16, self.format)

    @property
    def ability_bit(self) -> int:
        """0/1 slot bit as stored by Gen 3 (hidden reported as 0)."""
        return 1 if self.ability_number == 2 else 0

    # ------------------------------------------------------------------ #
    #  Parsed dict boundary                                               #
    # ------------------------------------------------------------------ #

    def to_parsed(self) -> Dict:
        """Dict in the shape the save parser and storage screens use."""
        return {
            "species": self.species,
            "form": self.form,
            "nickname": self.nickname,
            "is_nicknamed": self.is_nicknamed,
            "level": self.level,
            "experience": self.exp,
            "nature": self.nature,
            "personality": self.pid,
            "ot_id": self.ot_id32,
            "ot_name": self.ot_name,
            "ot_gender": self.ot_gender,
            "language": self.language,
            "ivs": dict(zip(STAT_KEYS, self.ivs)),
            "evs": dict(zip(STAT_KEYS, self.evs)),
            "stats": dict(zip(STAT_KEYS, self.stats)),
            "moves": [{"id": m, "pp": 0} for m in self.moves if m > 0],
            "held_item": self.held_item,
            "met_location": self.met_location,
            "met_level": self.met_level,
            "egg_location": self.egg_location,
            "game_of_origin": self.version,
            "format": int(self.context),
            "is_shiny": self.is_shiny,
            "friendship": self.friendship,
            "pokeball": self.ball,
            "ability_num": self.ability_bit,
            "ability_number": self.ability_number,
            "gender": self.gender,
            "fateful": self.fateful,
            "is_egg": self.is_egg,
            "empty": False,
        }

    @classmethod
    def from_parsed(cls, data: Dict, context: Optional[EntityContext] = None) -> "Entity":
        """
        Build an entity from a parsed dict. Missing keys take defaults;
        range checking is left to validate_entity(). A missing species or an
        unknown format raises MalformedCandidate.
        """
        if "species" not in data:
            raise MalformedCandidate("species", None, "missing")
        ot_id = data.get("ot_id", 0)
        if "ability_number" in data:
            ability_number = data["ability_number"]
        else:
            ability_number = 2 if data.get("ability_num", 0) else 1

        moves = []
        for move in data.get("moves", []):
            move_id = move.get("id", 0) if isinstance(move, dict) else move
            if move_id:
                moves.append(move_id)

        if context is None:
            value = data.get("format", EntityContext.GEN3)
            try:
                context = EntityContext(value)
            except ValueError:
                raise MalformedCandidate("format", value, "unknown format") from None

        def _stat_list(key):
            values = data.get(key) or {}
            if isinstance(values, dict):
                return [values.get(k, 0) for k in STAT_KEYS]
            return list(values)

        return cls(
            species=data["species"],
            form=data.get("form", 0),
            level=data.get("level", 1),
            exp=data.get("experience", 0),
            met_location=data.get("met_location", 0),
            met_level=data.get("met_level", 0),
            egg_location=data.get("egg_location", 0),
            version=data.get("game_of_origin", 0),
            context=context,
            ball=data.get("pokeball", Ball.POKE),
            ot_name=data.get("ot_name", ""),
            ot_gender=data.get("ot_gender", 0),
            tid16=ot_id & 0xFFFF,
            sid16=(ot_id >> 16) & 0xFFFF,
            language=data.get("language", LanguageID.ENGLISH),
            nickname=data.get("nickname", ""),
            is_nicknamed=data.get("is_nicknamed", False),
            pid=data.get("personality", 0),
            nature=data.get("nature", data.get("personality", 0) % NATURE_COUNT),
            ability_number=ability_number,
            gender=data.get("gender", Gender.MALE),
            ivs=_stat_list("ivs") or [0] * 6,
            evs=_stat_list("evs") or [0] * 6,
            moves=moves,
            friendship=data.get("friendship", 70),
            fateful=data.get("fateful", False),
            held_item=data.get("held_item", 0),
            is_egg=data.get("is_egg", False),
            stats=_stat_list("stats") or [0] * 6,
        )


# =============================================================================
# VALIDATION
# =============================================================================


def get_max_iv(generation: int) -> int:
    """Gen 1/2 store 4-bit DVs, later formats 5-bit IVs."""
    return 15 if generation <= 2 else 31


def validate_entity(entity: Entity) -> None:
    """Raise MalformedCandidate if a field is outside its format's range."""
    try:
        generation = entity.format
    except ValueError:
        raise MalformedCandidate("context", entity.context, "unknown format") from None

    if not 0 <= entity.pid <= 0xFFFFFFFF:
        raise MalformedCandidate("pid", entity.pid, "must fit in 32 bits")
    if not 0 <= entity.tid16 <= 0xFFFF:
        raise MalformedCandidate("tid16", entity.tid16, "must fit in 16 bits")
    if not 0 <= entity.sid16 <= 0xFFFF:
        raise MalformedCandidate("sid16", entity.sid16, "must fit in 16 bits")
    if not 1 <= entity.level <= MAX_LEVEL:
        raise MalformedCandidate("level", entity.level)
    if not 0 <= entity.met_level <= MAX_LEVEL:
        raise MalformedCandidate("met_level", entity.met_level)
    if not 0 <= entity.nature < NATURE_COUNT:
        raise MalformedCandidate("nature", entity.nature)
    if entity.ability_number not in (1, 2, 4):
        raise MalformedCandidate("ability_number", entity.ability_number)
    if entity.gender not in (Gender.MALE, Gender.FEMALE, Gender.GENDERLESS):
        raise MalformedCandidate("gender", entity.gender)
    if not 0 <= entity.language <= max(LanguageID):
        raise MalformedCandidate("language", entity.language)

    if len(entity.ivs) != 6:
        raise MalformedCandidate("ivs", entity.ivs, "expected 6 values")
    max_iv = get_max_iv(generation)
    for key, iv in zip(STAT_KEYS, entity.ivs):
        if not 0 <= iv <= max_iv:
            raise MalformedCandidate(f"ivs.{key}", iv, f"format allows 0-{max_iv}")
