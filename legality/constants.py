"""
Encounter Legality - Constants
Enums and lookup tables shared by the matching and generation code.
"""

from enum import IntEnum

# =============================================================================
# CONTEXTS / VERSIONS
# =============================================================================


class EntityContext(IntEnum):
    """Format family an entity is stored in (or a template originates from)."""

    GEN1 = 1
    GEN2 = 2
    GEN3 = 3
    GEN4 = 4
    GEN5 = 5
    GEN6 = 6
    GEN7 = 7
    GEN8 = 8
    GEN9 = 9
    GEN7b = 70  # Let's Go
    GEN8a = 81  # Legends Arceus
    GEN8b = 82  # Brilliant Diamond / Shining Pearl

    @property
    def generation(self) -> int:
        if self.value >= 70:
            return self.value // 10
        return self.value


class GameVersion(IntEnum):
    """Origin game ids as stored in the entity's version field."""

    NONE = 0
    S = 1
    R = 2
    E = 3
    FR = 4
    LG = 5
    CXD = 15
    HG = 7
    SS = 8
    D = 10
    P = 11
    Pt = 12
    W = 20
    B = 21
    W2 = 22
    B2 = 23
    X = 24
    Y = 25
    SN = 30
    MN = 31
    SW = 44
    SH = 45
    BD = 48
    SP = 49
    SL = 50
    VL = 51

    # Group tags used by templates only (never stored on an entity)
    XD = 200
    COLO = 201


class LanguageID(IntEnum):
    HACKED = 0
    JAPANESE = 1
    ENGLISH = 2
    FRENCH = 3
    ITALIAN = 4
    GERMAN = 5
    UNUSED_6 = 6
    SPANISH = 7
    KOREAN = 8
    CHINESE_S = 9
    CHINESE_T = 10


class Ball(IntEnum):
    NONE = 0
    MASTER = 1
    ULTRA = 2
    GREAT = 3
    POKE = 4
    SAFARI = 5
    NET = 6
    DIVE = 7
    NEST = 8
    REPEAT = 9
    TIMER = 10
    LUXURY = 11
    PREMIER = 12
    DUSK = 13
    HEAL = 14
    QUICK = 15
    CHERISH = 16


class Gender(IntEnum):
    MALE = 0
    FEMALE = 1
    GENDERLESS = 2


# =============================================================================
# ENCOUNTER POLICIES
# =============================================================================


class EncounterKind(IntEnum):
    STATIC = 0
    TRADE = 1
    GIFT = 2
    WILD_SLOT = 3
    EGG = 4
    EVENT = 5


ENCOUNTER_KIND_NAMES = {
    EncounterKind.STATIC: "Static Encounter",
    EncounterKind.TRADE: "Trade Encounter",
    EncounterKind.GIFT: "Gift Encounter",
    EncounterKind.WILD_SLOT: "Wild Encounter",
    EncounterKind.EGG: "Egg",
    EncounterKind.EVENT: "Event Gift",
}


class ShinyPolicy(IntEnum):
    NEVER = 0
    RANDOM = 1
    ALWAYS = 2


class ShinyPreference(IntEnum):
    ANY = 0
    SHINY = 1
    NOT_SHINY = 2


class AbilityPermission(IntEnum):
    """Which ability numbers (1, 2, 4=hidden) a template may produce."""

    ANY_12 = 0
    ONLY_FIRST = 1
    ONLY_SECOND = 2
    ONLY_HIDDEN = 4
    ANY_12H = 7

    @property
    def allowed(self) -> tuple:
        return ABILITY_PERMISSION_NUMBERS[self]


ABILITY_PERMISSION_NUMBERS = {
    AbilityPermission.ANY_12: (1, 2),
    AbilityPermission.ONLY_FIRST: (1,),
    AbilityPermission.ONLY_SECOND: (2,),
    AbilityPermission.ONLY_HIDDEN: (4,),
    AbilityPermission.ANY_12H: (1, 2, 4),
}


class CorrelationType(IntEnum):
    """Historical PID/IV generation schemes."""

    NONE = 0  # Gen 6+: independent random values
    METHOD_1 = 1
    METHOD_2 = 2
    METHOD_4 = 4
    METHOD_1_UNOWN = 11
    CXD = 20
    G5 = 50

    @property
    def uses_lcrng(self) -> bool:
        return self in (
            CorrelationType.METHOD_1,
            CorrelationType.METHOD_2,
            CorrelationType.METHOD_4,
            CorrelationType.METHOD_1_UNOWN,
        )

    @property
    def nature_from_pid(self) -> bool:
        return self.uses_lcrng or self is CorrelationType.CXD

    @property
    def gender_from_pid(self) -> bool:
        return self is not CorrelationType.NONE

    @property
    def ability_from_pid(self) -> bool:
        """True when the non-hidden ability bit is a function of the PID."""
        return self.uses_lcrng or self is CorrelationType.G5


# =============================================================================
# TABLES
# =============================================================================

NATURE_NAMES = [
    "Hardy", "Lonely", "Brave", "Adamant", "Naughty",
    "Bold", "Docile", "Relaxed", "Impish", "Lax",
    "Timid", "Hasty", "Serious", "Jolly", "Naive",
    "Modest", "Mild", "Quiet", "Bashful", "Rash",
    "Calm", "Gentle", "Sassy", "Careful", "Quirky",
]

NATURE_COUNT = 25

# Stat order used everywhere in this package
STAT_KEYS = ("hp", "attack", "defense", "speed", "sp_attack", "sp_defense")

# Gender ratio sentinels (anything else: female if PID low byte < ratio)
RATIO_MALE_ONLY = 0
RATIO_FEMALE_ONLY = 254
RATIO_GENDERLESS = 255

# Species ids with rules attached to them
SPECIES_UNOWN = 201
SPECIES_SHEDINJA = 292
SPECIES_DEOXYS = 386

UNOWN_FORM_COUNT = 28

# Location sentinels
LOCATION_NONE = 0
LOCATION_NONE_8B = 65535  # BDSP stores "no egg location" as 0xFFFF
LOCATION_PAL_PARK = 55  # Gen 4 transfer location

MAX_LEVEL = 100

# Origin game -> generation it belongs to
VERSION_GENERATION = {
    GameVersion.S: 3, GameVersion.R: 3, GameVersion.E: 3,
    GameVersion.FR: 3, GameVersion.LG: 3, GameVersion.CXD: 3,
    GameVersion.XD: 3, GameVersion.COLO: 3,
    GameVersion.HG: 4, GameVersion.SS: 4, GameVersion.D: 4,
    GameVersion.P: 4, GameVersion.Pt: 4,
    GameVersion.W: 5, GameVersion.B: 5, GameVersion.W2: 5, GameVersion.B2: 5,
    GameVersion.X: 6, GameVersion.Y: 6,
    GameVersion.SN: 7, GameVersion.MN: 7,
    GameVersion.SW: 8, GameVersion.SH: 8, GameVersion.BD: 8, GameVersion.SP: 8,
    GameVersion.SL: 9, GameVersion.VL: 9,
}


def get_version_generation(version: int) -> int:
    """Generation of an origin game id, 0 when unknown."""
    return VERSION_GENERATION.get(version, 0)
