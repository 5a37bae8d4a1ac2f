"""
Encounter Legality - Species metadata
Read-only species table (base stats, gender ratio, friendship, abilities,
growth rate, level-up learnset) plus the experience and stat formulas.

The table is passed explicitly to the pipeline and finder so tests can run
against small synthetic data sets.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import (
    MAX_LEVEL,
    RATIO_FEMALE_ONLY,
    RATIO_GENDERLESS,
    RATIO_MALE_ONLY,
    SPECIES_SHEDINJA,
    Gender,
)

# =============================================================================
# GROWTH RATES
# =============================================================================

GROWTH_RATES = ("medium_fast", "erratic", "fluctuating", "medium_slow", "fast", "slow")


def get_exp_for_level(growth_rate: str, level: int) -> int:
    """Total experience needed to reach `level` for the given growth rate."""
    if level <= 1:
        return 0
    n = min(level, MAX_LEVEL)
    cube = n ** 3

    if growth_rate == "fast":
        return 4 * cube // 5
    if growth_rate == "medium_fast":
        return cube
    if growth_rate == "medium_slow":
        return (6 * cube) // 5 - 15 * n * n + 100 * n - 140
    if growth_rate == "slow":
        return 5 * cube // 4
    if growth_rate == "erratic":
        if n < 50:
            return cube * (100 - n) // 50
        if n < 68:
            return cube * (150 - n) // 100
        if n < 98:
            return cube * ((1911 - 10 * n) // 3) // 500
        return cube * (160 - n) // 100
    if growth_rate == "fluctuating":
        if n < 15:
            return cube * ((n + 1) // 3 + 24) // 50
        if n < 36:
            return cube * (n + 14) // 50
        return cube * (n // 2 + 32) // 50

    raise ValueError(f"Unknown growth rate: {growth_rate}")


# =============================================================================
# STATS
# =============================================================================


def get_nature_modifiers(nature: int) -> List[int]:
    """
    Percent multipliers for [atk, def, spe, spa, spd].
    Nature n raises stat n // 5 and lowers stat n % 5 (neutral when equal).
    """
    mods = [100] * 5
    up, down = divmod(nature, 5)
    if up != down:
        mods[up] = 110
        mods[down] = 90
    return mods


def calculate_stats(species_id: int, base_stats: Sequence[int], ivs: Sequence[int],
                    evs: Sequence[int], level: int, nature: int) -> List[int]:
    """Gen 3+ stat formula. All sequences use hp/atk/def/spe/spa/spd order."""
    base_hp = base_stats[0]
    if species_id == SPECIES_SHEDINJA:
        hp = 1
    else:
        hp = (2 * base_hp + ivs[0] + evs[0] // 4) * level // 100 + level + 10

    mods = get_nature_modifiers(nature)
    stats = [hp]
    for i in range(1, 6):
        raw = (2 * base_stats[i] + ivs[i] + evs[i] // 4) * level // 100 + 5
        stats.append(raw * mods[i - 1] // 100)
    return stats


# =============================================================================
# SPECIES TABLE
# =============================================================================


class SpeciesInfo:
    """Personal data for one (species, form)."""

    __slots__ = (
        "species", "form", "name", "base_stats", "gender_ratio",
        "base_friendship", "abilities", "growth_rate", "learnset", "form_count",
    )

    def __init__(self, species: int, name: str, base_stats: Sequence[int],
                 gender_ratio: int = 127, base_friendship: int = 70,
                 abilities: Sequence[int] = (0, 0, 0), growth_rate: str = "medium_fast",
                 learnset: Iterable[Tuple[int, int]] = (), form: int = 0,
                 form_count: int = 1):
        if len(base_stats) != 6:
            raise ValueError(f"{name}: expected 6 base stats, got {len(base_stats)}")
        if growth_rate not in GROWTH_RATES:
            raise ValueError(f"{name}: unknown growth rate {growth_rate!r}")
        self.species = species
        self.form = form
        self.name = name
        self.base_stats = tuple(base_stats)
        self.gender_ratio = gender_ratio
        self.base_friendship = base_friendship
        self.abilities = tuple(abilities)
        self.growth_rate = growth_rate
        self.learnset = tuple(sorted(learnset))
        self.form_count = form_count

    @property
    def is_genderless(self) -> bool:
        return self.gender_ratio == RATIO_GENDERLESS

    @property
    def fixed_gender(self) -> Optional[int]:
        """The only possible gender, or None when both are possible."""
        if self.gender_ratio == RATIO_GENDERLESS:
            return Gender.GENDERLESS
        if self.gender_ratio == RATIO_FEMALE_ONLY:
            return Gender.FEMALE
        if self.gender_ratio == RATIO_MALE_ONLY:
            return Gender.MALE
        return None

    def gender_from_pid(self, pid: int) -> int:
        fixed = self.fixed_gender
        if fixed is not None:
            return fixed
        return Gender.FEMALE if (pid & 0xFF) < self.gender_ratio else Gender.MALE

    def get_level_up_moves(self, level: int, count: int = 4) -> List[int]:
        """The last `count` distinct moves learned by level-up at or below `level`."""
        moves: List[int] = []
        for learn_level, move in self.learnset:
            if learn_level > level:
                break
            if move in moves:
                moves.remove(move)
            moves.append(move)
        return moves[-count:]

    def __repr__(self):
        return f"<SpeciesInfo {self.species}-{self.form} {self.name}>"


class SpeciesTable:
    """Read-only lookup keyed by (species, form); missing forms fall back to form 0."""

    def __init__(self, entries: Iterable[SpeciesInfo]):
        self._entries: Dict[Tuple[int, int], SpeciesInfo] = {}
        for info in entries:
            self._entries[(info.species, info.form)] = info

    def get(self, species: int, form: int = 0) -> SpeciesInfo:
        info = self._entries.get((species, form)) or self._entries.get((species, 0))
        if info is None:
            raise KeyError(f"No species data for {species}-{form}")
        return info

    def __contains__(self, species: int) -> bool:
        return (species, 0) in self._entries

    def __len__(self):
        return len(self._entries)

    def get_species_name(self, species: int, language: int = 2, generation: int = 3) -> str:
        """
        Default localized name. Only English names are bundled; callers with a
        string table pass their own lookup to the pipeline instead.
        Gen 1-4 store default names in upper case.
        """
        name = self.get(species).name
        if generation <= 4:
            return name.upper()
        return name

    @classmethod
    def from_dict(cls, data: Dict) -> "SpeciesTable":
        """
        Build from a pokemon_db.json-style mapping:
            {"201": {"name": "Unown", "base_stats": [...], ...}, ...}
        """
        entries = []
        for key, value in data.items():
            species = int(value.get("id", key))
            entries.append(
                SpeciesInfo(
                    species,
                    value["name"],
                    value["base_stats"],
                    gender_ratio=value.get("gender_ratio", 127),
                    base_friendship=value.get("base_friendship", 70),
                    abilities=value.get("abilities", (0, 0, 0)),
                    growth_rate=value.get("growth_rate", "medium_fast"),
                    learnset=[tuple(x) for x in value.get("learnset", [])],
                    form=value.get("form", 0),
                    form_count=value.get("form_count", 1),
                )
            )
        return cls(entries)


# =============================================================================
# BUNDLED DATA
# =============================================================================

# Species referenced by the bundled encounter tables.
# (species, name, base stats, gender ratio, friendship, abilities, growth, learnset, form count)
_DEFAULT_SPECIES = [
    (52, "Meowth", (40, 45, 35, 90, 40, 40), 127, 70, (53, 0, 101), "medium_fast",
     [(1, 10), (1, 45), (6, 44), (11, 103), (17, 6), (22, 154)], 1),
    (116, "Horsea", (30, 40, 70, 60, 70, 25), 63, 70, (33, 0, 97), "medium_fast",
     [(1, 145), (8, 108), (15, 43), (22, 55), (29, 116)], 1),
    (133, "Eevee", (55, 55, 50, 55, 45, 65), 31, 70, (50, 0, 91), "medium_fast",
     [(1, 33), (1, 39), (8, 28), (16, 98), (23, 44), (30, 204)], 1),
    (151, "Mew", (100, 100, 100, 100, 100, 100), 255, 100, (28, 0, 0), "medium_slow",
     [(1, 1), (10, 144), (20, 5), (30, 118), (40, 94)], 1),
    (201, "Unown", (48, 72, 48, 48, 72, 48), 255, 70, (26, 0, 0), "medium_fast",
     [(1, 237)], 28),
    (213, "Shuckle", (20, 10, 230, 5, 10, 230), 127, 70, (5, 0, 82), "medium_slow",
     [(1, 110), (1, 132), (9, 35), (14, 111), (23, 156), (28, 230)], 1),
    (239, "Elekid", (45, 63, 37, 95, 65, 55), 63, 70, (9, 0, 72), "medium_fast",
     [(1, 98), (1, 43), (9, 84), (17, 9), (25, 113), (33, 129)], 1),
    (249, "Lugia", (106, 90, 130, 110, 90, 154), 255, 0, (46, 0, 136), "slow",
     [(1, 177), (11, 16), (22, 219), (33, 239), (44, 57), (55, 105)], 1),
    (250, "Ho-Oh", (106, 130, 90, 90, 110, 154), 255, 0, (46, 0, 144), "slow",
     [(1, 221), (11, 16), (22, 219), (33, 225), (44, 126), (55, 105)], 1),
    (273, "Seedot", (40, 40, 50, 30, 30, 30), 127, 70, (34, 48, 124), "medium_slow",
     [(1, 117), (3, 106), (7, 74), (13, 235)], 1),
    (307, "Meditite", (30, 40, 55, 60, 40, 55), 127, 70, (74, 0, 140), "medium_fast",
     [(1, 67), (4, 96), (9, 93), (12, 197), (17, 95), (20, 149)], 1),
    (311, "Plusle", (60, 50, 40, 95, 85, 75), 127, 70, (57, 0, 31), "medium_fast",
     [(1, 45), (4, 86), (10, 98), (13, 84), (19, 209)], 1),
    (384, "Rayquaza", (105, 150, 90, 95, 150, 90), 255, 0, (77, 0, 0), "slow",
     [(1, 239), (15, 184), (30, 242), (45, 349), (60, 200), (65, 19), (75, 63)], 1),
    (386, "Deoxys", (50, 150, 50, 150, 150, 50), 255, 0, (46, 0, 0), "slow",
     [(1, 35), (1, 43), (5, 101), (10, 100), (15, 228), (20, 97), (25, 129), (30, 94)], 4),
    (387, "Turtwig", (55, 68, 64, 31, 45, 55), 31, 70, (65, 0, 75), "medium_slow",
     [(1, 33), (5, 74), (9, 71), (13, 242), (17, 75)], 1),
    (643, "Reshiram", (100, 120, 100, 90, 150, 120), 255, 0, (163, 0, 0), "slow",
     [(1, 225), (1, 246), (8, 82), (15, 163), (22, 126), (29, 53)], 1),
    (644, "Zekrom", (100, 150, 120, 90, 120, 100), 255, 0, (164, 0, 0), "slow",
     [(1, 225), (1, 246), (8, 82), (15, 163), (22, 85), (29, 87)], 1),
    (716, "Xerneas", (126, 131, 95, 99, 131, 98), 255, 0, (187, 0, 0), "slow",
     [(1, 591), (1, 113), (5, 585), (10, 584), (18, 94), (26, 581)], 2),
]


def build_default_species_table() -> SpeciesTable:
    entries = []
    for (species, name, stats, ratio, friendship, abilities,
         growth, learnset, form_count) in _DEFAULT_SPECIES:
        entries.append(
            SpeciesInfo(species, name, stats, gender_ratio=ratio,
                        base_friendship=friendship, abilities=abilities,
                        growth_rate=growth, learnset=learnset, form_count=form_count)
        )
    return SpeciesTable(entries)
