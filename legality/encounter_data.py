"""
Encounter Legality - Bundled encounter tables
A representative set of templates for each generation family. Callers with
complete tables build their own TemplateStore from the same value type.

Name tuples are indexed by language id (index 0 is the fallback).
"""

from typing import List

from .constants import (
    UNOWN_FORM_COUNT,
    AbilityPermission,
    Ball,
    CorrelationType,
    EncounterKind,
    EntityContext,
    GameVersion,
    ShinyPolicy,
)
from .templates import EncounterTemplate, TemplateStore

# =============================================================================
# GEN 3 - RUBY / SAPPHIRE / EMERALD
# =============================================================================

# In-game trades: (id, species, level, location, nickname, trainer, tid)
_EMERALD_TRADES = [
    ("e-trade-seedot", 273, 4, 1, "DOTS", "KOBE", 38726),
    ("e-trade-plusle", 311, 15, 2, "PLUSES", "ROMAN", 73),
    ("e-trade-horsea", 116, 20, 3, "SEASOR", "SKYLAR", 46285),
    ("e-trade-meowth", 52, 15, 4, "MEOWOW", "ISIS", 25945),
]


def _emerald_trade(template_id, species, level, location, nickname, trainer, tid):
    return EncounterTemplate(
        template_id=template_id,
        species=species,
        level_min=level,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=location,
        kind=EncounterKind.TRADE,
        fixed_ball=Ball.POKE,
        trainer_names=(trainer, "", trainer),
        nicknames=(nickname, "", nickname),
        tid16=tid,
        ot_gender=0,
    )


GEN3_RSE = [_emerald_trade(*row) for row in _EMERALD_TRADES] + [
    EncounterTemplate(
        template_id="e-static-rayquaza",
        species=384,
        level_min=70,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=87,  # Sky Pillar
    ),
    EncounterTemplate(
        template_id="e-event-mew",
        species=151,
        level_min=30,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=201,  # Faraway Island
        kind=EncounterKind.EVENT,
        fateful=True,
    ),
    EncounterTemplate(
        template_id="e-event-deoxys",
        species=386,
        level_min=30,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=200,  # Birth Island
        kind=EncounterKind.EVENT,
        fateful=True,
    ),
    EncounterTemplate(
        template_id="e-event-lugia",
        species=249,
        level_min=70,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=211,  # Navel Rock
        kind=EncounterKind.EVENT,
        fateful=True,
    ),
    EncounterTemplate(
        template_id="e-event-hooh",
        species=250,
        level_min=70,
        context=EntityContext.GEN3,
        version=GameVersion.E,
        location=211,
        kind=EncounterKind.EVENT,
        fateful=True,
    ),
]

# =============================================================================
# GEN 3 - FIRERED / LEAFGREEN
# =============================================================================

# Tanoby Chambers: the letter is baked into the PID, one template per form
GEN3_FRLG = [
    EncounterTemplate(
        template_id=f"frlg-unown-{form}",
        species=201,
        form=form,
        level_min=25,
        context=EntityContext.GEN3,
        version=GameVersion.FR,
        location=188,
        kind=EncounterKind.WILD_SLOT,
        correlation=CorrelationType.METHOD_1_UNOWN,
    )
    for form in range(UNOWN_FORM_COUNT)
]

# =============================================================================
# GEN 3 - COLOSSEUM / XD
# =============================================================================

# XD trades are received from one in-game trainer; the ball is fixed and
# the stored origin version is the shared Colosseum/XD id
_XD_TRAINER_ID = 38198
_XD_TRAINER_NAMES = ("HORDEL", "", "HORDEL", "HORDEL", "HORDEL", "HORDEL", "", "HORDEL")


def _xd_trade(template_id, species, level, location, moves=()):
    return EncounterTemplate(
        template_id=template_id,
        species=species,
        level_min=level,
        context=EntityContext.GEN3,
        version=GameVersion.XD,
        location=location,
        kind=EncounterKind.TRADE,
        fixed_ball=Ball.POKE,
        correlation=CorrelationType.CXD,
        trainer_names=_XD_TRAINER_NAMES,
        tid16=_XD_TRAINER_ID,
        ot_gender=0,
        fateful=True,
        moves=moves,
        met_version=GameVersion.CXD,
    )


GEN3_XD = [
    _xd_trade("xd-trade-elekid", 239, 20, 164),
    _xd_trade("xd-trade-meditite", 307, 20, 164),
    _xd_trade("xd-trade-shuckle", 213, 20, 164, moves=(110, 35, 111, 156)),
]

# =============================================================================
# GEN 4 / GEN 5
# =============================================================================

GEN4 = [
    EncounterTemplate(
        template_id="hgss-static-lugia",
        species=249,
        level_min=45,
        context=EntityContext.GEN4,
        version=GameVersion.SS,
        location=218,  # Whirl Islands
        correlation=CorrelationType.METHOD_1,
    ),
]

GEN5 = [
    EncounterTemplate(
        template_id="bw-static-reshiram",
        species=643,
        level_min=50,
        context=EntityContext.GEN5,
        version=GameVersion.B,
        location=14,  # N's Castle
        correlation=CorrelationType.G5,
        shiny=ShinyPolicy.NEVER,
    ),
    EncounterTemplate(
        template_id="bw-static-zekrom",
        species=644,
        level_min=50,
        context=EntityContext.GEN5,
        version=GameVersion.W,
        location=14,
        correlation=CorrelationType.G5,
        shiny=ShinyPolicy.NEVER,
    ),
]

# =============================================================================
# GEN 6+
# =============================================================================

GEN6 = [
    EncounterTemplate(
        template_id="x-static-xerneas",
        species=716,
        form=1,
        level_min=50,
        context=EntityContext.GEN6,
        version=GameVersion.X,
        location=138,  # Team Flare Secret HQ
        correlation=CorrelationType.NONE,
        shiny=ShinyPolicy.NEVER,
        ability=AbilityPermission.ONLY_FIRST,
        flawless_ivs=3,
    ),
]

GEN8B = [
    EncounterTemplate(
        template_id="bdsp-gift-turtwig",
        species=387,
        level_min=5,
        context=EntityContext.GEN8b,
        version=GameVersion.BD,
        location=216,  # Lake Verity
        kind=EncounterKind.GIFT,
        fixed_ball=Ball.POKE,
        correlation=CorrelationType.NONE,
    ),
]


def get_default_templates() -> List[EncounterTemplate]:
    return GEN3_RSE + GEN3_FRLG + GEN3_XD + GEN4 + GEN5 + GEN6 + GEN8B


def build_default_store() -> TemplateStore:
    return TemplateStore(get_default_templates())
