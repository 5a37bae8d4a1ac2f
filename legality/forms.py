"""
Encounter Legality - Forms
PID-keyed form derivation and the default form-change capability query.
"""

from typing import Optional, Protocol

from .constants import (
    SPECIES_DEOXYS,
    SPECIES_UNOWN,
    UNOWN_FORM_COUNT,
    CorrelationType,
    EntityContext,
)


def get_unown_form_gen3(pid: int) -> int:
    """Gen 3 Unown letter: two bits from each PID byte, modulo 28."""
    value = (
        ((pid & 0x3000000) >> 18)
        | ((pid & 0x30000) >> 12)
        | ((pid & 0x300) >> 6)
        | (pid & 0x3)
    )
    return value % UNOWN_FORM_COUNT


def get_pid_form(species: int, pid: int, correlation: CorrelationType) -> Optional[int]:
    """
    Form determined by the PID under this algorithm, or None when the
    species' form does not depend on the PID.
    """
    if species == SPECIES_UNOWN and correlation.uses_lcrng:
        return get_unown_form_gen3(pid)
    return None


def is_form_locked(species: int, correlation: CorrelationType) -> bool:
    return species == SPECIES_UNOWN and correlation.uses_lcrng


class FormChangeQuery(Protocol):
    def is_form_changeable(self, species: int, old_form: int, new_form: int,
                           origin: EntityContext, current: EntityContext) -> bool:
        ...


# Species whose stored form can be changed outside battle, keyed to the
# first generation where that is possible
FORM_CHANGE_FROM_GENERATION = {
    SPECIES_DEOXYS: 4,  # meteorites (Pt/HGSS)
    412: 4,  # Burmy
    479: 4,  # Rotom
    487: 4,  # Giratina
    492: 4,  # Shaymin
    641: 5,  # Tornadus
    642: 5,  # Thundurus
    645: 5,  # Landorus
    646: 5,  # Kyurem
    676: 6,  # Furfrou
    720: 6,  # Hoopa
    741: 7,  # Oricorio
    800: 7,  # Necrozma
    898: 8,  # Calyrex
}


class FormInfo:
    """Default FormChangeQuery backed by FORM_CHANGE_FROM_GENERATION."""

    def __init__(self, table=None):
        self.table = FORM_CHANGE_FROM_GENERATION if table is None else table

    def is_form_changeable(self, species: int, old_form: int, new_form: int,
                           origin: EntityContext, current: EntityContext) -> bool:
        if old_form == new_form:
            return True
        first_generation = self.table.get(species)
        if first_generation is None:
            return False
        return EntityContext(current).generation >= first_generation


DEFAULT_FORM_INFO = FormInfo()
