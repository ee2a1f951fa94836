# Models for game elements of the Evacuation of Königsberg

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Side(Enum):
    SOVIET = "soviet"
    GERMAN = "german"
    NEUTRAL = "neutral"


class UnitType(Enum):
    INFANTRY = "infantry"
    ARMOR = "armor"
    FORT = "fort"
    CHIT = "chit"


class Phase(Enum):
    """Every state of the turn sequence. `rules` and `view` dispatch on these."""
    SETUP_GERMAN = "setup_german"
    SETUP_SOVIET = "setup_soviet"
    EVENT = "event_phase"
    EVENT_CHOICE = "event_choice"
    EVACUATION = "evacuation_phase"
    RUSSIAN_REACTION = "russian_reaction_phase"
    MOVEMENT_GERMAN = "movement_german"
    MOVEMENT_SOVIET = "movement_soviet"
    ELIMINATION_GERMAN = "elimination_german"
    ELIMINATION_SOVIET = "elimination_soviet"
    COMBAT_SETUP = "combat_setup"
    COMBAT_RESOLVE = "combat_resolve"
    COMBAT_RETREAT = "combat_retreat"
    COMBAT_ADVANCE = "combat_advance"


GERMAN = "German"
SOVIET = "Soviet"
ROLES = (SOVIET, GERMAN)

ROLE_SIDE = {GERMAN: Side.GERMAN, SOVIET: Side.SOVIET}
SIDE_ROLE = {Side.GERMAN: GERMAN, Side.SOVIET: SOVIET}


def other_role(role: str) -> str:
    """Return the opposing player role."""
    return SOVIET if role == GERMAN else GERMAN


@dataclass(frozen=True)
class Space:
    """A map space or a track slot. Track slots have no neighbors."""
    id: str  # "1".."52" for the map, "track_*" for holding slots
    name: str
    x: int = 0  # Display coordinates, unused by the rules
    y: int = 0

    @property
    def is_track(self) -> bool:
        return self.id.startswith("track_")


@dataclass(frozen=True)
class Unit:
    """
    A catalog entry: combat unit, fort or chit.
    Forts are neutral and immobile; chits carry no combat values.
    """
    id: str
    name: str
    side: Side
    type: UnitType
    combat: int = 0  # Hit if attack die <= combat
    cohesion: int = 1  # Defender holds if save die <= cohesion
    army: Optional[str] = None  # Soviet stacking homogeneity tag
    space: Optional[str] = None  # Pre-placed location (forts only)

    @property
    def is_combat_unit(self) -> bool:
        return self.type in (UnitType.INFANTRY, UnitType.ARMOR)

    @property
    def is_fort(self) -> bool:
        return self.type == UnitType.FORT

    @property
    def is_chit(self) -> bool:
        return self.type == UnitType.CHIT


@dataclass(frozen=True)
class Attack:
    """A declared attack. `target` is None when attacking an empty space."""
    attacker: str
    target: Optional[str]
    source: str  # Attacker's space at declaration
    target_space: str  # Target's space at declaration

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            'attacker': self.attacker,
            'target': self.target,
            'source': self.source,
            'targetSpace': self.target_space,
        }


@dataclass
class RetreatContext:
    """
    Defender-side sub-state of combat resolution.
    Control passes to `acting_role` and returns to `resume_role`.
    """
    unit: str
    from_space: str
    options: List[str]
    acting_role: str
    resume_role: str


@dataclass
class AdvanceContext:
    """Attackers allowed to move into `space` after it was vacated."""
    space: str
    candidates: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Snapshot:
    """Undo entry: value copies of the tracked fields only."""
    pieces: Tuple[Tuple[str, Optional[str]], ...]
    moved: Tuple[Tuple[str, int], ...]
    attacks: Tuple[Attack, ...]
    stance: Optional[str]
