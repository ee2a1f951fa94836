"""
Board graph and catalog for the Evacuation of Königsberg.

The board is an undirected adjacency graph over named spaces, built once from
the dataset rows. Track slots belong to the catalog but never to the graph.
A BoardContext bundles graph, catalog and rule constants and is shared,
never copied, by every game.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import board_data
from models import Side, Space, Unit, UnitType


class BoardGraph:
    """Binary adjacency between map spaces."""

    def __init__(self, adjacency: Dict[str, Set[str]]):
        self._adjacency = adjacency

    @classmethod
    def from_rows(cls, rows: Iterable[List[str]]) -> "BoardGraph":
        """
        Build the graph from rows of [space, *neighbors].

        Each listed relation is inserted both ways, so a row only needs to
        name a neighbor once.
        """
        adjacency: Dict[str, Set[str]] = {}
        for row in rows:
            source, neighbors = row[0], row[1:]
            adjacency.setdefault(source, set())
            for neighbor in neighbors:
                adjacency[source].add(neighbor)
                adjacency.setdefault(neighbor, set()).add(source)
        return cls(adjacency)

    def neighbors(self, space_id: Optional[str]) -> Set[str]:
        """Neighbors of a space. Unknown ids and track slots have none."""
        if space_id is None:
            return set()
        return set(self._adjacency.get(space_id, ()))

    def is_adjacent(self, a: Optional[str], b: Optional[str]) -> bool:
        return b in self._adjacency.get(a, ()) if a is not None else False

    def spaces(self) -> Set[str]:
        return set(self._adjacency)


@dataclass(frozen=True)
class BoardContext:
    """Read-only context handed to every rules function."""
    graph: BoardGraph
    spaces: Mapping[str, Space]
    units: Mapping[str, Unit]
    config: Mapping[str, Any] = field(default_factory=dict)

    def unit(self, unit_id: str) -> Unit:
        return self.units[unit_id]

    def is_playable(self, space_id: Optional[str]) -> bool:
        """True for map spaces 1-52, False for track slots and None."""
        return space_id is not None and space_id in self.spaces and not self.spaces[space_id].is_track

    def units_at(self, pieces: Mapping[str, Optional[str]], space_id: str) -> List[Unit]:
        """All catalog units currently located in a space, in catalog order."""
        return [u for uid, u in self.units.items() if pieces.get(uid) == space_id]

    def combat_units_at(self, pieces: Mapping[str, Optional[str]], space_id: str) -> List[Unit]:
        """Units counted for stacking: no forts, no chits."""
        return [u for u in self.units_at(pieces, space_id) if u.is_combat_unit]

    def fort_at(self, pieces: Mapping[str, Optional[str]], space_id: str) -> Optional[Unit]:
        for u in self.units_at(pieces, space_id):
            if u.is_fort:
                return u
        return None

    def side_units(self, side: Side) -> List[Unit]:
        """Combat units of one side, in catalog order."""
        return [u for u in self.units.values() if u.side == side and u.is_combat_unit]

    def is_hostile(self, unit: Unit, side: Side) -> bool:
        """
        Whether `unit` opposes `side`.

        Forts defend the German position: they are hostile to the Soviets
        and never to the Germans. Chits are never hostile.
        """
        if unit.is_chit:
            return False
        if unit.is_fort:
            return side == Side.SOVIET
        return unit.side != side and unit.side != Side.NEUTRAL

    def hostile_units_at(self, pieces: Mapping[str, Optional[str]], space_id: str, side: Side) -> List[Unit]:
        return [u for u in self.units_at(pieces, space_id) if self.is_hostile(u, side)]

    def first_free_slot(self, pieces: Mapping[str, Optional[str]], track: List[str]) -> Optional[str]:
        occupied = set(pieces.values())
        for slot in track:
            if slot not in occupied:
                return slot
        return None

    def chits_on_track(self, pieces: Mapping[str, Optional[str]], track: List[str]) -> int:
        slots = set(track)
        return sum(1 for location in pieces.values() if location in slots)


def load_spaces() -> Dict[str, Space]:
    spaces = {}
    for space_id, name, x, y in board_data.MAP_SPACES + board_data.TRACK_SPACES:
        spaces[space_id] = Space(id=space_id, name=name, x=x, y=y)
    return spaces


def load_units() -> Dict[str, Unit]:
    units = {}
    for uid, name, side, utype, combat, cohesion, army, space in board_data.UNITS:
        units[uid] = Unit(
            id=uid,
            name=name,
            side=Side(side),
            type=UnitType(utype),
            combat=combat,
            cohesion=cohesion,
            army=army,
            space=space,
        )
    return units


def build_context(config: Optional[Mapping[str, Any]] = None,
                  rows: Optional[Iterable[List[str]]] = None) -> BoardContext:
    """
    Build the shared context from the Standard Game dataset.

    Args:
        config: Rule constants (see state.load_config)
        rows: Alternative adjacency rows, mainly for tests

    Returns:
        BoardContext ready to be shared across games
    """
    graph = BoardGraph.from_rows(rows if rows is not None else board_data.ADJACENCY)
    return BoardContext(
        graph=graph,
        spaces=load_spaces(),
        units=load_units(),
        config=dict(config or {}),
    )


def space_label(ctx: BoardContext, space_id: Optional[str]) -> str:
    """Human readable space name for log lines."""
    if space_id is None:
        return "off-map"
    space = ctx.spaces.get(space_id)
    if space is None:
        return space_id
    return f"{space.name} ({space_id})"


def stack_counts(ctx: BoardContext, pieces: Mapping[str, Optional[str]]) -> Dict[str, int]:
    """Number of stacking units per playable space."""
    counts: Dict[str, int] = {}
    for uid, location in pieces.items():
        if ctx.is_playable(location) and ctx.units[uid].is_combat_unit:
            counts[location] = counts.get(location, 0) + 1
    return counts


def sorted_space_ids(space_ids: Iterable[str]) -> List[str]:
    """Map spaces numerically, track slots after them."""
    def key(space_id: str) -> Tuple[int, Any]:
        return (0, int(space_id)) if space_id.isdigit() else (1, space_id)
    return sorted(space_ids, key=key)
