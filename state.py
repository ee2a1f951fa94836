"""
Game state management for the Evacuation of Königsberg.
Implements the game record, configuration loading, the game log and the
undo history.

State is created by initialize_game, mutated only by the rules functions and
never shares containers with the views built from it.
"""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional

import board_data
from board import BoardContext, build_context
from models import (
    GERMAN,
    AdvanceContext,
    Attack,
    Phase,
    RetreatContext,
    Snapshot,
)


class ActionError(Exception):
    """Base class for actions the engine refuses to apply."""
    pass


class IllegalActionError(ActionError):
    """Action, role or argument not allowed in the current state."""
    pass


class InvariantViolationError(ActionError):
    """A phase-ending action whose data precondition does not hold."""
    pass


DEFAULT_CONFIG: Dict[str, Any] = {
    'stacking_limit': 3,
    'movement_points': 3,
    'german_attack_points': 2,
    'german_units_per_point': 2,
    'soviet_base_attack_points': 1,
    'soviet_units_per_point': 2,
    'major_sinking_penalty': 5,
    'die_sides': 6,
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load rule constants from config.json, falling back to defaults."""
    if config_path is None:
        config_path = os.path.join(os.path.dirname(__file__), 'config.json')
    config = dict(DEFAULT_CONFIG)
    try:
        with open(config_path, 'r') as f:
            config.update(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError):
        # Use defaults if config file is missing or invalid
        pass
    return config


@lru_cache(maxsize=None)
def default_context() -> BoardContext:
    """The Standard Game context, built once per process."""
    return build_context(load_config())


@dataclass
class GameState:
    """
    Complete game state.

    `phase` alone decides which actions are legal. `active` is the role
    expected to act and differs from `combat_side` while a defender picks
    a retreat.
    """
    seed: Any = None
    scenario: str = "Standard Game"
    options: Dict[str, Any] = field(default_factory=dict)
    phase: Phase = Phase.SETUP_GERMAN
    active: str = GERMAN
    turn: int = 1
    pieces: Dict[str, Optional[str]] = field(default_factory=dict)  # unit id -> space, track slot or None
    moved: Dict[str, int] = field(default_factory=dict)  # movement points spent this phase
    selected: Optional[str] = None
    attacks: List[Attack] = field(default_factory=list)  # resolution order
    combat_index: int = 0
    combat_side: Optional[str] = None
    attack_resolved: bool = False
    retreat: Optional[RetreatContext] = None
    advance: Optional[AdvanceContext] = None
    stance: Optional[str] = None  # 'Land' or 'Naval'
    cef: int = 0
    major_exodus: bool = False
    russian_halt: bool = False
    major_sinking: bool = False
    major_sinking_last_turn: bool = False
    sea_cef_this_turn: int = 0
    undo: List[Snapshot] = field(default_factory=list)
    log: List[str] = field(default_factory=list)

    def push_undo(self) -> None:
        """Record the tracked fields before a reversible action."""
        self.undo.append(Snapshot(
            pieces=tuple(self.pieces.items()),
            moved=tuple(self.moved.items()),
            attacks=tuple(self.attacks),
            stance=self.stance,
        ))

    def pop_undo(self) -> bool:
        """Restore the latest snapshot. Returns False when there is none."""
        if not self.undo:
            return False
        snapshot = self.undo.pop()
        self.pieces = dict(snapshot.pieces)
        self.moved = dict(snapshot.moved)
        self.attacks = list(snapshot.attacks)
        self.stance = snapshot.stance
        self.selected = None
        return True

    def enter_phase(self, phase: Phase, active: str) -> None:
        """Switch phase and acting role. Undo never crosses a phase boundary."""
        self.phase = phase
        self.active = active
        self.selected = None
        self.undo = []


def log_event(game_state: GameState, event: str) -> None:
    """
    Append a line to the game log.

    Args:
        game_state: Current game state
        event: Human readable text; a leading '>' marks a sub-step
    """
    game_state.log.append(event)


def roll_die(rng, ctx: BoardContext) -> int:
    """Roll one die using the injected random source."""
    return rng.randint(1, ctx.config.get('die_sides', 6))


def initialize_game(seed: Any = None, scenario: str = "Standard Game",
                    options: Optional[Dict[str, Any]] = None,
                    ctx: Optional[BoardContext] = None) -> GameState:
    """
    Initialize a new game in German setup.

    Every catalog unit gets an entry in `pieces`: forts at their fixed
    space, everything else off-map.

    Args:
        seed: Opaque seed recorded for the host
        scenario: Must be one of board_data.SCENARIOS
        options: Reserved

    Returns:
        New GameState instance

    Raises:
        ValueError: If the scenario is unknown
    """
    if scenario not in board_data.SCENARIOS:
        raise ValueError(f"Unknown scenario: {scenario}")
    ctx = ctx or default_context()

    game_state = GameState(
        seed=seed,
        scenario=scenario,
        options=dict(options or {}),
        phase=Phase.SETUP_GERMAN,
        active=GERMAN,
    )
    for unit in ctx.units.values():
        game_state.pieces[unit.id] = unit.space if unit.is_fort else None
    log_event(game_state, f"Scenario: {scenario}")
    log_event(game_state, "German setup.")
    return game_state
