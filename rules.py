"""
Rules engine entry points for the Evacuation of Königsberg.

The host calls initialize once, project for every connected role, and apply
for every action it receives, one at a time. apply checks the action against
the role's current actions record before touching the state, so a rejected
action leaves the game exactly as it was.
"""

import random
from typing import Any, Callable, Dict, Optional

import board_data
from board import BoardContext
from deployment import end_setup, place_unit, set_stance
from evacuation import NAVY, SHIPPING, choose_event_chit, roll_evacuation, roll_event, roll_reaction
from models import ROLES
from movement import eliminate_unit, end_elimination, end_movement, move_unit, stop_unit
from resolution import (
    advance_unit,
    declare_attack,
    done_advance,
    end_combat,
    end_combat_setup,
    next_attack,
    resolve_attack,
    retreat_unit,
)
from state import GameState, IllegalActionError, default_context, initialize_game, log_event
from view import project as project_view

scenarios = list(board_data.SCENARIOS)
roles = list(ROLES)


def _select(game_state, ctx, args, rng):
    game_state.selected = args


def _deselect(game_state, ctx, args, rng):
    game_state.selected = None


def _undo(game_state, ctx, args, rng):
    if game_state.pop_undo():
        log_event(game_state, "Undo.")


ACTION_HANDLERS: Dict[str, Callable[[GameState, BoardContext, Any, Any], Any]] = {
    'set_stance': lambda g, c, a, r: set_stance(g, c, a),
    'select': _select,
    'deselect': _deselect,
    'place': lambda g, c, a, r: place_unit(g, c, a),
    'undo': _undo,
    'end_setup': lambda g, c, a, r: end_setup(g, c),
    'roll_event': lambda g, c, a, r: roll_event(g, c, r),
    'choose_navy': lambda g, c, a, r: choose_event_chit(g, c, NAVY),
    'choose_shipping': lambda g, c, a, r: choose_event_chit(g, c, SHIPPING),
    'roll_evacuation': lambda g, c, a, r: roll_evacuation(g, c, r),
    'roll_reaction': lambda g, c, a, r: roll_reaction(g, c, r),
    'move': lambda g, c, a, r: move_unit(g, c, a),
    'stop': lambda g, c, a, r: stop_unit(g, c),
    'end_movement': lambda g, c, a, r: end_movement(g, c),
    'eliminate': lambda g, c, a, r: eliminate_unit(g, c, a),
    'end_elimination': lambda g, c, a, r: end_elimination(g, c),
    'target': lambda g, c, a, r: declare_attack(g, c, a),
    'end_combat_setup': lambda g, c, a, r: end_combat_setup(g, c),
    'roll_combat': lambda g, c, a, r: resolve_attack(g, c, r),
    'next_attack': lambda g, c, a, r: next_attack(g),
    'retreat': lambda g, c, a, r: retreat_unit(g, c, a),
    'done_advance': lambda g, c, a, r: done_advance(g, c),
    'advance_to': lambda g, c, a, r: advance_unit(g, c, a),
    'end_combat': lambda g, c, a, r: end_combat(g),
}


def initialize(seed: Any = None, scenario: str = "Standard Game",
               options: Optional[Dict[str, Any]] = None,
               ctx: Optional[BoardContext] = None) -> GameState:
    """Create a new game. Only the "Standard Game" scenario exists."""
    return initialize_game(seed, scenario, options, ctx=ctx)


def project(game_state: GameState, role: str, ctx: Optional[BoardContext] = None) -> Dict[str, Any]:
    """View of the game for `role` ("German", "Soviet" or any observer name)."""
    return project_view(game_state, role, ctx or default_context())


def legal_actions(game_state: GameState, role: str, ctx: Optional[BoardContext] = None) -> Dict[str, Any]:
    return project(game_state, role, ctx)['actions']


def validate_action(game_state: GameState, role: str, action: str, args: Any,
                    ctx: Optional[BoardContext] = None) -> None:
    """
    Check an action against the role's current actions record.

    Raises:
        IllegalActionError: If the verb is not offered or the argument is not listed
    """
    actions = legal_actions(game_state, role, ctx)
    if action not in actions:
        raise IllegalActionError(
            f"{action} is not allowed for {role} during {game_state.phase.value}"
        )
    allowed = actions[action]
    if isinstance(allowed, list) and args not in allowed:
        raise IllegalActionError(f"Invalid argument for {action}: {args!r}")


def apply(game_state: GameState, role: str, action: str, args: Any = None,
          rng=None, ctx: Optional[BoardContext] = None) -> GameState:
    """
    Apply one action and return the updated state.

    Args:
        game_state: Current game state, updated in place
        role: Role sending the action
        action: Verb name; unknown verbs are ignored
        args: Unit id or space id for verbs that take one
        rng: Random source exposing randint (defaults to a fresh random.Random)

    Returns:
        The same GameState instance

    Raises:
        IllegalActionError: If the action is not legal right now
        InvariantViolationError: If a phase-ending precondition fails
    """
    handler = ACTION_HANDLERS.get(action)
    if handler is None:
        return game_state
    ctx = ctx or default_context()
    if isinstance(args, int) and not isinstance(args, bool):
        args = str(args)

    validate_action(game_state, role, action, args, ctx)
    handler(game_state, ctx, args, rng if rng is not None else random.Random())
    return game_state
