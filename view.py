"""
Per-role projection of the game state.

A view carries everything a client renders (no fog of war) plus the
`actions` record: the only verbs the role may send right now, each mapped
to 1 or to the list of legal arguments. Building a view never touches the
state it reads.
"""

from typing import Any, Callable, Dict

import board_data
from board import BoardContext, space_label
from deployment import setup_complete, unplaced_units, valid_setup_spaces
from models import GERMAN, ROLE_SIDE, SOVIET, Phase
from movement import eliminable_units, movable_units, movement_role, overstacked_spaces, valid_moves
from resolution import (
    advance_room,
    attack_limits,
    eligible_attackers,
    pending_attack,
    valid_targets,
)
from state import GameState


def _setup_view(game_state: GameState, ctx: BoardContext, role: str, view: Dict[str, Any]) -> None:
    actions = view['actions']
    if role == GERMAN and game_state.stance is None:
        view['prompt'] = "Choose your stance: Land or Naval."
        actions['set_stance'] = list(board_data.STANCE_SLOTS)
        return

    unplaced = unplaced_units(game_state, ctx, ROLE_SIDE[role])
    if game_state.selected:
        view['prompt'] = "Select destination."
        spaces = valid_setup_spaces(game_state, ctx, game_state.selected)
        if spaces:
            actions['place'] = spaces
        actions['deselect'] = 1
    elif unplaced:
        view['prompt'] = f"{role} setup: {len(unplaced)} units remaining."
        actions['select'] = unplaced
    if setup_complete(game_state, ctx, role):
        view['prompt'] = "All units placed. End setup to continue."
        actions['end_setup'] = 1


def _event_view(game_state, ctx, role, view):
    view['prompt'] = "Roll on the event table."
    view['actions']['roll_event'] = 1


def _event_choice_view(game_state, ctx, role, view):
    view['prompt'] = "Choose a German Navy or a German Shipping chit."
    view['actions']['choose_navy'] = 1
    view['actions']['choose_shipping'] = 1


def _evacuation_view(game_state, ctx, role, view):
    view['prompt'] = "Roll for evacuation."
    view['actions']['roll_evacuation'] = 1


def _reaction_view(game_state, ctx, role, view):
    view['prompt'] = f"Sea evacuation of {game_state.sea_cef_this_turn}. Roll for Russian reaction."
    view['actions']['roll_reaction'] = 1


def _movement_view(game_state: GameState, ctx: BoardContext, role: str, view: Dict[str, Any]) -> None:
    actions = view['actions']
    selected = game_state.selected
    if selected:
        name = ctx.unit(selected).name
        spent = game_state.moved.get(selected, 0)
        view['prompt'] = f"Move {name} ({spent} of {ctx.config.get('movement_points', 3)} used)."
        moves = valid_moves(game_state, ctx, selected)
        if moves:
            actions['move'] = moves
        if spent > 0:
            actions['stop'] = 1
        else:
            actions['deselect'] = 1
    else:
        view['prompt'] = f"{role} movement: select a unit to move."
    movable = [uid for uid in movable_units(game_state, ctx, role) if uid != selected]
    if movable:
        actions['select'] = movable
    actions['end_movement'] = 1


def _elimination_view(game_state: GameState, ctx: BoardContext, role: str, view: Dict[str, Any]) -> None:
    overstacked = view['overstacked']
    if overstacked:
        names = ", ".join(space_label(ctx, s) for s in overstacked)
        view['prompt'] = f"Overstacked in {names}. Eliminate units."
    else:
        view['prompt'] = "Stacking restored. End elimination."
    units = eliminable_units(game_state, ctx, movement_role(game_state))
    if units:
        view['actions']['eliminate'] = units
    view['actions']['end_elimination'] = 1


def _combat_setup_view(game_state: GameState, ctx: BoardContext, role: str, view: Dict[str, Any]) -> None:
    actions = view['actions']
    points, per_point = attack_limits(game_state, ctx, role)
    selected = game_state.selected
    if selected:
        view['prompt'] = f"Choose a target for {ctx.unit(selected).name}."
        targets = valid_targets(game_state, ctx, selected)
        if targets:
            actions['target'] = targets
        actions['deselect'] = 1
    else:
        view['prompt'] = (f"{role} combat: declare attacks "
                          f"(up to {points} attack points, {per_point} units each).")
    attackers = [uid for uid in eligible_attackers(game_state, ctx, role) if uid != selected]
    if attackers:
        actions['select'] = attackers
    actions['end_combat_setup'] = 1


def _combat_resolve_view(game_state, ctx, role, view):
    attack = pending_attack(game_state)
    if attack is None:
        view['prompt'] = "All attacks resolved."
        view['actions']['end_combat'] = 1
    elif game_state.attack_resolved:
        view['prompt'] = f"Attack {game_state.combat_index + 1} resolved."
        view['actions']['next_attack'] = 1
    else:
        view['prompt'] = f"Resolve attack {game_state.combat_index + 1} by {ctx.unit(attack.attacker).name}."
        view['actions']['roll_combat'] = 1


def _combat_retreat_view(game_state, ctx, role, view):
    retreat = game_state.retreat
    view['prompt'] = f"Choose where {ctx.unit(retreat.unit).name} retreats."
    view['actions']['retreat'] = list(retreat.options)


def _combat_advance_view(game_state: GameState, ctx: BoardContext, role: str, view: Dict[str, Any]) -> None:
    advance = game_state.advance
    actions = view['actions']
    room = advance_room(game_state, ctx)
    view['prompt'] = f"Advance into {space_label(ctx, advance.space)}?"
    if game_state.selected:
        if room > 0:
            actions['advance_to'] = [advance.space]
        actions['deselect'] = 1
    elif room > 0 and advance.candidates:
        actions['select'] = list(advance.candidates)
    actions['done_advance'] = 1


PHASE_VIEWS: Dict[Phase, Callable[[GameState, BoardContext, str, Dict[str, Any]], None]] = {
    Phase.SETUP_GERMAN: _setup_view,
    Phase.SETUP_SOVIET: _setup_view,
    Phase.EVENT: _event_view,
    Phase.EVENT_CHOICE: _event_choice_view,
    Phase.EVACUATION: _evacuation_view,
    Phase.RUSSIAN_REACTION: _reaction_view,
    Phase.MOVEMENT_GERMAN: _movement_view,
    Phase.MOVEMENT_SOVIET: _movement_view,
    Phase.ELIMINATION_GERMAN: _elimination_view,
    Phase.ELIMINATION_SOVIET: _elimination_view,
    Phase.COMBAT_SETUP: _combat_setup_view,
    Phase.COMBAT_RESOLVE: _combat_resolve_view,
    Phase.COMBAT_RETREAT: _combat_retreat_view,
    Phase.COMBAT_ADVANCE: _combat_advance_view,
}

WAITING = {
    Phase.SETUP_GERMAN: "German is setting up...",
    Phase.SETUP_SOVIET: "Soviet is setting up...",
    Phase.COMBAT_RETREAT: "Waiting for the defender to retreat...",
}


def project(game_state: GameState, role: str, ctx: BoardContext) -> Dict[str, Any]:
    """
    Build the view of `role`. Observers and the waiting player get the
    same board with an empty actions record.
    """
    view: Dict[str, Any] = {
        'active': game_state.active,
        'phase': game_state.phase.value,
        'turn': game_state.turn,
        'pieces': dict(game_state.pieces),
        'moved': dict(game_state.moved),
        'selected': game_state.selected,
        'log': list(game_state.log),
        'prompt': None,
        'cef': game_state.cef,
        'stance': game_state.stance,
        'overstacked': overstacked_spaces(game_state, ctx),
        'attacks': [attack.to_dict() for attack in game_state.attacks],
        'combat_index': game_state.combat_index,
        'actions': {},
    }

    if role not in (GERMAN, SOVIET) or role != game_state.active:
        view['prompt'] = WAITING.get(game_state.phase, f"Waiting for {game_state.active}...")
        return view

    PHASE_VIEWS[game_state.phase](game_state, ctx, role, view)
    if game_state.undo:
        view['actions']['undo'] = 1
    return view
