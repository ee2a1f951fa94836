"""
Movement and stacking rules.

A unit moves one edge of the board graph per action and may spend up to
`movement_points` per movement phase. Spaces holding hostile units cannot be
entered, and neither can a space already at the stacking limit, so the
limit holds after every step. Should a side still end its movement
overstacked, it must eliminate units until every space is back under the
limit.
"""

from typing import List

from board import BoardContext, sorted_space_ids, space_label, stack_counts
from models import GERMAN, ROLE_SIDE, SOVIET, Phase
from phases import begin_combat, begin_movement
from state import GameState, InvariantViolationError, log_event


def movement_points(ctx: BoardContext) -> int:
    return ctx.config.get('movement_points', 3)


def movement_role(game_state: GameState) -> str:
    if game_state.phase in (Phase.MOVEMENT_GERMAN, Phase.ELIMINATION_GERMAN):
        return GERMAN
    return SOVIET


def movable_units(game_state: GameState, ctx: BoardContext, role: str) -> List[str]:
    """Own combat units on the map with movement points left."""
    budget = movement_points(ctx)
    return [
        u.id for u in ctx.side_units(ROLE_SIDE[role])
        if ctx.is_playable(game_state.pieces.get(u.id)) and game_state.moved.get(u.id, 0) < budget
    ]


def valid_moves(game_state: GameState, ctx: BoardContext, unit_id: str) -> List[str]:
    """Adjacent spaces the unit may enter: not held by a hostile unit and not full."""
    unit = ctx.unit(unit_id)
    limit = ctx.config.get('stacking_limit', 3)
    location = game_state.pieces.get(unit_id)
    moves = []
    for space_id in ctx.graph.neighbors(location):
        if not ctx.is_playable(space_id):
            continue
        if ctx.hostile_units_at(game_state.pieces, space_id, unit.side):
            continue
        if len(ctx.combat_units_at(game_state.pieces, space_id)) >= limit:
            continue
        moves.append(space_id)
    return sorted_space_ids(moves)


def overstacked_spaces(game_state: GameState, ctx: BoardContext) -> List[str]:
    """Playable spaces holding more combat units than the stacking limit."""
    limit = ctx.config.get('stacking_limit', 3)
    counts = stack_counts(ctx, game_state.pieces)
    return sorted_space_ids(s for s, n in counts.items() if n > limit)


def move_unit(game_state: GameState, ctx: BoardContext, space_id: str) -> None:
    """Move the selected unit one space. The unit is released once its budget is spent."""
    unit_id = game_state.selected
    origin = game_state.pieces[unit_id]
    game_state.push_undo()
    game_state.pieces[unit_id] = space_id
    game_state.moved[unit_id] = game_state.moved.get(unit_id, 0) + 1
    log_event(game_state, f"{ctx.unit(unit_id).name} moved from {space_label(ctx, origin)} "
                          f"to {space_label(ctx, space_id)}.")
    if game_state.moved[unit_id] >= movement_points(ctx):
        game_state.selected = None


def stop_unit(game_state: GameState, ctx: BoardContext) -> None:
    """End the selected unit's move, forfeiting its remaining points."""
    unit_id = game_state.selected
    game_state.push_undo()
    game_state.moved[unit_id] = movement_points(ctx)
    game_state.selected = None
    log_event(game_state, f"{ctx.unit(unit_id).name} stops.")


def _after_movement(game_state: GameState, role: str) -> None:
    if role == GERMAN:
        begin_movement(game_state, SOVIET)
    else:
        begin_combat(game_state, GERMAN)


def end_movement(game_state: GameState, ctx: BoardContext) -> None:
    """Close the movement phase, diverting to elimination if a space is overstacked."""
    role = movement_role(game_state)
    overstacked = overstacked_spaces(game_state, ctx)
    log_event(game_state, f"{role} movement finished.")
    if overstacked:
        phase = Phase.ELIMINATION_GERMAN if role == GERMAN else Phase.ELIMINATION_SOVIET
        game_state.enter_phase(phase, role)
        names = ", ".join(space_label(ctx, s) for s in overstacked)
        log_event(game_state, f"Overstacked: {names}. {role} must eliminate units.")
        return
    _after_movement(game_state, role)


def eliminable_units(game_state: GameState, ctx: BoardContext, role: str) -> List[str]:
    """Own combat units standing in an overstacked space."""
    overstacked = set(overstacked_spaces(game_state, ctx))
    return [
        u.id for u in ctx.side_units(ROLE_SIDE[role])
        if game_state.pieces.get(u.id) in overstacked
    ]


def eliminate_unit(game_state: GameState, ctx: BoardContext, unit_id: str) -> None:
    location = game_state.pieces[unit_id]
    game_state.push_undo()
    game_state.pieces[unit_id] = None
    log_event(game_state, f"{ctx.unit(unit_id).name} eliminated in {space_label(ctx, location)}.")


def end_elimination(game_state: GameState, ctx: BoardContext) -> None:
    """
    Leave the elimination phase.

    Raises:
        InvariantViolationError: If any space is still overstacked
    """
    overstacked = overstacked_spaces(game_state, ctx)
    if overstacked:
        raise InvariantViolationError(f"Spaces still overstacked: {', '.join(overstacked)}")
    _after_movement(game_state, movement_role(game_state))
