"""
Setup phases: German stance choice, then unit placement for both sides.
"""

from typing import List

import board_data
from board import BoardContext, space_label
from models import GERMAN, ROLE_SIDE, SOVIET, Phase, Side
from phases import begin_turn
from state import GameState, InvariantViolationError, log_event


def unplaced_units(game_state: GameState, ctx: BoardContext, side: Side) -> List[str]:
    """Combat units of `side` still off-map."""
    return [u.id for u in ctx.side_units(side) if game_state.pieces.get(u.id) is None]


def valid_setup_spaces(game_state: GameState, ctx: BoardContext, unit_id: str) -> List[str]:
    """
    Spaces where a unit may be placed during setup.

    German: spaces 1-4, 20, 24-52. Soviet: spaces 2-24, never with German
    units and never with Soviet units of another army. Either side is
    limited by the stacking cap at placement time.
    """
    unit = ctx.unit(unit_id)
    limit = ctx.config.get('stacking_limit', 3)
    zone = board_data.GERMAN_SETUP_SPACES if unit.side == Side.GERMAN else board_data.SOVIET_SETUP_SPACES

    spaces = []
    for space_id in zone:
        occupants = ctx.combat_units_at(game_state.pieces, space_id)
        if len(occupants) >= limit:
            continue
        if unit.side == Side.SOVIET:
            if any(u.side == Side.GERMAN for u in occupants):
                continue
            if any(u.side == Side.SOVIET and u.army != unit.army for u in occupants):
                continue
        spaces.append(space_id)
    return spaces


def set_stance(game_state: GameState, ctx: BoardContext, slot: str) -> None:
    """Place the stance marker on the Land or Naval slot."""
    game_state.push_undo()
    game_state.pieces[board_data.STANCE_CHIT] = slot
    game_state.stance = board_data.STANCE_SLOTS[slot]
    log_event(game_state, f"German stance: {game_state.stance}.")


def place_unit(game_state: GameState, ctx: BoardContext, space_id: str) -> None:
    """Place the selected unit and clear the selection."""
    unit_id = game_state.selected
    game_state.push_undo()
    game_state.pieces[unit_id] = space_id
    game_state.selected = None
    log_event(game_state, f"{ctx.unit(unit_id).name} set up in {space_label(ctx, space_id)}.")


def setup_complete(game_state: GameState, ctx: BoardContext, role: str) -> bool:
    if role == GERMAN and game_state.stance is None:
        return False
    return not unplaced_units(game_state, ctx, ROLE_SIDE[role])


def end_setup(game_state: GameState, ctx: BoardContext) -> None:
    """
    Finish the current side's setup.

    Raises:
        InvariantViolationError: If units remain unplaced or no stance was chosen
    """
    role = GERMAN if game_state.phase == Phase.SETUP_GERMAN else SOVIET
    if not setup_complete(game_state, ctx, role):
        raise InvariantViolationError(f"{role} setup is not complete")

    if role == GERMAN:
        log_event(game_state, "German setup finished.")
        game_state.enter_phase(Phase.SETUP_SOVIET, SOVIET)
        log_event(game_state, "Soviet setup.")
    else:
        log_event(game_state, "Soviet setup finished.")
        begin_turn(game_state)
