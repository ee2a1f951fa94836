"""
Turn sequence transitions.

Every phase change that crosses module boundaries goes through here so the
order of the turn stays in one place:
event -> evacuation -> [russian reaction] -> German movement -> Soviet movement
-> German combat -> Soviet combat -> next turn.
"""

from models import GERMAN, SOVIET, Phase
from state import GameState, log_event


def begin_turn(game_state: GameState) -> None:
    """Open the event phase of the current turn."""
    game_state.enter_phase(Phase.EVENT, GERMAN)
    log_event(game_state, f"Turn {game_state.turn}")
    log_event(game_state, "Event phase.")


def end_turn(game_state: GameState) -> None:
    """Roll turn-scoped flags over and start the next turn."""
    game_state.major_sinking_last_turn = game_state.major_sinking
    game_state.major_sinking = False
    game_state.russian_halt = False
    game_state.sea_cef_this_turn = 0
    game_state.attacks = []
    game_state.combat_index = 0
    game_state.combat_side = None
    game_state.attack_resolved = False
    game_state.retreat = None
    game_state.advance = None
    game_state.turn += 1
    begin_turn(game_state)


def begin_movement(game_state: GameState, role: str) -> None:
    """Reset movement budgets and hand movement to `role`."""
    game_state.moved = {}
    phase = Phase.MOVEMENT_GERMAN if role == GERMAN else Phase.MOVEMENT_SOVIET
    game_state.enter_phase(phase, role)
    log_event(game_state, f"{role} movement.")


def begin_combat(game_state: GameState, role: str) -> None:
    """
    Open the combat declaration step for `role`.

    Russian Halt cancels the Soviet combat pass, which ends the turn.
    """
    game_state.attacks = []
    game_state.combat_index = 0
    game_state.attack_resolved = False
    game_state.retreat = None
    game_state.advance = None
    if role == SOVIET and game_state.russian_halt:
        log_event(game_state, "Russian Halt: no Soviet combat this turn.")
        end_turn(game_state)
        return
    game_state.combat_side = role
    game_state.enter_phase(Phase.COMBAT_SETUP, role)
    log_event(game_state, f"{role} combat.")


def finish_combat(game_state: GameState) -> None:
    """Close the running combat pass and move on."""
    if game_state.combat_side == GERMAN:
        begin_combat(game_state, SOVIET)
    else:
        end_turn(game_state)
