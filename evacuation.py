"""
Event and evacuation phases for the Evacuation of Königsberg.
Handles the event table, the German evacuation rolls that build the CEF
score, and the Soviet reaction against sea evacuation.

- Event roll: 1d6, -1 with exactly two Soviet Activation chits out, +1 with none
- Land CEF: 1d6 mapped to 1-3, doubled while the Königsberg perimeter holds,
  or 2d6 under Major Exodus
- Sea CEF: 1d6 plus navy/shipping chits, minus sinking and Soviet coast
  penalties, mapped to 0-9, tripled under Major Exodus with a Naval stance
- Russian reaction: a 6 followed by a low roll sinks a transport (-1 CEF)
"""

from typing import Dict, List, Optional

import board_data
from board import BoardContext
from models import GERMAN, SOVIET, Phase, Side
from phases import begin_movement
from state import GameState, log_event, roll_die


NAVY = "navy"
SHIPPING = "shipping"

CHIT_TRACKS = {
    NAVY: (board_data.NAVY_CHITS, board_data.NAVY_TRACK, "German Navy"),
    SHIPPING: (board_data.SHIPPING_CHITS, board_data.SHIPPING_TRACK, "German Shipping"),
}


def place_chit(game_state: GameState, ctx: BoardContext, chits: List[str], track: List[str]) -> Optional[str]:
    """
    Move the next off-map chit onto the first free slot of a track.

    Returns:
        The slot used, or None when the chits or the track are exhausted
    """
    slot = ctx.first_free_slot(game_state.pieces, track)
    chit = next((c for c in chits if game_state.pieces.get(c) is None), None)
    if slot is None or chit is None:
        return None
    game_state.pieces[chit] = slot
    return slot


def activation_chits(game_state: GameState, ctx: BoardContext) -> int:
    return ctx.chits_on_track(game_state.pieces, board_data.SOVIET_ACTIVATION_TRACK)


def event_modifier(game_state: GameState, ctx: BoardContext) -> int:
    """-1 with exactly two Soviet Activation chits placed, +1 with none."""
    placed = activation_chits(game_state, ctx)
    if placed == 2:
        return -1
    if placed == 0:
        return 1
    return 0


def begin_evacuation(game_state: GameState) -> None:
    game_state.enter_phase(Phase.EVACUATION, GERMAN)
    log_event(game_state, "Evacuation phase.")


def _add_event_chit(game_state: GameState, ctx: BoardContext, kind: str) -> None:
    chits, track, label = CHIT_TRACKS[kind]
    slot = place_chit(game_state, ctx, chits, track)
    if slot:
        log_event(game_state, f">{label} chit placed.")
    else:
        log_event(game_state, f">No {label} chit left.")


def _russian_halt(game_state: GameState) -> None:
    game_state.russian_halt = True
    log_event(game_state, ">Russian Halt.")


def roll_event(game_state: GameState, ctx: BoardContext, rng) -> Dict:
    """
    Roll on the event table.

    Args:
        game_state: Game in the event phase
        ctx: Board context
        rng: Random source exposing randint

    Returns:
        Dictionary with the raw die, the modifier and the clamped result
    """
    sides = ctx.config.get('die_sides', 6)
    die = roll_die(rng, ctx)
    modifier = event_modifier(game_state, ctx)
    result = max(1, min(sides, die + modifier))
    log_event(game_state, f"Event roll: {die} ({modifier:+d}) = {result}.")

    if result == 1:
        game_state.major_exodus = True
        log_event(game_state, ">Major Exodus.")
    elif result == 2:
        game_state.enter_phase(Phase.EVENT_CHOICE, GERMAN)
        log_event(game_state, ">German chooses Navy or Shipping.")
        return {'die': die, 'modifier': modifier, 'result': result}
    elif result == 3:
        if game_state.stance == "Naval":
            _add_event_chit(game_state, ctx, NAVY)
        else:
            _russian_halt(game_state)
    elif result == 4:
        _add_event_chit(game_state, ctx, SHIPPING)
    elif result == 5:
        _russian_halt(game_state)
    else:
        slot = place_chit(game_state, ctx, board_data.SOVIET_ACTIVATION_CHITS,
                          board_data.SOVIET_ACTIVATION_TRACK)
        if slot:
            log_event(game_state, ">Soviet Activation chit placed.")
        else:
            log_event(game_state, ">No Soviet Activation chit left.")

    begin_evacuation(game_state)
    return {'die': die, 'modifier': modifier, 'result': result}


def choose_event_chit(game_state: GameState, ctx: BoardContext, kind: str) -> None:
    """Resolve event 2: the German player takes a Navy or a Shipping chit."""
    _add_event_chit(game_state, ctx, kind)
    begin_evacuation(game_state)


def holds_all(game_state: GameState, ctx: BoardContext, spaces: List[str], side: Side) -> bool:
    """True if every space holds at least one combat unit of `side`."""
    return all(
        any(u.side == side for u in ctx.combat_units_at(game_state.pieces, space_id))
        for space_id in spaces
    )


def land_cef(game_state: GameState, ctx: BoardContext, rng) -> int:
    """Land evacuation for this turn."""
    if game_state.major_exodus:
        first, second = roll_die(rng, ctx), roll_die(rng, ctx)
        log_event(game_state, f">Land (Major Exodus): {first} + {second}.")
        return first + second

    die = roll_die(rng, ctx)
    if die <= 2:
        value = 1
    elif die <= 5:
        value = 2
    else:
        value = 3
    if holds_all(game_state, ctx, board_data.LAND_PERIMETER, Side.GERMAN):
        value *= 2
        log_event(game_state, f">Land: {die}, perimeter held, doubled to {value}.")
    else:
        log_event(game_state, f">Land: {die} gives {value}.")
    return value


def sea_modifier(game_state: GameState, ctx: BoardContext) -> int:
    modifier = ctx.chits_on_track(game_state.pieces, board_data.NAVY_TRACK)
    modifier += ctx.chits_on_track(game_state.pieces, board_data.SHIPPING_TRACK)
    if game_state.major_sinking_last_turn:
        modifier -= ctx.config.get('major_sinking_penalty', 5)
    for spaces in board_data.SEA_SOVIET_SETS:
        if holds_all(game_state, ctx, spaces, Side.SOVIET):
            modifier -= 1
    return modifier


def sea_cef(game_state: GameState, ctx: BoardContext, rng) -> int:
    """Sea evacuation for this turn."""
    die = roll_die(rng, ctx)
    modifier = sea_modifier(game_state, ctx)
    roll = max(1, die + modifier)
    if roll == 1:
        value = 0
    elif roll < 10:
        value = roll - 1
    else:
        value = 9
    if game_state.major_exodus and game_state.stance == "Naval":
        value *= 3
    log_event(game_state, f">Sea: {die} ({modifier:+d}) gives {value}.")
    return value


def roll_evacuation(game_state: GameState, ctx: BoardContext, rng) -> Dict:
    """
    Perform the evacuation rolls and add both results to the CEF.

    A positive Sea CEF gives the Soviets a reaction roll before movement.

    Returns:
        Dictionary with 'land_cef', 'sea_cef' and the new 'cef' total
    """
    land = land_cef(game_state, ctx, rng)
    sea = sea_cef(game_state, ctx, rng)
    game_state.cef += land + sea
    game_state.sea_cef_this_turn = sea
    game_state.major_exodus = False
    game_state.major_sinking_last_turn = False
    log_event(game_state, f"Evacuated: {land} by land, {sea} by sea. CEF {game_state.cef}.")

    if sea > 0:
        game_state.enter_phase(Phase.RUSSIAN_REACTION, SOVIET)
        log_event(game_state, "Russian reaction.")
    else:
        begin_movement(game_state, GERMAN)
    return {'land_cef': land, 'sea_cef': sea, 'cef': game_state.cef}


def roll_reaction(game_state: GameState, ctx: BoardContext, rng) -> Dict:
    """
    Soviet air and submarine reaction against the sea lift.

    On a 6 a second die is rolled, modified by the German Navy chits in
    play; a total of 5 or less is a Major Sinking.

    Returns:
        Dictionary with the dice rolled and whether a sinking occurred
    """
    sides = ctx.config.get('die_sides', 6)
    die = roll_die(rng, ctx)
    results = {'die': die, 'second': None, 'sinking': False}
    if die == sides:
        second = roll_die(rng, ctx)
        navy = ctx.chits_on_track(game_state.pieces, board_data.NAVY_TRACK)
        results['second'] = second
        log_event(game_state, f"Reaction roll: {die}, then {second} ({navy:+d}).")
        if second + navy <= 5:
            game_state.cef = max(0, game_state.cef - 1)
            game_state.major_sinking = True
            results['sinking'] = True
            log_event(game_state, f">Major Sinking! CEF {game_state.cef}.")
        else:
            log_event(game_state, ">The convoy gets through.")
    else:
        log_event(game_state, f"Reaction roll: {die}, no effect.")

    begin_movement(game_state, GERMAN)
    return results
