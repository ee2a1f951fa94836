from typing import Any, Dict, List, Optional, Set, Tuple

import board_data
from board import BoardContext, sorted_space_ids, space_label
from models import (
    GERMAN,
    ROLE_SIDE,
    SIDE_ROLE,
    AdvanceContext,
    Attack,
    Phase,
    RetreatContext,
)
from phases import finish_combat
from state import GameState, log_event, roll_die


def attack_limits(game_state: GameState, ctx: BoardContext, role: str) -> Tuple[int, int]:
    """
    Maximum attack points (distinct spaces of origin) and attackers per point.

    The Germans have fixed limits. Soviet limits grow with the Soviet
    Activation chits in play; Russian Halt removes the Soviet pass altogether.
    """
    config = ctx.config
    if role == GERMAN:
        return config.get('german_attack_points', 2), config.get('german_units_per_point', 2)
    if game_state.russian_halt:
        return 0, 0
    activation = ctx.chits_on_track(game_state.pieces, board_data.SOVIET_ACTIVATION_TRACK)
    points = config.get('soviet_base_attack_points', 1) + activation
    per_point = config.get('soviet_units_per_point', 2) + activation // 2
    return points, per_point


def attack_points_used(game_state: GameState) -> Set[str]:
    return {attack.source for attack in game_state.attacks}


def can_attack_from(game_state: GameState, ctx: BoardContext, role: str, source: str) -> bool:
    max_points, per_point = attack_limits(game_state, ctx, role)
    points = attack_points_used(game_state)
    if source not in points and len(points) >= max_points:
        return False
    from_source = sum(1 for attack in game_state.attacks if attack.source == source)
    return from_source < per_point


def _adjacent_to_enemy(game_state: GameState, ctx: BoardContext, unit_id: str) -> bool:
    unit = ctx.unit(unit_id)
    location = game_state.pieces.get(unit_id)
    return any(
        ctx.hostile_units_at(game_state.pieces, space_id, unit.side)
        for space_id in ctx.graph.neighbors(location)
    )


def eligible_attackers(game_state: GameState, ctx: BoardContext, role: str) -> List[str]:
    """Own combat units in contact with the enemy that may still declare an attack."""
    declared = {attack.attacker for attack in game_state.attacks}
    eligible = []
    for unit in ctx.side_units(ROLE_SIDE[role]):
        location = game_state.pieces.get(unit.id)
        if not ctx.is_playable(location) or unit.id in declared:
            continue
        if not _adjacent_to_enemy(game_state, ctx, unit.id):
            continue
        if can_attack_from(game_state, ctx, role, location):
            eligible.append(unit.id)
    return eligible


def valid_targets(game_state: GameState, ctx: BoardContext, unit_id: str) -> List[str]:
    """
    Legal targets for an attacker: hostile units in adjacent spaces,
    followed by adjacent spaces empty of any unit.
    """
    unit = ctx.unit(unit_id)
    location = game_state.pieces.get(unit_id)
    neighbors = sorted_space_ids(s for s in ctx.graph.neighbors(location) if ctx.is_playable(s))
    units = []
    spaces = []
    for space_id in neighbors:
        occupants = [u for u in ctx.units_at(game_state.pieces, space_id) if not u.is_chit]
        if not occupants:
            spaces.append(space_id)
            continue
        units.extend(u.id for u in occupants if ctx.is_hostile(u, unit.side))
    return units + spaces


def declare_attack(game_state: GameState, ctx: BoardContext, target: str) -> Attack:
    """Record an attack by the selected unit against a unit or an empty space."""
    attacker = game_state.selected
    source = game_state.pieces[attacker]
    if target in ctx.units:
        attack = Attack(attacker=attacker, target=target, source=source,
                        target_space=game_state.pieces[target])
        description = ctx.unit(target).name
    else:
        attack = Attack(attacker=attacker, target=None, source=source, target_space=target)
        description = space_label(ctx, target)
    game_state.push_undo()
    game_state.attacks.append(attack)
    game_state.selected = None
    log_event(game_state, f"{ctx.unit(attacker).name} will attack {description}.")
    return attack


def end_combat_setup(game_state: GameState, ctx: BoardContext) -> None:
    """Lock in the declarations. With none declared the pass ends at once."""
    role = game_state.combat_side
    if not game_state.attacks:
        log_event(game_state, f"{role} declares no attacks.")
        finish_combat(game_state)
        return
    log_event(game_state, f"{role} declares {len(game_state.attacks)} attack(s).")
    game_state.combat_index = 0
    game_state.attack_resolved = False
    game_state.enter_phase(Phase.COMBAT_RESOLVE, role)


def effective_target(game_state: GameState, ctx: BoardContext, target_id: str) -> str:
    """An intact fort shields the units stacked with it."""
    if ctx.unit(target_id).is_fort:
        return target_id
    fort = ctx.fort_at(game_state.pieces, game_state.pieces[target_id])
    return fort.id if fort else target_id


def find_retreat_spaces(game_state: GameState, ctx: BoardContext, unit_id: str) -> List[str]:
    """Adjacent spaces free of hostile units and below the stacking limit."""
    unit = ctx.unit(unit_id)
    limit = ctx.config.get('stacking_limit', 3)
    options = []
    for space_id in ctx.graph.neighbors(game_state.pieces.get(unit_id)):
        if not ctx.is_playable(space_id):
            continue
        if ctx.hostile_units_at(game_state.pieces, space_id, unit.side):
            continue
        if len(ctx.combat_units_at(game_state.pieces, space_id)) >= limit:
            continue
        options.append(space_id)
    return sorted_space_ids(options)


def advance_candidates(game_state: GameState, ctx: BoardContext, space_id: str) -> List[str]:
    """
    Attackers allowed to advance into a vacated space.

    Eligibility rests on the space recorded when the attack was declared,
    rechecked against live adjacency: any attacker that targeted a unit in
    that space and still stands next to it qualifies.
    """
    candidates = []
    for attack in game_state.attacks:
        if attack.target is None or attack.target_space != space_id:
            continue
        if attack.attacker in candidates:
            continue
        if ctx.graph.is_adjacent(game_state.pieces.get(attack.attacker), space_id):
            candidates.append(attack.attacker)
    return candidates


def advance_room(game_state: GameState, ctx: BoardContext) -> int:
    limit = ctx.config.get('stacking_limit', 3)
    return limit - len(ctx.combat_units_at(game_state.pieces, game_state.advance.space))


def check_advance(game_state: GameState, ctx: BoardContext, space_id: str) -> bool:
    """Offer an advance after combat if `space_id` has been emptied."""
    if any(not u.is_chit for u in ctx.units_at(game_state.pieces, space_id)):
        return False
    candidates = advance_candidates(game_state, ctx, space_id)
    if not candidates:
        return False
    game_state.advance = AdvanceContext(space=space_id, candidates=candidates)
    game_state.enter_phase(Phase.COMBAT_ADVANCE, game_state.combat_side)
    log_event(game_state, f">{space_label(ctx, space_id)} is vacated. Attackers may advance.")
    return True


def _eliminate(game_state: GameState, ctx: BoardContext, unit_id: str, reason: str) -> None:
    game_state.pieces[unit_id] = None
    log_event(game_state, f">{ctx.unit(unit_id).name} {reason}")


def _resolve_space_attack(game_state: GameState, ctx: BoardContext, attack: Attack,
                          result: Dict[str, Any]) -> Dict[str, Any]:
    attacker = ctx.unit(attack.attacker)
    limit = ctx.config.get('stacking_limit', 3)
    location = game_state.pieces.get(attack.attacker)
    space_id = attack.target_space
    if (not ctx.graph.is_adjacent(location, space_id)
            or ctx.hostile_units_at(game_state.pieces, space_id, attacker.side)
            or len(ctx.combat_units_at(game_state.pieces, space_id)) >= limit):
        result['outcome'] = 'cancelled'
        log_event(game_state, f">{attacker.name} cannot enter {space_label(ctx, space_id)}. Attack cancelled.")
        return result
    game_state.pieces[attack.attacker] = space_id
    result['outcome'] = 'advanced'
    log_event(game_state, f">{attacker.name} advances into {space_label(ctx, space_id)}.")
    return result


def resolve_attack(game_state: GameState, ctx: BoardContext, rng) -> Dict[str, Any]:
    """
    Resolve the attack at `combat_index`.

    The attacker hits when its die is at most its combat strength. A hit
    forces a cohesion save: at most cohesion holds, cohesion + 1 retreats,
    anything higher eliminates. Forts cannot retreat and are eliminated
    instead. A retreat with several destinations hands control to the
    defender until a destination is chosen.

    Args:
        game_state: Game in the combat resolution phase
        ctx: Board context
        rng: Random source exposing randint

    Returns:
        Dictionary describing the outcome: 'cancelled', 'miss', 'held',
        'eliminated', 'retreated', 'retreat_pending' or 'advanced'
    """
    attack = game_state.attacks[game_state.combat_index]
    result: Dict[str, Any] = {'attacker_id': attack.attacker, 'target_id': attack.target,
                              'outcome': None, 'attack_die': None, 'save_die': None}
    game_state.undo = []
    game_state.attack_resolved = True
    attacker = ctx.unit(attack.attacker)
    log_event(game_state, f"Attack {game_state.combat_index + 1} of {len(game_state.attacks)}: {attacker.name}.")

    if attack.target is None:
        return _resolve_space_attack(game_state, ctx, attack, result)

    attacker_space = game_state.pieces.get(attack.attacker)
    target_space = game_state.pieces.get(attack.target)
    if target_space is None or not ctx.graph.is_adjacent(attacker_space, target_space):
        result['outcome'] = 'cancelled'
        log_event(game_state, ">Target out of reach. Attack cancelled.")
        return result

    defender_id = effective_target(game_state, ctx, attack.target)
    defender = ctx.unit(defender_id)
    result['defender_id'] = defender_id
    if defender_id != attack.target:
        log_event(game_state, f">{defender.name} shields {ctx.unit(attack.target).name}.")

    attack_die = roll_die(rng, ctx)
    result['attack_die'] = attack_die
    if attack_die > attacker.combat:
        result['outcome'] = 'miss'
        log_event(game_state, f">Attack die: {attack_die} against {attacker.combat}. Miss.")
        return result
    log_event(game_state, f">Attack die: {attack_die} against {attacker.combat}. Hit!")

    save_die = roll_die(rng, ctx)
    result['save_die'] = save_die
    if save_die <= defender.cohesion:
        result['outcome'] = 'held'
        log_event(game_state, f">Cohesion die: {save_die} against {defender.cohesion}. {defender.name} holds.")
        return result

    log_event(game_state, f">Cohesion die: {save_die} against {defender.cohesion}.")
    if save_die > defender.cohesion + 1 or defender.is_fort:
        result['outcome'] = 'eliminated'
        _eliminate(game_state, ctx, defender_id, "is eliminated.")
        check_advance(game_state, ctx, target_space)
        return result

    options = find_retreat_spaces(game_state, ctx, defender_id)
    if not options:
        result['outcome'] = 'eliminated'
        _eliminate(game_state, ctx, defender_id, "has no retreat path. Eliminated.")
        check_advance(game_state, ctx, target_space)
    elif len(options) == 1:
        result['outcome'] = 'retreated'
        result['retreat_to'] = options[0]
        game_state.pieces[defender_id] = options[0]
        log_event(game_state, f">{defender.name} retreats to {space_label(ctx, options[0])}.")
        check_advance(game_state, ctx, target_space)
    else:
        result['outcome'] = 'retreat_pending'
        defender_role = SIDE_ROLE[defender.side]
        game_state.retreat = RetreatContext(
            unit=defender_id,
            from_space=target_space,
            options=options,
            acting_role=defender_role,
            resume_role=game_state.combat_side,
        )
        game_state.enter_phase(Phase.COMBAT_RETREAT, defender_role)
        log_event(game_state, f">{defender.name} must retreat. {defender_role} chooses where.")
    return result


def retreat_unit(game_state: GameState, ctx: BoardContext, space_id: str) -> None:
    """Carry out the defender's retreat choice and hand control back."""
    retreat = game_state.retreat
    game_state.pieces[retreat.unit] = space_id
    log_event(game_state, f">{ctx.unit(retreat.unit).name} retreats to {space_label(ctx, space_id)}.")
    game_state.retreat = None
    game_state.enter_phase(Phase.COMBAT_RESOLVE, retreat.resume_role)
    check_advance(game_state, ctx, retreat.from_space)


def advance_unit(game_state: GameState, ctx: BoardContext, space_id: str) -> None:
    unit_id = game_state.selected
    game_state.pieces[unit_id] = space_id
    game_state.advance.candidates.remove(unit_id)
    game_state.selected = None
    log_event(game_state, f">{ctx.unit(unit_id).name} advances into {space_label(ctx, space_id)}.")


def done_advance(game_state: GameState, ctx: BoardContext) -> None:
    game_state.advance = None
    game_state.enter_phase(Phase.COMBAT_RESOLVE, game_state.combat_side)
    next_attack(game_state)


def next_attack(game_state: GameState) -> None:
    game_state.combat_index += 1
    game_state.attack_resolved = False


def end_combat(game_state: GameState) -> None:
    log_event(game_state, f"{game_state.combat_side} combat finished.")
    finish_combat(game_state)


def pending_attack(game_state: GameState) -> Optional[Attack]:
    if game_state.combat_index < len(game_state.attacks):
        return game_state.attacks[game_state.combat_index]
    return None
