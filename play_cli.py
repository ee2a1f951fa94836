"""
CLI hotseat mode for the Evacuation of Königsberg.

Both players share one terminal. The board is listed space by space, the
active role's prompt and legal actions are shown, and commands are typed as
`<action> [argument]`.

Usage: python play_cli.py [seed]
"""

import random
import sys

from board import sorted_space_ids, space_label
from rules import apply, initialize, project
from state import ActionError, default_context


# ---------------------------------------------------------------------------
# Text Renderer
# ---------------------------------------------------------------------------


def render_board(view: dict):
    """List every occupied space with its units."""
    ctx = default_context()
    by_space = {}
    for unit_id, location in view["pieces"].items():
        if location is not None:
            by_space.setdefault(location, []).append(unit_id)

    print()
    print(f"  Turn {view['turn']}   Phase: {view['phase']}   CEF: {view['cef']}   Stance: {view['stance'] or '-'}")
    print("  " + "-" * 60)
    for space_id in sorted_space_ids(by_space):
        units = []
        for unit_id in by_space[space_id]:
            unit = ctx.unit(unit_id)
            if unit.is_chit:
                units.append(unit.name)
            else:
                spent = view["moved"].get(unit_id, 0)
                units.append(f"{unit_id}[{unit.combat}-{unit.cohesion}]" + (f" m{spent}" if spent else ""))
        flag = " OVERSTACKED" if space_id in view["overstacked"] else ""
        print(f"  {space_label(ctx, space_id):28s} {', '.join(units)}{flag}")
    print()


def show_actions(view: dict):
    print(f">> {view['active']}: {view['prompt']}")
    for action, value in view["actions"].items():
        if isinstance(value, list):
            print(f"   {action}: {' '.join(str(v) for v in value)}")
        else:
            print(f"   {action}")


def show_new_log(view: dict, seen: int) -> int:
    for line in view["log"][seen:]:
        print(f"   | {line}")
    return len(view["log"])


# ---------------------------------------------------------------------------
# Main Game Loop
# ---------------------------------------------------------------------------


def parse_command(raw: str):
    tokens = raw.split()
    if not tokens:
        return None, None
    action = tokens[0]
    args = tokens[1] if len(tokens) > 1 else None
    return action, args


def main():
    print("=" * 50)
    print("  EVACUATION OF KÖNIGSBERG  -  Hotseat Mode")
    print("=" * 50)

    seed = int(sys.argv[1]) if len(sys.argv) > 1 else random.randint(0, 99999)
    rng = random.Random(seed)
    print(f"\nSeed: {seed}")

    game = initialize(seed, "Standard Game", {})
    seen = 0

    while True:
        role = game.active
        view = project(game, role)
        seen = show_new_log(view, seen)
        render_board(view)
        show_actions(view)

        raw = input(f"{role.lower()}> ").strip()
        if raw in ("quit", "exit"):
            break
        action, args = parse_command(raw)
        if action is None:
            continue
        if action not in view["actions"]:
            print(f"  Unknown or unavailable action: {action}")
            continue
        try:
            apply(game, role, action, args, rng=rng)
        except ActionError as e:
            print(f"  Error: {e}")

    print("\n" + "=" * 50)
    print(f"  Game stopped on turn {game.turn} with CEF {game.cef}.")
    print("=" * 50)


if __name__ == "__main__":
    main()
