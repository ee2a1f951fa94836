import pytest

from models import GERMAN, SOVIET, Phase
from resolution import (
    attack_limits,
    eligible_attackers,
    end_combat,
    find_retreat_spaces,
    resolve_attack,
    valid_targets,
)
from rules import apply, project
from state import IllegalActionError

from conftest import ScriptedDice, combat_game, declare


class TestAttackLimits:
    """Attack points and attackers per point."""

    def test_german_limits(self, ctx):
        game = combat_game({})
        assert attack_limits(game, ctx, GERMAN) == (2, 2)

    @pytest.mark.parametrize("chits,limits", [(0, (1, 2)), (1, (2, 2)), (2, (3, 3)), (3, (4, 3))])
    def test_soviet_limits_grow_with_activation(self, ctx, chits, limits):
        game = combat_game({})
        for index in range(chits):
            game.pieces[f"chit_sov_act_{index + 1}"] = f"track_sov_act{index + 1}"
        assert attack_limits(game, ctx, SOVIET) == limits

    def test_russian_halt_removes_soviet_attacks(self, ctx):
        game = combat_game({})
        game.russian_halt = True
        assert attack_limits(game, ctx, SOVIET) == (0, 0)

    def test_points_and_units_per_point(self, ctx):
        game = combat_game({
            "ger_xxvi": "27", "ger_ix": "28", "ger_gd": "28", "ger_xxviii": "29",
            "sov_11ga_8": "3", "sov_1tk": "4", "sov_43a_13": "20",
        })
        assert eligible_attackers(game, ctx, GERMAN) == ["ger_gd", "ger_ix", "ger_xxvi", "ger_xxviii"]
        declare(game, GERMAN, "ger_xxvi", "sov_11ga_8")
        declare(game, GERMAN, "ger_ix", "sov_1tk")
        # both attack points are spent, only 28 may add a second attacker
        assert eligible_attackers(game, ctx, GERMAN) == ["ger_gd"]
        declare(game, GERMAN, "ger_gd", "sov_1tk")
        assert eligible_attackers(game, ctx, GERMAN) == []


def test_units_out_of_contact_cannot_attack(ctx):
    game = combat_game({"ger_lv": "50", "ger_gd": "28", "sov_1tk": "4"})
    assert eligible_attackers(game, ctx, GERMAN) == ["ger_gd"]


def test_valid_targets(ctx):
    game = combat_game({"ger_gd": "28", "sov_11ga_8": "4"})
    # 35 holds only a friendly fort
    assert valid_targets(game, ctx, "ger_gd") == ["sov_11ga_8", "27", "29"]


def test_soviet_targets_include_forts(ctx):
    game = combat_game({"ger_gd": "35", "sov_11ga_8": "28"}, role=SOVIET)
    assert valid_targets(game, ctx, "sov_11ga_8") == ["ger_gd", "fort_konigsberg", "4", "27", "29"]


def test_declare_and_undo(ctx):
    game = combat_game({"ger_gd": "28", "sov_11ga_8": "4"})
    apply(game, GERMAN, "select", "ger_gd")
    apply(game, GERMAN, "target", "sov_11ga_8")
    assert len(game.attacks) == 1
    attack = game.attacks[0]
    assert (attack.attacker, attack.target, attack.source, attack.target_space) == ("ger_gd", "sov_11ga_8", "28", "4")
    assert project(game, GERMAN)['attacks'] == [
        {'attacker': "ger_gd", 'target': "sov_11ga_8", 'source': "28", 'targetSpace': "4"}
    ]
    apply(game, GERMAN, "undo")
    assert game.attacks == []


def test_target_must_be_listed(ctx):
    game = combat_game({"ger_gd": "28", "sov_11ga_8": "4"})
    apply(game, GERMAN, "select", "ger_gd")
    with pytest.raises(IllegalActionError):
        apply(game, GERMAN, "target", "sov_1tk")
    assert game.attacks == []


def test_no_attacks_skips_to_soviet_combat(ctx):
    game = combat_game({"ger_gd": "28", "sov_11ga_8": "4"})
    apply(game, GERMAN, "end_combat_setup")
    assert game.phase == Phase.COMBAT_SETUP
    assert game.active == SOVIET
    assert game.combat_side == SOVIET


def test_russian_halt_skips_soviet_combat(ctx):
    game = combat_game({"ger_gd": "28", "sov_11ga_8": "4"})
    game.russian_halt = True
    apply(game, GERMAN, "end_combat_setup")
    assert game.phase == Phase.EVENT
    assert game.turn == 2
    assert game.russian_halt is False


def german_attack(placements, attacker, target):
    game = combat_game(placements)
    declare(game, GERMAN, attacker, target)
    apply(game, GERMAN, "end_combat_setup")
    assert game.phase == Phase.COMBAT_RESOLVE
    return game


class TestResolution:
    """Attack die against combat, then cohesion save."""

    def test_elimination_and_advance(self):
        """Scenario E: a hit and a failed save by two clears the space."""
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
        assert project(game, GERMAN)['actions'] == {'roll_combat': 1}

        apply(game, GERMAN, "roll_combat", rng=ScriptedDice(3, 5))
        assert game.pieces["sov_11ga_8"] is None
        assert game.phase == Phase.COMBAT_ADVANCE
        assert game.advance.space == "4"
        assert game.advance.candidates == ["ger_gd"]
        assert project(game, GERMAN)['actions'] == {'select': ["ger_gd"], 'done_advance': 1}

        apply(game, GERMAN, "select", "ger_gd")
        apply(game, GERMAN, "advance_to", "4")
        assert game.pieces["ger_gd"] == "4"
        assert game.advance.candidates == []

        apply(game, GERMAN, "done_advance")
        assert game.phase == Phase.COMBAT_RESOLVE
        assert game.combat_index == 1
        assert project(game, GERMAN)['actions'] == {'end_combat': 1}

        apply(game, GERMAN, "end_combat")
        assert game.phase == Phase.COMBAT_SETUP
        assert game.active == SOVIET

    def test_miss(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
        result = resolve_attack(game, ctx, ScriptedDice(5))
        assert result['outcome'] == 'miss'
        assert game.pieces["sov_11ga_8"] == "4"
        assert project(game, GERMAN)['actions'] == {'next_attack': 1}

    def test_defender_holds(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
        result = resolve_attack(game, ctx, ScriptedDice(4, 3))
        assert result['outcome'] == 'held'
        assert game.pieces["sov_11ga_8"] == "4"

    def test_retreat_with_choice(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
        result = resolve_attack(game, ctx, ScriptedDice(1, 4))
        assert result['outcome'] == 'retreat_pending'
        assert game.phase == Phase.COMBAT_RETREAT
        assert game.active == SOVIET
        assert project(game, SOVIET)['actions'] == {'retreat': ["3", "8", "20"]}
        assert project(game, GERMAN)['actions'] == {}

        with pytest.raises(IllegalActionError):
            apply(game, GERMAN, "retreat", "8")
        apply(game, SOVIET, "retreat", "8")
        assert game.pieces["sov_11ga_8"] == "8"
        assert game.retreat is None
        assert game.phase == Phase.COMBAT_ADVANCE
        assert game.active == GERMAN

    def test_single_retreat_path_is_automatic(self, ctx):
        game = german_attack(
            {"ger_gd": "28", "ger_ix": "3", "ger_xxvi": "20", "sov_11ga_8": "4"},
            "ger_gd", "sov_11ga_8",
        )
        result = resolve_attack(game, ctx, ScriptedDice(1, 4))
        assert result['outcome'] == 'retreated'
        assert result['retreat_to'] == "8"
        assert game.pieces["sov_11ga_8"] == "8"
        assert game.phase == Phase.COMBAT_ADVANCE

    def test_no_retreat_path_eliminates(self, ctx):
        game = german_attack(
            {"ger_gd": "28", "ger_ix": "3", "ger_xxvi": "20", "ger_lv": "8", "sov_11ga_8": "4"},
            "ger_gd", "sov_11ga_8",
        )
        result = resolve_attack(game, ctx, ScriptedDice(1, 4))
        assert result['outcome'] == 'eliminated'
        assert game.pieces["sov_11ga_8"] is None

    def test_retreat_avoids_full_spaces(self, ctx):
        game = combat_game({
            "ger_gd": "28", "sov_11ga_8": "4",
            "sov_39a_5": "8", "sov_39a_113": "8", "sov_43a_13": "8",
        })
        assert find_retreat_spaces(game, ctx, "sov_11ga_8") == ["3", "20"]

    def test_fort_shields_and_cannot_retreat(self, ctx):
        game = combat_game({"ger_gd": "35", "sov_11ga_8": "28"}, role=SOVIET)
        declare(game, SOVIET, "sov_11ga_8", "ger_gd")
        apply(game, SOVIET, "end_combat_setup")
        result = resolve_attack(game, ctx, ScriptedDice(1, 6))
        assert result['defender_id'] == "fort_konigsberg"
        assert result['outcome'] == 'eliminated'
        assert game.pieces["fort_konigsberg"] is None
        assert game.pieces["ger_gd"] == "35"
        assert game.phase == Phase.COMBAT_RESOLVE

    def test_cancelled_when_target_gone(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
        game.pieces["sov_11ga_8"] = None
        result = resolve_attack(game, ctx, ScriptedDice())
        assert result['outcome'] == 'cancelled'


class TestEmptySpaceAttack:
    """An attack on an empty space moves the attacker in."""

    def test_attacker_advances_without_dice(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "27")
        result = resolve_attack(game, ctx, ScriptedDice())
        assert result['outcome'] == 'advanced'
        assert game.pieces["ger_gd"] == "27"

    def test_cancelled_if_enemy_arrived(self, ctx):
        game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "27")
        game.pieces["sov_1tk"] = "27"
        result = resolve_attack(game, ctx, ScriptedDice())
        assert result['outcome'] == 'cancelled'
        assert game.pieces["ger_gd"] == "28"


def test_two_attacks_in_declaration_order(ctx):
    game = combat_game({"ger_gd": "28", "ger_ix": "28", "sov_11ga_8": "4"})
    declare(game, GERMAN, "ger_gd", "sov_11ga_8")
    declare(game, GERMAN, "ger_ix", "sov_11ga_8")
    apply(game, GERMAN, "end_combat_setup")

    apply(game, GERMAN, "roll_combat", rng=ScriptedDice(6))
    assert game.attacks[game.combat_index].attacker == "ger_gd"
    apply(game, GERMAN, "next_attack")
    assert game.combat_index == 1
    apply(game, GERMAN, "roll_combat", rng=ScriptedDice(1, 6))
    assert game.pieces["sov_11ga_8"] is None
    assert game.advance.candidates == ["ger_gd", "ger_ix"]


def test_full_combat_turn_ends_turn(ctx):
    game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
    apply(game, GERMAN, "roll_combat", rng=ScriptedDice(6))
    apply(game, GERMAN, "next_attack")
    apply(game, GERMAN, "end_combat")
    assert game.active == SOVIET
    apply(game, SOVIET, "end_combat_setup")
    assert game.phase == Phase.EVENT
    assert game.turn == 2
    assert game.attacks == []


def test_end_combat_needs_only_the_state(ctx):
    game = german_attack({"ger_gd": "28", "sov_11ga_8": "4"}, "ger_gd", "sov_11ga_8")
    end_combat(game)
    assert game.phase == Phase.COMBAT_SETUP
    assert game.combat_side == SOVIET
    assert "German combat finished." in game.log
