"""Shared test fixtures and helpers."""

import random

import pytest

from models import GERMAN, SOVIET
from phases import begin_combat, begin_movement
from rules import apply, initialize
from state import default_context

# --- Standard setups ---

STANDARD_GERMAN_SETUP = {
    "ger_gd": "35",
    "ger_ix": "28",
    "ger_xxvi": "27",
    "ger_xxviii": "29",
    "ger_lv": "50",
    "ger_vi": "36",
}

STANDARD_SOVIET_SETUP = {
    "sov_11ga_8": "3",
    "sov_11ga_16": "3",
    "sov_11ga_36": "3",
    "sov_1tk": "4",
    "sov_39a_5": "2",
    "sov_39a_113": "2",
    "sov_43a_13": "20",
    "sov_43a_54": "20",
    "sov_5a_45": "8",
    "sov_5a_65": "8",
    "sov_2ga_11": "24",
    "sov_2ga_60": "24",
}


class ScriptedDice:
    """Random source returning pre-set die rolls in order."""

    def __init__(self, *rolls):
        self.rolls = list(rolls)

    def randint(self, a, b):
        roll = self.rolls.pop(0)
        assert a <= roll <= b
        return roll


# --- Fixtures ---


@pytest.fixture
def ctx():
    return default_context()


@pytest.fixture
def game():
    """Fresh game in German setup."""
    return initialize(seed=42, scenario="Standard Game", options={})


@pytest.fixture
def set_up_game():
    """Game with both sides deployed, at the start of turn 1."""
    return make_set_up_game()


@pytest.fixture
def rng():
    """Deterministic RNG seeded at 42."""
    return random.Random(42)


@pytest.fixture
def api_client():
    """Flask test client."""
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


# --- Helper functions ---


def place_units(game, role, placements):
    for unit_id, space_id in placements.items():
        apply(game, role, "select", unit_id)
        apply(game, role, "place", space_id)


def make_set_up_game(stance_slot="track_land"):
    game = initialize(seed=42, scenario="Standard Game", options={})
    apply(game, GERMAN, "set_stance", stance_slot)
    place_units(game, GERMAN, STANDARD_GERMAN_SETUP)
    apply(game, GERMAN, "end_setup")
    place_units(game, SOVIET, STANDARD_SOVIET_SETUP)
    apply(game, SOVIET, "end_setup")
    return game


def clear_board(game, ctx):
    """Take every non-fort unit off the map."""
    for unit_id, unit in ctx.units.items():
        if not unit.is_fort:
            game.pieces[unit_id] = None


def movement_game(placements, role=GERMAN):
    """Game in `role`'s movement phase with only the given units on the map."""
    game = initialize(seed=1)
    clear_board(game, default_context())
    game.pieces.update(placements)
    begin_movement(game, role)
    return game


def combat_game(placements, role=GERMAN):
    """Game in `role`'s combat declaration step with only the given units on the map."""
    game = initialize(seed=1)
    clear_board(game, default_context())
    game.pieces.update(placements)
    begin_combat(game, role)
    return game


def declare(game, role, attacker, target):
    apply(game, role, "select", attacker)
    apply(game, role, "target", target)
