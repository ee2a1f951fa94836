import copy

import pytest

from models import GERMAN, SOVIET, Phase
from rules import apply, project
from view import PHASE_VIEWS

VIEW_KEYS = {
    'active', 'phase', 'turn', 'pieces', 'moved', 'selected', 'log', 'prompt',
    'cef', 'stance', 'overstacked', 'attacks', 'combat_index', 'actions',
}


def test_every_phase_has_a_view_builder():
    assert set(PHASE_VIEWS) == set(Phase)


def test_view_fields(game):
    view = project(game, GERMAN)
    assert set(view) == VIEW_KEYS
    assert view['active'] == GERMAN
    assert view['phase'] == "setup_german"
    assert view['turn'] == 1
    assert view['pieces']["fort_pillau"] == "50"


def test_project_is_idempotent(set_up_game):
    before = copy.deepcopy(set_up_game)
    first = project(set_up_game, GERMAN)
    second = project(set_up_game, GERMAN)
    assert first == second
    assert set_up_game == before


def test_view_does_not_alias_state(set_up_game):
    view = project(set_up_game, GERMAN)
    view['pieces']["ger_gd"] = "1"
    view['log'].append("tampered")
    view['moved']["ger_gd"] = 3
    assert set_up_game.pieces["ger_gd"] == "35"
    assert "tampered" not in set_up_game.log
    assert set_up_game.moved == {}


@pytest.mark.parametrize("role", ["Observer", "", SOVIET])
def test_non_active_roles_get_no_actions(set_up_game, role):
    view = project(set_up_game, role)
    assert view['actions'] == {}
    assert view['prompt'] == "Waiting for German..."
    assert view['pieces'] == project(set_up_game, GERMAN)['pieces']


def test_undo_only_offered_to_active_role(game):
    apply(game, GERMAN, "set_stance", "track_land")
    assert project(game, GERMAN)['actions']['undo'] == 1
    assert 'undo' not in project(game, SOVIET)['actions']


def test_prompt_is_set_for_active_role(set_up_game):
    view = project(set_up_game, GERMAN)
    assert view['prompt'] == "Roll on the event table."
