from flask import Flask, request, jsonify
from flask_cors import CORS
from rules import initialize, project, apply, scenarios
from state import ActionError, GameState
from typing import Dict
import random
import uuid

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes
games: Dict[str, GameState] = {}  # In-memory storage for game states
dice: Dict[str, random.Random] = {}  # One random source per game


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Create a new game with the provided seed and scenario."""
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'error': 'Invalid JSON data'}), 400

        seed = data.get('seed', 42)  # Default seed if none provided

        # Validate seed is an integer
        try:
            seed = int(seed)
        except (ValueError, TypeError):
            return jsonify({'error': 'Seed must be an integer'}), 400

        scenario = data.get('scenario', scenarios[0])
        if scenario not in scenarios:
            return jsonify({'error': f'Unknown scenario: {scenario}'}), 400

        options = data.get('options') or {}
        if not isinstance(options, dict):
            return jsonify({'error': 'Options must be an object'}), 400

        game_state = initialize(seed, scenario, options)

        # Use UUID for unique game ID generation
        game_id = str(uuid.uuid4())
        games[game_id] = game_state
        dice[game_id] = random.Random(seed)

        return jsonify({'game_id': game_id})

    except Exception as e:
        return jsonify({'error': f'Failed to create game: {str(e)}'}), 500


@app.route('/api/game/<game_id>/view', methods=['GET'])
def get_game_view(game_id: str):
    """Retrieve the view of the game for the requesting role."""
    try:
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        role = request.args.get('role', 'Observer')
        view = project(games[game_id], role)
        view['game_id'] = game_id
        return jsonify(view)

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve game view: {str(e)}'}), 500


@app.route('/api/game/<game_id>/action', methods=['POST'])
def submit_action(game_id: str):
    """Apply one action for a role and return that role's new view."""
    try:
        # Validate game_id exists
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        # Validate request body
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'error': 'Invalid JSON data'}), 400

        if not all(key in data for key in ['role', 'action']):
            return jsonify({'error': 'Action must have role and action fields'}), 400

        role = data['role']
        action = data['action']
        args = data.get('args')

        try:
            apply(games[game_id], role, action, args, rng=dice[game_id])
        except ActionError as e:
            return jsonify({'error': str(e)}), 400

        view = project(games[game_id], role)
        view['game_id'] = game_id
        return jsonify(view)

    except Exception as e:
        return jsonify({'error': f'Failed to process action: {str(e)}'}), 500


@app.route('/api/game/<game_id>/log', methods=['GET'])
def get_game_log(game_id: str):
    """Retrieve the full game log."""
    try:
        # Validate game_id exists
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        game_state = games[game_id]

        # Prepare response with game log
        log_response = {
            'game_id': game_id,
            'turn': game_state.turn,
            'phase': game_state.phase.value,
            'log': game_state.log
        }

        return jsonify(log_response)

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve game log: {str(e)}'}), 500


if __name__ == '__main__':
    app.run(debug=True)
