"""
app.py - Flask application for Bulls and Cows (single player)
"""

import os

from flask import Flask, request, session, jsonify

from game_logic import (
    new_game, parse_guess, apply_guess, is_winner,
    REJECTION_MESSAGES, WON, SECRET_LENGTH,
)

app = Flask(__name__)
app.secret_key = os.environ.get('SECRET_KEY', 'bulls-and-cows-dev-secret')

# Optional random source for secret generation (tests inject a seeded one)
app.config.setdefault('SECRET_RNG', None)


# ─────────────────────────────────────────────
# HELPER UTILITIES
# ─────────────────────────────────────────────

def error_response(message, status=400):
    return jsonify({'success': False, 'error': message}), status


def secret_string(state):
    return ''.join(str(d) for d in state['secret'])


# ─────────────────────────────────────────────
# ROUTES
# ─────────────────────────────────────────────

@app.route('/')
def index():
    """Landing route — rules and available endpoints."""
    return jsonify({
        'success': True,
        'rules': (
            f'Guess the hidden {SECRET_LENGTH}-digit number. Digits may repeat. '
            'A counts digits in the right place, B counts right digits in the wrong place.'
        ),
        'routes': ['/start', '/guess', '/result', '/reset'],
    })


@app.route('/start', methods=['POST'])
def start():
    """Start a new game; the secret lives only in the signed session."""
    session.clear()
    session['game'] = new_game(app.config.get('SECRET_RNG'))
    app.logger.debug('new game started')
    return jsonify({'success': True})


@app.route('/guess', methods=['POST'])
def guess():
    """
    Player submits a guess against the secret.
    Expects JSON: { "guess": "5678" }
    Returns bulls, cows, attempt count and whether the player won.
    """
    state = session.get('game')
    if state is None:
        return error_response('No active game. Please start a new game.', 403)

    if state['status'] == WON:
        return error_response('Game is already over.')

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return error_response('No data provided.')

    digits, reason = parse_guess(str(data.get('guess', '')))
    if reason is not None:
        return error_response(REJECTION_MESSAGES[reason])

    state, output = apply_guess(state, digits)
    session['game'] = state

    last = state['history'][-1]
    payload = {
        'success': True,
        'bulls': last['bulls'],
        'cows': last['cows'],
        'attempts': state['attempts'],
        'won': is_winner(last['bulls']),
        'message': output[0],
    }
    if payload['won']:
        payload['secret'] = secret_string(state)
        payload['win_message'] = output[1]
        app.logger.info('game won in %d attempts', state['attempts'])

    return jsonify(payload)


@app.route('/result', methods=['GET'])
def result():
    """Return current game state summary."""
    state = session.get('game')
    if state is None:
        return error_response('No active game.', 403)

    return jsonify({
        'success': True,
        'status': state['status'],
        'attempts': state['attempts'],
        'history': state['history'],
    })


@app.route('/reset', methods=['POST'])
def reset():
    """Clear session and restart."""
    session.clear()
    return jsonify({'success': True, 'redirect': '/'})


@app.route('/favicon.ico')
def favicon():
    return '', 204


# ─────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────

if __name__ == '__main__':
    app.run(debug=True, port=5000)
