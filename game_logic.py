"""
game_logic.py - Core game logic for Bulls and Cows

The secret is 4 digits drawn independently from 0-9, so digits may repeat.
Game state is kept as plain dicts/lists so the web front-end can store it in
the Flask session unchanged.
"""

import logging
import random

logger = logging.getLogger(__name__)

SECRET_LENGTH = 4

PLAYING = 'playing'
WON = 'won'

# Rejection reasons for a line that cannot be scored
UNPARSEABLE = 'unparseable'
WRONG_LENGTH = 'wrong_length'
NON_DIGIT = 'non_digit'

REJECTION_MESSAGES = {
    UNPARSEABLE: 'Guess must be a whole number.',
    WRONG_LENGTH: 'Guess must be exactly 4 characters.',
    NON_DIGIT: 'Guess must contain the digits 0-9 only.',
}


class GameOverError(Exception):
    """Raised when a guess is submitted to a game that has already been won."""


# ─────────────────────────────────────────────
# SCORING
# ─────────────────────────────────────────────

def digit_histogram(digits):
    """Count occurrences of each digit value. Returns a list of 10 counts."""
    counts = [0] * 10
    for d in digits:
        counts[d] += 1
    return counts


def calculate_bulls_and_cows(secret, guess):
    """
    Calculate Bulls and Cows for a given guess against the secret number.

    Bull  = correct digit in correct position
    Cow   = correct digit in wrong position, counted with multiplicity
            capped by the rarer occurrence count in secret and guess

    The multiset overlap of both histograms already includes every bull,
    so bulls are subtracted back out of it to get the cows.

    Returns (bulls: int, cows: int)
    """
    snc = digit_histogram(secret)
    gnc = digit_histogram(guess)

    overlap = 0
    for d in range(10):
        overlap += min(snc[d], gnc[d])

    bulls = 0
    for s, g in zip(secret, guess):
        if s == g:
            bulls += 1

    return bulls, overlap - bulls


def is_winner(bulls):
    """Check if the player has won (4 bulls = all digits correct)."""
    return bulls == SECRET_LENGTH


def format_score(bulls, cows):
    return f'A : {bulls}, B : {cows}'


def format_win(attempts):
    return f'You Win! You tried : {attempts}'


# ─────────────────────────────────────────────
# SECRET GENERATION
# ─────────────────────────────────────────────

def generate_secret(rng=None):
    """
    Draw SECRET_LENGTH digits independently from 0-9.
    `rng` is any object with a `randrange` method (e.g. random.Random);
    the process-wide random module is used when none is given.
    """
    rng = rng or random
    return [rng.randrange(10) for _ in range(SECRET_LENGTH)]


# ─────────────────────────────────────────────
# INPUT PARSING
# ─────────────────────────────────────────────

def parse_unsigned(text):
    """Parse text as an unsigned integer. Returns the int, or None."""
    if text.startswith('-'):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_guess(line):
    """
    Turn one line of player input into guess digits.

    The checks run in the order the game has always applied them: the
    trimmed line must parse as an unsigned integer, must be exactly 4
    characters long, and every character must decode as a digit 0-9.
    A line like '+123' passes the first two checks and is rejected by
    the last one.

    Returns (digits: list or None, reason: str or None)
    """
    text = line.strip()

    if parse_unsigned(text) is None:
        return None, UNPARSEABLE

    if len(text) != SECRET_LENGTH:
        return None, WRONG_LENGTH

    digits = []
    for ch in text:
        if ch not in '0123456789':
            return None, NON_DIGIT
        digits.append(ord(ch) - ord('0'))

    return digits, None


# ─────────────────────────────────────────────
# SESSION STATE MACHINE
# ─────────────────────────────────────────────

def new_game(rng=None):
    """Return a fresh game state dict with a newly drawn secret."""
    return {
        'secret': generate_secret(rng),
        'attempts': 0,
        'status': PLAYING,
        'history': [],      # list of {guess, bulls, cows}
    }


def apply_guess(state, digits):
    """
    Count and score an accepted guess.
    Returns (updated_state, output_lines); `state` itself is left untouched.
    """
    if state['status'] == WON:
        raise GameOverError('Game is already over.')

    bulls, cows = calculate_bulls_and_cows(state['secret'], digits)
    attempts = state['attempts'] + 1
    guess = ''.join(str(d) for d in digits)

    new_state = {
        'secret': list(state['secret']),
        'attempts': attempts,
        'status': PLAYING,
        'history': state['history'] + [{'guess': guess, 'bulls': bulls, 'cows': cows}],
    }
    output = [format_score(bulls, cows)]
    logger.debug('guess %s scored %d bulls, %d cows', guess, bulls, cows)

    if is_winner(bulls):
        new_state['status'] = WON
        output.append(format_win(attempts))
        logger.info('secret found after %d attempts', attempts)

    return new_state, output


def step(state, line):
    """
    Advance the game by one line of input.

    Playing + rejected line -> Playing, no output
    Playing + scored guess  -> Playing or Won, score line (+ win line)
    Won is terminal; stepping it raises GameOverError.

    Returns (state, output_lines)
    """
    if state['status'] == WON:
        raise GameOverError('Game is already over.')

    digits, reason = parse_guess(line)
    if reason is not None:
        logger.debug('ignoring input %r: %s', line, reason)
        return state, []

    return apply_guess(state, digits)
