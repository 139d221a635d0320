"""
cli.py - Console game loop for Bulls and Cows

Usage:
    bulls-and-cows
    python -m cli
"""

import logging
import sys

from game_logic import new_game, step, WON

logger = logging.getLogger(__name__)

PROMPT = 'Please input your guess.'


class ReadLineError(Exception):
    """Standard input closed or could not be read."""


def play(state, stdin, stdout):
    """
    Prompt, read and score lines until the secret is found.
    Raises ReadLineError when input runs out or cannot be decoded
    before the game is won.
    Returns the final (won) state.
    """
    while state['status'] != WON:
        print(PROMPT, file=stdout)

        try:
            line = stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadLineError(e) from e
        if not line:
            raise ReadLineError('standard input closed')

        state, output = step(state, line)
        for text in output:
            print(text, file=stdout)

    return state


def main(stdin=None, stdout=None, rng=None):
    """Run one game on the console. Returns the process exit code."""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    state = new_game(rng)
    try:
        play(state, stdin, stdout)
    except ReadLineError as e:
        logger.error('Failed to read line: %s', e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
