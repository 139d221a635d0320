"""
Tests for the console game loop.
"""

import logging
from io import BytesIO, StringIO, TextIOWrapper

import pytest

from cli import main, play, PROMPT, ReadLineError
from game_logic import new_game, WON


class FixedDigits:

    def __init__(self, digits):
        self._digits = iter(digits)

    def randrange(self, stop):
        return next(self._digits)


def run_game(lines, secret=(1, 2, 3, 4)):
    stdin = StringIO(''.join(line + '\n' for line in lines))
    stdout = StringIO()
    code = main(stdin=stdin, stdout=stdout, rng=FixedDigits(secret))
    return code, stdout.getvalue().splitlines()


class TestConsoleGame:

    def test_win_on_first_guess(self):
        code, out = run_game(['1234'])
        assert code == 0
        assert out == [PROMPT, 'A : 4, B : 0', 'You Win! You tried : 1']

    def test_full_session(self):
        code, out = run_game(['5678', '4321', '1234'])
        assert code == 0
        assert out == [
            PROMPT, 'A : 0, B : 0',
            PROMPT, 'A : 0, B : 4',
            PROMPT, 'A : 4, B : 0',
            'You Win! You tried : 3',
        ]

    def test_rejected_lines_reprompt_without_scoring(self):
        code, out = run_game(['hello', '123', '+123', '12345', '1234'])
        assert code == 0
        assert out.count(PROMPT) == 5
        assert [line for line in out if line.startswith('A : ')] == ['A : 4, B : 0']
        assert out[-1] == 'You Win! You tried : 1'

    def test_repeated_digit_secret(self):
        code, out = run_game(['1212', '1122'], secret=(1, 1, 2, 2))
        assert code == 0
        assert out[1] == 'A : 2, B : 2'
        assert out[-1] == 'You Win! You tried : 2'

    def test_lines_after_win_are_not_read(self):
        stdin = StringIO('1234\n9999\n')
        stdout = StringIO()
        assert main(stdin=stdin, stdout=stdout, rng=FixedDigits([1, 2, 3, 4])) == 0
        assert stdin.readline() == '9999\n'


class TestInputFailure:

    def test_closed_stdin_exits_with_diagnostic(self, caplog):
        with caplog.at_level(logging.ERROR, logger='cli'):
            code, out = run_game(['0000'])

        assert code == 1
        assert out == [PROMPT, 'A : 0, B : 0', PROMPT]
        assert 'Failed to read line' in caplog.text

    def test_undecodable_stdin_exits_with_diagnostic(self, caplog):
        stdin = TextIOWrapper(BytesIO(b'\xff\xfe12\n1234\n'), encoding='utf-8')
        stdout = StringIO()
        with caplog.at_level(logging.ERROR, logger='cli'):
            code = main(stdin=stdin, stdout=stdout, rng=FixedDigits([1, 2, 3, 4]))

        assert code == 1
        assert stdout.getvalue().splitlines() == [PROMPT]
        assert 'Failed to read line' in caplog.text

    def test_write_failure_is_not_reported_as_read_failure(self):
        class BrokenPipe(StringIO):
            def write(self, s):
                raise BrokenPipeError(32, 'Broken pipe')

        with pytest.raises(BrokenPipeError):
            main(stdin=StringIO('1234\n'), stdout=BrokenPipe(), rng=FixedDigits([1, 2, 3, 4]))

    def test_play_raises_on_eof(self):
        state = new_game(FixedDigits([1, 2, 3, 4]))
        with pytest.raises(ReadLineError):
            play(state, StringIO(''), StringIO())

    def test_play_returns_won_state(self):
        state = new_game(FixedDigits([0, 0, 0, 7]))
        final = play(state, StringIO('0007\n'), StringIO())
        assert final['status'] == WON
        assert final['attempts'] == 1
