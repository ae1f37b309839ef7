# test_main.py

import io
import math

import pytest

import rpncalc.main as main_module
from rpncalc.config import Settings
from rpncalc.evaluator import Outcome
from rpncalc.main import HELP_TEXT, REPL, build_parser, format_stack, main


class FakeSession:
    """Stands in for a PromptSession, replaying scripted input."""

    def __init__(self, lines):
        self.lines = iter(lines)
        self.prompts = []

    def prompt(self, message, **kwargs):
        self.prompts.append(message)
        item = next(self.lines, EOFError)
        if isinstance(item, type) and issubclass(item, BaseException):
            raise item
        return item


def interactive(lines, **settings):
    return REPL(Settings(**settings), interactive=True, session=FakeSession(lines))

# ---------------------------
# Rendering
# ---------------------------

def test_format_stack_default_precision():
    assert format_stack([7.0, -0.5]) == ["7.000000", "-0.500000"]

def test_format_stack_custom_precision():
    assert format_stack([1 / 3], precision=2) == ["0.33"]
    assert format_stack([]) == []

# ---------------------------
# Interactive loop
# ---------------------------

def test_interactive_prints_stack_after_each_line(capsys):
    repl = interactive(["3 4", "+"])
    repl.run()
    out = capsys.readouterr().out
    assert out == "3.000000\n4.000000\n7.000000\n\n"
    assert repl.session.prompts == ['> ', '> ', '> ']

def test_interactive_quit_ends_without_printing(capsys):
    repl = interactive(["1 2 quit"])
    repl.run()
    assert capsys.readouterr().out == ""
    assert list(repl.stack) == [1.0, 2.0]

def test_interactive_invalid_token_reports_and_prints(capsys):
    repl = interactive(["5 bogus 6", "quit"])
    repl.run()
    out = capsys.readouterr().out
    assert "error - invalid token: 'bogus'" in out
    assert "5.000000" in out
    assert "6.000000" not in out

def test_interactive_division_by_zero(capsys):
    repl = interactive(["10 0 /", "quit"])
    repl.run()
    assert "error - division by zero" in capsys.readouterr().out
    assert repl.stack.size() == 0

def test_interactive_empty_line_is_error(capsys):
    repl = interactive(["", "quit"])
    repl.run()
    assert "error - empty line" in capsys.readouterr().out

def test_interactive_help(capsys):
    repl = interactive(["help", "quit"])
    repl.run()
    out = capsys.readouterr().out
    assert HELP_TEXT in out
    assert repl.stack.size() == 0

def test_interactive_keyboard_interrupt_continues(capsys):
    repl = interactive([KeyboardInterrupt, "2", "quit"])
    repl.run()
    out = capsys.readouterr().out
    assert out.startswith("^C\n")
    assert "2.000000" in out

def test_interactive_eof(capsys):
    repl = interactive([EOFError])
    repl.run()
    assert capsys.readouterr().out == "\n"

def test_interactive_uses_configured_precision(capsys):
    repl = interactive(["2 3 /", "quit"], precision=3)
    repl.run()
    assert "0.667\n" in capsys.readouterr().out

def test_stack_uses_configured_segment_capacity():
    repl = interactive([], segment_capacity=2)
    assert repl.stack.segment_capacity == 2

def test_process_line_returns_result(capsys):
    repl = interactive([])
    result = repl.process_line("1 2 +")
    assert result.outcome is Outcome.COMPLETED
    assert capsys.readouterr().out == ""

# ---------------------------
# Batch loop
# ---------------------------

def test_batch_prints_stack_once_at_end(capsys):
    stdin = io.StringIO("1 2\n3 +\n")
    REPL(Settings(), interactive=False, stdin=stdin).run()
    assert capsys.readouterr().out == "1.000000\n5.000000\n"

def test_batch_reports_errors_and_continues(capsys):
    stdin = io.StringIO("4 0 /\nnope\n2 2 *\n")
    REPL(Settings(), interactive=False, stdin=stdin).run()
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "error - division by zero",
        "error - invalid token: 'nope'",
        "4.000000",
    ]

def test_batch_quit_stops_reading(capsys):
    stdin = io.StringIO("1\nquit\n2\n")
    REPL(Settings(), interactive=False, stdin=stdin).run()
    assert capsys.readouterr().out == "1.000000\n"

def test_batch_handles_crlf(capsys):
    stdin = io.StringIO("1 2 +\r\n")
    REPL(Settings(), interactive=False, stdin=stdin).run()
    assert capsys.readouterr().out == "3.000000\n"

# ---------------------------
# Command line
# ---------------------------

def test_parser_options():
    args = build_parser().parse_args(["-b", "--precision", "2", "--segment-capacity", "4"])
    assert args.batch
    assert args.precision == 2
    assert args.segment_capacity == 4
    assert args.log_level is None

def test_main_batch(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO("3 4 +\n"))
    assert main(["-b", "--precision", "1"]) == 0
    assert capsys.readouterr().out == "7.0\n"

def test_main_interactive(monkeypatch, capsys):
    monkeypatch.setattr(main_module, 'PromptSession', lambda **kwargs: FakeSession(["1 1 +", "quit"]))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Type 'help' for help" in out
    assert "2.000000" in out

def test_main_invalid_configuration(capsys):
    assert main(["-b", "--segment-capacity", "0"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err

def test_main_help_exits(capsys):
    with pytest.raises(SystemExit) as e:
        main(["--help"])
    assert e.value.code == 0
    assert "Reverse Polish Notation" in capsys.readouterr().out

# ---------------------------
# Oversized input and history file
# ---------------------------

def test_format_stack_infinite_values():
    assert format_stack([math.inf, -math.inf]) == ["inf", "-inf"]

def test_batch_renders_huge_number(capsys):
    stdin = io.StringIO("9" * 400 + "\n")
    REPL(Settings(), interactive=False, stdin=stdin).run()
    assert capsys.readouterr().out == "inf\n"

def test_interactive_creates_history_directory(monkeypatch, tmp_path):
    history_file = tmp_path / "missing" / "nested" / "history"
    created = {}

    def fake_prompt_session(**kwargs):
        created.update(kwargs)
        return FakeSession([])

    monkeypatch.setattr(main_module, 'PromptSession', fake_prompt_session)
    REPL(Settings(history_file=str(history_file)), interactive=True)
    assert history_file.parent.is_dir()
    assert created['history'].filename == str(history_file)
