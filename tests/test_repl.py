import sys

import pytest

import main
from miniforth import ForthEnv, ForthSession, Interpreter, UnboundName
from miniforth.core import RECURSION_LIMIT


def test_unknown_token_halts_remaining_tokens(run, env):
    out, error = run("1 2 foo 3")
    assert out == "Error: Invalid token: foo\n"
    assert isinstance(error, UnboundName)
    assert env.stack == [1, 2]


def test_successful_eval_returns_none(run):
    _, error = run("1 2 +")
    assert error is None


def test_state_is_kept_after_failure(run, env):
    run(": sq dup * ; 3 4 oops")
    assert env.stack == [3, 4]
    out, _ = run("sq .")
    assert out == "16 "


def test_empty_tokens_are_skipped(env, interp):
    interp.eval_tokens(env, ['1', '', '  ', '2'])
    assert env.stack == [1, 2]


def test_register_resolves_before_builtin(env, interp):
    env.set_special('dup', 9)
    interp.eval(env, "dup")
    assert env.stack == [9]


def test_constant_resolves_before_variable(run, env):
    run("variable q 3 constant q q")
    assert env.stack == [3]


def test_number_resolves_before_constant(env, interp):
    env.define_constant('12', 99)
    interp.eval(env, "12")
    assert env.stack == [12]


def test_echo_stack(env, capsys):
    Interpreter(echo_stack=True).eval(env, "1 2")
    assert capsys.readouterr().out == "=> [1, 2]\n"


def test_echo_after_error(env, capsys):
    Interpreter(echo_stack=True).eval(env, "1 nope")
    assert capsys.readouterr().out == "Error: Invalid token: nope\n=> [1]\n"


def test_nested_echo_is_top_level_only(env, capsys):
    Interpreter(echo_stack=True).eval(env, ": two 1 1 + ; two")
    assert capsys.readouterr().out == "=> [2]\n"


def test_environment_reused_across_interpreters(capsys):
    env = ForthEnv()
    Interpreter().eval(env, ": sq dup * ;")
    Interpreter().eval(env, "5 sq .")
    assert capsys.readouterr().out == "25 "


class TestSession:

    def test_execute_chains(self):
        session = ForthSession(echo_stack=False)
        assert session.execute("1 2 +").peek() == 3
        assert session.push(4, 5).pop() == 5
        assert session.env.stack == [3, 4]

    def test_call_pushes(self):
        session = ForthSession(echo_stack=False)
        session(1, 2).execute("*")
        assert session.peek() == 2

    def test_pop_and_peek_on_empty(self):
        session = ForthSession(echo_stack=False)
        assert session.pop() is None
        assert session.peek() is None

    def test_last_error(self, capsys):
        session = ForthSession(echo_stack=False)
        session.execute("nope")
        assert isinstance(session.last_error, UnboundName)
        session.execute("1")
        assert session.last_error is None

    def test_repl_reads_until_bye(self, capsys):
        lines = iter([": sq dup * ;", "", "6 sq .", "bye", "never read"])
        session = ForthSession()
        session.repl(get_input=lambda prompt: next(lines))
        out = capsys.readouterr().out
        assert "36 => []" in out
        assert next(lines) == "never read"

    def test_repl_stops_at_end_of_input(self, capsys):
        def no_input(prompt):
            raise EOFError
        session = ForthSession()
        assert session.repl(get_input=no_input) is session

    def test_repl_survives_interrupt(self, capsys):
        events = iter([KeyboardInterrupt, "1 .", EOFError])

        def get_input(prompt):
            event = next(events)
            if isinstance(event, type):
                raise event
            return event

        ForthSession(echo_stack=False).repl(get_input=get_input)
        out = capsys.readouterr().out
        assert "(Ctrl+C)" in out
        assert "1 " in out


class TestMain:

    def test_eval_option(self, capsys):
        assert main.main(["-e", "1 2 + ."]) == 0
        assert capsys.readouterr().out == "3 => []\n"

    def test_eval_quiet(self, capsys):
        assert main.main(["-q", "-e", "0 3 do i . loop"]) == 0
        assert capsys.readouterr().out == "0 1 2 "

    def test_eval_error_exit_status(self, capsys):
        assert main.main(["-q", "-e", "nope"]) == 1
        assert capsys.readouterr().out == "Error: Invalid token: nope\n"

    def test_run_file(self, tmp_path, capsys):
        source = tmp_path / "prog.fth"
        source.write_text(": sq dup * ;\n\n7 sq .\n", encoding="utf-8")
        assert main.main([str(source)]) == 0
        assert capsys.readouterr().out == "49 \n"

    def test_run_file_error_exit_status(self, tmp_path, capsys):
        source = tmp_path / "prog.forth"
        source.write_text("1 .\nnope\n2 .\n", encoding="utf-8")
        assert main.main([str(source)]) == 1
        assert capsys.readouterr().out == "1 Error: Invalid token: nope\n2 \n"

    def test_run_file_counts_failed_lines(self, tmp_path, capsys):
        source = tmp_path / "prog.fth"
        source.write_text("drop\n3 .\n1 0 /\n", encoding="utf-8")
        assert main.run_file(ForthSession(echo_stack=False), source) == 2

    def test_deep_recursion_within_limit(self, capsys):
        limit = sys.getrecursionlimit()
        try:
            program = ": count dup 0 > if 1 - count then ; 500 count ."
            assert main.main(["-q", "-e", program]) == 0
            assert sys.getrecursionlimit() >= RECURSION_LIMIT
        finally:
            sys.setrecursionlimit(limit)
        assert capsys.readouterr().out == "0 "

    def test_missing_file(self, tmp_path, capsys):
        assert main.main([str(tmp_path / "missing.fth")]) == 1
        assert "could not read" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [[], ["bogus"]])
    def test_usage(self, argv, capsys):
        assert main.main(argv) == 2
        assert "usage:" in capsys.readouterr().out
