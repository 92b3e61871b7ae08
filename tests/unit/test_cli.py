"""
Tests for the mathexpr command-line interface.
"""

import io

import pytest

from mathexpr import __version__
from mathexpr.cli import cmd_sexp, create_parser, main
from mathexpr.repl import Colors


@pytest.fixture(autouse=True)
def no_colors():
    Colors.disable()


class TestCLIEval:
    """Tests for the eval command."""

    def test_eval_default_point(self, capsys):
        assert main(["eval", "x + 1"]) == 0
        assert capsys.readouterr().out == "101.000000\n"

    def test_eval_at(self, capsys):
        assert main(["eval", "sqrt(x)", "--at", "16"]) == 0
        assert capsys.readouterr().out == "4.000000\n"

    def test_eval_packrat(self, capsys):
        assert main(["--packrat", "e", "10-2-3"]) == 0
        assert capsys.readouterr().out == "11.000000\n"

    def test_eval_parse_failure(self, capsys):
        assert main(["eval", "1+2)"]) == 1
        assert "Can't parse: '1+2)'" in capsys.readouterr().err

    def test_eval_unbound_variable(self, capsys):
        assert main(["eval", "y"]) == 1
        assert "No binding for y" in capsys.readouterr().err

    def test_eval_stack_exhaustion(self, capsys):
        assert main(["eval", "5000!"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error:")


class TestCLISexp:
    """Tests for the batch s-expression command."""

    def test_sexp_lines(self, capsys):
        args = create_parser().parse_args(["sexp"])
        stdin = io.StringIO("1+2*3\n2^3^2\n1+2)\n")

        assert cmd_sexp(args, stdin) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "               1+2*3 -> (+ 1 (* 2 3))",
            "               2^3^2 -> (^ 2 (^ 3 2))",
            "Can't parse '1+2)'",
        ]

    def test_sexp_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("5!\n"))
        assert main(["sexp"]) == 0
        assert capsys.readouterr().out.endswith("-> (! 5)\n")


class TestCLITable:
    """Tests for the table command."""

    def test_table_rows(self, capsys):
        assert main(["table", "x^2", "--start", "0", "--stop", "2", "--num", "3"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["x", "x^2"]
        assert [line.split() for line in lines[1:]] == [
            ["0.000000", "0.000000"],
            ["1.000000", "1.000000"],
            ["2.000000", "4.000000"],
        ]

    def test_table_requires_positive_num(self, capsys):
        assert main(["table", "x", "--start", "0", "--stop", "1", "--num", "0"]) == 1
        assert "--num must be at least 1" in capsys.readouterr().err

    def test_table_parse_failure(self, capsys):
        assert main(["table", "(", "--start", "0", "--stop", "1"]) == 1

    def test_table_stack_exhaustion(self, capsys):
        assert main(["table", "x!", "--start", "5000", "--stop", "5000", "--num", "1"]) == 1
        assert capsys.readouterr().err.startswith("Error:")


class TestCLIGeneral:
    """Tests for top-level options."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: mathexpr" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
