import pytest

from symdiff.__main__ import main, parse_args, sample_expressions


def test_parse_args_defaults():
    args = parse_args([])
    assert args.var == "x"
    assert not args.verbose


def test_main_prints_derivatives(capsys):
    assert main(["x"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(sample_expressions())
    assert "d/dx (a + b) = 0" in lines
    assert "d/dx (x)**3 = 3*(x)**2" in lines
    assert "d/dx exp((x + 3)) = exp((x + 3))" in lines


def test_main_other_variable(capsys):
    assert main(["a", "--verbose"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "d/da (a + b) = 1" in lines
    assert "d/da (x)**3 = 0" in lines


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--nope"])
