import io
import sys

import pytest

import config
import lib
import repl
import treelox
import treeloxm
from errors import (
    IllegalCharError, InvalidSyntaxError, RTError, StaticError,
    StaticErrorList, UnterminatedStringError,
)
from image import load_image, make_key
from interpreter import Interpreter


def test_run_returns_interpreter_and_no_error(capsys):
    interpreter, error = lib.run('<test>', 'var a = 2;\nprint a * 21;')
    assert error is None
    assert isinstance(interpreter, Interpreter)
    assert capsys.readouterr().out == '42\n'


def test_run_reuses_interpreter_globals():
    output = io.StringIO()
    interpreter = Interpreter(output=output)

    lib.run('<line 1>', 'var greeting = "hello";', interpreter)
    _, error = lib.run('<line 2>', 'print greeting;', interpreter)

    assert error is None
    assert output.getvalue() == 'hello\n'


@pytest.mark.parametrize('source, error_class', [
    ('print 1', InvalidSyntaxError),
    ('print "never', UnterminatedStringError),
    ('print #;', IllegalCharError),
    ('return;', StaticError),
    ('print -nil;', RTError),
])
def test_run_surfaces_each_error_kind(source, error_class):
    _, error = lib.run('<test>', source, Interpreter(output=io.StringIO()))
    assert isinstance(error, error_class)


def test_resolve_returns_every_static_error():
    statements, error = lib.parse('<test>', '{ var a = 1; var a = 2; }\nreturn 1;')
    assert error is None

    locals_, errors = lib.resolve(statements)

    assert locals_ is None
    assert [error.details for error in errors] == [
        'Already a variable with this name in this scope.',
        "Can't return from top-level code.",
    ]


def test_resolve_without_errors_returns_table():
    statements, _ = lib.parse('<test>', '{ var a = 1; print a; }')
    locals_, errors = lib.resolve(statements)
    assert errors == []
    assert list(locals_.values()) == [0]


def test_run_carries_every_static_error():
    _, error = lib.run('<test>', 'print this;\nreturn 1;', Interpreter(output=io.StringIO()))

    assert isinstance(error, StaticErrorList)
    assert [e.line for e in error.errors] == [1, 2]
    assert error.details == "Can't use 'this' outside of a class."
    text = error.as_string()
    assert "Can't use 'this' outside of a class." in text
    assert "Can't return from top-level code." in text


def test_functions_from_earlier_runs_keep_their_scopes(session):
    assert session.run('fun make() { var n = 0; fun inc() { n = n + 1; return n; } return inc; }') is None
    assert session.run('var counter = make();') is None
    assert session.run('counter();') is None
    assert session.run('print counter();') is None
    assert session.lines == ['2']


def test_compile_source_reports_syntax_errors_before_resolving():
    statements, locals_, error = lib.compile_source('<test>', 'var = 1;')
    assert statements is None
    assert locals_ is None
    assert error.details == 'Expected variable name.'


@pytest.mark.parametrize('source, exit_code', [
    ('print "hi";', 0),
    ('print "hi"', config.EXIT_DATA_ERROR),
    ('{ var a; var a; }', config.EXIT_DATA_ERROR),
    ('print nil + 1;', config.EXIT_SOFTWARE_ERROR),
])
def test_repl_run_file_exit_codes(tmp_path, source, exit_code):
    script = tmp_path / 'script.lox'
    script.write_text(source, encoding='utf-8')
    assert repl.run_file(str(script)) == exit_code


def test_repl_run_file_reports_to_stderr(tmp_path, capsys):
    script = tmp_path / 'script.lox'
    script.write_text('print "out";\nprint missing;', encoding='utf-8')

    assert repl.run_file(str(script)) == config.EXIT_SOFTWARE_ERROR

    captured = capsys.readouterr()
    assert captured.out == 'out\n'
    assert "Undefined variable 'missing'." in captured.err


def test_build_and_run_image(tmp_path, monkeypatch, capsys):
    image_path = tmp_path / 'program.tlx'
    assert treeloxm.build('<test>', 'print "from image";', str(image_path)) == 0

    statements, locals_ = load_image(image_path, make_key(config.IMAGE_KEY))
    assert len(statements) == 1

    monkeypatch.setattr(sys, 'argv', ['treelox', str(image_path)])
    treelox.main()
    assert capsys.readouterr().out == 'from image\n'


def test_build_rejects_invalid_programs(tmp_path, capsys):
    image_path = tmp_path / 'program.tlx'
    assert treeloxm.build('<test>', 'return 1;', str(image_path)) == config.EXIT_DATA_ERROR
    assert not image_path.exists()
    assert "Can't return from top-level code." in capsys.readouterr().err


def test_image_runtime_error_exit_code(tmp_path, monkeypatch, capsys):
    image_path = tmp_path / 'program.tlx'
    assert treeloxm.build('<test>', 'print 1;\nprint -"x";', str(image_path)) == 0

    monkeypatch.setattr(sys, 'argv', ['treelox', str(image_path)])
    with pytest.raises(SystemExit) as exc_info:
        treelox.main()

    assert exc_info.value.code == config.EXIT_SOFTWARE_ERROR
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'Operand must be a number.' in captured.err


def test_repl_run_file_prints_every_static_error(tmp_path, capsys):
    script = tmp_path / 'script.lox'
    script.write_text('print this;\nreturn 1;', encoding='utf-8')

    assert repl.run_file(str(script)) == config.EXIT_DATA_ERROR

    err = capsys.readouterr().err
    assert "Can't use 'this' outside of a class." in err
    assert "Can't return from top-level code." in err


def test_build_prints_every_static_error(tmp_path, capsys):
    image_path = tmp_path / 'program.tlx'
    source = '{ var a; var a; }\nclass A < A {}'

    assert treeloxm.build('<test>', source, str(image_path)) == config.EXIT_DATA_ERROR

    err = capsys.readouterr().err
    assert 'Already a variable with this name in this scope.' in err
    assert "A class can't inherit from itself." in err
