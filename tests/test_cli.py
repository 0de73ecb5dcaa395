import json

import pytest

from nscript.__main__ import main
from nscript.ast_json import ast_to_obj
from nscript.parser import parse


def test_expressions_share_one_environment(capsys):
    main(['-e', 'x = 2', '-e', 'x * 3'])
    assert capsys.readouterr().out == '6\n'


def test_print_output_and_echo(capsys):
    main(['-e', "print('n=', 4)", '-e', "'done'"])
    assert capsys.readouterr().out == "'n='4'done'\n"


def test_error_exits_with_status_1(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['-e', '1 / 0'])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert 'RuntimeError: dividing by 0' in err
    assert '    ^' in err


def test_script_file(tmp_path, capsys):
    script = tmp_path / 'calc.ns'
    script.write_text('a = 4\n\nb = a / 8\nb + 1\n', encoding='utf-8')
    main([str(script)])
    assert capsys.readouterr().out == '1.5\n'


def test_script_error_reports_line(tmp_path, capsys):
    script = tmp_path / 'bad.ns'
    script.write_text('a = 1\nb\n', encoding='utf-8')
    with pytest.raises(SystemExit):
        main([str(script)])
    assert f'{script}:2: RuntimeError: unknown variable' in capsys.readouterr().err


def test_emit_ast(capsys):
    main(['--emit-ast', '1 + 2'])
    obj = json.loads(capsys.readouterr().out)
    assert obj['type'] == 'Binary'
    assert obj['left']['value'] == 1.0


def test_run_ast_file(tmp_path, capsys):
    ast_file = tmp_path / 'prog.ast.json'
    ast_file.write_text(json.dumps(ast_to_obj(parse('2 * 21'))), encoding='utf-8')
    main(['--ast', str(ast_file)])
    assert capsys.readouterr().out == '42\n'


def test_console(monkeypatch, capsys):
    lines = iter(['x = 3', '', 'y', 'x + 1'])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr('builtins.input', fake_input)
    main([])
    captured = capsys.readouterr()
    assert captured.out == '4\n\n'
    assert 'unknown variable' in captured.err


def test_debug_flag(capsys):
    main(['-v', '-e', '1'])
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'eval 1' in captured.err


def test_max_depth_beyond_recursion_limit_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--max-depth', '5000', '-e', '1'])
    assert exc.value.code == 2
    assert 'max_depth must be between 1 and' in capsys.readouterr().err


def test_print_shows_expressions_unevaluated(capsys):
    main(['-e', 'x = 4', '-e', 'print(x * 2)'])
    assert capsys.readouterr().out == 'x * 2'
