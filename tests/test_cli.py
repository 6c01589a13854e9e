import json

import pytest

from sprig.__main__ import main


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_runs_program_file(tmp_path, capsys):
    program = write(tmp_path, 'hello.sprig', 'x = 2 print(x ^ 3)')
    main([str(program)])
    assert capsys.readouterr().out == '8\n'


def test_runtime_error_exits_with_status_1(tmp_path, capsys):
    program = write(tmp_path, 'bad.sprig', 'print(1) print(missing)')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'Runtime error: UndefinedVariable: undefined variable missing' in captured.err


def test_syntax_error_exits_with_status_1(tmp_path, capsys):
    program = write(tmp_path, 'bad.sprig', 'print("open')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    assert 'Syntax error: LexError' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'nope.sprig')])
    assert 'not found' in capsys.readouterr().err


def test_emit_and_run_ast(tmp_path, capsys):
    program = write(tmp_path, 'add.sprig', 'add(a, b){ return a + b } print(add(1, 2))')
    main(['--emit-ast', str(program)])
    out_path = tmp_path / 'add.sprig.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data[0]['type'] == 'FunctionDeclaration'
    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '3\n'


def test_max_depth_flag(tmp_path, capsys):
    program = write(tmp_path, 'deep.sprig', 'f(n){ if(n > 0){ return f(n - 1) } return 0 } print(f(30))')
    with pytest.raises(SystemExit):
        main(['--max-depth', '20', str(program)])
    assert 'RecursionLimitExceeded' in capsys.readouterr().err
    main([str(program)])
    assert capsys.readouterr().out == '0\n'


def test_verbose_writes_debug_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    program = write(tmp_path, 'v.sprig', 'x = 1')
    main(['-vv', str(program)])
    assert 'assign x: Number = 1' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')


def test_malformed_ast_json_exits_with_status_1(tmp_path, capsys):
    broken = write(tmp_path, 'broken.ast.json', '[{"type": ')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(broken)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err
