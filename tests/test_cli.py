from pathlib import Path

import pytest

from bfvm.__main__ import fetch_input, main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def example(name):
    return str(EXAMPLES / name)


def test_cli_print(capsys):
    assert main(['-p', example('hello.bf')]) == 0
    out = capsys.readouterr().out
    assert out == 'Hello World!\n\n'


def test_cli_stream_input(capsys):
    assert main([example('echo.bf'), '-s', 'abc', '-p']) == 0
    assert capsys.readouterr().out == 'abc\n'


def test_cli_output_file(tmp_path):
    out_file = tmp_path / 'out.bin'
    in_file = tmp_path / 'in.bin'
    in_file.write_bytes(bytes([1, 2]))
    assert main([example('add.bf'), '-i', str(in_file), '-o', str(out_file)]) == 0
    assert out_file.read_bytes() == bytes([3])


def test_cli_stream_comes_before_input_file(tmp_path):
    out_file = tmp_path / 'out.bin'
    in_file = tmp_path / 'in.bin'
    in_file.write_bytes(b'cd')
    assert main([example('echo.bf'), '--stream', 'ab', '--input', str(in_file),
                 '--output', str(out_file)]) == 0
    assert out_file.read_bytes() == b'abcd'


def test_fetch_input_keeps_low_byte_of_each_character():
    assert list(fetch_input('Ał', None)) == [65, 0x42]
    assert list(fetch_input(None, None)) == []


def test_cli_requires_output_or_print(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([example('hello.bf')])
    assert excinfo.value.code == 2
    assert 'no output file or print flag' in capsys.readouterr().err


def test_cli_syntax_error(capsys):
    assert main(['-p', example('unbalanced.bf')]) == 1
    captured = capsys.readouterr()
    assert captured.err.strip() == 'Syntax error.'
    assert captured.out == ''


def test_cli_missing_program(tmp_path, capsys):
    assert main(['-p', str(tmp_path / 'nope.bf')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_cli_missing_input_file(tmp_path, capsys):
    assert main(['-p', example('echo.bf'), '-i', str(tmp_path / 'nope.bin')]) == 1
    assert capsys.readouterr().err.startswith('Error:')


def test_cli_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(['-vvv', '-p', example('add.bf'), '-s', '\x02\x03']) == 0
    assert capsys.readouterr().out == '\x05\n'
    text = (tmp_path / 'debug.txt').read_text()
    assert 'halted after' in text


def test_cli_source_with_non_utf8_comment(tmp_path, capsys):
    program_file = tmp_path / 'latin1.bf'
    program_file.write_bytes(b'caf\xe9 ++++++++[>++++++++<-]>+.')
    assert main(['-p', str(program_file)]) == 0
    assert capsys.readouterr().out == 'A\n'


def test_cli_utf8_comment_is_inert(tmp_path, capsys):
    program_file = tmp_path / 'utf8.bf'
    program_file.write_text('naïve → ++++++++[>++++++++<-]>+.', encoding='utf-8')
    assert main(['-p', str(program_file)]) == 0
    assert capsys.readouterr().out == 'A\n'


def test_cli_program_path_is_a_directory(tmp_path, capsys):
    assert main(['-p', str(tmp_path)]) == 1
    assert capsys.readouterr().err.startswith('Error:')
