import io

import pytest

import lib
from image import ImageError, load_image, make_key, save_image
from interpreter import Interpreter
from nodes import VarAccessNode

KEY = make_key('test passphrase')

SOURCE = '''
fun makeCounter() {
  var i = 0;
  fun count() { i = i + 1; return i; }
  return count;
}
var c = makeCounter();
print c();
print c();
'''


def compile_program(source=SOURCE):
    statements, locals_, error = lib.compile_source('<test>', source)
    assert error is None
    return statements, locals_


def test_make_key_is_a_valid_fernet_key():
    assert len(make_key('short')) == 44
    assert make_key('x' * 100) == make_key('x' * 32)


def test_saved_image_runs_like_source(tmp_path):
    path = tmp_path / 'counter.tlx'
    statements, locals_ = compile_program()
    save_image(statements, locals_, path, KEY)

    loaded_statements, loaded_locals = load_image(path, KEY)
    output = io.StringIO()
    error = Interpreter(output=output).interpret(loaded_statements, loaded_locals)

    assert error is None
    assert output.getvalue() == '1\n2\n'


def test_resolution_table_points_at_loaded_nodes(tmp_path):
    path = tmp_path / 'block.tlx'
    statements, locals_ = compile_program('{ var a = 1; print a; }')
    save_image(statements, locals_, path, KEY)

    loaded_statements, loaded_locals = load_image(path, KEY)
    access = loaded_statements[0].statements[1].expression

    assert isinstance(access, VarAccessNode)
    assert loaded_locals[access] == 0


def test_image_layout(tmp_path):
    path = tmp_path / 'layout.tlx'
    statements, locals_ = compile_program()
    save_image(statements, locals_, path, KEY)

    data = path.read_bytes()
    prefix_len = int.from_bytes(data[:2], byteorder='big')
    token_len = int.from_bytes(data[2:6], byteorder='big')

    assert 10 <= prefix_len < 42
    assert len(data) > 6 + prefix_len + token_len


def test_wrong_key_is_rejected(tmp_path):
    path = tmp_path / 'secret.tlx'
    statements, locals_ = compile_program()
    save_image(statements, locals_, path, KEY)

    with pytest.raises(ImageError):
        load_image(path, make_key('another passphrase'))


@pytest.mark.parametrize('data', [b'', b'\x00\x01', b'\x00\x0a\x00\x00\x10\x00' + b'x' * 20])
def test_malformed_files_are_rejected(tmp_path, data):
    path = tmp_path / 'bad.tlx'
    path.write_bytes(data)

    with pytest.raises(ImageError):
        load_image(path, KEY)
