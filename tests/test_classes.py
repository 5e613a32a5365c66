import pytest

from errors import RTError


def test_class_and_instance_printing(run_lox):
    lines, error = run_lox('class Bagel {}\nprint Bagel;\nprint Bagel();')
    assert error is None
    assert lines == ['Bagel', 'Bagel instance']


def test_fields_are_per_instance(run_lox):
    lines, error = run_lox('''
class Point {}
var a = Point();
var b = Point();
a.x = 1;
b.x = 2;
print a.x;
print b.x;
print a.x = 3;
''')
    assert error is None
    assert lines == ['1', '2', '3']


def test_initializer_and_methods(run_lox):
    lines, error = run_lox('''
class Counter {
  init(start) { this.n = start; }
  bump() { this.n = this.n + 1; return this; }
  get() { return this.n; }
}
print Counter(5).bump().bump().get();
''')
    assert error is None
    assert lines == ['7']


def test_initializer_always_returns_instance(run_lox):
    lines, error = run_lox('''
class C {
  init() { this.x = 1; return; print "unreachable"; }
}
var c = C();
print c;
print c.init();
''')
    assert error is None
    assert lines == ['C instance', 'C instance']


def test_class_arity_comes_from_initializer(run_lox):
    lines, error = run_lox('class C { init(a, b) { print "ran"; } }\nC(1);')
    assert lines == []
    assert error.details == 'Expected 2 arguments but got 1.'

    _, error = run_lox('class D {}\nD(1);')
    assert error.details == 'Expected 0 arguments but got 1.'


def test_bound_method_remembers_instance(run_lox):
    lines, error = run_lox('''
class Person {
  init(name) { this.name = name; }
  hello() { return "hi " + this.name; }
}
var greet = Person("ada").hello;
print greet;
print greet();
''')
    assert error is None
    assert lines == ['<fn hello>', 'hi ada']


def test_method_override_with_super_call(run_lox):
    lines, error = run_lox('''
class A { greet() { return "A"; } }
class B < A { greet() { return super.greet() + "B"; } }
print B().greet();
''')
    assert error is None
    assert lines == ['AB']


def test_inherited_methods_and_initializers(run_lox):
    lines, error = run_lox('''
class A {
  init(x) { this.x = x; }
  hi() { return "hi"; }
}
class B < A {
  init(x, y) { super.init(x); this.y = y; }
}
var b = B(1, 2);
print b.x + b.y;
print b.hi();
''')
    assert error is None
    assert lines == ['3', 'hi']


def test_super_binds_to_the_declaring_class(run_lox):
    lines, error = run_lox('''
class A { method() { print "A method"; } }
class B < A {
  method() { print "B method"; }
  test() { super.method(); }
}
class C < B {}
C().test();
''')
    assert error is None
    assert lines == ['A method']


def test_fields_shadow_methods(run_lox):
    lines, error = run_lox('''
class C { m() { return "method"; } }
var c = C();
print c.m();
c.m = fun () { return "field"; };
print c.m();
print C().m();
''')
    assert error is None
    assert lines == ['method', 'field', 'method']


def test_methods_can_name_their_class(run_lox):
    lines, error = run_lox('''
class Node {
  init(next) { this.next = next; }
  push() { return Node(this); }
}
print Node(nil).push().next;
''')
    assert error is None
    assert lines == ['Node instance']


def test_local_class_closes_over_locals(run_lox):
    lines, error = run_lox('''
fun make(prefix) {
  class Tag { label(s) { return prefix + s; } }
  return Tag;
}
print make("#")().label("x");
''')
    assert error is None
    assert lines == ['#x']


@pytest.mark.parametrize('source, details', [
    ('class A {}\nprint A().missing;', "Undefined property 'missing'."),
    ('class A {}\nclass B < A { m() { return super.nope; } }\nB().m();',
     "Undefined property 'nope'."),
    ('var NotAClass = 1;\nclass B < NotAClass {}', 'Superclass must be a class.'),
    ('class A {}\nprint A.field;', 'Only instances have properties.'),
])
def test_class_runtime_errors(run_lox, source, details):
    lines, error = run_lox(source)
    assert lines == []
    assert isinstance(error, RTError)
    assert error.details == details
    assert error.line == 2
