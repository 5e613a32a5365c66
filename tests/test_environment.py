import pytest

from environment import Environment
from values import Number


def test_define_and_get():
    environment = Environment()
    environment.define('a', Number(1))
    assert environment.get('a').value == 1
    assert environment.get('missing') is None


def test_get_only_looks_in_own_scope():
    parent = Environment()
    parent.define('a', Number(1))
    child = Environment(parent)
    assert child.get('a') is None
    assert child.get_at(1, 'a').value == 1


def test_assign_requires_existing_binding():
    environment = Environment()
    assert environment.assign('a', Number(1)) is False
    environment.define('a', Number(1))
    assert environment.assign('a', Number(2)) is True
    assert environment.get('a').value == 2


def test_ancestor_walks_parent_links():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    assert leaf.ancestor(0) is leaf
    assert leaf.ancestor(1) is middle
    assert leaf.ancestor(2) is root


def test_assignment_is_visible_through_every_alias():
    shared = Environment()
    shared.define('count', Number(0))
    first = Environment(shared)
    second = Environment(shared)

    first.assign_at(1, 'count', Number(5))

    assert second.get_at(1, 'count').value == 5
    assert shared.get('count').value == 5


def test_shadowing_binding_does_not_touch_parent():
    parent = Environment()
    parent.define('a', Number(1))
    child = Environment(parent)
    child.define('a', Number(2))
    assert child.get_at(0, 'a').value == 2
    assert child.get_at(1, 'a').value == 1


def test_missing_resolved_binding_is_an_internal_error():
    environment = Environment(Environment())
    with pytest.raises(Exception, match="Resolved variable 'x' is missing at distance 1"):
        environment.get_at(1, 'x')
    with pytest.raises(Exception, match="Resolved variable 'x' is missing at distance 0"):
        environment.assign_at(0, 'x', Number(1))
