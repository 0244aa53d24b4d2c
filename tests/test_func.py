import inspect
import numbers

import pytest

from method_bind import BindingError, Curried, Explicit, bind, group, introspect, synthesize

from hosts import Calculator, Inventory, Point, Robot


def curried(host_class, **kwargs):
    handle = bind(host_class)
    return handle, synthesize(group(introspect(host_class)), Curried(handle), **kwargs)


def explicit(host_class, **kwargs):
    return synthesize(group(introspect(host_class)), Explicit(), **kwargs)


def test_curried_void_methods_return_the_bound_instance():
    handle, fns = curried(Robot)
    robot = handle.instance
    assert fns['_move_mouse'](10, 20) is robot
    assert fns['_get_position']() == Point(10, 20)

    # chain on the returned instance
    fns['_move_mouse'](1, 1).moveBy(2, 2)
    assert fns['move_by'](1, 1) is robot
    assert (robot.x, robot.y) == (4, 4)


def test_curried_branches_share_one_instance():
    handle, fns = curried(Robot)
    fns['press']('a')
    fns['press']('b', 2)
    assert fns['press'].arities == [1, 2]
    assert handle.instance.keys == ['a', 'b', 'b']


def test_static_methods_never_take_a_receiver():
    _, fns = curried(Robot)
    assert fns['_parse'].arities == [1]
    assert fns['_parse']('42') == 42
    assert fns['reset_count']() is None
    assert isinstance(fns['build'](), Robot)

    fns = explicit(Robot)
    assert fns['_parse'].arities == [1]
    assert fns['_parse']('7') == 7
    with pytest.raises(TypeError):
        fns['_parse'](Robot(), '7')


def test_explicit_void_methods_return_the_receiver():
    fns = explicit(Robot)
    robot = Robot()
    assert fns['_move_mouse'](robot, 3, 4) is robot
    assert fns['move_by'](fns['_move_mouse'](robot, 1, 1), 2, 2) is robot
    assert fns['_get_position'](robot) == Point(3, 3)
    assert fns['press'].arities == [2, 3]


def test_wrong_argument_count():
    _, fns = curried(Robot)
    with pytest.raises(TypeError, match='takes 2 positional arguments but 1 were given'):
        fns['_move_mouse'](1)


def test_explicit_argument_count_collision_keeps_first_declared():
    fns = explicit(Inventory)
    assert fns['item_count'].arities == [1]
    assert fns['item_count'](['a', 'b']) == 2

    handle, fns = curried(Inventory)
    fns['add']('apple')
    assert fns['item_count'].arities == [0, 1]
    assert fns['item_count']() == 1
    assert fns['item_count']([1, 2, 3]) == 3


def test_hints_use_abstract_numeric_types():
    _, fns = curried(Robot)
    sig = fns['_move_mouse'].__signature__
    assert [p.annotation for p in sig.parameters.values()] == [numbers.Integral, numbers.Integral]
    assert sig.return_annotation is Robot
    assert inspect.signature(fns['_move_mouse']) == sig

    assert fns['reset_count'].__signature__.return_annotation is None

    branch = fns['_move_mouse'].branches[2]
    assert branch.__annotations__ == {'x': numbers.Integral, 'y': numbers.Integral, 'return': Robot}


def test_explicit_receiver_is_hinted_with_the_host_class():
    fns = explicit(Robot)
    params = list(fns['_move_mouse'].__signature__.parameters.values())
    assert params[0].name == 'receiver'
    assert params[0].annotation is Robot


def test_colliding_signatures_are_not_hinted():
    _, fns = curried(Calculator)
    (param,) = fns['scale'].__signature__.parameters.values()
    assert param.annotation is inspect.Parameter.empty
    assert fns['scale'].branches[1].__annotations__ == {}


def test_hinting_can_be_disabled():
    _, fns = curried(Robot, hinting_enabled=False)
    assert fns['_move_mouse'].branches[2].__annotations__ == {}


def test_coercion_selects_a_signature():
    _, fns = curried(Calculator)
    assert fns['scale'](2.5) == 'int'
    assert fns['scale'](2) == 'int'
    assert fns['scale']('x') == 'str'
    assert fns['half'](9.7) == 4
    assert type(fns['half'](9.7)) is int
    assert fns['label'](None) == 'none'


def test_coercion_disabled_passes_arguments_through():
    _, fns = curried(Calculator, coercion_enabled=False)
    assert fns['half'](9.7) == 4.0
    assert type(fns['half'](9.7)) is float
    assert fns['scale'](2.5) == 'float'


def test_exact_arguments_give_same_result_with_or_without_coercion():
    _, with_coercion = curried(Calculator)
    _, without = curried(Calculator, coercion_enabled=False)
    assert with_coercion['add'](1.0, 2.0) == without['add'](1.0, 2.0) == 3.0


def test_collision_dispatches_to_first_declared():
    _, fns = curried(Calculator)
    assert fns['get_value']() == 1


def test_host_errors_propagate():
    _, fns = curried(Calculator)
    with pytest.raises(ValueError, match='boom'):
        fns['fail']('boom')


def test_released_handle():
    handle, fns = curried(Robot)
    handle.release()
    with pytest.raises(BindingError):
        fns['_move_mouse'](1, 2)
    with pytest.raises(BindingError):
        synthesize(group(introspect(Robot)), Curried(handle))
    with pytest.raises(BindingError):
        synthesize({}, Curried(handle))


def test_empty_input():
    assert synthesize({}, Explicit()) == {}


def test_generated_function_metadata():
    _, fns = curried(Robot)
    move = fns['_move_mouse']
    assert move.__name__ == '_move_mouse'
    assert move.raw_name == 'MoveMouse'
    assert move.host_class is Robot
    assert move.__doc__.startswith('Calls Robot.MoveMouse')
    assert 'Robot.MoveMouse' in repr(move)
