import pytest

from method_bind import BindingError, bind

from hosts import NeedsArgs, Point, Robot


def test_default_construction():
    handle = bind(Robot)
    assert handle.live
    assert isinstance(handle.instance, Robot)
    assert handle.host_class is Robot


def test_prebuilt_instance_is_kept():
    robot = Robot()
    assert bind(Robot, robot).instance is robot


def test_wrong_instance_type():
    with pytest.raises(BindingError):
        bind(Robot, Point())


def test_constructor_failure_is_chained():
    with pytest.raises(BindingError) as excinfo:
        bind(NeedsArgs)
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_release_drops_the_instance():
    handle = bind(Robot)
    handle.release()
    assert not handle.live
    assert 'released' in repr(handle)
    with pytest.raises(BindingError):
        handle.instance
