"""
Instance binding module

Holds the single shared receiver used by curried wrappers.
"""

from typing import Any, Optional

from .errors import BindingError

_RELEASED = object()


class InstanceHandle:
    """Owned reference to the instance curried wrappers dispatch on"""

    __slots__ = ('host_class', '_instance')

    def __init__(self, host_class: type, instance: Any):
        self.host_class = host_class
        self._instance = instance

    @property
    def live(self) -> bool:
        return self._instance is not _RELEASED

    @property
    def instance(self) -> Any:
        """The bound instance, BindingError once released"""
        if self._instance is _RELEASED:
            raise BindingError(f'{self.host_class.__qualname__} handle has been released')
        return self._instance

    def release(self):
        """Drop the reference to the bound instance"""
        self._instance = _RELEASED

    def __repr__(self) -> str:
        state = 'live' if self.live else 'released'
        return f'<InstanceHandle {self.host_class.__qualname__} {state}>'


def bind(host_class: type, instance: Optional[Any] = None) -> InstanceHandle:
    """Bind an instance of host_class, default-constructing one when omitted"""
    if instance is None:
        try:
            instance = host_class()
        except Exception as e:
            raise BindingError(
                f'could not default-construct {host_class.__qualname__}: {e}') from e

    if not isinstance(instance, host_class):
        raise BindingError(
            f'{instance!r} is not an instance of {host_class.__qualname__}')

    return InstanceHandle(host_class, instance)
