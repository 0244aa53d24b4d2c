"""
Scope emission module

Resolves the namespace generated functions are published into.
"""

import importlib
import sys
import types
from collections.abc import MutableMapping
from typing import Any, Union

ScopeLike = Union[str, types.ModuleType, MutableMapping]


def resolve_scope(scope: ScopeLike) -> MutableMapping:
    """Resolve a module, module name or mapping to a writable namespace

    A dotted name that cannot be imported is created as an empty module
    and registered in sys.modules (and on its parent package, if loaded).
    """
    if isinstance(scope, types.ModuleType):
        return vars(scope)
    elif isinstance(scope, MutableMapping):
        return scope
    elif isinstance(scope, str):
        return vars(_get_or_create_module(scope))
    raise TypeError(f'scope must be a module, module name or mapping, got {scope!r}')


def _get_or_create_module(name: str) -> types.ModuleType:
    if name in sys.modules:
        return sys.modules[name]
    try:
        return importlib.import_module(name)
    except ModuleNotFoundError as e:
        # Only the requested module (or one of its packages) may be missing
        if e.name != name and not name.startswith(f'{e.name}.'):
            raise

    module = types.ModuleType(name)
    sys.modules[name] = module
    parent_name, _, child = name.rpartition('.')
    if parent_name in sys.modules:
        setattr(sys.modules[parent_name], child, module)
    return module


def scope_name(scope: ScopeLike) -> str:
    """Display name of a scope, without importing or creating anything"""
    if isinstance(scope, str):
        return scope
    elif isinstance(scope, types.ModuleType):
        return scope.__name__
    elif isinstance(scope, MutableMapping):
        return scope.get('__name__', '<mapping>')
    return repr(scope)


def emit(functions: dict[str, Any], namespace: MutableMapping):
    """Publish all functions in a single update"""
    module_name = namespace.get('__name__')
    if module_name is not None:
        for func in functions.values():
            func.__module__ = module_name
    namespace.update(functions)
