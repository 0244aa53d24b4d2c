"""
Main generator module

Orchestrates introspection, grouping, binding and synthesis, then emits
the generated functions into a scope.
"""

import inspect
import sys
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .errors import InvalidTargetError
from .func import Curried, Explicit, GeneratedFunction, synthesize
from .instance import InstanceHandle, bind
from .ir import HostIR
from .overload import collisions, group, name_map
from .scope import ScopeLike, emit, resolve_scope, scope_name
from .types import TypeCoercer


@dataclass
class BindingConfig:
    """Options for one binding request"""
    currying: bool = True
    hinting: bool = True
    coercion: bool = True
    separator: str = '_'
    ignores: set[str] = field(default_factory=set)
    verbose: bool = False


@dataclass
class BindingResult:
    """Generated functions of one run, not yet emitted"""
    host_class: type
    functions: dict[str, GeneratedFunction]
    names: dict[str, str]  # generated name -> raw name
    handle: Optional[InstanceHandle] = None

    @property
    def currying(self) -> bool:
        return self.handle is not None


class Generator:
    """Main binding generator"""

    def __init__(self, config: Optional[BindingConfig] = None):
        self.config = config or BindingConfig()
        self.coercer = TypeCoercer()

    def ignore(self, *names: str):
        """Skip methods by raw name"""
        self.config.ignores.update(names)

    def type_handler(self, tp: Any):
        """Decorator to register a coercion handler for a declared type"""
        def decorator(cls):
            self.coercer.register(tp, cls())
            return cls
        return decorator

    def generate(self, target: Any) -> BindingResult:
        """Generate wrappers for a class or instance without emitting them"""
        config = self.config
        host_class, instance = self._resolve_target(target)

        ir = HostIR.from_class(host_class, config.separator)
        specs = [s for s in ir.methods if s.raw_name not in config.ignores]

        if config.verbose:
            for name in ir.skipped:
                print(f'  >> warning: skipping {name}, not a plain method')
            for name, raw_names in collisions(specs).items():
                print(f'  >> warning: {", ".join(raw_names)} all map to {name}')

        handle = bind(host_class, instance) if config.currying else None
        context = Curried(handle) if handle is not None else Explicit()

        grouped = group(specs)
        functions = synthesize(
            grouped, context,
            hinting_enabled=config.hinting,
            coercion_enabled=config.coercion,
            coercer=self.coercer,
            verbose=config.verbose,
        )
        return BindingResult(
            host_class=host_class,
            functions=functions,
            names=name_map(grouped),
            handle=handle,
        )

    def bind(self, target: Any, scope: Optional[ScopeLike] = None) -> dict[str, str]:
        """Generate wrappers and emit them into scope (default: caller's module)

        Returns the generated name -> raw name mapping.
        """
        if scope is None:
            scope = sys._getframe(1).f_globals

        if self.config.verbose:
            host_class, _ = self._resolve_target(target)
            print(f'=== Binding {host_class.__module__}.{host_class.__qualname__} '
                  f'=> {scope_name(scope)}:')

        # The scope may create a module, so it is resolved only once
        # generation has succeeded
        result = self.generate(target)
        emit(result.functions, resolve_scope(scope))
        return result.names

    def _resolve_target(self, target: Any) -> tuple[type, Any]:
        """Return (host_class, instance or None) for a target"""
        if target is None:
            raise InvalidTargetError('no binding target given')

        if not self.config.currying:
            if not inspect.isclass(target):
                raise InvalidTargetError(
                    f'currying disabled, expected a class but got {target!r}')
            return target, None

        if inspect.isclass(target):
            return target, None
        return type(target), target


def def_methods(target: Any, *, currying: bool = True, scope: Optional[ScopeLike] = None,
                disable_type_hinting: bool = False, disable_coercion: bool = False,
                separator: str = '_', ignore: Iterable[str] = (),
                verbose: bool = False) -> dict[str, str]:
    """Define free functions for the methods of a class or instance

    With currying (the default) every function dispatches on one instance:
    ``target`` itself, or a default-constructed one when it is a class.
    Without currying ``target`` must be a class and instance methods take
    their receiver as first argument. Void methods return their receiver
    so calls can be chained.

    Functions are defined in ``scope`` (a module, module name or mapping),
    or in the calling module. Returns the generated name -> raw name mapping.
    """
    config = BindingConfig(
        currying=currying,
        hinting=not disable_type_hinting,
        coercion=not disable_coercion,
        separator=separator,
        ignores=set(ignore),
        verbose=verbose,
    )
    if scope is None:
        scope = sys._getframe(1).f_globals
    return Generator(config).bind(target, scope)
