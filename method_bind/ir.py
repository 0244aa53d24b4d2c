"""
IR (Intermediate Representation) module

Reads the declared methods of a host class into MethodSpec records.
"""

import inspect
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Callable

from .codegen import as_generated_name, is_public_name, is_void_type
from .errors import InvalidTargetError

POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class MethodSpec:
    """Normalized description of one declared method (or overload)"""
    declaring_type: type
    generated_name: str
    raw_name: str
    arity: int
    param_types: tuple
    is_void: bool
    is_static: bool
    param_names: tuple = ()
    return_type: Any = Any


@dataclass(frozen=True)
class ArityGroup:
    """All methods sharing a generated name and an arity"""
    generated_name: str
    arity: int
    spec: MethodSpec  # Representative, first in declaration order
    signatures: tuple  # param_types of every method in the bucket
    hinting_disabled: bool = False


@dataclass
class HostIR:
    """Intermediate representation of a host class"""
    host_class: type
    methods: list[MethodSpec]
    skipped: list[str] = field(default_factory=list)

    @classmethod
    def from_class(cls, host_class: type, separator: str = '_') -> 'HostIR':
        """Introspect the public methods declared directly on a class"""
        if not inspect.isclass(host_class):
            raise InvalidTargetError(f'expected a class, got {host_class!r}')

        methods = []
        skipped = []
        for name, member in vars(host_class).items():
            if not is_public_name(name):
                continue
            parsed = cls._parse_member(host_class, name, member, separator)
            if parsed is None:
                if callable(member) and not inspect.isclass(member):
                    skipped.append(name)
                continue
            methods.extend(parsed)

        return cls(host_class=host_class, methods=methods, skipped=skipped)

    @classmethod
    def _parse_member(cls, host_class: type, name: str, member: Any,
                      separator: str) -> typing.Optional[list[MethodSpec]]:
        """Parse a class attribute, returns None for non-methods

        Besides plain functions this accepts extension type methods
        (method descriptors, read through their text signature) and
        decorated methods whose wrapper binds like a function.
        """
        if isinstance(member, staticmethod):
            func, is_static, receivers = member.__func__, True, 0
        elif isinstance(member, classmethod):
            func, is_static, receivers = member.__func__, True, 1
        elif isinstance(member, types.ClassMethodDescriptorType):
            # Bound through the class, so the signature has no receiver
            func, is_static, receivers = getattr(host_class, name), True, 0
        elif inspect.isroutine(member) and not inspect.isbuiltin(member):
            func, is_static, receivers = member, False, 1
        else:
            return None

        target = inspect.unwrap(func)
        overloads = typing.get_overloads(target) if inspect.isfunction(target) else []
        variants = [getattr(o, '__func__', o) for o in overloads] or [func]
        generated_name = as_generated_name(name, separator)
        try:
            return [
                cls._parse_func(host_class, name, generated_name, variant, is_static, receivers)
                for variant in variants
            ]
        except (ValueError, TypeError):
            # No signature available (extension method without text signature)
            return None

    @staticmethod
    def _parse_func(host_class: type, raw_name: str, generated_name: str,
                    func: Callable, is_static: bool, receivers: int) -> MethodSpec:
        """Parse a single function signature"""
        sig = inspect.signature(func)
        hints = _resolve_hints(inspect.unwrap(func), sig)

        params = [p for p in sig.parameters.values() if p.kind in POSITIONAL_KINDS]
        params = params[receivers:]

        return_type = hints.get('return', Any)
        return MethodSpec(
            declaring_type=host_class,
            generated_name=generated_name,
            raw_name=raw_name,
            arity=len(params),
            param_types=tuple(hints.get(p.name, Any) for p in params),
            is_void='return' in hints and is_void_type(return_type),
            is_static=is_static,
            param_names=tuple(p.name for p in params),
            return_type=return_type,
        )


def _resolve_hints(func: Callable, sig: inspect.Signature) -> dict[str, Any]:
    """Resolve annotations, falling back to the raw objects on bad forward refs"""
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        hints = {name: p.annotation for name, p in sig.parameters.items()
                 if p.annotation is not inspect.Parameter.empty}
        if sig.return_annotation is not inspect.Signature.empty:
            hints['return'] = sig.return_annotation
        return hints


def introspect(host_class: type, separator: str = '_') -> list[MethodSpec]:
    """Return one MethodSpec per public method declared on host_class"""
    return HostIR.from_class(host_class, separator).methods
