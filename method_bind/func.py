"""
Function binding generation module

Builds multi-arity wrapper callables for grouped host methods.
"""

import inspect
import types
from dataclasses import dataclass
from typing import Any, Callable, Optional, TYPE_CHECKING

from .codegen import as_hint
from .errors import BindingError
from .types import TypeCoercer

if TYPE_CHECKING:
    from .instance import InstanceHandle
    from .ir import ArityGroup, MethodSpec


@dataclass(frozen=True)
class Curried:
    """Every wrapper dispatches on one shared bound instance"""
    handle: 'InstanceHandle'


@dataclass(frozen=True)
class Explicit:
    """Every instance-method wrapper takes its receiver as first argument"""


class GeneratedFunction:
    """Free-function wrapper with one branch per accepted argument count"""

    def __init__(self, name: str, raw_name: str, host_class: type,
                 branches: dict[int, Callable]):
        self.__name__ = name
        self.__qualname__ = name
        self.__module__ = host_class.__module__
        self.raw_name = raw_name
        self.host_class = host_class
        self._branches = dict(sorted(branches.items()))
        self.__doc__ = self._make_doc()
        if len(self._branches) == 1:
            (branch,) = self._branches.values()
            self.__signature__ = branch.__signature__

    @property
    def arities(self) -> list[int]:
        """Accepted positional argument counts"""
        return list(self._branches)

    @property
    def branches(self) -> dict[int, Callable]:
        return dict(self._branches)

    def __call__(self, *args):
        branch = self._branches.get(len(args))
        if branch is None:
            expected = ' or '.join(str(n) for n in self._branches)
            raise TypeError(
                f'{self.__name__}() takes {expected} positional arguments '
                f'but {len(args)} were given')
        return branch(*args)

    def __repr__(self) -> str:
        return f'<generated function {self.__name__} -> {self.host_class.__qualname__}.{self.raw_name}>'

    def _make_doc(self) -> str:
        lines = [f'Calls {self.host_class.__qualname__}.{self.raw_name}', '']
        for branch in self._branches.values():
            lines.append(f'{self.__name__}{branch.__signature__}')
        return '\n'.join(lines)


def raw_callable(spec: 'MethodSpec') -> Callable:
    """Resolve the callable a spec dispatches to

    Instance methods resolve to the class attribute itself (a plain
    function, method descriptor or decorator wrapper), which takes the
    receiver as first argument. Classmethods are bound to the host class.
    """
    member = vars(spec.declaring_type)[spec.raw_name]
    if isinstance(member, (classmethod, types.ClassMethodDescriptorType)):
        return getattr(spec.declaring_type, spec.raw_name)
    elif isinstance(member, staticmethod):
        return member.__func__
    return member


class FuncGenerator:
    """Generates wrapper functions for one host class"""

    def __init__(self, host_class: type, context, coercer: Optional[TypeCoercer] = None,
                 hinting: bool = True, verbose: bool = False):
        check_context(host_class, context)
        self.host_class = host_class
        self.context = context
        self.coercer = coercer
        self.hinting = hinting
        self.verbose = verbose

    def generate(self, name: str, groups: list['ArityGroup']) -> GeneratedFunction:
        """Generate one wrapper from all arity groups of a generated name"""
        branches: dict[int, Callable] = {}
        for arity_group in groups:
            branch = self._gen_branch(arity_group)
            argc = len(branch.__signature__.parameters)
            if argc in branches:
                if self.verbose:
                    print(f'  >> warning: {name}/{argc} already bound, '
                          f'skipping {arity_group.spec.raw_name}/{arity_group.arity}')
                continue
            branches[argc] = branch
            if self.verbose:
                print(f'  {arity_group.spec.raw_name} => {name}/{argc}')

        return GeneratedFunction(name, groups[0].spec.raw_name, self.host_class, branches)

    def _gen_branch(self, arity_group: 'ArityGroup') -> Callable:
        """Generate the wrapper for a single arity"""
        spec = arity_group.spec
        raw = raw_callable(spec)
        is_void = spec.is_void
        coerce = self._coerce_fn(arity_group)

        if spec.is_static:
            def branch(*args):
                result = raw(*coerce(args))
                return None if is_void else result

        elif isinstance(self.context, Curried):
            handle = self.context.handle

            def branch(*args):
                receiver = handle.instance
                result = raw(receiver, *coerce(args))
                return receiver if is_void else result

        else:
            def branch(receiver, *args):
                result = raw(receiver, *coerce(args))
                return receiver if is_void else result

        branch.__name__ = arity_group.generated_name
        branch.__qualname__ = f'{arity_group.generated_name}/{arity_group.arity}'
        branch.__signature__ = self._gen_signature(arity_group)
        branch.__annotations__ = _annotations(branch.__signature__)
        return branch

    def _coerce_fn(self, arity_group: 'ArityGroup') -> Callable[[tuple], tuple]:
        """Argument coercion for a branch, identity when not applicable"""
        candidates = tuple(s for s in arity_group.signatures if len(s) == arity_group.arity)
        if self.coercer is None or not candidates or arity_group.arity == 0:
            return _identity

        coercer = self.coercer

        def coerce(args):
            return coercer.coerce(args, candidates)
        return coerce

    def _gen_signature(self, arity_group: 'ArityGroup') -> inspect.Signature:
        """Build the branch signature, annotated when hinting applies"""
        spec = arity_group.spec
        hinted = self.hinting and not arity_group.hinting_disabled
        empty = inspect.Parameter.empty
        kind = inspect.Parameter.POSITIONAL_ONLY

        params = []
        if not spec.is_static and isinstance(self.context, Explicit):
            receiver_name = 'receiver'
            while receiver_name in spec.param_names:
                receiver_name = '_' + receiver_name
            params.append(inspect.Parameter(
                receiver_name, kind, annotation=self.host_class if hinted else empty))

        for param_name, tp in zip(spec.param_names, spec.param_types):
            annotation = as_hint(tp) if hinted and tp is not Any else empty
            params.append(inspect.Parameter(param_name, kind, annotation=annotation))

        if not hinted:
            return_annotation = empty
        elif spec.is_void:
            return_annotation = None if spec.is_static else self.host_class
        else:
            return_annotation = spec.return_type
        return inspect.Signature(params, return_annotation=return_annotation)


def _identity(args: tuple) -> tuple:
    return args


def _annotations(sig: inspect.Signature) -> dict[str, Any]:
    """__annotations__ equivalent of a signature"""
    empty = inspect.Parameter.empty
    annotations = {p.name: p.annotation for p in sig.parameters.values() if p.annotation is not empty}
    if sig.return_annotation is not empty:
        annotations['return'] = sig.return_annotation
    return annotations


def check_context(host_class: Optional[type], binding_context):
    """Raise BindingError when a curried context has nothing to dispatch on"""
    if isinstance(binding_context, Curried) and not binding_context.handle.live:
        name = host_class.__qualname__ if host_class is not None else 'host'
        raise BindingError(f'no live {name} instance to curry over')


def synthesize(grouped: dict[str, list['ArityGroup']], binding_context, hinting_enabled: bool = True,
               coercion_enabled: bool = True, coercer: Optional[TypeCoercer] = None,
               verbose: bool = False) -> dict[str, GeneratedFunction]:
    """Build one GeneratedFunction per generated name"""
    if not grouped:
        host_class = binding_context.handle.host_class if isinstance(binding_context, Curried) else None
        check_context(host_class, binding_context)
        return {}

    if coercion_enabled and coercer is None:
        coercer = TypeCoercer()
    elif not coercion_enabled:
        coercer = None

    host_class = next(iter(grouped.values()))[0].spec.declaring_type
    func_gen = FuncGenerator(host_class, binding_context, coercer, hinting_enabled, verbose)
    return {name: func_gen.generate(name, groups) for name, groups in grouped.items()}
