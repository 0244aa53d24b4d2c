"""
method_bind - free-function bindings for class methods

Introspects the methods declared on a class and generates plain functions
calling them, either curried over one shared instance or taking the
receiver as first argument. Overloads are grouped by arity, void methods
return their receiver for chaining, and arguments are coerced best-effort
to the declared parameter types.
"""

from .errors import BindGenError, InvalidTargetError, BindingError
from .ir import HostIR, MethodSpec, ArityGroup, introspect
from .codegen import CodeGen, as_generated_name
from .overload import group
from .types import TypeCoercer, TypeHandler, ConversionContext, coerce
from .instance import InstanceHandle, bind
from .func import Curried, Explicit, FuncGenerator, GeneratedFunction, synthesize
from .stubs import StubGenerator
from .generator import BindingConfig, BindingResult, Generator, def_methods

__all__ = [
    'BindGenError', 'InvalidTargetError', 'BindingError',
    'HostIR', 'MethodSpec', 'ArityGroup', 'introspect',
    'CodeGen', 'as_generated_name',
    'group',
    'TypeCoercer', 'TypeHandler', 'ConversionContext', 'coerce',
    'InstanceHandle', 'bind',
    'Curried', 'Explicit', 'FuncGenerator', 'GeneratedFunction', 'synthesize',
    'StubGenerator',
    'BindingConfig', 'BindingResult', 'Generator', 'def_methods',
]
