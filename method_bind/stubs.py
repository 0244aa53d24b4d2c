"""
Type stub generation module

Generates .pyi files describing generated functions for IDEs and type
checkers.
"""

import inspect
from typing import TYPE_CHECKING

from .codegen import CodeGen, annotation_modules, format_annotation

if TYPE_CHECKING:
    from .func import GeneratedFunction
    from .generator import BindingResult


class StubGenerator:
    """Generates a .pyi module for one BindingResult"""

    def __init__(self, result: 'BindingResult'):
        self.result = result

    def generate(self) -> str:
        """Generate complete stub file"""
        host = self.result.host_class
        gen = CodeGen()
        gen.lines(
            f'# Type stubs for functions generated from {host.__module__}.{host.__qualname__}',
            '# Auto-generated, do not edit',
            '',
        )

        funcs = []
        skipped = []
        for name, func in self.result.functions.items():
            if name.isidentifier():
                funcs.append(func)
            else:
                skipped.append(name)

        # Imports
        gen.lines('import typing', 'from typing import Any, overload')
        gen.lines(*(f'import {module}' for module in sorted(self._collect_modules(funcs))))
        gen.line()

        for name in skipped:
            gen.line(f'# {name}: not a valid identifier, no stub generated')

        for func in funcs:
            gen.line()
            self._gen_func(func, gen)

        return gen.output()

    def _collect_modules(self, funcs: list['GeneratedFunction']) -> set[str]:
        modules = set()
        for func in funcs:
            for branch in func.branches.values():
                sig = branch.__signature__
                annotations = [p.annotation for p in sig.parameters.values()]
                annotations.append(sig.return_annotation)
                for annotation in annotations:
                    if annotation is not inspect.Parameter.empty:
                        modules |= annotation_modules(annotation)
        modules.discard('typing')
        return modules

    def _gen_func(self, func: 'GeneratedFunction', gen: CodeGen):
        """Generate stubs for every branch of a function"""
        branches = list(func.branches.values())
        for branch in branches:
            if len(branches) > 1:
                gen.line('@overload')
            gen.line(f'def {func.__name__}({self._format_params(branch.__signature__)})'
                     f'{self._format_return(branch.__signature__)}:')
            gen.indent()
            gen.line(f'"""Calls {func.host_class.__qualname__}.{func.raw_name}"""')
            gen.dedent()

    def _format_params(self, sig: inspect.Signature) -> str:
        params = []
        for param in sig.parameters.values():
            if param.annotation is inspect.Parameter.empty:
                params.append(param.name)
            else:
                params.append(f'{param.name}: {format_annotation(param.annotation)}')
        if params:
            params.append('/')
        return ', '.join(params)

    def _format_return(self, sig: inspect.Signature) -> str:
        if sig.return_annotation is inspect.Signature.empty:
            return ''
        return f' -> {format_annotation(sig.return_annotation)}'
