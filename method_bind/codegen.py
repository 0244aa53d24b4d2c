"""
Code generation utilities

Provides identifier transformation, type predicates and a small helper
for emitting Python source (used for type stubs).

Generated names use a separator before every capital. The canonical form
is hyphenated (MoveMouse -> -move-mouse); the default separator is an
underscore so names stay valid identifiers (MoveMouse -> _move_mouse).
"""

import decimal
import fractions
import numbers
import typing
from typing import Any


class CodeGen:
    """Python source builder with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines) + '\n'


def as_generated_name(raw: str, separator: str = '_') -> str:
    """Convert a mixed-case method name to a separated lower-case name

    Every upper-case letter becomes the separator followed by its lower-case
    form. A leading capital therefore yields a leading separator. Pass
    separator='-' for the hyphenated form, the default '_' keeps
    results usable as Python identifiers.

    Examples:
        moveMouse -> move_mouse
        MoveMouse -> _move_mouse
        getURL -> get_u_r_l
        MoveMouse (separator='-') -> -move-mouse
    """
    return ''.join(separator + c.lower() if c.isupper() else c for c in raw)


def is_public_name(name: str) -> bool:
    """Check if a member name is part of the public API"""
    return not name.startswith('_')


# Declared numeric types that arguments may be converted to
NUMERIC_TYPES = (int, float, complex, decimal.Decimal, fractions.Fraction)

# Built-in numeric annotations and the abstract type used when hinting them
NUMERIC_HINTS = {
    int: numbers.Integral,
    float: numbers.Real,
    complex: numbers.Complex,
}


def is_numeric_type(tp: Any) -> bool:
    """Check if an annotation is a concrete numeric type (bool excluded)"""
    return isinstance(tp, type) and tp is not bool and issubclass(tp, NUMERIC_TYPES)


def is_numeric_value(value: Any) -> bool:
    """Check if a value is a number (bool excluded)"""
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_void_type(tp: Any) -> bool:
    """Check if a return annotation declares no value"""
    return tp is None or tp is type(None) or (isinstance(tp, str) and tp == 'None')


def as_hint(tp: Any) -> Any:
    """Map a declared parameter type to the annotation used for hinting

    Examples:
        int -> numbers.Integral
        float -> numbers.Real
        str -> str
    """
    return NUMERIC_HINTS.get(tp, tp)


def format_annotation(tp: Any) -> str:
    """Render an annotation as source text

    Builtin classes are rendered by bare name, other classes with their
    module path.

    Examples:
        int -> int
        numbers.Integral -> numbers.Integral
        list[int] -> list[int]
        Optional[int] -> typing.Optional[int]
        None -> None
    """
    if tp is Any:
        return 'Any'
    elif is_void_type(tp):
        return 'None'
    elif isinstance(tp, type) and typing.get_origin(tp) is None:
        if tp.__module__ == 'builtins':
            return tp.__qualname__
        return f'{tp.__module__}.{tp.__qualname__}'
    return repr(tp)


def annotation_modules(tp: Any) -> set[str]:
    """Modules a stub must import to reference an annotation"""
    found = set()
    if isinstance(tp, (list, tuple)):
        for item in tp:
            found |= annotation_modules(item)
    elif typing.get_origin(tp) is not None:
        found |= annotation_modules(typing.get_origin(tp))
        found |= annotation_modules(typing.get_args(tp))
    elif isinstance(tp, type) and tp.__module__ != 'builtins':
        found.add(tp.__module__)
    return found
