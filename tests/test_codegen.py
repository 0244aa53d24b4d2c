import numbers
from typing import Any

from method_bind.codegen import (
    CodeGen, annotation_modules, as_generated_name, as_hint, format_annotation,
    is_numeric_type, is_numeric_value, is_void_type,
)

from hosts import Point


def test_generated_name_lowercases_at_case_boundaries():
    assert as_generated_name('moveMouse') == 'move_mouse'
    assert as_generated_name('getURL') == 'get_u_r_l'
    assert as_generated_name('parse2D') == 'parse2_d'
    assert as_generated_name('echo') == 'echo'
    assert as_generated_name('') == ''


def test_generated_name_keeps_leading_separator():
    assert as_generated_name('MoveMouse') == '_move_mouse'
    assert as_generated_name('MoveMouse', '-') == '-move-mouse'
    assert as_generated_name('GetPosition', '-') == '-get-position'


def test_generated_name_collapses_case_variants():
    assert as_generated_name('getValue') == as_generated_name('get_value')


def test_numeric_hints_use_abstract_types():
    assert as_hint(int) is numbers.Integral
    assert as_hint(float) is numbers.Real
    assert as_hint(complex) is numbers.Complex
    assert as_hint(str) is str
    assert as_hint(Point) is Point


def test_type_predicates():
    assert is_numeric_type(int)
    assert is_numeric_type(float)
    assert not is_numeric_type(bool)
    assert not is_numeric_type(str)
    assert is_numeric_value(1.5)
    assert not is_numeric_value(True)
    assert is_void_type(None)
    assert is_void_type(type(None))
    assert is_void_type('None')
    assert not is_void_type(int)


def test_format_annotation():
    assert format_annotation(int) == 'int'
    assert format_annotation(numbers.Integral) == 'numbers.Integral'
    assert format_annotation(Point) == 'hosts.Point'
    assert format_annotation(list[int]) == 'list[int]'
    assert format_annotation(None) == 'None'
    assert format_annotation(Any) == 'Any'


def test_annotation_modules():
    assert annotation_modules(int) == set()
    assert annotation_modules(Point) == {'hosts'}
    assert annotation_modules(list[Point]) == {'hosts'}
    assert annotation_modules(numbers.Real) == {'numbers'}


def test_codegen_indentation():
    gen = CodeGen()
    gen.line('def f():')
    gen.indent()
    gen.lines('x = 1', 'return x')
    gen.dedent()
    gen.dedent()
    gen.line()
    assert gen.output() == 'def f():\n    x = 1\n    return x\n\n'
