"""
Type coercion module

Best-effort matching of call arguments against declared parameter types.
Coercion never validates: when nothing matches, the arguments are passed
through untouched and the host method decides what to do with them.
"""

import decimal
import types
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .codegen import is_numeric_type, is_numeric_value, is_void_type

# Returned by conversions that do not apply to a value
NO_MATCH = object()

# Errors raised by numeric constructors for values they cannot represent
CONVERSION_ERRORS = (TypeError, ValueError, OverflowError, decimal.InvalidOperation)


@dataclass
class ConversionContext:
    """Context for converting one argument"""
    idx: int              # Position in the argument list
    value: Any            # Argument as passed by the caller
    type: Any             # Declared parameter type


class TypeHandler(ABC):
    """Base class for custom argument coercions"""

    @abstractmethod
    def accepts(self, ctx: ConversionContext) -> bool:
        """Check if the value can be passed as the declared type"""
        pass

    @abstractmethod
    def convert(self, ctx: ConversionContext) -> Any:
        """Convert an accepted value to the declared type"""
        pass


class TypeCoercer:
    """Selects a candidate signature and converts arguments to it"""

    def __init__(self):
        self._handlers: dict[Any, TypeHandler] = {}

    def register(self, tp: Any, handler: TypeHandler):
        """Register a custom handler for a declared type"""
        self._handlers[tp] = handler

    def has_handler(self, tp: Any) -> bool:
        """Check if a custom handler exists for this type"""
        return tp in self._handlers

    def get_handler(self, tp: Any) -> Optional[TypeHandler]:
        """Get custom handler for type"""
        return self._handlers.get(tp)

    def coerce(self, args: Sequence[Any], candidate_signatures: Sequence[tuple]) -> tuple:
        """Convert args to the first signature they are compatible with

        Signatures are tried in the order given; those of a different
        length are skipped. Returns args unchanged when none matches.
        """
        args = tuple(args)
        if not args:
            return args

        for signature in candidate_signatures:
            if len(signature) != len(args):
                continue
            converted = self._convert_all(args, signature)
            if converted is not None:
                return converted
        return args

    def matches(self, args: Sequence[Any], signature: tuple) -> bool:
        """Check if args are compatible with one signature"""
        return len(signature) == len(args) and self._convert_all(tuple(args), signature) is not None

    def _convert_all(self, args: tuple, signature: tuple) -> Optional[tuple]:
        converted = []
        for idx, (value, tp) in enumerate(zip(args, signature)):
            result = self.convert(ConversionContext(idx=idx, value=value, type=tp))
            if result is NO_MATCH:
                return None
            converted.append(result)
        return tuple(converted)

    def convert(self, ctx: ConversionContext) -> Any:
        """Convert a single value, NO_MATCH when incompatible"""
        # Check for custom handler
        handler = self._handlers.get(ctx.type)
        if handler is not None:
            return handler.convert(ctx) if handler.accepts(ctx) else NO_MATCH

        return self._default_convert(ctx)

    def _default_convert(self, ctx: ConversionContext) -> Any:
        """Default conversion rules"""
        value, tp = ctx.value, ctx.type

        if tp is Any or tp is object:
            return value

        # Annotations that could not be resolved are not checked
        elif isinstance(tp, (str, typing.ForwardRef, typing.TypeVar)):
            return value

        elif is_void_type(tp):
            return value if value is None else NO_MATCH

        origin = typing.get_origin(tp)
        if origin is typing.Union or origin is types.UnionType:
            for member in typing.get_args(tp):
                member_ctx = ConversionContext(idx=ctx.idx, value=value, type=member)
                result = self.convert(member_ctx)
                if result is not NO_MATCH:
                    return result
            return NO_MATCH

        elif origin is typing.Literal:
            return value if value in typing.get_args(tp) else NO_MATCH

        elif isinstance(origin, type):
            # Generic alias: only the container type is checked
            return value if isinstance(value, origin) else NO_MATCH

        if not isinstance(tp, type):
            return value

        if isinstance(value, tp):
            return value

        elif is_numeric_type(tp) and is_numeric_value(value):
            try:
                return tp(value)
            except CONVERSION_ERRORS:
                return NO_MATCH

        return NO_MATCH


_default_coercer = TypeCoercer()


def coerce(args: Sequence[Any], candidate_signatures: Sequence[tuple]) -> tuple:
    """Coerce args with the built-in rules only"""
    return _default_coercer.coerce(args, candidate_signatures)
