r"""
Argosy binders: value coercion for parsed arguments.

Overview
- Binder: single-method capability. bind(arg, value) coerces the resolved value
  string of a parsed argument and stores it in the binder's target (.value).
  Malformed input raises ConversionError.
- Built-ins
  • BoolBinder: presence-only. Any non-empty value is an error; binding sets True.
  • FloatBinder, IntBinder (signed 32-bit), Int64Binder, UintBinder (unsigned
    32-bit), Uint64Binder, StringBinder.
  • ...ListBinder variants split the value on ',' (no escaping), coerce every
    element and fail the whole bind if any element fails.
- @binder: wrap a plain function (arg, value) into a Binder.

Contract
- An empty value never touches the target, for every binder kind.
- 'arg' is the raw token the argument was matched from; it is only used in messages.

Quick example:
    >>> threads = IntBinder(4)
    >>> threads.bind("--threads=8", "8")
    >>> threads.value
    8
    >>> ports = IntListBinder([1, 2, 3])
    >>> ports.bind("--ports", "")
    >>> ports.value
    [1, 2, 3]
"""
import re
from abc import ABCMeta, abstractmethod

from .faults import ConversionError, getdoc, FaultCode
from .utils import *


def _fault(arg, value, /):
    return ConversionError(
        "invalid option-argument %r for option %r" % (value, arg),
        arg=arg,
        value=value,
        hint="check the expected type of %r with --help" % arg,
        docs=getdoc(FaultCode.CONVERSION_FAILED),
    )


class Binder(metaclass=ABCMeta):
    """
    Capability that binds a resolved option-argument to a target.

    Subclasses implement bind(); the bound target is kept in .value so host
    code can read it back after a run. 'boolean' marks presence-only binders:
    the rule engine never hands them a separate token and treats their mere
    presence as their value.
    """
    boolean = False

    def __init__(self, value=None, /):
        self.value = value

    @abstractmethod
    def bind(self, arg, value, /):
        """
        coerce 'value' and store it; raise ConversionError on malformed input.
        """
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BoolBinder(Binder):
    """
    presence-only binder; the only accepted option-argument is none at all.
    """
    boolean = True

    def __init__(self, value=False, /):
        super().__init__(value)

    def bind(self, arg, value, /):
        if value:
            raise _fault(arg, value)
        self.value = True


class _ScalarBinder(Binder):
    """
    shared shape of every single-value binder: skip empty, convert, store.
    """

    def convert(self, value, /):
        raise NotImplementedError

    def bind(self, arg, value, /):
        if not value:
            return
        try:
            self.value = self.convert(value)
        except ValueError:
            raise _fault(arg, value) from None


class _ListBinder(_ScalarBinder):
    """
    comma-separated list of scalars; every element must convert.
    """
    element = _ScalarBinder

    def convert(self, value, /):
        return self.element.convert(self, value)

    def __init__(self, value=Unset, /):
        super().__init__(list(coalesce(value, ())))

    def bind(self, arg, value, /):
        if not value:
            return
        converted = []
        for element in value.split(","):
            try:
                converted.append(self.convert(element))
            except ValueError:
                raise _fault(arg, value) from None
        self.value = converted


def _integer(value, /, *, bits, signed):
    # Decimal digits with an optional sign only; int() would also accept
    # whitespace and underscores.
    if not re.fullmatch(r"[+-]?[0-9]+" if signed else r"[0-9]+", value):
        raise ValueError(value)
    integer = int(value)
    lower, upper = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
    if not lower <= integer <= upper:
        raise ValueError(value)
    return integer


class FloatBinder(_ScalarBinder):
    def __init__(self, value=0.0, /):
        super().__init__(value)

    def convert(self, value, /):
        if value != value.strip() or "_" in value:
            raise ValueError(value)
        return float(value)


class IntBinder(_ScalarBinder):
    """signed 32-bit integer."""

    def __init__(self, value=0, /):
        super().__init__(value)

    def convert(self, value, /):
        return _integer(value, bits=32, signed=True)


class Int64Binder(IntBinder):
    """signed 64-bit integer."""

    def convert(self, value, /):
        return _integer(value, bits=64, signed=True)


class UintBinder(IntBinder):
    """unsigned 32-bit integer."""

    def convert(self, value, /):
        return _integer(value, bits=32, signed=False)


class Uint64Binder(IntBinder):
    """unsigned 64-bit integer."""

    def convert(self, value, /):
        return _integer(value, bits=64, signed=False)


class StringBinder(_ScalarBinder):
    def __init__(self, value="", /):
        super().__init__(value)

    def convert(self, value, /):
        return value


class FloatListBinder(_ListBinder):
    element = FloatBinder

    def convert(self, value, /):
        # Elements may be padded with spaces ("1.5, 2.5"); empty elements are rejected.
        if not (value := value.strip()):
            raise ValueError(value)
        return FloatBinder.convert(self, value)


class IntListBinder(_ListBinder):
    element = IntBinder


class Int64ListBinder(_ListBinder):
    element = Int64Binder


class UintListBinder(_ListBinder):
    element = UintBinder


class Uint64ListBinder(_ListBinder):
    element = Uint64Binder


class StringListBinder(_ListBinder):
    element = StringBinder


class _FunctionBinder(Binder):
    def __init__(self, function, /, *, boolean=False):
        super().__init__()
        self._function = function
        self.boolean = bool(boolean)

    def bind(self, arg, value, /):
        self.value = self._function(arg, value)


def binder(function=Unset, /, *, boolean=False):
    """
    Build a Binder from a plain function, or return a decorator that does.

    The function receives (arg, value) and its return value becomes the
    binder's .value. It should raise ConversionError on malformed input.

    Forms
    - binder(function) -> Binder
    - @binder(boolean=True) def flag(arg, value): ...
    """
    @rename("binder")
    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@binder() must be applied to a callable")
        return _FunctionBinder(function, boolean=boolean)

    return wrapper(function) if function is not Unset else wrapper


__all__ = (
    "Binder",
    "BoolBinder",
    "FloatBinder",
    "IntBinder",
    "Int64Binder",
    "UintBinder",
    "Uint64Binder",
    "StringBinder",
    "FloatListBinder",
    "IntListBinder",
    "Int64ListBinder",
    "UintListBinder",
    "Uint64ListBinder",
    "StringListBinder",
    "binder",
)
