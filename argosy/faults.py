"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- configuration: ConfigurationError (fatal, raised before parsing begins).
- syntax: SyntaxFault and its subclasses; the runner attaches the offending
  command's rendered help text as the 'help' option.
- missing values: MissingValueError, attached to help text like syntax faults.
- conversion: ConversionError, raised by binders and never attached to help text.
- execution: NoCommandsError, CancelledError.

Integration
- Rules and binders raise faults directly; the runner enriches them with
  copy.replace(fault, help=..., command=...) and re-raises.
- In shell mode (see argosy.runner.invoke) faults are rendered via rich instead.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - configuration (2110x)
      • NO_ROOT_COMMAND, UNSUPPORTED_SYNTAX
    - syntax (2111x)
      • INVALID_OPTION, UNKNOWN_ARGUMENT, NON_REPEATABLE, INVALID_NAME, SEPARATE_VALUE
    - binding (2112x)
      • MISSING_VALUE, CONVERSION_FAILED
    - execution (2113x)
      • NO_COMMANDS, CANCELLED
    - warnings (2211x)
      • SHADOWED_HELP

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired.
    """
    # --- configuration errors (21xxx) ---
    NO_ROOT_COMMAND    = 21101
    UNSUPPORTED_SYNTAX = 21102

    # --- syntax errors (21xxx) ---
    INVALID_OPTION     = 21111
    UNKNOWN_ARGUMENT   = 21112
    NON_REPEATABLE     = 21113
    INVALID_NAME       = 21114
    SEPARATE_VALUE     = 21115

    # --- binding errors (21xxx) ---
    MISSING_VALUE      = 21121
    CONVERSION_FAILED  = 21122

    # --- execution errors (21xxx) ---
    NO_COMMANDS        = 21131
    CANCELLED          = 21132

    # --- warnings (22xxx) ---
    SHADOWED_HELP      = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base class for every fault raised by the engine.

    the message is positional; everything else (code, title, hint, token, help,
    command, ...) travels in the read-only 'options' mapping and can be
    extended with copy.replace(fault, **options).
    """
    __code__ = Unset
    __title__ = "command error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": self.__code__,
            "title": self.__title__,
        } | options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else self.options["title"]

    @property
    def code(self):
        return self.options["code"]

    @property
    def help(self):
        """
        rendered help text of the command the fault belongs to, if attached.
        """
        return self.options.get("help")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "help": "#9CA3AF",  # muted help text under the fault
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("command") or "argosy"), styler("prog-name"))
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        renders = [text(str(self), styler("error-message"))]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if self.help:
            renders.append(Text("\n").append(text(self.help.rstrip(), styler("help"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(CommandException):
    __title__ = "invalid configuration"


class SyntaxFault(CommandException):
    """
    base for faults caused by the shape of the command line itself.
    """
    __title__ = "invalid syntax"


class InvalidOptionError(SyntaxFault):
    __code__ = FaultCode.INVALID_OPTION
    __title__ = "invalid option"


class UnknownArgumentError(SyntaxFault):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class NonRepeatableError(SyntaxFault):
    __code__ = FaultCode.NON_REPEATABLE
    __title__ = "non-repeatable option"


class InvalidNameError(SyntaxFault):
    __code__ = FaultCode.INVALID_NAME
    __title__ = "invalid option name"


class SeparateValueError(SyntaxFault):
    __code__ = FaultCode.SEPARATE_VALUE
    __title__ = "misplaced option-argument"


class MissingValueError(CommandException):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing option-argument"


class ConversionError(CommandException, ValueError):
    __code__ = FaultCode.CONVERSION_FAILED
    __title__ = "invalid option-argument"


class NoCommandsError(CommandException):
    __code__ = FaultCode.NO_COMMANDS
    __title__ = "no commands parsed"


class CancelledError(CommandException):
    __code__ = FaultCode.CANCELLED
    __title__ = "cancelled"


class CommandWarning(ABC, Warning):
    __code__ = Unset
    __title__ = "command warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": self.__code__,
            "title": self.__title__,
        } | options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else self.options["title"]

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", self.options.get("command") or "argosy"), "prog-name"),
            " — ",
            text(self.options["code"].normalize(), "code"),
            " | ",
            text(self.options["title"].title(), "warning-title"),
            " ]"
        )
        message = text(str(self), "warning-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))
        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedHelpWarning(CommandWarning):
    __code__ = FaultCode.SHADOWED_HELP
    __title__ = "shadowed help"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "ConfigurationError",
    "SyntaxFault",
    "InvalidOptionError",
    "UnknownArgumentError",
    "NonRepeatableError",
    "InvalidNameError",
    "SeparateValueError",
    "MissingValueError",
    "ConversionError",
    "NoCommandsError",
    "CancelledError",
    "CommandWarning",
    "ShadowedHelpWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
