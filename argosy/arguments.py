r"""
Argosy argument definitions.

Overview
- Argument: static description of one option attached to a command.
  • name: long name, used as '--name' (GNU syntax) and in messages/help.
  • short: optional single character, used as '-x' (both syntaxes).
  • required: the option requires an option-argument (a value).
  • repeatable: the option may appear more than once per command.
  • helper: the designated help argument; matching it stops the run with help.
  • usage: short description for help output.
  • binder: optional Binder capability that receives the resolved value.
- help_argument(): factory for the help argument injected into every command.

Metadata (sanitized on construction)
- name/short/usage must be strings; short must be at most one character.
- at least one of name/short must be given.
- binder must provide a callable bind().
- character classes are deliberately not checked here: the rule engine rejects
  names that are not portable (letters/digits) when the option is matched, so
  the fault carries the offending token and command help.

Quick example:
    >>> from argosy import Argument, BoolBinder
    >>> verbose = Argument("verbose", "v", binder=BoolBinder(), usage="talk more")
    >>> verbose.boolean
    True
"""
import builtins

from .binders import BoolBinder
from .utils import *


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate argument metadata in place.

    Raises
    - TypeError: wrong types (names, usage, binder without bind()).
    - ValueError: short names longer than one character or no name at all.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    metadata["name"] = name.strip()

    if not isinstance(short := metadata["short"], str):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif len(short) > 1:
        raise ValueError(f"{cls.__typename__} 'short' must be a single character")

    if not metadata["name"] and not short:
        raise ValueError(f"{cls.__typename__} must specify a 'name' or a 'short' name")

    if not isinstance(usage := metadata["usage"], str):
        raise TypeError(f"{cls.__typename__} 'usage' must be a string")
    metadata["usage"] = usage.strip()

    binder = metadata["binder"]
    if binder is not None and not builtins.callable(getattr(binder, "bind", None)):
        raise TypeError(f"{cls.__typename__} 'binder' must provide a bind() method")


class Argument(metaclass=IntrospectiveType):
    """
    Option definition owned by a command.

    Instances are read-only records: every field in __introspectable__ is
    exposed as a property. The 'boolean' property is derived from the binder:
    boolean arguments take no option-argument, their presence is their value.
    """

    __introspectable__ = (
        "name",
        "short",
        "required",
        "repeatable",
        "helper",
        "usage",
        "binder",
    )

    __displayable__ = (
        "name",
        "short",
        "required",
        "repeatable",
        "helper",
    )

    def __init__(
            self,
            name="",
            short="",
            /,
            binder=None,
            usage="",
            *,
            required=False,
            repeatable=False,
            helper=False,
    ):
        metadata = {
            "name": name,
            "short": short,
            "binder": binder,
            "usage": usage,
            "required": bool(required),
            "repeatable": bool(repeatable),
            "helper": bool(helper),
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def boolean(self):
        """
        whether the binder is presence-only (see Binder.boolean).
        """
        return bool(getattr(self._binder, "boolean", False))

    def matches(self, name, /):
        """
        whether 'name' addresses this argument by long or short name.
        """
        return bool(name) and name in (self._name, self._short)

    @property
    def label(self):
        """
        canonical spelling for messages: '--name' when there is one, '-x' otherwise.
        """
        return "--" + self._name if self._name else "-" + self._short


def help_argument():
    """
    Build the help argument injected into commands that do not declare one.
    """
    return Argument(
        "help",
        "h",
        binder=BoolBinder(),
        usage="display usage information for this command",
        repeatable=True,
        helper=True,
    )


__all__ = (
    "Argument",
    "help_argument",
)
