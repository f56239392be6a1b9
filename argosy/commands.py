"""
Argosy command layer: declare commands, compose them into trees, render help.

What this module provides
- Command: a named node holding an optional action, usage text, its argument
  definitions and its child commands (ownership only; parent relations live in
  argosy.tree.CommandTree).
- Helper: single-method capability rendering help text for a command route.
  • DefaultHelper: usage line, subcommand list and column-aligned options.
  • Command.helper(fn) overrides the renderer for one command.
- command(...): create a Command or a decorator that produces one from an
  action function, mirroring how commands are declared with @command.

Actions
- An action is called as action(context, operands) where context is the
  run's argosy.runner.Context and operands is the list of operand strings.
- Commands without an action are pure namespaces for their subcommands.

Help injection
- Every command receives a help argument (--help / -h) unless it already
  declares one. This happens once, when the command is attached to a parent
  (or, for the root, when a Runner is built).

Quick start
    from argosy import command, Argument, BoolBinder, Runner

    verbose = BoolBinder()

    @command(arguments=[Argument("verbose", "v", binder=verbose)])
    def tool(context, operands):
        "do the tool thing"

    @tool.command
    def build(context, operands):
        "build the things"

    Runner(tool).run(["-v", "build"])
"""
import inspect
from abc import ABCMeta, abstractmethod

from .arguments import Argument, help_argument
from .faults import ShadowedHelpWarning, FaultCode, trigger, getdoc
from .syntax import Syntax
from .utils import *


class Helper(metaclass=ABCMeta):
    """
    Capability rendering the help text of a command.

    render() receives the route (commands from the root down to the command
    being described, the last element) and the active Syntax, and returns the
    formatted text.
    """

    @abstractmethod
    def render(self, route, syntax, /):
        raise NotImplementedError


class DefaultHelper(Helper):
    """
    Plain-text help layout.

        Usage:
            tool build [command] <options>

        Commands:
            [clean]  remove build outputs

        Options:
            -j, --jobs    number of parallel jobs
    """
    indent = 4
    gutter = 4

    @staticmethod
    def label(argument, syntax, /):
        """
        option label for the given syntax; empty when the syntax cannot address it.
        """
        match syntax:
            case Syntax.GNU:
                labels = []
                if argument.short:
                    labels.append("-" + argument.short)
                if argument.name:
                    labels.append("--" + argument.name)
                return ", ".join(labels)
            case Syntax.POSIX:
                if argument.short:
                    return "-" + argument.short
                if len(argument.name) == 1:
                    return "-" + argument.name
                return ""
        return ""

    def render(self, route, syntax, /):
        command = route[-1]
        options = [argument for argument in command._arguments if not argument.helper]
        padding = " " * self.indent

        usage = " ".join(step.name for step in route if step.name)
        if command._children:
            usage += " [command] <options>"
        elif options:
            usage += " <options>"
        sections = ["Usage:\n" + padding + usage.strip()]

        if command.usage:
            sections.append(padding + command.usage)

        if command._children:
            sections.append("Commands:\n" + "\n".join(
                f"{padding}[{name}]  {child.usage}".rstrip() for name, child in command._children.items()
            ))

        lines = [(label, argument.usage) for argument in options if (label := self.label(argument, syntax))]
        if lines:
            width = max(len(label) for label, _ in lines)
            sections.append("Options:\n" + "\n".join(
                f"{padding}{label.ljust(width + self.gutter)}{usage}".rstrip() for label, usage in lines
            ))

        return "\n\n".join(sections) + "\n"


class _FunctionHelper(Helper):
    def __init__(self, function, /):
        self._function = function

    def render(self, route, syntax, /):
        return self._function(route, syntax)


def _declares_help(arguments):
    """
    whether one of 'arguments' already plays (or shadows) the help argument.
    """
    return any(
        argument.helper or argument.name in ("help", "h") or argument.short == "h"
        for argument in arguments
    )


def _attach_to_parent(self, parent):
    """
    Register 'self' under 'parent', enforcing the tree invariants.

    - child names are unique within a parent;
    - a command is registered under at most one parent;
    - no command may become its own ancestor.
    """
    if self._attached:
        raise ValueError(f"{type(self).__typename__} {self.name!r} is already registered under a parent")

    pending = [self]
    while pending:
        if (node := pending.pop()) is parent:
            raise ValueError(f"{type(self).__typename__} {self.name!r} cannot be registered under its own subtree")
        pending.extend(node._children.values())

    if parent._children.setdefault(self.name, self) is not self:
        typeof = "subcommand" if parent._attached else "command"
        raise ValueError(f"{type(self).__typename__} {typeof} name {self.name!r} is already in use")

    self._attached = True


class Command(metaclass=IntrospectiveType):
    """
    Command definition node.

    Responsibilities
    - Holds identity (name, usage), the optional action and the ordered
      argument definitions.
    - Owns its child commands (an ordered name → Command mapping).
    - Renders its own help through its Helper.

    Notes
    - The parent relation is not stored here: CommandTree indexes the
      whole hierarchy and answers parent/route questions.
    - Definitions are read-only once a run starts; the only mutation after
      construction is the one-time help injection.
    """

    __introspectable__ = (
        "name",
        "usage",
        "action",
        "arguments",
        "children",
    )

    __displayable__ = (
        "name",
        "usage",
        "arguments",
        "children",
    )

    def __init__(self, name="", /, action=None, usage="", arguments=(), *, helper=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        if action is not None and not callable(action):
            raise TypeError(f"{type(self).__typename__} 'action' must be callable")
        if not isinstance(usage, str):
            raise TypeError(f"{type(self).__typename__} 'usage' must be a string")

        self._name = name.strip()
        self._action = action
        self._usage = usage.strip()
        self._arguments = []
        self._children = {}
        self._attached = False
        self._configured = False
        self._helper = DefaultHelper()

        for argument in arguments:
            if not isinstance(argument, Argument):
                raise TypeError(f"{type(self).__typename__} 'arguments' must contain only arguments")
            self._arguments.append(argument)

        if helper is not Unset:
            self.helper(helper)

    def helper(self, function, /):
        """
        Override the help renderer of this command.

        Accepts a Helper instance or a function (route, syntax) -> str; can be
        used as a decorator.
        """
        if isinstance(function, Helper):
            self._helper = function
        elif callable(function):
            self._helper = _FunctionHelper(function)
        else:
            raise TypeError("helper() argument must be a helper or a callable")
        return function

    def render(self, route, syntax, /):
        """
        Render the help text of this command for 'route' (root … self).
        """
        return self._helper.render(tuple(route), syntax)

    def configure(self):
        """
        Inject the help argument unless one is already declared (runs once).
        """
        if self._configured:
            return
        self._configured = True

        if not _declares_help(self._arguments):
            self._arguments.append(help_argument())
        elif not any(argument.helper for argument in self._arguments):
            trigger(ShadowedHelpWarning(
                "command %r declares a 'help' or 'h' argument that is not a helper" % self.name,
                code=FaultCode.SHADOWED_HELP,
                command=self.name,
                hint="pass helper=True to that argument or rename it to keep --help available",
                docs=getdoc(FaultCode.SHADOWED_HELP),
            ))

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Create (or adopt) a child command under this command.

        Forms
        - parent.command(child): register an existing Command.
        - parent.command(action, ...): wrap an action function into a child.
        - @parent.command / @parent.command(name=..., ...): decorator form.
        """
        @rename("command")
        def wrapper(source, /):
            child = source if isinstance(source, Command) else command(source, *args, **kwargs)
            _attach_to_parent(child, self)
            child.configure()
            return child

        return wrapper(source) if source is not Unset else wrapper


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command from an action function or return a decorator to build it later.

    Name and usage default to the function's __name__ and the first line of
    its docstring.

    Forms
    - command(action, name="x", arguments=[...])
    - @command
      def tool(context, operands): ...
    - @command(arguments=[...])
      def tool(context, operands): ...
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        options = dict(kwargs)
        name = options.pop("name", Unset)
        usage = options.pop("usage", Unset)
        docstring = (inspect.getdoc(source) or "").strip().splitlines()
        return Command(
            coalesce(name, getattr(source, "__name__", "")),
            source,
            coalesce(usage, docstring[0] if docstring else ""),
            *args,
            **options,
        )

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "Helper",
    "DefaultHelper",
    "command",
)
