"""
Argosy runner: parse, bind and execute a command tree against an argument vector.

Pipeline (one run)
1. walk: split argv into per-command token groups (argosy.tree.walk).
2. parse: classify each group with the syntax rule chain (argosy.syntax.parse).
3. bind: validate required values and hand each value to its binder.
4. execute: run the actions of every completed command, root first, polling
   the cancellation context between actions.

Results and faults
- run() returns None after a complete run, or a Help result when a help
  argument was matched (nothing runs in that case).
- Syntax faults and missing values are re-raised with the offending command's
  help text attached (fault.help); conversion faults propagate untouched.
- A cancelled context stops execution before the next action; its cause is raised.

Entry point
- invoke(runner, argv) reads sys.argv when argv is omitted. In shell mode it
  prints help or faults through rich and exits; otherwise it behaves like run().

Quick example
    >>> from argosy import Runner, Syntax, command
    >>> @command
    ... def tool(context, operands):
    ...     print(operands)
    >>> Runner(tool, Syntax.POSIX).run(["--", "-x", "file"])
    ['-x', 'file']
"""
import copy
import shlex
import sys
import threading
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .faults import *
from .syntax import Syntax, parse
from .tree import CommandTree, walk
from .utils import *


class Context:
    """
    Cancellation-aware execution context handed to every action.

    cancel() may be called from any thread; the runner only polls it between
    two actions, a running action is never interrupted.
    """

    def __init__(self):
        self._event = threading.Event()
        self._cause = None

    @property
    def cancelled(self):
        return self._event.is_set()

    @property
    def cause(self):
        """
        the exception explaining the cancellation (None while not cancelled).
        """
        return self._cause

    def cancel(self, cause=Unset, /):
        """
        Cancel the context; the first cause wins.
        """
        if self._event.is_set():
            return
        if cause is Unset:
            cause = CancelledError("execution cancelled", hint="the run was stopped before this command")
        elif isinstance(cause, type) and issubclass(cause, BaseException):
            cause = cause()
        elif not isinstance(cause, BaseException):
            cause = CancelledError(str(cause))
        self._cause = cause
        self._event.set()


class Help(metaclass=IntrospectiveType):
    """
    Early-exit result carrying the rendered help of the command that asked for it.
    """

    __introspectable__ = (
        "text",
        "command",
    )

    def __init__(self, text, /, command=""):
        self._text = text
        self._command = command

    def __str__(self):
        return self._text

    def __rich__(self):
        return Text(self._text.rstrip("\n"))


class Runner(metaclass=IntrospectiveType):
    """
    Parses and executes a command tree.

    Parameters
    - root: the root Command.
    - syntax: Syntax.GNU (default) or Syntax.POSIX.
    - shell / colorful / fancy: presentation flags used by invoke().

    Raises
    - ConfigurationError when root is not a Command or syntax is unsupported.
    """

    __introspectable__ = (
        "root",
        "syntax",
        "shell",
        "colorful",
        "fancy",
    )

    def __init__(self, root, /, syntax=Syntax.GNU, *, shell=False, colorful=False, fancy=False):
        CommandTree(root)
        if not isinstance(syntax, Syntax):
            raise ConfigurationError(
                "unsupported argument syntax %r" % (syntax,),
                code=FaultCode.UNSUPPORTED_SYNTAX,
                hint="use one of: %s" % ", ".join(member.name for member in Syntax),
                docs=getdoc(FaultCode.UNSUPPORTED_SYNTAX),
            )
        root.configure()

        self._root = root
        self._syntax = syntax
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    def run(self, argv, /, context=None):
        """
        Run the tree against 'argv' (tokens after the program name).

        Returns a Help result or None; raises faults as described in the module docs.
        """
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("run() argument must be an iterable of strings")
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("run() argument must be an iterable of strings")

        tree = CommandTree(self._root)
        completed = self._parse(tree, argv)
        if isinstance(completed, Help):
            return completed
        if not completed:
            raise NoCommandsError("no commands parsed", hint="pass a command name or options")

        self._execute(tree, completed, context if context is not None else Context())
        return None

    def _render(self, tree, parsed):
        return tree.commands[parsed.node].render(tree.route(parsed.node), self._syntax)

    def _parse(self, tree, argv):
        commands, path = walk(tree, argv)
        completed = []

        for parsed in commands:
            if path.terminated:
                break

            command = tree.commands[parsed.node]
            try:
                state = parse(command._arguments, parsed.tokens, parsed.positions, self._syntax, argv)
                parsed.arguments = state.parsed
                parsed.operands = state.operands
                path.terminated = state.terminated
                if (help := self._bind(tree, parsed)) is not None:
                    return help
            except (SyntaxFault, MissingValueError) as fault:
                raise copy.replace(fault, help=self._render(tree, parsed), command=command.name) from None

            completed.append(parsed)

        return completed

    def _bind(self, tree, parsed):
        """
        Bind one command's parsed arguments in match order.

        Returns a Help result when the help argument was matched.
        """
        for argument in parsed.arguments:
            definition = argument.definition

            if definition.helper:
                return Help(self._render(tree, parsed), tree.commands[parsed.node].name)

            # boolean arguments are their own value, they are never "missing"
            if not definition.boolean and definition.required and not argument.value:
                raise MissingValueError(
                    "missing option-argument for required option %r" % (definition.name or definition.short),
                    token=argument.raw,
                    argument=definition,
                    hint="pass a value right after %s" % argument.raw,
                    docs=getdoc(FaultCode.MISSING_VALUE),
                )

            if definition.binder is not None:
                definition.binder.bind(argument.raw, argument.value)

        return None

    def _execute(self, tree, completed, context):
        for parsed in completed:
            if (action := tree.commands[parsed.node].action) is None:
                continue
            if context.cancelled:
                raise context.cause
            action(context, list(parsed.operands))


def invoke(runner, argv=Unset, /, context=None):
    """
    Process entry point for a Runner.

    Parameters
    - argv:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: used as-is.

    Behavior
    - shell mode: help is printed to stdout (exit status 0), faults are
      rendered to stderr through trigger() (exit status 1).
    - otherwise: returns what run() returns and lets faults propagate.
    """
    if not isinstance(runner, Runner):
        raise TypeError("invoke() first argument must be a runner")

    if argv is Unset:
        tokens = sys.argv[1:]
    elif isinstance(argv, str):
        tokens = shlex.split(argv)
    else:
        tokens = argv

    try:
        result = runner.run(tokens, context)
    except CommandException as fault:
        if not runner.shell:
            raise
        trigger(fault, shell=True, colorful=runner.colorful, fancy=runner.fancy)
        raise

    if isinstance(result, Help) and runner.shell:
        Console().print(result)
        sys.exit(0)

    return result


__all__ = (
    "Context",
    "Help",
    "Runner",
    "invoke",
)
