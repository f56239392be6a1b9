"""
Argosy command tree and token walker.

What this module provides
- CommandTree: an arena over a command hierarchy. Commands are addressed by
  index (root is 0); each node has one parent index and an ordered tuple of
  child indexes. Commands themselves never point back at their parents.
- ParsedCommand: one matched command with its residual tokens.
- PathContext: run-wide walker state (reachable command indexes, terminated).
- walk(): single left-to-right pass assigning every token to a command.

Walking rules
- The reachable set starts as the root's children.
- A token naming a reachable command opens a new ParsedCommand; the reachable
  set becomes the children of that command followed by the children of each
  of its ancestors, nearest first (so siblings stay addressable).
- Any other token joins the residual slice of the currently open command.
- argv[0] equal to the root's own name (and not to a reachable child) is taken
  as the root's command token, so vectors that still carry the program name
  parse the same way.
"""
from dataclasses import dataclass, field

from .commands import Command
from .faults import ConfigurationError, FaultCode, getdoc


class CommandTree:
    """
    Index-addressed view of a command hierarchy rooted at 'root'.

    attributes
    - commands: list of Command, in depth-first declaration order.
    - parents: parent index per node (None for the root).
    - children: tuple of child indexes per node.
    """

    def __init__(self, root, /):
        if not isinstance(root, Command):
            raise ConfigurationError(
                "root command not set",
                code=FaultCode.NO_ROOT_COMMAND,
                hint="pass a Command instance as the root of the runner",
                docs=getdoc(FaultCode.NO_ROOT_COMMAND),
            )

        self.commands = []
        self.parents = []
        self.children = []
        self._indexes = {}

        pending = [(root, None)]
        while pending:
            command, parent = pending.pop()
            index = len(self.commands)
            self.commands.append(command)
            self.parents.append(parent)
            self.children.append(())
            self._indexes[id(command)] = index
            if parent is not None:
                self.children[parent] += (index,)
            pending.extend((child, index) for child in reversed(command._children.values()))

    def __len__(self):
        return len(self.commands)

    @property
    def root(self):
        return self.commands[0]

    def lookup(self, command, /):
        """
        index of 'command' in the arena (KeyError if it is not part of the tree).
        """
        return self._indexes[id(command)]

    def parent(self, index, /):
        return self.parents[index]

    def ancestors(self, index, /):
        """
        indexes from the parent of 'index' up to the root.
        """
        while (index := self.parents[index]) is not None:
            yield index

    def route(self, index, /):
        """
        commands from the root down to 'index' (inclusive).
        """
        return tuple(self.commands[step] for step in reversed((index, *self.ancestors(index))))

    def reachable(self, index, /):
        """
        child indexes of 'index' and of each of its ancestors, nearest first.
        """
        return tuple(child for step in (index, *self.ancestors(index)) for child in self.children[step])


@dataclass(eq=False)
class ParsedCommand:
    """
    One matched command.

    - node: the command's index in the CommandTree.
    - tokens / positions: residual tokens and their absolute argv indexes.
    - index: argv index of the command token (None for an implicit root).
    - operands / arguments: filled by the rule engine.
    """
    node: int
    index: int | None = None
    tokens: list = field(default_factory=list)
    positions: list = field(default_factory=list)
    operands: list = field(default_factory=list)
    arguments: list = field(default_factory=list)


@dataclass(eq=False)
class PathContext:
    reachable: tuple = ()
    terminated: bool = False


def walk(tree, argv, /):
    """
    Split 'argv' into ParsedCommands, root first, in discovery order.

    returns
    - (parsed commands, PathContext)
    """
    path = PathContext(reachable=tree.reachable(0))
    current = ParsedCommand(0)
    parsed = [current]

    for position, token in enumerate(argv):
        node = next((index for index in path.reachable if token and tree.commands[index].name == token), None)

        if node is not None:
            current = ParsedCommand(node, position)
            parsed.append(current)
            path.reachable = tree.reachable(node)
        elif position == 0 and tree.root.name and token == tree.root.name:
            current.index = position
        else:
            current.tokens.append(token)
            current.positions.append(position)

    return parsed, path


__all__ = (
    "CommandTree",
    "ParsedCommand",
    "PathContext",
    "walk",
)
