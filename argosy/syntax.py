r"""
Argosy syntax rule engine.

Overview
- Syntax: the two supported option conventions.
  • GNU: long options ('--name', '--name=value') on top of POSIX short clusters.
  • POSIX: short options and clusters only ('-a', '-abc', '-xVALUE', '-x VALUE').
- RULES: for each syntax, a fixed, ordered tuple of classification rules.
  A rule has the signature rule(token, index, context) -> bool:
  • True means the token was consumed and the chain stops;
  • False hands the token to the next rule;
  • a SyntaxFault aborts the whole run;
  • Termination ('--') ends option classification for the rest of the run.
- parse(): runs the chain over one command's residual tokens.

Chains
- GNU:   gnu_terminated, posix_terminated, leading, long_option, operand,
         long_separate, short_cluster, short_separate
- POSIX: posix_terminated, leading, short_cluster, operand, short_separate

Values
- '--name=value' binds inline; a separate token binds to a long option only
  when the option is required (or was given with '=' already).
- '-xVALUE' binds the rest of the cluster to a non-boolean '-x'.
- '-x VALUE' binds the next token to any non-boolean short option.
- Boolean arguments never take the next token: a plain token after them is an
  operand, a dash-prefixed one must classify on its own.
- Once the most recent argument holds a value, plain tokens are operands.

Termination
- A qualifying '--' stops classification for the whole run; every token of the
  original argument vector after it becomes an operand of the current command,
  verbatim and in order (option-looking strings included).
"""
import difflib
import enum
from dataclasses import dataclass, field

from .faults import *
from .utils import ordinal


class Syntax(enum.Enum):
    GNU = "gnu"
    POSIX = "posix"


class Termination(Exception):
    """
    Internal signal raised by the termination rules; never surfaced to users.

    'position' is the absolute index of the '--' token in the argument vector.
    """

    def __init__(self, position):
        super().__init__("arguments terminated")
        self.position = position


@dataclass(eq=False)
class ParsedArgument:
    definition: object
    raw: str
    value: str = ""
    inline: bool = False

    @property
    def boolean(self):
        return self.definition.boolean


@dataclass(eq=False)
class ParseContext:
    """
    Per-command classification state.

    - definitions: the command's argument definitions.
    - positions: absolute argv index of each residual token.
    - parsed: parsed arguments in match order; 'last' is the most recent one.
    - operands: operands in order.
    - terminated: a '--' ended classification.
    """
    definitions: tuple
    positions: tuple
    parsed: list = field(default_factory=list)
    operands: list = field(default_factory=list)
    last: ParsedArgument | None = None
    terminated: bool = False

    def open(self, definition, raw, /):
        self.last = ParsedArgument(definition, raw)
        self.parsed.append(self.last)
        return self.last

    def repeated(self, definition, /):
        """
        whether matching 'definition' again would break its repeatability.
        """
        return not definition.repeatable and any(argument.definition is definition for argument in self.parsed)

    def where(self, index, /):
        return ordinal(self.positions[index] + 1)


def _portable(name, /):
    # letters and digits in every hyphen-separated component
    return all(character.isalnum() for segment in name.split("-") for character in segment)


def _non_repeatable(token, index, context, definition, /):
    return NonRepeatableError(
        "non-repeatable option %r at %s position was already provided" % (token, context.where(index)),
        token=token,
        index=context.positions[index],
        argument=definition,
        hint="keep a single %s; it can be specified only once" % definition.label,
        docs=getdoc(FaultCode.NON_REPEATABLE),
    )


def _invalid_name(token, index, context, definition, /):
    return InvalidNameError(
        "invalid option name %r at %s position" % (token, context.where(index)),
        token=token,
        index=context.positions[index],
        argument=definition,
        hint="option names may only contain letters and digits (and '-' between words)",
        docs=getdoc(FaultCode.INVALID_NAME),
    )


def gnu_terminated(token, index, context):
    """
    '--' after an optional argument that still has no value.
    """
    if token == "--" and (last := context.last) is not None and not last.definition.required and not last.value:
        raise Termination(context.positions[index])
    return False


def posix_terminated(token, index, context):
    """
    '--' as the first token, or after a boolean or already-valued argument.
    """
    if token == "--" and (index == 0 or ((last := context.last) is not None and (last.boolean or last.value))):
        raise Termination(context.positions[index])
    return False


def leading(token, index, context):
    """
    The first token of a command must look like an option.
    """
    if index == 0 and not token.startswith("-"):
        raise InvalidOptionError(
            "invalid option %r at %s position" % (token, context.where(index)),
            token=token,
            index=context.positions[index],
            hint="options start with '-' (or '--' for long names); operands go after them or after '--'",
            docs=getdoc(FaultCode.INVALID_OPTION),
        )
    return False


def long_option(token, index, context):
    """
    '--name' or '--name=value' (split at the first '=').
    """
    if not token.startswith("--") or token == "--":
        return False

    name, separator, value = token[2:].partition("=")
    if not name:
        return False

    for definition in context.definitions:
        if definition.name != name:
            continue
        if not _portable(name):
            raise _invalid_name(token, index, context, definition)
        if context.repeated(definition):
            raise _non_repeatable(token, index, context, definition)
        argument = context.open(definition, token)
        argument.value = value
        argument.inline = bool(separator)
        return True

    return False


def operand(token, index, context):
    """
    Anything after a valued argument is an operand.
    """
    if (last := context.last) is not None and last.value:
        context.operands.append(token)
        return True
    return False


def long_separate(token, index, context):
    """
    Separate-token value for the most recent long option.

    Only required options (or options already given with '=') accept it;
    optional ones must attach their value with '='.
    """
    if (last := context.last) is None or last.value or last.boolean or not last.raw.startswith("--"):
        return False

    if not last.definition.required and not last.inline:
        raise SeparateValueError(
            "optional option-argument %r at %s position must be attached to %r with '='" % (
                token, context.where(index), last.definition.label
            ),
            token=token,
            index=context.positions[index],
            argument=last.definition,
            hint="write it as %s=%s" % (last.definition.label, token),
            docs=getdoc(FaultCode.SEPARATE_VALUE),
        )

    last.value = token
    return True


def short_cluster(token, index, context):
    """
    '-a', '-abc' (cluster of flags) and '-xVALUE' (inline short value).

    Characters are matched left to right against short names and single
    character long names. A non-boolean match binds the rest of the cluster as
    its value. An unmatched character after the first binds the rest of the
    cluster, from that character on, to the previous match. An unmatched first
    character leaves the token unconsumed.
    """
    if not token.startswith("-") or len(token) < 2 or token == "--":
        return False

    cluster = token[1:]
    for offset, character in enumerate(cluster):
        definition = next((
            definition for definition in context.definitions if definition.matches(character)
        ), None)

        if definition is None:
            if offset == 0:
                return False
            context.last.value = cluster[offset:]
            return True

        if not ((len(definition.name) == 1 and definition.name.isalnum()) or definition.short.isalnum()):
            raise _invalid_name(token, index, context, definition)
        if context.repeated(definition):
            raise _non_repeatable(token, index, context, definition)

        argument = context.open(definition, token)
        if not definition.boolean and offset + 1 < len(cluster):
            argument.value = cluster[offset + 1:]
            return True

    return True


def short_separate(token, index, context):
    """
    Separate-token value for the most recent argument.
    """
    if (last := context.last) is None or last.value:
        return False

    if last.boolean:
        if token.startswith("-") and token != "-":
            return False
        context.operands.append(token)
        return True

    last.value = token
    return True


RULES = {
    Syntax.GNU: (
        gnu_terminated,
        posix_terminated,
        leading,
        long_option,
        operand,
        long_separate,
        short_cluster,
        short_separate,
    ),
    Syntax.POSIX: (
        posix_terminated,
        leading,
        short_cluster,
        operand,
        short_separate,
    ),
}


def _unknown(token, index, context, syntax):
    labels = []
    for definition in context.definitions:
        if definition.name and syntax is Syntax.GNU:
            labels.append("--" + definition.name)
        if definition.short:
            labels.append("-" + definition.short)

    suggestions = difflib.get_close_matches(token.partition("=")[0], labels, 5)
    try:
        hint = "did you mean %r? you can also run with --help to see all options" % suggestions[0]
    except IndexError:
        hint = "run with --help to see all available options"

    return UnknownArgumentError(
        "unknown argument %r at %s position" % (token, context.where(index)),
        token=token,
        index=context.positions[index],
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
    )


def parse(definitions, tokens, positions, syntax, argv, /):
    """
    Classify one command's residual tokens.

    parameters
    - definitions: the command's Argument definitions.
    - tokens / positions: the residual tokens and their absolute argv indexes.
    - syntax: a Syntax member.
    - argv: the whole argument vector (operands after '--' are taken from it).

    returns
    - ParseContext with parsed arguments, operands and the terminated flag.

    raises
    - ConfigurationError for an unknown syntax; SyntaxFault subclasses for
      malformed input.
    """
    try:
        rules = RULES[syntax]
    except (KeyError, TypeError):
        raise ConfigurationError(
            "unsupported argument syntax %r" % (syntax,),
            code=FaultCode.UNSUPPORTED_SYNTAX,
            hint="use one of: %s" % ", ".join(member.name for member in Syntax),
            docs=getdoc(FaultCode.UNSUPPORTED_SYNTAX),
        ) from None

    context = ParseContext(tuple(definitions), tuple(positions))

    for index, token in enumerate(tokens):
        try:
            for rule in rules:
                if rule(token, index, context):
                    break
            else:
                raise _unknown(token, index, context, syntax)
        except Termination as termination:
            context.terminated = True
            context.operands.extend(argv[termination.position + 1:])
            break

    return context


__all__ = (
    "Syntax",
    "ParsedArgument",
    "ParseContext",
    "RULES",
    "parse",
)
