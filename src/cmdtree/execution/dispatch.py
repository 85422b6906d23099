"""
Dispatch of raw argument vectors against a resolved command tree.

Resolution runs in three steps:

1. Global flags (and the implicit help flag) are pulled out of the vector in a
   single left-to-right scan, so they may appear anywhere.
2. The remaining tokens are matched against the command tree depth by depth.
   An exact child name wins; otherwise a token that is a prefix of exactly one
   sibling selects it. If the very first token matches no top-level command,
   the whole tree is searched so that ancestor segments may be omitted. That
   search prefers exact names: a token naming exactly one command anywhere
   selects it even when it is also a prefix of other command names, and only
   when no name matches exactly are prefixes considered.
3. The tokens after the command path are bound to the command's local flags
   and positional arguments, independent of their relative order. Arguments
   bind by position; a repeated argument name gets a numeric suffix in the
   bundle (`path`, `path_2`).

A leading `help` word acts like the help flag unless a top-level command is
named `help`, in which case that command is dispatched normally.

The tree is never modified, so one `Dispatcher` may serve concurrent callers.
"""

import logging
from dataclasses import dataclass, field

from cmdtree.config import HELP_FLAG
from cmdtree.core.nodes import Flag, Topic
from cmdtree.core.tree import Command, ResolvedTree
from cmdtree.core.types import flag_zero_value
from cmdtree.execution.results import (
    DispatchFailure,
    DispatchResult,
    FailureKind,
    HelpRequest,
    Invocation,
    ParameterBundle,
)

logger = logging.getLogger(__name__)


def is_flag_token(token: str) -> bool:
    """A token is flag-shaped when it starts with '-' and is not just '-'."""
    return len(token) > 1 and token.startswith("-")


@dataclass
class GlobalScan:
    """Outcome of global flag extraction."""

    remaining: list[str] = field(default_factory=list)
    values: dict[str, bool | str] = field(default_factory=dict)
    help: bool = False
    failure: DispatchFailure | None = None


@dataclass
class PathResolution:
    """
    Outcome of command-path resolution.

    Params:
        command: Deepest command reached, `None` if no segment resolved
        consumed: Number of tokens used by the path
        failure: Set when resolution failed; `command` still holds the deepest
            command reached before the failure
    """

    command: Command | None = None
    consumed: int = 0
    failure: DispatchFailure | None = None


class Dispatcher:
    """Resolves argument vectors against one resolved tree."""

    def __init__(self, tree: ResolvedTree):
        self.tree = tree
        self.global_flags: tuple[Flag, ...] = (HELP_FLAG,) + tree.global_flags
        # a declared top-level `help` command shadows the help word
        self.help_word = None if tree.find(HELP_FLAG.name) else HELP_FLAG.name

    def dispatch(self, argv: list[str]) -> DispatchResult:
        """
        Resolve an argument vector.

        Params:
            argv: Raw arguments, without the program name

        Returns:
            An `Invocation` for a fully bound leaf command, a `HelpRequest`,
            or a classified `DispatchFailure`
        """
        scan = self.extract_global_flags(argv)
        if scan.failure is not None:
            return scan.failure
        tokens = scan.remaining
        if tokens and tokens[0] == self.help_word:
            scan.help = True
            scan.values[HELP_FLAG.name] = True
            tokens = tokens[1:]

        resolution = self.resolve_path(tokens)
        command = resolution.command
        rest = tokens[resolution.consumed :]

        if scan.help:
            topic = None
            if command is None and rest and not is_flag_token(rest[0]):
                topic = self.match_topic(rest[0])
            logger.debug("help requested for %r", command.path if command else topic)
            return HelpRequest(command=command, topic=topic, globals=scan.values)

        if resolution.failure is not None:
            logger.debug("path resolution failed: %s", resolution.failure.describe())
            return resolution.failure

        if command is None:
            if rest:
                return DispatchFailure(FailureKind.UNKNOWN_FLAG, token=rest[0])
            return HelpRequest(globals=scan.values)

        if not command.is_leaf:
            if rest and not is_flag_token(rest[0]):
                return DispatchFailure(
                    FailureKind.UNKNOWN_COMMAND, token=rest[0], path=command.path
                )
            return HelpRequest(command=command, globals=scan.values)

        return self.bind(command, rest, scan.values)

    def extract_global_flags(self, argv: list[str]) -> GlobalScan:
        """
        Remove global flags from the vector in one left-to-right scan.

        A bool flag consumes only itself; a string flag consumes itself and the
        following token. Tokens that are not global flags are kept in order.
        """
        scan = GlobalScan(
            values={flag.name: flag_zero_value(flag.kind) for flag in self.global_flags}
        )
        i = 0
        while i < len(argv):
            token = argv[i]
            flag = self._find_global(token)
            if flag is None:
                scan.remaining.append(token)
            elif flag.name == HELP_FLAG.name:
                scan.help = True
                scan.values[flag.name] = True
            elif flag.is_bool:
                scan.values[flag.name] = True
            else:
                if i + 1 >= len(argv):
                    scan.failure = DispatchFailure(FailureKind.MISSING_FLAG_VALUE, token=token)
                    return scan
                scan.values[flag.name] = argv[i + 1]
                i += 1
            i += 1
        return scan

    def _find_global(self, token: str) -> Flag | None:
        for flag in self.global_flags:
            if flag.matches(token):
                return flag
        return None

    def resolve_path(self, tokens: list[str]) -> PathResolution:
        """
        Walk the tree along the leading tokens.

        Descent stops at a command without children, or at a token that
        matches no child once at least one segment has resolved. Ancestor
        omission is only tried for the very first token.
        """
        current: Command | None = None
        consumed = 0
        while consumed < len(tokens):
            children = self.tree.children_of(current)
            if current is not None and not children:
                break
            token = tokens[consumed]
            matches = self.match_children(children, token)

            if len(matches) > 1:
                return PathResolution(
                    current,
                    consumed,
                    DispatchFailure(
                        FailureKind.AMBIGUOUS_COMMAND,
                        token=token,
                        candidates=tuple(match.name for match in matches),
                        path=current.path if current else "",
                    ),
                )
            if not matches and current is None and not is_flag_token(token):
                matches = self.match_anywhere(token)
                if not matches:
                    return PathResolution(
                        None, consumed, DispatchFailure(FailureKind.UNKNOWN_COMMAND, token=token)
                    )
                if len(matches) > 1:
                    return PathResolution(
                        None,
                        consumed,
                        DispatchFailure(
                            FailureKind.AMBIGUOUS_COMMAND,
                            token=token,
                            candidates=tuple(match.path for match in matches),
                        ),
                    )
                logger.debug("token %r resolved by omission to %s", token, matches[0].path)
            if not matches:
                break
            current = matches[0]
            consumed += 1
        return PathResolution(current, consumed)

    def match_children(self, children: tuple[Command, ...], token: str) -> list[Command]:
        """Exact match among siblings, else every sibling the token prefixes."""
        if not token or is_flag_token(token):
            return []
        for child in children:
            if child.name == token:
                return [child]
        return [child for child in children if child.name.startswith(token)]

    def match_anywhere(self, token: str) -> list[Command]:
        """Tree-wide search used when ancestor segments are omitted."""
        if not token:
            return []
        exact = [command for command in self.tree.walk() if command.name == token]
        if exact:
            return exact
        return [command for command in self.tree.walk() if command.name.startswith(token)]

    def match_topic(self, token: str) -> Topic | None:
        """Topic named exactly by `token`, else the only topic it prefixes."""
        topic = self.tree.find_topic(token)
        if topic is not None:
            return topic
        matches = [topic for topic in self.tree.topics if topic.name.startswith(token)]
        return matches[0] if len(matches) == 1 else None

    def bind(
        self, command: Command, tokens: list[str], global_values: dict[str, bool | str]
    ) -> Invocation | DispatchFailure:
        """
        Bind tokens to a leaf command's flags and positional arguments.

        Flag-shaped tokens select local flags wherever they appear; all other
        tokens fill positional arguments in declaration order.
        """
        flags: dict[str, bool | str] = {
            flag.name: flag_zero_value(flag.kind) for flag in command.flags
        }
        keys = command.argument_keys
        arguments: dict[str, str] = {}
        position = 0
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if is_flag_token(token):
                flag = command.find_flag(token)
                if flag is None:
                    return DispatchFailure(
                        FailureKind.UNKNOWN_FLAG, token=token, path=command.path
                    )
                if flag.is_bool:
                    flags[flag.name] = True
                elif i + 1 >= len(tokens):
                    return DispatchFailure(
                        FailureKind.MISSING_FLAG_VALUE, token=token, path=command.path
                    )
                else:
                    flags[flag.name] = tokens[i + 1]
                    i += 1
            else:
                if position >= len(command.arguments):
                    return DispatchFailure(
                        FailureKind.SURPLUS_ARGUMENT, token=token, path=command.path
                    )
                arguments[keys[position]] = token
                position += 1
            i += 1

        if position < len(command.arguments):
            return DispatchFailure(
                FailureKind.MISSING_ARGUMENT,
                token=command.arguments[position].name,
                path=command.path,
            )
        logger.debug("dispatched %s", command.path)
        return Invocation(
            command=command,
            bundle=ParameterBundle(flags=flags, arguments=arguments, globals=global_values),
        )


def dispatch(tree: ResolvedTree, argv: list[str]) -> DispatchResult:
    """Resolve `argv` against `tree`; see `Dispatcher.dispatch`."""
    return Dispatcher(tree).dispatch(argv)
