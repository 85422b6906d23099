"""
Plain-text help rendering for a resolved command tree.

Produces the root overview (usage, global flags, command tree, topics), the
detail page of a single command, and topic pages.
"""

from cmdtree.config import HELP_FLAG
from cmdtree.core.nodes import Flag, Topic
from cmdtree.core.tree import Command, ResolvedTree
from cmdtree.execution.results import HelpRequest
from cmdtree.structure.resolver import attribute_or_default

BOX_TREE = "├──"
BOX_LAST = "└──"
BOX_ITEM = "│  "


def _flag_label(flag: Flag) -> str:
    label = flag.long_form
    if flag.short:
        label += f", {flag.short_form}"
    if not flag.is_bool:
        label += f" <{flag.name}>"
    return label


def _dotted(label: str, description: str, width: int) -> str:
    dots = "." * max(2, width - len(label))
    return f"{label} {dots} {description}".rstrip()


def _command_tree(tree: ResolvedTree, command: Command, indent: str, is_last: bool) -> list[str]:
    prefix = BOX_LAST if is_last else BOX_TREE
    label = f"{indent}{prefix} {command.name}"
    lines = [_dotted(label, command.description, 30)]
    child_indent = indent + ("    " if is_last else BOX_ITEM + " ")
    children = tree.children_of(command)
    for i, child in enumerate(children):
        lines.extend(_command_tree(tree, child, child_indent, i == len(children) - 1))
    return lines


def render_root_help(tree: ResolvedTree) -> str:
    """Overview of the whole interface."""
    app = tree.app_name or "app"
    lines = []
    if tree.app_name or tree.tagline:
        lines.append(" - ".join(part for part in (tree.app_name, tree.tagline) if part))
        lines.append("")
    lines.append("Usage:")
    lines.append(f"  {app} [flags] <command>")
    lines.append("")
    lines.append("Global Flags:")
    for flag in (HELP_FLAG,) + tree.global_flags:
        lines.append(f"  {_flag_label(flag):<24} {flag.description}".rstrip())

    roots = tree.children_of(None)
    if roots:
        lines.append("")
        lines.append("Commands:")
        for i, command in enumerate(roots):
            lines.extend(_command_tree(tree, command, "  ", i == len(roots) - 1))

    if tree.topics:
        lines.append("")
        lines.append("Topics:")
        for topic in tree.topics:
            lines.append("  " + _dotted(topic.name, topic.description, 20))

    lines.append("")
    word = HELP_FLAG.long_form if tree.find(HELP_FLAG.name) else HELP_FLAG.name
    lines.append(f"Type '{app} {word} <command>' for more details.")
    return "\n".join(lines)


def render_command_help(tree: ResolvedTree, command: Command) -> str:
    """Detail page of one command."""
    app = tree.app_name or "app"
    usage = [app, command.path.replace("/", " ")]
    if not command.is_leaf:
        usage.append("<command>")
    if command.flags:
        usage.append("[flags]")
    usage.extend(f"<{argument.name}>" for argument in command.arguments)

    lines = [f"Command: {command.path}"]
    if command.description:
        lines.append(f"Description: {command.description}")
    lines.append(f"Usage: {' '.join(usage)}")

    children = tree.children_of(command)
    if children:
        lines.append("")
        lines.append("Subcommands:")
        for i, child in enumerate(children):
            prefix = BOX_LAST if i == len(children) - 1 else BOX_TREE
            lines.append(f"  {prefix} {child.name:<12} {child.description}".rstrip())

    if command.arguments:
        lines.append("")
        lines.append("Arguments:")
        for argument in command.arguments:
            label = f"<{argument.name}>"
            lines.append(f"  {label:<15} {argument.description}".rstrip())

    if command.flags:
        lines.append("")
        lines.append("Flags:")
        for flag in command.flags:
            lines.append(f"  {_flag_label(flag):<24} {flag.description}".rstrip())

    if command.examples:
        lines.append("")
        lines.append("Examples:")
        for example in command.examples:
            lines.append(f"  {example}")

    if tree.attribute_table:
        lines.append("")
        lines.append("Attributes:")
        for definition in tree.attribute_table:
            value = attribute_or_default(tree, command, definition.name)
            shown = str(value).lower() if isinstance(value, bool) else repr(value)
            lines.append(f"  {definition.name} = {shown}")
    return "\n".join(lines)


def render_topic_help(topic: Topic) -> str:
    """Page of a help topic."""
    lines = [f"Topic: {topic.name}", topic.description]
    if topic.text:
        lines.append("")
        lines.append(topic.text)
    return "\n".join(lines)


def render_help(tree: ResolvedTree, request: HelpRequest) -> str:
    """Render the page a help request is scoped to."""
    if request.topic is not None:
        return render_topic_help(request.topic)
    if request.command is not None:
        return render_command_help(tree, request.command)
    return render_root_help(tree)
