from __future__ import annotations

import re
from dataclasses import dataclass

_TAG_PATTERN = re.compile(r"({{.*?}}|{%.*?%}\n?)", re.DOTALL)
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_CONDITION_PATTERN = re.compile(r"^if\s+(?P<negated>not\s+)?(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)$")


@dataclass(frozen=True, slots=True)
class _Text:
    value: str


@dataclass(frozen=True, slots=True)
class _Variable:
    identifier: str


@dataclass(frozen=True, slots=True)
class _Conditional:
    identifier: str
    negated: bool
    truthy: tuple[_Node, ...]
    falsy: tuple[_Node, ...]


_Node = _Text | _Variable | _Conditional


class SnippetEnvironment:
    """Compile code snippets with ``{{ name }}`` and ``{% if name %}`` tags.

    A block tag consumes the newline that directly follows it, so tags can sit
    on their own lines without leaving blank lines in the rendered code.
    """

    def from_string(self, text: str) -> Snippet:
        """Compile snippet text.

        Args:
            text: Snippet source.

        Raises:
            ValueError: If the text contains malformed or unsupported tags.

        """
        nodes, closing = _parse(_tokenize(text), 0, frozenset())
        if closing is not None:
            msg = f"Unexpected block tag '{closing[0]}'."
            raise ValueError(msg)
        return Snippet(nodes[0])


class Snippet:
    """Compiled snippet."""

    def __init__(self, nodes: tuple[_Node, ...]) -> None:
        self._nodes = nodes

    def render(self, **context: object) -> str:
        """Render the snippet with keyword context values.

        Raises:
            ValueError: If a referenced name is missing from ``context``.

        """
        return "".join(_render(self._nodes, context))


def _tokenize(text: str) -> list[str]:
    tokens = [token for token in _TAG_PATTERN.split(text) if token]
    for token in tokens:
        if _TAG_PATTERN.fullmatch(token):
            continue
        if "{{" in token or "{%" in token:
            msg = "Unclosed snippet tag."
            raise ValueError(msg)
    return tokens


def _parse(
    tokens: list[str],
    position: int,
    closers: frozenset[str],
) -> tuple[tuple[tuple[_Node, ...], int], tuple[str, int] | None]:
    nodes: list[_Node] = []
    while position < len(tokens):
        token = tokens[position]
        position += 1

        if token.startswith("{{"):
            identifier = token[2:-2].strip()
            if not _IDENTIFIER_PATTERN.fullmatch(identifier):
                msg = f"Unsupported variable expression '{identifier}'."
                raise ValueError(msg)
            nodes.append(_Variable(identifier))
            continue

        if not token.startswith("{%"):
            nodes.append(_Text(token))
            continue

        tag = token.rstrip("\n")[2:-2].strip()
        if tag in closers:
            return (tuple(nodes), position), (tag, position)
        if tag in {"else", "endif"}:
            msg = f"Unexpected block tag '{tag}'."
            raise ValueError(msg)

        condition = _CONDITION_PATTERN.fullmatch(tag)
        if condition is None:
            msg = f"Unsupported snippet tag '{tag}'."
            raise ValueError(msg)

        (truthy, position), closing = _parse(tokens, position, frozenset({"else", "endif"}))
        if closing is None:
            msg = "Unclosed if block: missing endif."
            raise ValueError(msg)
        falsy: tuple[_Node, ...] = ()
        if closing[0] == "else":
            (falsy, position), closing = _parse(tokens, position, frozenset({"endif"}))
            if closing is None:
                msg = "Unclosed if block: missing endif."
                raise ValueError(msg)

        nodes.append(
            _Conditional(
                identifier=condition.group("identifier"),
                negated=condition.group("negated") is not None,
                truthy=truthy,
                falsy=falsy,
            ),
        )

    return (tuple(nodes), position), None


def _render(nodes: tuple[_Node, ...], context: dict[str, object]) -> list[str]:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, _Text):
            parts.append(node.value)
        elif isinstance(node, _Variable):
            parts.append(str(_lookup(context, node.identifier)))
        else:
            matched = bool(_lookup(context, node.identifier)) != node.negated
            parts.extend(_render(node.truthy if matched else node.falsy, context))
    return parts


def _lookup(context: dict[str, object], identifier: str) -> object:
    if identifier not in context:
        msg = f"Missing snippet variable '{identifier}'."
        raise ValueError(msg)
    return context[identifier]
