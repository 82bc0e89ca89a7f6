"""
Minimal prompt templating for generation flows.

Only four directive kinds are understood:

* ``{{field}}`` / ``{{field.sub}}`` / ``{{this}}`` substitute a value,
* ``{{#if field}}...{{else}}...{{/if}}`` and ``{{#unless field}}...{{/unless}}``,
* ``{{#each field}}...{{/each}}`` with ``@first``, ``@last`` and ``@index``,
* ``{{media url=field}}`` attaches an image and leaves an ``[Image N]`` marker.

Anything else is a template defect and fails when the template is built, so a
broken prompt can never reach the model.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

_TAG_RE = re.compile(r"\{\{\s*(.*?)\s*\}\}", re.DOTALL)
_PATH_RE = re.compile(r"^(this|@first|@last|@index|[A-Za-z_]\w*)(\.[A-Za-z_]\w*)*$")
_DATA_URI_RE = re.compile(r"^data:([\w.+-]+/[\w.+-]+)?(;[^,]*)?,", re.IGNORECASE)
_LOOP_KEYS = {"@first", "@last", "@index"}


class TemplateError(ValueError):
    pass


@dataclass(frozen=True)
class MediaAttachment:
    url: str
    mime_type: str | None = None

    @classmethod
    def from_url(cls, url: str) -> MediaAttachment:
        match = _DATA_URI_RE.match(url)
        return cls(url=url, mime_type=match.group(1) if match and match.group(1) else None)


@dataclass(frozen=True)
class PromptPayload:
    text: str
    media: tuple[MediaAttachment, ...] = ()


@dataclass
class _Text:
    value: str


@dataclass
class _Var:
    path: str


@dataclass
class _Media:
    path: str


@dataclass
class _If:
    path: str
    negate: bool = False
    body: list = field(default_factory=list)
    orelse: list = field(default_factory=list)
    in_else: bool = False


@dataclass
class _Each:
    path: str
    body: list = field(default_factory=list)


def _check_path(path: str, tag: str) -> str:
    if not _PATH_RE.match(path):
        raise TemplateError(f"Invalid field reference in '{{{{{tag}}}}}'")
    return path


def _append(stack: list, node: Any) -> None:
    top = stack[-1]
    if isinstance(top, _If):
        (top.orelse if top.in_else else top.body).append(node)
    elif isinstance(top, _Each):
        top.body.append(node)
    else:
        top.append(node)


def _parse(source: str) -> list:
    root: list = []
    stack: list = [root]
    pos = 0
    for match in _TAG_RE.finditer(source):
        if match.start() > pos:
            _append(stack, _Text(source[pos:match.start()]))
        pos = match.end()
        tag = match.group(1)

        if tag.startswith("#if ") or tag.startswith("#unless "):
            keyword, _, path = tag.partition(" ")
            node = _If(path=_check_path(path.strip(), tag), negate=keyword == "#unless")
            _append(stack, node)
            stack.append(node)
        elif tag.startswith("#each "):
            node = _Each(path=_check_path(tag[len("#each "):].strip(), tag))
            _append(stack, node)
            stack.append(node)
        elif tag == "else":
            top = stack[-1]
            if not isinstance(top, _If) or top.in_else:
                raise TemplateError("'{{else}}' outside of an '{{#if}}' block")
            top.in_else = True
        elif tag in {"/if", "/unless"}:
            top = stack[-1]
            if not isinstance(top, _If) or top.negate != (tag == "/unless"):
                raise TemplateError(f"Unexpected '{{{{{tag}}}}}'")
            stack.pop()
        elif tag == "/each":
            if not isinstance(stack[-1], _Each):
                raise TemplateError("Unexpected '{{/each}}'")
            stack.pop()
        elif tag.startswith("media "):
            option = tag[len("media "):].strip()
            if not option.startswith("url="):
                raise TemplateError(f"Media directive needs 'url=': '{{{{{tag}}}}}'")
            _append(stack, _Media(path=_check_path(option[len("url="):], tag)))
        elif tag.startswith(("#", "/", ">", "!")):
            raise TemplateError(f"Unsupported directive '{{{{{tag}}}}}'")
        else:
            _append(stack, _Var(path=_check_path(tag, tag)))

    if len(stack) != 1:
        raise TemplateError(f"Unclosed block for '{stack[-1].path}'")
    if pos < len(source):
        _append(stack, _Text(source[pos:]))
    return root


def _is_truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (Sequence, Mapping)):
        return len(value) > 0
    return bool(value)


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return ", ".join(f"{k}: {_format(v)}" for k, v in value.items())
    if isinstance(value, Sequence):
        return ", ".join(_format(item) for item in value)
    return str(value)


@dataclass
class _Frame:
    item: Any
    index: int = 0
    length: int = 1


class _Renderer:
    def __init__(self, context: Mapping[str, Any]):
        self.frames = [_Frame(item=context)]
        self.parts: list[str] = []
        self.media: list[MediaAttachment] = []

    def resolve(self, path: str) -> Any:
        head, *rest = path.split(".")
        frame = self.frames[-1]
        if head == "this":
            value = frame.item
        elif head in _LOOP_KEYS:
            if len(self.frames) == 1:
                return None
            return {
                "@first": frame.index == 0,
                "@last": frame.index == frame.length - 1,
                "@index": frame.index,
            }[head]
        else:
            value = None
            for candidate in reversed(self.frames):
                if isinstance(candidate.item, Mapping) and head in candidate.item:
                    value = candidate.item[head]
                    break
        for part in rest:
            if isinstance(value, Mapping):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
            if value is None:
                return None
        return value

    def render(self, nodes: list) -> None:
        for node in nodes:
            if isinstance(node, _Text):
                self.parts.append(node.value)
            elif isinstance(node, _Var):
                self.parts.append(_format(self.resolve(node.path)))
            elif isinstance(node, _If):
                truthy = _is_truthy(self.resolve(node.path))
                self.render(node.body if truthy != node.negate else node.orelse)
            elif isinstance(node, _Each):
                items = self.resolve(node.path)
                if not _is_truthy(items) or isinstance(items, (str, Mapping)):
                    continue
                items = list(items)
                for index, item in enumerate(items):
                    self.frames.append(_Frame(item=item, index=index, length=len(items)))
                    self.render(node.body)
                    self.frames.pop()
            elif isinstance(node, _Media):
                url = self.resolve(node.path)
                if isinstance(url, str) and url.strip():
                    self.media.append(MediaAttachment.from_url(url))
                    self.parts.append(f"[Image {len(self.media)}]")


def _collect_fields(nodes: list, names: set[str], *, depth: int = 0) -> None:
    for node in nodes:
        if isinstance(node, (_Var, _Media, _If, _Each)):
            head = node.path.split(".")[0]
            if depth == 0 and head != "this" and head not in _LOOP_KEYS:
                names.add(head)
        if isinstance(node, _If):
            _collect_fields(node.body, names, depth=depth)
            _collect_fields(node.orelse, names, depth=depth)
        elif isinstance(node, _Each):
            _collect_fields(node.body, names, depth=depth + 1)


class PromptTemplate:
    def __init__(self, source: str):
        self.source = source
        self._nodes = _parse(source)

    def fields(self) -> set[str]:
        """Top-level names referenced outside iteration blocks."""
        names: set[str] = set()
        _collect_fields(self._nodes, names)
        return names

    def check_fields(self, model: type[BaseModel], extra: Sequence[str] = ()) -> None:
        known = set(model.model_fields) | set(extra)
        unknown = sorted(self.fields() - known)
        if unknown:
            raise TemplateError(
                f"Template references fields not defined on {model.__name__}: {', '.join(unknown)}"
            )

    def render(self, context: Mapping[str, Any]) -> PromptPayload:
        renderer = _Renderer(context)
        renderer.render(self._nodes)
        text = re.sub(r"[ \t]+\n", "\n", "".join(renderer.parts))
        text = re.sub(r"\n{3,}", "\n\n", text).strip()
        return PromptPayload(text=text, media=tuple(renderer.media))
