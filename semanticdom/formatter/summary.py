"""SummaryFormatter — compact plain-text projections of a SemanticDocument."""

from __future__ import annotations

import math
import re
from urllib.parse import urlparse

from semanticdom.core.types import SemanticDocument, SemanticIntent, SemanticNode, SemanticRole

_INDENT = "  "
_HREF_IN_SELECTOR = re.compile(r"""\[href=["']([^"']+)["']\]""")


def truncate(text: str, max_len: int) -> str:
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 2] + ".."


def domain_of(url: str) -> str:
    if not url:
        return ""
    host = urlparse(url).hostname
    if host:
        return host
    return url.split("/")[0]


def estimate_tokens(text: str) -> int:
    """Rough token count at ~4 characters per token."""
    return math.ceil(len(text) / 4)


def _resource_url(node: SemanticNode) -> str:
    for key in ("src", "href", "url"):
        value = node.metadata.get(key)
        if isinstance(value, str):
            return value
    return ""


def _href(node: SemanticNode) -> str:
    href = node.metadata.get("href")
    if isinstance(href, str):
        return href
    match = _HREF_IN_SELECTOR.search(node.selector or "")
    return match.group(1) if match else ""


class SummaryFormatter:
    """
    Token-compact text for LLM agents.

    Example agent summary:

        SITE: example.com
        TITLE: My Website
        LANG: en
        CERT: full (100/100)

        LANDMARKS:
        navigation: Main Nav | #nav
        main: - | body > main

        ACTIONS:
        link: Home | #home | navigate
        button: Submit | body > main > button | submit
    """

    def __init__(
        self,
        *,
        include_landmarks: bool = True,
        include_interactables: bool = True,
        include_certification: bool = True,
        include_resource_urls: bool = True,
        max_landmarks: int = 10,
        max_interactables: int = 20,
    ) -> None:
        self.include_landmarks = include_landmarks
        self.include_interactables = include_interactables
        self.include_certification = include_certification
        self.include_resource_urls = include_resource_urls
        self.max_landmarks = max_landmarks
        self.max_interactables = max_interactables

    def agent_summary(self, document: SemanticDocument) -> str:
        lines = [f"SITE: {domain_of(document.url) or 'local'}"]
        if document.title:
            lines.append(f"TITLE: {truncate(document.title, 50)}")
        lines.append(f"LANG: {document.language or 'en'}")
        if self.include_certification:
            cert = document.certification
            lines.append(f"CERT: {cert.level.value} ({cert.score}/100)")
        lines.append("")

        if self.include_landmarks and document.landmarks:
            lines.append("LANDMARKS:")
            for node in document.landmarks[: self.max_landmarks]:
                lines.append(f"{node.role.value}: {truncate(node.label, 25)} | {truncate(node.selector, 30)}")
            extra = len(document.landmarks) - self.max_landmarks
            if extra > 0:
                lines.append(f"... +{extra} more")
            lines.append("")

        if self.include_interactables and document.interactables:
            lines.append("ACTIONS:")
            for node in document.interactables[: self.max_interactables]:
                intent = node.intent.value if node.intent else "-"
                line = f"{node.role.value}: {truncate(node.label, 20)} | {truncate(node.selector, 25)} | {intent}"
                url = _resource_url(node) if self.include_resource_urls else ""
                if url:
                    line += f" | {url}"
                lines.append(line)
            extra = len(document.interactables) - self.max_interactables
            if extra > 0:
                lines.append(f"... +{extra} more")

        return "\n".join(lines).rstrip("\n")

    @staticmethod
    def one_liner(document: SemanticDocument) -> str:
        cert = document.certification
        return (
            f"{domain_of(document.url) or 'local'} | {cert.level.value} ({cert.score})"
            f" | {len(document.landmarks)} landmarks | {len(document.interactables)} actions"
        )

    @staticmethod
    def nav_summary(document: SemanticDocument, limit: int = 15) -> str:
        lines = [f"NAV: {domain_of(document.url)}".rstrip()]
        links = [
            n for n in document.interactables
            if n.role == SemanticRole.LINK and n.intent == SemanticIntent.NAVIGATE
        ]
        for node in links[:limit]:
            lines.append(f"{truncate(node.label, 20)}: {_href(node) or node.selector or '-'}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Tree outline
    # ------------------------------------------------------------------

    def outline(self, document: SemanticDocument, include_placeholders: bool = False) -> str:
        """Indented ``- role "name" [id] (props)`` lines, one per node."""
        return "\n".join(self._render_node(document.root, 0, include_placeholders))

    def _render_node(self, node: SemanticNode, depth: int, include_placeholders: bool) -> list[str]:
        if node.placeholder and not include_placeholders:
            return []
        parts = [node.role.value]
        if node.label:
            parts.append(f'"{node.label}"')

        props: list[str] = []
        if node.state.value != "idle":
            props.append(node.state.value)
        if node.intent is not None:
            props.append(f"intent: {node.intent.value}")
        if node.value is not None and node.value != "":
            props.append(f"value: {node.value!r}")
        if node.accessibility.level is not None:
            props.append(f"level: {node.accessibility.level}")
        props.extend(flag.value for flag in sorted(node.state_flags) if flag != node.state)

        prop_str = f" ({', '.join(props)})" if props else ""
        lines = [f"{_INDENT * depth}- {' '.join(parts)} [{node.id}]{prop_str}"]
        for child in node.children:
            lines += self._render_node(child, depth + 1, include_placeholders)
        return lines


def to_agent_summary(document: SemanticDocument, **options) -> str:
    return SummaryFormatter(**options).agent_summary(document)


def to_one_liner(document: SemanticDocument) -> str:
    return SummaryFormatter.one_liner(document)


def to_nav_summary(document: SemanticDocument, limit: int = 15) -> str:
    return SummaryFormatter.nav_summary(document, limit=limit)


def to_outline(document: SemanticDocument, include_placeholders: bool = False) -> str:
    return SummaryFormatter().outline(document, include_placeholders=include_placeholders)
