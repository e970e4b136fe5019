"""TreeBuilder — walks a source element tree into SemanticNodes and indexes them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

from semanticdom.adapters.base import ElementAdapter
from semanticdom.builder.ids import EXPLICIT_ID_ATTRIBUTES, IdGenerator
from semanticdom.builder.selectors import SelectorBuilder, build_path, child_path, sibling_positions
from semanticdom.classifier.classifier import Classification, Classifier
from semanticdom.core.config import ParseConfig
from semanticdom.core.types import A11yInfo, SemanticNode, SemanticRole, StateType

logger = logging.getLogger(__name__)

# Errors a misbehaving adapter may raise while an element is classified
_ADAPTER_ERRORS = (AttributeError, TypeError, ValueError)


@dataclass
class BuildResult:
    """The tree plus the lookup structures extracted from it in one pre-order pass."""

    root: SemanticNode
    index: MappingProxyType
    landmarks: tuple[SemanticNode, ...]
    interactables: tuple[SemanticNode, ...]
    placeholders: int = 0
    nodes: list[SemanticNode] = field(default_factory=list)


def explicit_id(element: ElementAdapter) -> str | None:
    """Author-supplied id: the semantic data attributes first, then ``id``."""
    for attribute in EXPLICIT_ID_ATTRIBUTES + ("id",):
        value = (element.get_attribute(attribute) or "").strip()
        if value:
            return value
    return None


class TreeBuilder:
    """
    Builds the SemanticNode tree for one parse.

    Ids are assigned pre-order so a child always knows its parent's id.
    Excluded tags and elements deeper than ``max_depth`` become childless
    ``generic``/``hidden`` placeholders; they stay in the index.
    """

    def __init__(self, config: ParseConfig | None = None) -> None:
        self._config = config or ParseConfig()
        self._excluded = self._config.excluded_tags
        self._classifier = Classifier(self._config.role_mapping, self._config.intent_mapping)
        self._ids = IdGenerator(self._config.id_prefix)
        self._selectors = SelectorBuilder()
        self._placeholders = 0

    @property
    def classifier(self) -> Classifier:
        return self._classifier

    def build(self, root: ElementAdapter) -> BuildResult:
        self._ids.reset()
        self._selectors.index_ids(root)
        self._placeholders = 0

        tree = self._build(root, 0, None, self._selectors.build(root), build_path(root))

        nodes = list(tree.iter_nodes())
        index = {n.id: n for n in nodes}
        landmarks = tuple(n for n in nodes if n.is_landmark)
        interactables = tuple(n for n in nodes if n.is_interactive)
        return BuildResult(
            root=tree,
            index=MappingProxyType(index),
            landmarks=landmarks,
            interactables=interactables,
            placeholders=self._placeholders,
            nodes=nodes,
        )

    def _build(
        self,
        element: ElementAdapter,
        depth: int,
        parent_id: str | None,
        selector: str,
        path: str,
    ) -> SemanticNode:
        tag = element.tag_name
        if tag in self._excluded:
            logger.debug("excluded <%s> replaced by placeholder", tag)
            return self._placeholder(element, parent_id, selector, path)
        if depth > self._config.max_depth:
            logger.debug("<%s> at depth %d exceeds max_depth %d", tag, depth, self._config.max_depth)
            return self._placeholder(element, parent_id, selector, path)

        try:
            info = self._classifier.classify(element)
        except _ADAPTER_ERRORS as exc:
            logger.warning("could not classify <%s>, using placeholder: %s", tag, exc)
            return self._placeholder(element, parent_id, selector, path)

        source_id = explicit_id(element)
        node_id = self._ids.claim(source_id) if source_id else self._ids.generate(info.role)

        # children of the document element start a fresh selector chain
        prefix = selector if element.parent is not None else ""
        sources = element.children
        children = []
        for child, (position, count) in zip(sources, sibling_positions(sources)):
            child_selector = self._selectors.step(child, prefix, position, count)
            children.append(
                self._build(child, depth + 1, node_id, child_selector, child_path(path, child, position))
            )
        return self._node(element, node_id, parent_id, info, tuple(children), source_id, selector, path)

    def _node(
        self,
        element: ElementAdapter,
        node_id: str,
        parent_id: str | None,
        info: Classification,
        children: tuple[SemanticNode, ...],
        source_id: str | None,
        selector: str,
        path: str,
    ) -> SemanticNode:
        return SemanticNode(
            id=node_id,
            role=info.role,
            label=info.label,
            tag=element.tag_name,
            state=info.state,
            intent=info.intent,
            state_flags=info.state_flags,
            value=info.value,
            selector=selector,
            path=path,
            accessibility=info.accessibility,
            children=children,
            parent=parent_id,
            bounds=element.bounds() if self._config.compute_bounds else None,
            metadata=MappingProxyType(info.metadata),
            source_id=source_id,
        )

    def _placeholder(
        self, element: ElementAdapter, parent_id: str | None, selector: str, path: str,
    ) -> SemanticNode:
        self._placeholders += 1
        tag = element.tag_name
        return SemanticNode(
            id=self._ids.generate(SemanticRole.GENERIC),
            role=SemanticRole.GENERIC,
            label=tag,
            tag=tag,
            state=StateType.HIDDEN,
            selector=selector,
            path=path,
            accessibility=A11yInfo(),
            parent=parent_id,
            placeholder=True,
        )
