"""SemanticDOM — main orchestrator class."""

from __future__ import annotations

import logging
import time

from semanticdom.adapters.base import ElementAdapter
from semanticdom.adapters.soup import SoupDocument
from semanticdom.builder.tree import TreeBuilder
from semanticdom.certify.certifier import Certifier
from semanticdom.certify.checks import CheckContext
from semanticdom.core.config import ParseConfig
from semanticdom.core.types import AgentCertification, SemanticDocument, SemanticNode
from semanticdom.query.navigate import NavigateOptions
from semanticdom.query.navigate import navigate as _navigate
from semanticdom.query.query import SemanticQuery
from semanticdom.query.query import query as _query
from semanticdom.state.synthesizer import StateGraphSynthesizer

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class SemanticDOM:
    """
    Turns a source element tree into an immutable SemanticDocument.

    Usage:
        sdom = SemanticDOM()
        doc = sdom.parse_html("<nav><a href='/'>Home</a></nav><main>...</main>")
        doc.landmarks            # navigation, main
        sdom.query(doc.root, role="button")
        sdom.navigate(doc, node_id, direction="next")
    """

    def __init__(self, config: ParseConfig | None = None, **options) -> None:
        # config errors surface here, before anything is built
        if config is None:
            config = ParseConfig(**options)
        elif options:
            raise TypeError("pass either a ParseConfig or keyword options, not both")
        self.config = config
        self._synthesizer = StateGraphSynthesizer()
        self._certifier = Certifier(scoring=config.scoring)

    def parse(
        self,
        root: ElementAdapter,
        url: str = "",
        title: str = "",
        language: str | None = None,
    ) -> SemanticDocument:
        """Build the document for *root*. One call, one fresh immutable snapshot."""
        t0 = time.monotonic()

        built = TreeBuilder(self.config).build(root)

        state_graph = {}
        if self.config.include_state_graph:
            state_graph = self._synthesizer.synthesize(built.nodes)

        if self.config.validate:
            ctx = CheckContext(
                root=built.root,
                nodes=built.nodes,
                index=built.index,
                landmarks=built.landmarks,
                interactables=built.interactables,
                state_graph=state_graph,
            )
            certification = self._certifier.certify(built.root, ctx=ctx)
        else:
            certification = AgentCertification.empty()

        if not language:
            language = (root.get_attribute("lang") or "").strip() or DEFAULT_LANGUAGE

        document = SemanticDocument(
            root=built.root,
            index=built.index,
            landmarks=built.landmarks,
            interactables=built.interactables,
            state_graph=state_graph,
            certification=certification,
            url=url,
            title=title,
            language=language,
            generated_at=int(time.time() * 1000),
            target_certification=self.config.target_certification,
        )

        logger.debug(
            "parsed %d nodes (%d placeholders, %d landmarks, %d interactables) in %.1fms",
            len(built.index),
            built.placeholders,
            len(built.landmarks),
            len(built.interactables),
            (time.monotonic() - t0) * 1000,
        )
        return document

    def parse_html(self, html: str, url: str = "", title: str = "") -> SemanticDocument:
        """Parse markup with BeautifulSoup, then build from its ``<html>`` element."""
        source = SoupDocument.from_html(html)
        return self.parse_source(source, url=url, title=title)

    def parse_source(self, source: SoupDocument, url: str = "", title: str = "") -> SemanticDocument:
        return self.parse(
            source.root,
            url=url,
            title=title or source.title,
            language=source.language,
        )

    @staticmethod
    def query(root: SemanticNode, options: SemanticQuery | None = None, **criteria) -> list[SemanticNode]:
        return _query(root, options, **criteria)

    @staticmethod
    def lookup(document: SemanticDocument, node_id: str) -> SemanticNode | None:
        return document.get(node_id)

    @staticmethod
    def navigate(
        document: SemanticDocument,
        current_id: str,
        options: NavigateOptions | str | None = None,
        **kwargs,
    ) -> SemanticNode | None:
        return _navigate(document, current_id, options, **kwargs)


def parse(
    root: ElementAdapter,
    url: str = "",
    title: str = "",
    config: ParseConfig | None = None,
) -> SemanticDocument:
    """Parse an element tree with a one-off SemanticDOM."""
    if isinstance(root, SoupDocument):
        return SemanticDOM(config).parse_source(root, url=url, title=title)
    return SemanticDOM(config).parse(root, url=url, title=title)


def parse_html(
    html: str,
    url: str = "",
    title: str = "",
    config: ParseConfig | None = None,
) -> SemanticDocument:
    return SemanticDOM(config).parse_html(html, url=url, title=title)


def query(root: SemanticNode, options: SemanticQuery | None = None, **criteria) -> list[SemanticNode]:
    return _query(root, options, **criteria)


def lookup(document: SemanticDocument, node_id: str) -> SemanticNode | None:
    return document.get(node_id)


def navigate(
    document: SemanticDocument,
    current_id: str,
    options: NavigateOptions | str | None = None,
    **kwargs,
) -> SemanticNode | None:
    return _navigate(document, current_id, options, **kwargs)
