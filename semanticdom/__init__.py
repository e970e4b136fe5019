from semanticdom.core.config import ParseConfig
from semanticdom.core.dom import SemanticDOM, lookup, navigate, parse, parse_html, query
from semanticdom.core.errors import ConfigurationError, SemanticDOMError, TransitionError
from semanticdom.core.types import (
    A11yInfo,
    AgentCertification,
    Bounds,
    CertificationLevel,
    NavigationDirection,
    SemanticDocument,
    SemanticIntent,
    SemanticNode,
    SemanticRole,
    SSGNode,
    StateType,
)
from semanticdom.adapters.page import snapshot_page
from semanticdom.differ.tree_diff import diff_documents
from semanticdom.formatter.summary import to_agent_summary, to_nav_summary, to_one_liner
from semanticdom.query.navigate import NavigateOptions
from semanticdom.query.query import SemanticQuery
from semanticdom.state.store import StateStore

__all__ = [
    "SemanticDOM",
    "ParseConfig",
    "parse",
    "parse_html",
    "query",
    "lookup",
    "navigate",
    "snapshot_page",
    "NavigateOptions",
    "SemanticQuery",
    "StateStore",
    "diff_documents",
    "to_agent_summary",
    "to_nav_summary",
    "to_one_liner",
    # Records
    "A11yInfo",
    "AgentCertification",
    "Bounds",
    "CertificationLevel",
    "NavigationDirection",
    "SemanticDocument",
    "SemanticIntent",
    "SemanticNode",
    "SemanticRole",
    "SSGNode",
    "StateType",
    # Errors
    "ConfigurationError",
    "SemanticDOMError",
    "TransitionError",
]
