from semanticdom.query.navigate import NavigateOptions, navigate
from semanticdom.query.query import SemanticQuery, query

__all__ = ["NavigateOptions", "SemanticQuery", "navigate", "query"]
