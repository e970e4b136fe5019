from semanticdom.builder.ids import IdGenerator
from semanticdom.builder.selectors import SelectorBuilder, build_path, build_selector
from semanticdom.builder.tree import BuildResult, TreeBuilder

__all__ = ["BuildResult", "IdGenerator", "SelectorBuilder", "TreeBuilder", "build_path", "build_selector"]
