from semanticdom.adapters.base import ElementAdapter
from semanticdom.adapters.soup import SoupDocument, SoupElement, from_html

__all__ = ["ElementAdapter", "SoupDocument", "SoupElement", "from_html"]
