from semanticdom.differ.tree_diff import diff_documents

__all__ = ["diff_documents"]
