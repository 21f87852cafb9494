"""Layout module - computes positions for pipeline execution graphs."""

from .dfs_layout import compute_layout, find_roots, layer_of

__all__ = ["compute_layout", "find_roots", "layer_of"]
