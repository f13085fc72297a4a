"""Dot-path fragments and deep merge into nested mappings."""

from .nested import CONFLICT_POLICIES, ConflictPolicy, build_nested, merge_fragment, reconstruct_nested


__all__ = ["CONFLICT_POLICIES", "ConflictPolicy", "build_nested", "merge_fragment", "reconstruct_nested"]
