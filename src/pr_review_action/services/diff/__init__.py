from .unified_diff_parser import UnifiedDiffParser

__all__ = ["UnifiedDiffParser"]
