"""
序列对齐模块

通用的最小代价编辑距离计算,元素比较方式由调用方提供。
"""

from .levenshtein import (
    EditAction,
    CostModel,
    Operation,
    DEFAULT_COST_MODEL,
    MATCH_RESULTS,
    levenshtein,
)

__all__ = [
    "EditAction",
    "CostModel",
    "Operation",
    "DEFAULT_COST_MODEL",
    "MATCH_RESULTS",
    "levenshtein",
]
