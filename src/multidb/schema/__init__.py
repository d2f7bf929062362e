"""
Schema helpers shared by every dialect.
"""

from .indexes import INDEX_RULES, IndexRule, index_statements, match_rule, plan_indexes

__all__ = ["INDEX_RULES", "IndexRule", "index_statements", "match_rule", "plan_indexes"]
