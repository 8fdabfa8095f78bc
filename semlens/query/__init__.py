from semlens.query.engine import find_matches, run_query
from semlens.query.ranking import rank
from semlens.query.scoring import QueryPredicates, Score, score_node

__all__ = ["QueryPredicates", "Score", "find_matches", "rank", "run_query", "score_node"]
