from lispy.evaluation.evaluator import evaluate, evaluate_sexpression
from lispy.evaluation.apply import apply, apply_lambda

__all__ = ["evaluate", "evaluate_sexpression", "apply", "apply_lambda"]
