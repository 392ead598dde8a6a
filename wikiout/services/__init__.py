from wikiout.services.conditions import (
    ConditionEvaluator,
    ConditionValidationError,
    evaluate,
    parse_condition,
)
from wikiout.services.output_transform import OutputTransform, TransformOptions, transform

__all__ = [
    "ConditionEvaluator",
    "ConditionValidationError",
    "evaluate",
    "parse_condition",
    "OutputTransform",
    "TransformOptions",
    "transform",
]
