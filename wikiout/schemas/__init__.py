from wikiout.schemas.schemas import (
    SectionSchema,
    TransformOptionsSchema, TransformRequest, TransformResponse,
    ConditionRequest, ConditionResponse,
    FormStateRequest, FieldState, FormStateResponse,
)

__all__ = [
    "SectionSchema",
    "TransformOptionsSchema", "TransformRequest", "TransformResponse",
    "ConditionRequest", "ConditionResponse",
    "FormStateRequest", "FieldState", "FormStateResponse",
]
