#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Form condition endpoints.

POST /api/v1/forms/condition   — evaluate one condition against values
POST /api/v1/forms/state       — hidden / disabled state of every field
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from wikiout.schemas import (
    ConditionRequest, ConditionResponse,
    FieldState, FormStateRequest, FormStateResponse,
)
from wikiout.services.conditions import ConditionEvaluator, ConditionValidationError
from wikiout.services.forms import Form


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/forms", tags=["forms"])


# -----------------------------------------------------------------------------

@router.post("/condition", response_model=ConditionResponse)
async def evaluate_condition(body: ConditionRequest):
    try:
        evaluator = ConditionEvaluator(body.condition)
    except ConditionValidationError as ex:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(ex))
    return ConditionResponse(result=evaluator.evaluate(body.values))


# -----------------------------------------------------------------------------

@router.post("/state", response_model=FormStateResponse)
async def form_state(body: FormStateRequest):
    try:
        form = Form(body.fields, body.request_data, submit_attempt=body.submit_attempt)
    except ValueError as ex:   # includes ConditionValidationError
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(ex))
    states = {name: FieldState(**state) for name, state in form.field_states().items()}
    return FormStateResponse(fields=states)


# -----------------------------------------------------------------------------
