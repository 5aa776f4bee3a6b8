"""Decision API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from risk_gateway.application.dto import DecisionRequest
from risk_gateway.application.services import DecisionService
from risk_gateway.core.dependencies import get_decision_service
from risk_gateway.core.metrics import record_decision, track_decision_latency
from risk_gateway.presentation.schemas import (
    DecisionHistoryResponseSchema,
    DecisionRequestSchema,
    DecisionResponseSchema,
    DecisionSummarySchema,
    ErrorResponseSchema,
)

decision_router = APIRouter(
    prefix="/decision",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        500: {"model": ErrorResponseSchema, "description": "Invalid loan settings"},
    },
)


@decision_router.post(
    "",
    response_model=DecisionResponseSchema,
    status_code=200,
    summary="Request Loan Decision",
    description="""Evaluate a micro-loan application and route it to an approval lane""",
    responses={
        200: {"description": "Decision processed successfully"},
    },
)
async def create_decision(
    request: DecisionRequestSchema,
    decision_service: Annotated[DecisionService, Depends(get_decision_service)],
) -> DecisionResponseSchema:
    """
    Request a decision for a loan application.

    Unknown applicants and applicants failing eligibility are rejected with
    every failed rule listed; everyone else receives a risk assessment.
    """
    dto = DecisionRequest(
        phone_number=request.phone_number,
        requested_amount=request.requested_amount,
    )

    with track_decision_latency():
        response = await decision_service.make_decision(dto)

    assessment = response.risk_assessment
    record_decision(
        action=response.action,
        risk_category=assessment.risk_category if assessment else None,
        risk_score=assessment.risk_score if assessment else None,
        rejection_reasons=response.rejection_reasons,
    )

    return DecisionResponseSchema.from_dto(response)


@decision_router.get(
    "/history",
    response_model=DecisionHistoryResponseSchema,
    summary="Get Decision History",
    description="""
    Retrieve the decision history for an applicant.

    Returns a list of past decisions ordered by date (newest first).
    """,
    responses={
        200: {"description": "History retrieved successfully"},
    },
)
async def get_decision_history(
    phone_number: Annotated[
        str,
        Query(
            min_length=1,
            max_length=20,
            description="Phone number to get history for",
        ),
    ],
    decision_service: Annotated[DecisionService, Depends(get_decision_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of decisions to return"),
    ] = 10,
) -> DecisionHistoryResponseSchema:
    response = await decision_service.get_decision_history(phone_number, limit)

    return DecisionHistoryResponseSchema(
        phone_number=response.phone_number,
        decisions=[
            DecisionSummarySchema(
                decision_id=d.decision_id,
                requested_amount=d.requested_amount,
                action=d.action,
                status=d.status,
                risk_score=d.risk_score,
                risk_category=d.risk_category,
                created_at=d.created_at,
            )
            for d in response.decisions
        ],
    )


@decision_router.get(
    "/{decision_id}",
    response_model=DecisionResponseSchema,
    summary="Get Decision",
    description="Retrieve a persisted decision by its ID.",
    responses={
        200: {"description": "Decision retrieved successfully"},
        404: {"model": ErrorResponseSchema, "description": "Decision not found"},
    },
)
async def get_decision(
    decision_id: Annotated[
        UUID,
        Path(description="UUID of the decision to retrieve"),
    ],
    decision_service: Annotated[DecisionService, Depends(get_decision_service)],
) -> DecisionResponseSchema:
    response = await decision_service.get_decision_by_id(decision_id)
    return DecisionResponseSchema.from_dto(response)
