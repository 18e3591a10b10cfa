"""FastAPI router for the arithmetic endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from structlog.stdlib import BoundLogger

from calculator.dependencies import get_event_logger

from .operations import OPERATIONS, Operation
from .schemas import ErrorResponse, OperationError
from .service import evaluate


router = APIRouter(tags=["arithmetic"])


def query_parameters_schema(operation: Operation) -> list[dict[str, Any]]:
    """Describe an operation's query parameters for the OpenAPI schema."""
    parameters = []
    for index, name in enumerate(operation.parameters):
        description = operation.notes.get(name, "number")
        if index < len(operation.aliases):
            description = f"{description} (alias: {operation.aliases[index]})"
        parameters.append(
            {
                "name": name,
                "in": "query",
                "required": not operation.aliases,
                "description": description,
                "schema": {"type": "number"},
            }
        )
    return parameters


def create_operation_endpoint(operation: Operation):
    """Build the GET handler for one operation."""

    async def endpoint(
        request: Request,
        logger: Annotated[BoundLogger, Depends(get_event_logger)],
    ):
        outcome = evaluate(operation, request.query_params, logger)
        if isinstance(outcome, OperationError):
            return JSONResponse(status_code=400, content=outcome.to_payload())
        return outcome.to_payload()

    endpoint.__name__ = f"{operation.name}_endpoint"
    endpoint.__doc__ = f"Compute {operation.name}({', '.join(operation.parameters)})."
    return endpoint


for _operation in OPERATIONS.values():
    router.add_api_route(
        _operation.path,
        create_operation_endpoint(_operation),
        methods=["GET"],
        name=_operation.name,
        responses={400: {"model": ErrorResponse}},
        openapi_extra={"parameters": query_parameters_schema(_operation)},
    )
