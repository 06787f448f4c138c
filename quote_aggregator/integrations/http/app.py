"""HTTP surface for the aggregator, built on FastAPI.

Routes:
- POST /                        CloudEvent carrying a bank quote
- GET  /quotes/{correlation_id} Quotes aggregated so far for a workflow instance
- DELETE /quotes                Reset all state (only with enable_maintenance)
"""

import logging

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from ...application import AggregationService, Rejected
from ...config import AggregatorSettings
from ...domain import BankQuote
from ..cloudevents import CloudEventIngestion

LOGGER = logging.getLogger(__name__)


def create_app(
    service: AggregationService | None = None,
    settings: AggregatorSettings | None = None,
) -> FastAPI:
    """Build the FastAPI application around an aggregation service.

    Args:
        service: The service to expose. A service with a fresh in-memory
            store is created when omitted.
        settings: Runtime settings. Loaded from the environment when omitted.

    Returns:
        The configured application. The service is also available as
        `app.state.service`.
    """
    if settings is None:
        settings = AggregatorSettings()
    if service is None:
        service = AggregationService.from_settings(settings)
    ingestion = CloudEventIngestion.from_settings(service, settings)

    app = FastAPI(
        title="Quote Aggregator",
        description="Aggregates bank quotes by workflow instance id.",
    )
    app.state.service = service

    @app.post("/")
    async def receive_quote(request: Request) -> JSONResponse:
        body = await request.body()
        result = await ingestion.ingest_http(request.headers, body)
        if isinstance(result, Rejected):
            return JSONResponse(status_code=400, content=result.model_dump(mode="json"))
        return JSONResponse(
            status_code=200,
            content={
                "receipt_id": str(result.receipt_id),
                "correlation_id": result.correlation_id,
            },
        )

    @app.get("/quotes/{correlation_id:path}", response_model=list[BankQuote])
    async def list_quotes(correlation_id: str) -> list[BankQuote]:
        return await service.list_quotes(correlation_id)

    if settings.enable_maintenance:

        @app.delete("/quotes", status_code=204)
        async def reset_quotes() -> Response:
            await service.reset()
            return Response(status_code=204)

        LOGGER.warning("Maintenance reset endpoint enabled")

    return app


def main() -> None:
    """Serve the aggregator with uvicorn using environment settings."""
    settings = AggregatorSettings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    LOGGER.info(f"Starting quote aggregator on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
