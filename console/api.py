"""
Console REST API for the RouteLens dashboard.

This module implements the FastAPI application that the browser renderer
calls with already retrieved trace and history payloads. It answers with
the derived view model, hop table and chart series.
"""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import Any, List, Optional
import logging

from models import Language, ViewModel
from pipeline.assembler import ViewModelAssembler, parse_trace
from pipeline.aggregator import normalize_history
from pipeline.hop_table import HopRow, build_hop_table
from pipeline.series import DEFAULT_SYMBOL_THRESHOLD, MetricSeries, build_series

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="RouteLens Console API",
    description="View model endpoints for the RouteLens operator console",
    version="1.0.0"
)

# Initialize global components
assembler = ViewModelAssembler()
settings = {"symbol_threshold": DEFAULT_SYMBOL_THRESHOLD, "language": Language.PRIMARY}


class ViewRequest(BaseModel):
    """
    Inputs for one view model.

    Attributes:
        trace: Latest trace as an object or as JSON text; anything
            unreadable is treated as no trace
        history: Sample history, oldest first, in either naming scheme
        language: Label language
    """
    trace: Optional[Any] = Field(None, description="Latest trace snapshot")
    history: Optional[List[Any]] = Field(None, description="Sample history, oldest first, null for none")
    language: Optional[Language] = Field(None, description="Label language, configured default if omitted")


class HopTableRequest(BaseModel):
    """Inputs for the hop table."""
    trace: Optional[Any] = Field(None, description="Latest trace snapshot")
    language: Optional[Language] = Field(None, description="Label language, configured default if omitted")


class HopTableResponse(BaseModel):
    """Rows of the hop table."""
    hops: List[HopRow] = Field(default_factory=list)


class SeriesRequest(BaseModel):
    """Inputs for the history chart."""
    history: Optional[List[Any]] = Field(None, description="Sample history, oldest first, null for none")


@app.post("/api/v1/view", response_model=ViewModel, status_code=200)
async def get_view_model(data: ViewRequest) -> ViewModel:
    """
    Assemble the map and summary view model.

    Malformed traces never produce an error: the response then carries no
    points or segments and the default world frame.

    Example Request:
        POST /api/v1/view
        {
            "trace": {"target": "example.com", "hops": [
                {"hop": 1, "ip": "10.0.0.1", "lon": 0, "lat": 0},
                {"hop": 2, "ip": "203.0.113.1", "lon": 139.7, "lat": 35.7, "city": "Tokyo"}
            ]},
            "history": [{"latency_ms": 24.5, "packet_loss": 0, "speed_down": 120.5}],
            "language": "fallback"
        }
    """
    try:
        view_model = assembler.assemble(data.trace, data.history, data.language or settings["language"])
    except Exception as e:
        logger.error(f"Error assembling view model: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )

    logger.info(
        f"Served view model with {len(view_model.points)} points "
        f"and {len(view_model.segments)} segments"
    )
    return view_model


@app.post("/api/v1/hops", response_model=HopTableResponse, status_code=200)
async def get_hop_table(data: HopTableRequest) -> HopTableResponse:
    """Build the per-hop table, with "N/A" for missing measurements."""
    try:
        rows = build_hop_table(parse_trace(data.trace), data.language or settings["language"])
    except Exception as e:
        logger.error(f"Error building hop table: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )
    return HopTableResponse(hops=list(rows))


@app.post("/api/v1/series", response_model=MetricSeries, status_code=200)
async def get_series(data: SeriesRequest) -> MetricSeries:
    """Build the latency and loss series for the history chart."""
    try:
        return build_series(normalize_history(data.history), settings["symbol_threshold"])
    except Exception as e:
        logger.error(f"Error building series: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns basic system status information.
    """
    return {
        "status": "healthy",
        "cached_views": len(assembler)
    }
