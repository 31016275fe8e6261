"""
Numbers4 Engine API
===================

Thin HTTP surface over the engine:
- POST /api/v1/engine/predictions  ensemble tickets for the draw after the supplied history
- POST /api/v1/engine/backtest     walk-forward backtest of one or more algorithms
- GET  /api/v1/engine/analysis     positional frequency analysis of the latest window
"""

from datetime import date
from typing import Any, Dict, List, Optional

import numpy as np
from fastapi import APIRouter, FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from numbers4.draw_history import DrawHistory
from numbers4.draws import Draw, HistoryWindow
from numbers4.exceptions import InsufficientDataError, MalformedDrawError, UnknownAlgorithmError
from numbers4.predictor import Predictor


class DrawIn(BaseModel):
    drawNumber: int = Field(..., description="Draw number, increasing with draw order")
    drawDate: date = Field(..., description="Draw date (YYYY-MM-DD)")
    winningNumber: str = Field(..., description="4 digit winning number, zero-padded")


class PredictionRequest(BaseModel):
    draws: List[DrawIn] = Field(..., description="History window, any order")
    seed: Optional[int] = Field(None, description="Seed for the sampling steps")


class PredictionEntry(BaseModel):
    prediction: str
    source: str


class PredictionResponse(BaseModel):
    predictions: List[str] = Field(..., description="Tickets, highest confidence first")
    entries: List[PredictionEntry]
    nextDrawNumber: int


class BacktestRequest(BaseModel):
    startDate: date
    endDate: date
    algorithms: List[str] = Field(default_factory=lambda: ["kako"])
    windowSize: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = None
    draws: Optional[List[DrawIn]] = Field(None, description="History to use instead of the database")


class BacktestDetailOut(BaseModel):
    drawNumber: int
    drawDate: str
    winningNumber: str
    prediction: str
    winType: str
    winAmount: int


class BacktestResultOut(BaseModel):
    algorithm: str
    period: str
    totalPredictions: int
    straightWins: int
    boxWins: int
    totalWins: int
    winRate: float
    straightRate: float
    boxRate: float
    totalCost: int
    totalReturn: int
    profit: int
    roi: float
    scoredDraws: int
    skippedDraws: int
    details: List[BacktestDetailOut]


class BacktestResponse(BaseModel):
    results: List[BacktestResultOut]


engine_router = APIRouter(prefix="/api/v1/engine", tags=["Numbers4 Engine"])

_predictor: Optional[Predictor] = None


def get_predictor() -> Predictor:
    global _predictor
    if _predictor is None:
        _predictor = Predictor()
    return _predictor


def _to_draws(items: List[DrawIn]) -> List[Draw]:
    return [Draw(d.drawNumber, d.drawDate, d.winningNumber) for d in items]


def _raise_http(e: Exception) -> None:
    if isinstance(e, MalformedDrawError):
        raise HTTPException(status_code=422, detail=str(e))
    if isinstance(e, InsufficientDataError):
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, (UnknownAlgorithmError, ValueError)):
        raise HTTPException(status_code=400, detail=str(e))
    logger.error(f"Engine request failed: {e}")
    raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@engine_router.post("/predictions", response_model=PredictionResponse, summary="Generate ensemble predictions")
async def create_predictions(request: PredictionRequest) -> PredictionResponse:
    try:
        history = DrawHistory(_to_draws(request.draws))
        window = HistoryWindow.from_chronological(history.draws)
        predictor = get_predictor()
        if not window:
            raise InsufficientDataError("No historical draws supplied", required=1, available=0)

        rng = np.random.default_rng(request.seed)
        entries = predictor.ensemble.generate_detailed(window, window.latest, rng)
        return PredictionResponse(
            predictions=[e.prediction for e in entries],
            entries=[PredictionEntry(**e.to_dict()) for e in entries],
            nextDrawNumber=window.latest.draw_number + 1,
        )
    except HTTPException:
        raise
    except Exception as e:
        _raise_http(e)


@engine_router.post("/backtest", response_model=BacktestResponse, summary="Backtest prediction algorithms")
async def run_backtest(request: BacktestRequest) -> BacktestResponse:
    try:
        if request.draws is not None:
            history = DrawHistory(_to_draws(request.draws))
        else:
            history = DrawHistory.from_database()

        results = get_predictor().run_backtest(
            history,
            request.startDate,
            request.endDate,
            request.algorithms,
            window_size=request.windowSize,
            seed=request.seed,
        )
        return BacktestResponse(results=[BacktestResultOut(**r.to_dict()) for r in results])
    except HTTPException:
        raise
    except Exception as e:
        _raise_http(e)


@engine_router.get("/analysis", summary="Positional digit frequency of the latest window")
async def get_analysis() -> Dict[str, Any]:
    try:
        predictor = get_predictor()
        history = DrawHistory.from_database()
        window = history.latest_window(predictor.config.window_size)
        analysis = predictor.ensemble.frequency_model.analysis(window)
        patterns = predictor.ensemble.pattern_model.analyze(window)
        return {'frequency': analysis.to_dict(), 'patterns': patterns.to_dict()}
    except HTTPException:
        raise
    except Exception as e:
        _raise_http(e)


app = FastAPI(
    title="Numbers4 Prediction Engine",
    description="Statistical prediction and backtesting for 4 digit number lotteries",
)
app.include_router(engine_router)
