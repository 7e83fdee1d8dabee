import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.metrics import PREDICTION_OUTCOMES
from ..errors import PredictionError, UnexpectedError
from ..schemas import ErrorResponse, PredictionResult
from ..services.prediction_service import PredictionService, read_product_text

logger = logging.getLogger(__name__)

router = APIRouter()

def service_dep() -> PredictionService:
    # Cheap factory; providers open their HTTP client per call.
    return PredictionService()

@router.post(
    "/predict",
    responses={
        200: {"model": PredictionResult},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def post_predict(request: Request, svc: PredictionService = Depends(service_dep)):
    # Body is read by hand so bad JSON maps to 400 rather than FastAPI's 422.
    try:
        svc.ensure_configured()
        product_text = read_product_text(await request.body())
        prediction = await svc.predict(product_text)
    except PredictionError:
        raise
    except Exception as exc:
        logger.exception("Unhandled error while predicting")
        raise UnexpectedError(details=str(exc)) from exc

    PREDICTION_OUTCOMES.labels(outcome="ok").inc()
    # Echo the model's object as-is; a response_model would reshape it.
    return JSONResponse(content=prediction)
