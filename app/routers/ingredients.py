from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.logging import get_logger, log_with_context
from app.models.requests import IngredientRequest
from app.models.responses import IngredientClassificationResponse
from app.clients.chat_completion import UpstreamTimeoutError, UpstreamTransportError, UpstreamParseError
from app.services.ingredient import IngredientService, ClassificationParseError

router = APIRouter(prefix="/ingredients", tags=["ingredients"])
logger = get_logger(__name__)


def get_ingredient_service(request: Request) -> IngredientService:
    """Resolve the service built during application startup"""
    service = getattr(request.app.state, "ingredient_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Ingredient service is not initialised")
    return service


@router.post("", response_model=IngredientClassificationResponse)
async def categorize_ingredient(
    request: IngredientRequest,
    service: IngredientService = Depends(get_ingredient_service)
):
    """Classify an ingredient as vegan, vegetarian or regular"""
    log_with_context(
        logger, "info", "Ingredient classification request received",
        ingredient=request.ingredient,
        event="classification_started"
    )

    try:
        classification = await service.categorize(request.ingredient)
    except UpstreamTimeoutError as e:
        logger.error(f"Completion provider timed out: {str(e)}")
        raise HTTPException(status_code=504, detail=f"Completion provider timed out: {str(e)}")
    except (UpstreamTransportError, UpstreamParseError) as e:
        logger.error(f"Completion provider failed: {str(e)}")
        raise HTTPException(status_code=502, detail=f"Completion provider failed: {str(e)}")
    except ClassificationParseError as e:
        logger.error(f"Classification parsing failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Classification parsing failed: {str(e)}")
    except Exception as e:
        logger.exception(f"Classification failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Classification failed: {str(e)}")

    log_with_context(
        logger, "info", "Ingredient classification completed",
        ingredient=request.ingredient,
        classification=classification,
        event="classification_completed"
    )

    return IngredientClassificationResponse(
        ingredient=request.ingredient,
        classification=classification
    )
