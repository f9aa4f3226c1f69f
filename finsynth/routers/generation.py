"""Routes that generate synthetic financial datasets."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from finsynth.core.config import get_settings
from finsynth.core.log import get_logger
from finsynth.domain.reference import BANK_NAMES, BUSINESS_MODELS, COMPANY_SIZES, INDUSTRIES
from finsynth.schemas import GenerationRequest, GenerationResponse
from finsynth.services import FinancialDataService

router = APIRouter(tags=["generation"])
LOGGER = get_logger(__name__)


def get_financial_data_service() -> FinancialDataService:
    """Return a service instance per request."""

    return FinancialDataService(settings=get_settings().generator)


@router.get("/reference")
def reference_data() -> dict[str, list]:
    """Closed sets a caller can pick from when describing a company."""

    return {
        "industries": list(INDUSTRIES),
        "business_models": list(BUSINESS_MODELS),
        "company_sizes": [
            {
                "label": tier.label,
                "min_employees": tier.min_employees,
                "max_employees": tier.max_employees,
            }
            for tier in COMPANY_SIZES.values()
        ],
        "banks": list(BANK_NAMES),
    }


@router.post("/generate", response_model=GenerationResponse)
def generate(
    payload: GenerationRequest,
    service: FinancialDataService = Depends(get_financial_data_service),
) -> GenerationResponse:
    try:
        return service.generate(payload)
    except ValueError as exc:
        LOGGER.info("Rejected generation request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/generate/csv")
def generate_csv(
    payload: GenerationRequest,
    service: FinancialDataService = Depends(get_financial_data_service),
) -> Response:
    """Same as ``/generate`` but returns the transactions as a CSV download."""

    try:
        content = service.transactions_csv(payload)
    except ValueError as exc:
        LOGGER.info("Rejected CSV generation request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    filename = f"transactions-{date.today():%Y-%m-%d}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
