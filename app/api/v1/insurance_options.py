# app/api/v1/insurance_options.py
from fastapi import APIRouter, Depends
from typing import List

from app.core.dependencies import get_insurance_option_store
from app.core.exceptions import InsuranceOptionNotFoundError, DuplicateInsuranceOptionError
from app.core.logging import get_logger
from app.models.insurance_option import (
    InsuranceOption, InsuranceOptionCreate, PremiumQuote, PremiumQuoteRequest
)
from app.services.premium import quote_premium
from app.storage.insurance_option_store import InsuranceOptionStore

logger = get_logger(__name__)
router = APIRouter()

@router.get("", response_model=List[InsuranceOption])
def list_insurance_options(store: InsuranceOptionStore = Depends(get_insurance_option_store)):
    return store.get_all()

@router.post("", response_model=InsuranceOption, status_code=201)
def create_insurance_option(
    data: InsuranceOptionCreate,
    store: InsuranceOptionStore = Depends(get_insurance_option_store)
):
    """Add an insurance option. Ids are unique."""
    if store.exists(data.id):
        raise DuplicateInsuranceOptionError(data.id)
    option = store.insert(InsuranceOption(**data.model_dump()))
    logger.info(f"Insurance option created: {option.id} ({option.name})")
    return option

@router.get("/{option_id}", response_model=InsuranceOption)
def get_insurance_option(option_id: str, store: InsuranceOptionStore = Depends(get_insurance_option_store)):
    option = store.get(option_id)
    if option is None:
        raise InsuranceOptionNotFoundError(option_id)
    return option

@router.post("/{option_id}/quote", response_model=PremiumQuote)
def quote_insurance_option(
    option_id: str,
    request: PremiumQuoteRequest,
    store: InsuranceOptionStore = Depends(get_insurance_option_store)
):
    """Estimate the premium for covering part of the option's value."""
    option = store.get(option_id)
    if option is None:
        raise InsuranceOptionNotFoundError(option_id)
    return quote_premium(option, request.coverage_percent, request.duration_months)
