# app/storage/insurance_option_store.py
from typing import Dict, Any

from app.storage.base import BaseStore
from app.models.insurance_option import InsuranceOption
from app.core.constants import INSURANCE_OPTIONS_COLLECTION


class InsuranceOptionStore(BaseStore[InsuranceOption]):
    """Storage for insurance options offered on RWA tokens."""

    collection_name = INSURANCE_OPTIONS_COLLECTION

    def _get_id(self, entity: InsuranceOption) -> str:
        return entity.id

    def _serialize(self, entity: InsuranceOption) -> Dict[str, Any]:
        return entity.to_document()

    def _deserialize(self, data: Dict[str, Any]) -> InsuranceOption:
        return InsuranceOption.model_validate(data)
