# app/storage/token_store.py
"""Token storage implementation."""

import re
from typing import Dict, Any, Optional

from app.storage.base import BaseStore
from app.models.token import TokenDocument
from app.core.constants import TOKENS_COLLECTION


def _exact_ci(value: str) -> Dict[str, str]:
    """Case-insensitive exact match."""
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}


class TokenStore(BaseStore[TokenDocument]):
    """Storage for RWA token metadata."""

    collection_name = TOKENS_COLLECTION
    id_field = "address"

    def _get_id(self, entity: TokenDocument) -> str:
        return entity.address

    def _serialize(self, entity: TokenDocument) -> Dict[str, Any]:
        return entity.to_document()

    def _deserialize(self, data: Dict[str, Any]) -> TokenDocument:
        return TokenDocument.model_validate(data)

    def get_by_address(self, address: str) -> Optional[TokenDocument]:
        return self.find_one({"address": _exact_ci(address)})

    def get_by_symbol(self, symbol: str) -> Optional[TokenDocument]:
        return self.find_one({"symbol": _exact_ci(symbol)})

    def get_by_identifier(self, identifier: str) -> Optional[TokenDocument]:
        """Addresses start with 0x, anything else is a symbol."""
        if identifier.startswith("0x"):
            return self.get_by_address(identifier)
        return self.get_by_symbol(identifier)
