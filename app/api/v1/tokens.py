# app/api/v1/tokens.py
from fastapi import APIRouter, Depends
from typing import List

from app.core.dependencies import get_token_store, get_chain_service
from app.core.exceptions import TokenNotFoundError, DuplicateTokenError
from app.core.logging import get_logger
from app.models.token import TokenInfo, TokenDocument, OnChainTokenInfo, MessageResponse
from app.services.chain_service import ChainService
from app.storage.token_store import TokenStore

logger = get_logger(__name__)
router = APIRouter()

@router.get("", response_model=List[TokenInfo])
def list_tokens(store: TokenStore = Depends(get_token_store)):
    """All registered RWA tokens, without timestamps."""
    return [token.to_info() for token in store.get_all()]

@router.post("", response_model=MessageResponse, status_code=201)
def add_token(token: TokenInfo, store: TokenStore = Depends(get_token_store)):
    if store.get_by_symbol(token.symbol):
        raise DuplicateTokenError("symbol", token.symbol)
    if store.get_by_address(token.address):
        raise DuplicateTokenError("address", token.address)

    store.insert(TokenDocument(**token.model_dump()))
    logger.info(f"Token added: {token.symbol} at {token.address}")
    return MessageResponse(message="Token added successfully")

@router.get("/{address}/onchain", response_model=OnChainTokenInfo)
def get_onchain_token(address: str, chain: ChainService = Depends(get_chain_service)):
    """Read ERC-20 metadata straight from the contract."""
    info = chain.fetch_token_info(address)
    if info is None:
        raise TokenNotFoundError(address)
    return info

@router.get("/{identifier}", response_model=TokenInfo)
def get_token(identifier: str, store: TokenStore = Depends(get_token_store)):
    """Look a token up by address (0x...) or by symbol, ignoring case."""
    token = store.get_by_identifier(identifier)
    if token is None:
        raise TokenNotFoundError(identifier)
    return token.to_info()
