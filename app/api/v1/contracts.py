# app/api/v1/contracts.py
import json
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.chain.contracts import ContractClient
from app.core.dependencies import get_contract_client
from app.core.exceptions import ContractArgumentError
from app.models.chain import ContractReadResponse, ContractWriteRequest, ContractWriteResponse

router = APIRouter()


def parse_args(raw: Optional[str]) -> list:
    """Query-string args arrive as a JSON array."""
    if not raw:
        return []
    try:
        args = json.loads(raw)
    except ValueError:
        raise ContractArgumentError("args must be a JSON array")
    if not isinstance(args, list):
        raise ContractArgumentError("args must be a JSON array")
    return args


@router.get("/read", response_model=ContractReadResponse)
def read_contract(
    contract: str = Query(..., min_length=1, description="Contract name, e.g. InsuranceCore"),
    function: str = Query(..., min_length=1, description="View function name"),
    args: Optional[str] = Query(None, description='JSON array, e.g. ["0xabc...", 1]'),
    client: ContractClient = Depends(get_contract_client)
):
    """Call a view function on a deployed contract."""
    return ContractReadResponse(data=client.read(contract, function, parse_args(args)))

@router.post("/write", response_model=ContractWriteResponse)
def write_contract(request: ContractWriteRequest, client: ContractClient = Depends(get_contract_client)):
    """Send a transaction with the server wallet and wait for the receipt."""
    result = client.write(request.contract_name, request.function_name, request.args)
    return ContractWriteResponse(data=result)
