# app/models/user.py
from pydantic import Field
from typing import List

from app.models.base import BaseEntity


class User(BaseEntity):
    address: str
    policies: List[str] = Field(default_factory=list)
    claims: List[str] = Field(default_factory=list)
