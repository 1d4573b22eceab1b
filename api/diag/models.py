# api/diag/models.py
from pydantic import BaseModel


class TableName(BaseModel):
    table_name: str


class DiagResponse(BaseModel):
    ok: bool
    now: str | None = None
    tables: list[TableName] = []
