# backend/schemas/batch.py
from pydantic import BaseModel
from typing import List


# Summary returned by every bulk import: exact counts plus 1-indexed row messages
class ImportResult(BaseModel):
    success: int
    failed: int
    errors: List[str]
