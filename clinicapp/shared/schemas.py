"""Response envelope and pagination shared by all domains"""

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, totalPages=math.ceil(total / limit) if limit else 0)


class ApiResponse(BaseModel, Generic[T]):
    """``{"success": true, "data": ..., "message": ...}``"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
