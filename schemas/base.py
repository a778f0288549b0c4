"""
Shared base for normalized row schemas.
"""

from pydantic import BaseModel


class RowSchema(BaseModel):
    """
    One normalized row bound for a single table.

    Field names match the target table's column names one-to-one, so
    ``model_dump()`` is directly usable as an INSERT parameter set.
    """

    class Config:
        frozen = True
        extra = "forbid"
