"""
Base Pydantic model for all API param schemas.

Key features:
- frozen=True: Immutable after normalization (prevents downstream mutation)
- populate_by_name=True: Accept both alias and field name
- extra='ignore': Ignore undeclared fields (safe)
"""

from pydantic import BaseModel, ConfigDict


class BaseParamsModel(BaseModel):
    """
    Base model for all API param schemas.

    Param models here never reject a request: validators degrade malformed
    input to a default (or to None for month, which the filter builder turns
    into a match-nothing condition).
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )
