import math
from typing import Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

PRODUCT_INVALID_MSG = "Invalid product data. Ensure all fields are provided correctly."


class ProductIn(BaseModel):
    """Body of POST /api/products and PUT /api/products/{id}.

    Strict types: "12" is not a price and 1 is not a stock flag.
    Unknown keys (a client supplied "id" included) are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: StrictStr = Field(..., min_length=1)
    description: StrictStr = Field(..., min_length=1)
    price: Union[StrictInt, StrictFloat]
    category: StrictStr = Field(..., min_length=1)
    in_stock: StrictBool = Field(..., alias="inStock")

    @field_validator("price")
    @classmethod
    def _price_is_non_negative(cls, v):
        # ints may be too large to convert to float
        if (isinstance(v, float) and not math.isfinite(v)) or v < 0:
            raise ValueError("price must be a finite, non-negative number")
        return v


def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "category": p.category,
        "inStock": p.in_stock,
    }
