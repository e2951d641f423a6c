# product_api/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Union

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def merge(self, fields: Dict[str, Any]) -> None:
        """Overwrite the supplied wire fields in place; ``id`` never changes."""
        for key, value in fields.items():
            name = WIRE_TO_FIELD.get(key)
            if name is None or name == "id":
                continue
            setattr(self, name, value)

WIRE_TO_FIELD: Dict[str, str] = {
    (info.alias or name): name for name, info in Product.model_fields.items()
}
