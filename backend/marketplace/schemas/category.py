from pydantic import BaseModel


class CategoryNode(BaseModel):
    id: str
    name: str
    parent_id: str | None = None
    is_visible: bool
    subcategories: list["CategoryNode"] = []
