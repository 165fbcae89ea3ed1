"""
Entities that are not stored as rows but reshaped at query time.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Viewer(BaseModel):
    """Static root entity; the API root cannot be nodeless."""

    id: int = 1
    name: str = "Anonymous"


class MenuItem(BaseModel):
    """
    A nav_menu_item post reshaped into a tree node.

    parent_id 0 marks a root. Serialised with camelCase names
    (parentId, menuOrder, objectId, objectType).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = ""
    url: str = ""
    parent_id: int = Field(default=0, alias="parentId")
    menu_order: int = Field(default=0, alias="menuOrder")
    object_id: int = Field(default=0, alias="objectId")
    object_type: str = Field(default="", alias="objectType")
    children: List["MenuItem"] = Field(default_factory=list)


class Menu(BaseModel):
    """A term in the nav_menu taxonomy; slug is the external menu name."""

    term_id: int
    term_taxonomy_id: int
    name: str
    slug: str
    count: int = 0


class PostTerm(BaseModel):
    """A term as attached to a post, with its taxonomy binding flattened in."""

    term_id: int
    term_taxonomy_id: int
    name: str
    slug: str
    taxonomy: str
    parent: int = 0
    count: int = 0
    term_order: int = 0
