from wpquery.models.derived import Menu, MenuItem, PostTerm, Viewer
from wpquery.models.post import Post
from wpquery.models.postmeta import PostMeta
from wpquery.models.schema import TableSpec, WordPressSchema, build_schema
from wpquery.models.term import Term
from wpquery.models.term_relationship import TermRelationship
from wpquery.models.term_taxonomy import NAV_MENU, TermTaxonomy

__all__ = [
    "Post",
    "PostMeta",
    "Term",
    "TermTaxonomy",
    "TermRelationship",
    "Viewer",
    "MenuItem",
    "Menu",
    "PostTerm",
    "NAV_MENU",
    "TableSpec",
    "WordPressSchema",
    "build_schema",
]
