"""
Prefixed table declarations.

Each QueryService builds its own WordPressSchema on a private MetaData, so
services with different prefixes can coexist in one process. Additional
tables are declared here at construction time, never added later.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Type

from sqlalchemy import MetaData, Table
from sqlmodel import SQLModel

from wpquery.errors import ConfigurationError
from wpquery.models.post import Post, posts_table
from wpquery.models.postmeta import PostMeta, postmeta_table
from wpquery.models.term import Term, terms_table
from wpquery.models.term_relationship import TermRelationship, term_relationships_table
from wpquery.models.term_taxonomy import TermTaxonomy, term_taxonomy_table

TableBuilder = Callable[[MetaData, str], Table]


@dataclass(frozen=True)
class TableSpec:
    """How to declare a table for a prefix, and which row type its reads produce."""

    build: TableBuilder
    row_model: Optional[Type[SQLModel]] = None


CORE_TABLES: Dict[str, TableSpec] = {
    "posts": TableSpec(posts_table, Post),
    "postmeta": TableSpec(postmeta_table, PostMeta),
    "terms": TableSpec(terms_table, Term),
    "term_taxonomy": TableSpec(term_taxonomy_table, TermTaxonomy),
    "term_relationships": TableSpec(term_relationships_table, TermRelationship),
}


@dataclass(frozen=True)
class WordPressSchema:
    prefix: str
    metadata: MetaData
    tables: Dict[str, Table] = field(default_factory=dict)
    row_models: Dict[str, Optional[Type[SQLModel]]] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Table:
        return self.tables[name]


def build_schema(prefix: str, extra_tables: Optional[Mapping[str, TableSpec]] = None) -> WordPressSchema:
    """Declare the five core tables plus any extra ones under ``prefix``."""
    extra_tables = dict(extra_tables or {})
    clashes = sorted(set(extra_tables) & set(CORE_TABLES))
    if clashes:
        raise ConfigurationError(f"Extra tables shadow core tables: {', '.join(clashes)}")

    metadata = MetaData()
    schema = WordPressSchema(prefix=prefix, metadata=metadata)
    for name, spec in {**CORE_TABLES, **extra_tables}.items():
        schema.tables[name] = spec.build(metadata, prefix)
        schema.row_models[name] = spec.row_model
    return schema
