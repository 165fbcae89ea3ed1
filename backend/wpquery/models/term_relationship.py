from sqlalchemy import BigInteger, Column, Integer, MetaData, Table
from sqlmodel import SQLModel


class TermRelationship(SQLModel):
    """One row per (post, term taxonomy) pair"""

    object_id: int
    term_taxonomy_id: int
    term_order: int = 0


def term_relationships_table(metadata: MetaData, prefix: str) -> Table:
    return Table(
        f"{prefix}term_relationships",
        metadata,
        Column("object_id", BigInteger, primary_key=True),
        Column("term_taxonomy_id", BigInteger, primary_key=True, index=True),
        Column("term_order", Integer, nullable=False, default=0),
    )
