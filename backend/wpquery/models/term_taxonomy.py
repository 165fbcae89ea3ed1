from sqlalchemy import BigInteger, Column, MetaData, String, Table, Text
from sqlmodel import SQLModel

NAV_MENU = "nav_menu"


class TermTaxonomy(SQLModel):
    """Binds a term to a taxonomy namespace ("category", "nav_menu", ...)"""

    term_taxonomy_id: int
    term_id: int = 0
    taxonomy: str = ""
    description: str = ""
    parent: int = 0
    count: int = 0


def term_taxonomy_table(metadata: MetaData, prefix: str) -> Table:
    return Table(
        f"{prefix}term_taxonomy",
        metadata,
        Column("term_taxonomy_id", BigInteger, primary_key=True),
        Column("term_id", BigInteger, nullable=False, default=0),
        Column("taxonomy", String(32), nullable=False, default="", index=True),
        Column("description", Text, nullable=False, default=""),
        Column("parent", BigInteger, nullable=False, default=0),
        Column("count", BigInteger, nullable=False, default=0),
    )
