from sqlalchemy import BigInteger, Column, MetaData, String, Table
from sqlmodel import SQLModel


class Term(SQLModel):
    term_id: int
    name: str = ""
    slug: str = ""
    term_group: int = 0


def terms_table(metadata: MetaData, prefix: str) -> Table:
    return Table(
        f"{prefix}terms",
        metadata,
        Column("term_id", BigInteger, primary_key=True),
        Column("name", String(200), nullable=False, default=""),
        Column("slug", String(200), nullable=False, default="", index=True),
        Column("term_group", BigInteger, nullable=False, default=0),
    )
