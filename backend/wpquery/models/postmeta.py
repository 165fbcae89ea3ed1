from typing import Optional

from sqlalchemy import BigInteger, Column, MetaData, String, Table, Text
from sqlmodel import SQLModel


class PostMeta(SQLModel):
    """Arbitrary key/value attribute of a post. (post_id, meta_key) is not unique."""

    meta_id: int
    post_id: int = 0  # References Post.id, not enforced
    meta_key: Optional[str] = None
    meta_value: Optional[str] = None


def postmeta_table(metadata: MetaData, prefix: str) -> Table:
    return Table(
        f"{prefix}postmeta",
        metadata,
        Column("meta_id", BigInteger, primary_key=True),
        Column("post_id", BigInteger, nullable=False, default=0, index=True),
        Column("meta_key", String(255), nullable=True, index=True),
        Column("meta_value", Text, nullable=True),
    )
