from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Column, DateTime, Integer, MetaData, String, Table, Text
from sqlmodel import SQLModel


class Post(SQLModel):
    """
    Row of ``{prefix}posts``.

    Articles, pages, media attachments and menu items all live here,
    distinguished by post_type. The primary key column is ``ID``.
    """

    id: int
    post_author: int = 0
    post_date: Optional[datetime] = None
    post_title: str = ""
    post_content: str = ""
    post_excerpt: str = ""
    post_status: str = "publish"  # publish | draft | inherit | ...
    post_type: str = "post"  # post | page | attachment | nav_menu_item | ...
    post_name: str = ""  # slug
    post_parent: int = 0
    menu_order: int = 0
    guid: str = ""


def posts_table(metadata: MetaData, prefix: str) -> Table:
    return Table(
        f"{prefix}posts",
        metadata,
        Column("ID", BigInteger, primary_key=True, key="id"),
        Column("post_author", BigInteger, nullable=False, default=0),
        Column("post_date", DateTime, nullable=True),
        Column("post_content", Text, nullable=False, default=""),
        Column("post_title", Text, nullable=False, default=""),
        Column("post_excerpt", Text, nullable=False, default=""),
        Column("post_status", String(20), nullable=False, default="publish", index=True),
        Column("post_name", String(200), nullable=False, default="", index=True),
        Column("post_parent", BigInteger, nullable=False, default=0),
        Column("guid", String(255), nullable=False, default=""),
        Column("menu_order", Integer, nullable=False, default=0),
        Column("post_type", String(20), nullable=False, default="post", index=True),
    )
