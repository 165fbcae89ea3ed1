"""
Featured image URL for a post.

Chain: post --_thumbnail_id--> attachment post --_wp_attached_file--> path.
Every missing link yields None; nothing in the chain raises.
"""
import logging
from typing import Optional

from wpquery.config import WordPressSettings
from wpquery.repository import TableAccessor
from wpquery.utils.sql import meta_int

logger = logging.getLogger(__name__)

THUMBNAIL_KEY = "_thumbnail_id"
ATTACHED_FILE_KEY = "_wp_attached_file"
UPLOADS_PATH = "wp-content/uploads/"


def thumbnail_base_path(settings: WordPressSettings) -> str:
    """S3 buckets hold uploads at the root; a WordPress host under wp-content/uploads/."""
    if settings.amazon_s3:
        return settings.upload_directory
    return settings.upload_directory + UPLOADS_PATH


class ThumbnailResolver:
    def __init__(self, posts: TableAccessor, postmeta: TableAccessor, settings: WordPressSettings):
        self.posts = posts
        self.postmeta = postmeta
        self.base_path = thumbnail_base_path(settings)

    async def _first_meta_value(self, post_id: int, key: str) -> Optional[str]:
        row = await self.postmeta.find_one(post_id=post_id, meta_key=key, order_by=("meta_id",))
        return row.meta_value if row is not None else None

    async def resolve(self, post_id: int) -> Optional[str]:
        if await self.posts.find_one(id=post_id) is None:
            logger.debug("Thumbnail: post %d does not exist", post_id)
            return None

        attachment_id = meta_int(await self._first_meta_value(post_id, THUMBNAIL_KEY))
        if attachment_id is None:
            return None

        if await self.posts.find_one(id=attachment_id) is None:
            logger.debug("Thumbnail: post %d points at missing attachment %d", post_id, attachment_id)
            return None

        relative_path = await self._first_meta_value(attachment_id, ATTACHED_FILE_KEY)
        if not relative_path:
            logger.debug("Thumbnail: attachment %d has no attached file", attachment_id)
            return None

        return self.base_path + relative_path
