"""
Query façade over the WordPress tables.

Every operation is a coroutine issuing one or more reads through the table
accessors and reshaping the rows. Nothing here writes.

Status filtering is deliberately asymmetric: get_post_by_id returns a post
in any status (internal/administrative lookups) while get_post_by_name only
returns published posts (public display).
"""
import functools
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from wpquery.config import WordPressSettings
from wpquery.errors import NotFoundError, QueryValidationError
from wpquery.models.derived import Menu, MenuItem, PostTerm, Viewer
from wpquery.models.post import Post
from wpquery.models.postmeta import PostMeta
from wpquery.models.schema import TableSpec, build_schema
from wpquery.models.term import Term
from wpquery.models.term_taxonomy import NAV_MENU
from wpquery.repository import TableAccessor, build_accessors, group_by
from wpquery.services.menu_tree import build_menu_tree
from wpquery.services.meta_filter import filter_meta, validate_meta_keys
from wpquery.services.thumbnail_resolver import ThumbnailResolver
from wpquery.utils.sql import meta_int, require_int, require_str

logger = logging.getLogger(__name__)

PUBLISH = "publish"
NAV_MENU_ITEM = "nav_menu_item"
DEFAULT_POST_TYPE = "post"
POSTS_ARGS = frozenset({"post_type"})

MENU_PARENT_KEY = "_menu_item_menu_item_parent"
MENU_OBJECT_ID_KEY = "_menu_item_object_id"
MENU_OBJECT_KEY = "_menu_item_object"
MENU_TYPE_KEY = "_menu_item_type"
MENU_URL_KEY = "_menu_item_url"
MENU_META_KEYS = frozenset({MENU_PARENT_KEY, MENU_OBJECT_ID_KEY, MENU_OBJECT_KEY, MENU_TYPE_KEY, MENU_URL_KEY})

QueryFunc = Callable[..., Awaitable[Any]]


class QueryService:
    """
    Named read operations over one prefixed WordPress schema.

    ``tables`` exposes the raw per-table accessors; ``register_query`` adds
    named queries built on them, callable through ``run``.
    """

    def __init__(
        self,
        settings: WordPressSettings,
        engine: AsyncEngine,
        extra_tables: Optional[Mapping[str, TableSpec]] = None,
    ):
        self.settings = settings
        self.schema = build_schema(settings.wp_prefix, extra_tables)
        self.tables: Mapping[str, TableAccessor] = MappingProxyType(
            build_accessors(engine, self.schema.tables, self.schema.row_models)
        )
        self.posts = self.tables["posts"]
        self.postmeta = self.tables["postmeta"]
        self.terms = self.tables["terms"]
        self.term_taxonomy = self.tables["term_taxonomy"]
        self.term_relationships = self.tables["term_relationships"]
        self.thumbnails = ThumbnailResolver(self.posts, self.postmeta, settings)

        self._queries: Dict[str, QueryFunc] = {
            "getViewer": self.get_viewer,
            "getPosts": self.get_posts,
            "getPostById": self.get_post_by_id,
            "getPostByName": self.get_post_by_name,
            "getPostThumbnail": self.get_post_thumbnail,
            "getPostmeta": self.get_postmeta,
            "getPostMetaById": self.get_post_meta_by_id,
            "getMenu": self.get_menu,
            "getMenus": self.get_menus,
            "getPostTerms": self.get_post_terms,
            "getTermById": self.get_term_by_id,
        }

    # ── Named query registry ─────────────────────────────────────────────

    @property
    def queries(self) -> Mapping[str, QueryFunc]:
        return MappingProxyType(self._queries)

    def register_query(self, name: str, func: Callable[..., Awaitable[Any]]) -> None:
        """Register ``func(service, *args, **kwargs)`` under ``name``."""
        if not isinstance(name, str) or not name:
            raise QueryValidationError("Query name must be a non-empty string")
        if name in self._queries:
            raise QueryValidationError(f"Query {name!r} is already registered")
        self._queries[name] = functools.partial(func, self)

    async def run(self, name: str, *args: Any, **kwargs: Any) -> Any:
        try:
            func = self._queries[name]
        except KeyError:
            raise QueryValidationError(f"Unknown query {name!r}") from None
        return await func(*args, **kwargs)

    # ── Posts ────────────────────────────────────────────────────────────

    async def get_viewer(self) -> Viewer:
        return Viewer()

    async def get_posts(self, args: Optional[Mapping[str, Any]] = None) -> List[Post]:
        """Published posts of ``args["post_type"]`` (default "post"), ascending id."""
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise QueryValidationError(f"getPosts options must be a mapping, got {type(args).__name__}")
        unknown = sorted(set(args) - POSTS_ARGS)
        if unknown:
            raise QueryValidationError(f"Unsupported getPosts option(s): {', '.join(unknown)}")
        post_type = require_str(args.get("post_type", DEFAULT_POST_TYPE), "post_type")

        return await self.posts.find(post_status=PUBLISH, post_type=post_type)

    async def get_post_by_id(self, post_id: int) -> Post:
        """Any status. See module docstring for the asymmetry with get_post_by_name."""
        require_int(post_id, "post_id")
        post = await self.posts.find_one(id=post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    async def get_post_by_name(self, name: str) -> Post:
        """Published post with this slug; the lowest id wins if several share it."""
        require_str(name, "name")
        post = await self.posts.find_one(post_name=name, post_status=PUBLISH)
        if post is None:
            raise NotFoundError("Post", name)
        return post

    async def get_post_thumbnail(self, post_id: int) -> Optional[str]:
        require_int(post_id, "post_id")
        return await self.thumbnails.resolve(post_id)

    # ── Post meta ────────────────────────────────────────────────────────

    async def get_postmeta(self, post_id: int, keys=None) -> Dict[str, Optional[str]]:
        """
        {meta_key: meta_value} for a post, optionally limited to ``keys``.

        Duplicate keys resolve to the row with the lowest meta_id. Meta
        rows whose post does not exist are orphans and yield {}.
        """
        require_int(post_id, "post_id")
        keys = validate_meta_keys(keys)

        if await self.posts.find_one(id=post_id) is None:
            logger.debug("Post meta requested for missing post %d", post_id)
            return {}

        filters: Dict[str, Any] = {"post_id": post_id}
        if keys is not None:
            if not keys:
                return {}
            filters["meta_key"] = keys
        rows = await self.postmeta.find(order_by=("meta_id",), **filters)
        return filter_meta(rows, keys)

    async def get_post_meta_by_id(self, meta_id: int) -> PostMeta:
        """Single meta row; orphans (post missing) are NotFoundError like absent rows."""
        require_int(meta_id, "meta_id")
        row = await self.postmeta.find_one(meta_id=meta_id)
        if row is None:
            raise NotFoundError("PostMeta", meta_id)
        if await self.posts.find_one(id=row.post_id) is None:
            logger.debug("Meta row %d references missing post %d", meta_id, row.post_id)
            raise NotFoundError("PostMeta", meta_id)
        return row

    # ── Taxonomy ─────────────────────────────────────────────────────────

    async def get_term_by_id(self, term_id: int) -> Term:
        require_int(term_id, "term_id")
        term = await self.terms.find_one(term_id=term_id)
        if term is None:
            raise NotFoundError("Term", term_id)
        return term

    async def get_post_terms(self, post_id: int, taxonomy: Optional[str] = None) -> List[PostTerm]:
        """Terms attached to a post, ordered by taxonomy, term_order, term_id."""
        require_int(post_id, "post_id")
        if taxonomy is not None:
            require_str(taxonomy, "taxonomy")

        relationships = await self.term_relationships.find(object_id=post_id)
        order_by_tt = {rel.term_taxonomy_id: rel.term_order for rel in relationships}

        tt_filters: Dict[str, Any] = {"term_taxonomy_id": list(order_by_tt)}
        if taxonomy is not None:
            tt_filters["taxonomy"] = taxonomy
        bindings = await self.term_taxonomy.find(**tt_filters)

        terms = {t.term_id: t for t in await self.terms.find(term_id=[b.term_id for b in bindings])}
        result = [
            PostTerm(
                term_id=binding.term_id,
                term_taxonomy_id=binding.term_taxonomy_id,
                name=terms[binding.term_id].name,
                slug=terms[binding.term_id].slug,
                taxonomy=binding.taxonomy,
                parent=binding.parent,
                count=binding.count,
                term_order=order_by_tt[binding.term_taxonomy_id],
            )
            for binding in bindings
            if binding.term_id in terms
        ]
        result.sort(key=lambda t: (t.taxonomy, t.term_order, t.term_id))
        return result

    # ── Menus ────────────────────────────────────────────────────────────

    async def get_menus(self) -> List[Menu]:
        """All named menus, ordered by slug."""
        bindings = await self.term_taxonomy.find(taxonomy=NAV_MENU)
        terms = {t.term_id: t for t in await self.terms.find(term_id=[b.term_id for b in bindings])}
        menus = [
            Menu(
                term_id=b.term_id,
                term_taxonomy_id=b.term_taxonomy_id,
                name=terms[b.term_id].name,
                slug=terms[b.term_id].slug,
                count=b.count,
            )
            for b in bindings
            if b.term_id in terms
        ]
        menus.sort(key=lambda m: (m.slug, m.term_id))
        return menus

    async def get_menu(self, name: str) -> List[MenuItem]:
        """
        Ordered menu tree for the nav_menu term whose slug is ``name``.

        Reads run in sequence, each depending on the previous:
        terms -> term_taxonomy -> term_relationships -> posts -> postmeta
        (-> linked posts for items without their own title or URL).
        """
        require_str(name, "name")

        term_ids = [t.term_id for t in await self.terms.find(slug=name)]
        binding = None
        if term_ids:
            binding = await self.term_taxonomy.find_one(term_id=term_ids, taxonomy=NAV_MENU)
        if binding is None:
            raise NotFoundError("Menu", name)

        relationships = await self.term_relationships.find(term_taxonomy_id=binding.term_taxonomy_id)
        items = await self.posts.find(
            id=[rel.object_id for rel in relationships],
            post_type=NAV_MENU_ITEM,
            post_status=PUBLISH,
        )
        if not items:
            return []

        meta_rows = await self.postmeta.find(
            post_id=[item.id for item in items],
            meta_key=MENU_META_KEYS,
            order_by=("meta_id",),
        )
        meta_by_item = {
            item_id: filter_meta(rows, MENU_META_KEYS)
            for item_id, rows in group_by(meta_rows, "post_id").items()
        }

        records = await self._menu_records(items, meta_by_item)
        return build_menu_tree(records)

    async def _menu_records(self, items: List[Post], meta_by_item: Dict[int, Dict[str, Optional[str]]]) -> List[MenuItem]:
        """Flat MenuItem records; post_type items borrow title/URL from the linked post."""
        linked_ids = set()
        for item in items:
            meta = meta_by_item.get(item.id, {})
            object_id = meta_int(meta.get(MENU_OBJECT_ID_KEY))
            if meta.get(MENU_TYPE_KEY) == "post_type" and object_id:
                linked_ids.add(object_id)
        linked = {post.id: post for post in await self.posts.find(id=linked_ids)}

        records = []
        for item in items:
            meta = meta_by_item.get(item.id, {})
            object_id = meta_int(meta.get(MENU_OBJECT_ID_KEY)) or 0
            target = linked.get(object_id) if meta.get(MENU_TYPE_KEY) == "post_type" else None

            title = item.post_title or (target.post_title if target else "")
            url = meta.get(MENU_URL_KEY) or (f"/{target.post_name}" if target else "")
            records.append(
                MenuItem(
                    id=item.id,
                    title=title,
                    url=url,
                    parent_id=meta_int(meta.get(MENU_PARENT_KEY)) or 0,
                    menu_order=item.menu_order,
                    object_id=object_id,
                    object_type=meta.get(MENU_OBJECT_KEY) or "",
                )
            )
        return records
