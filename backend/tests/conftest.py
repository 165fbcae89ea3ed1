import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from wpquery.config import load_settings
from wpquery.services.query_service import QueryService

TEST_DATABASE_URL = "sqlite+aiosqlite://"
UPLOAD_DIRECTORY = "https://cdn.example.com/"

# ============================================================================
# Test Database Setup
# ============================================================================
# 1. sqlite+aiosqlite:// (in-memory) with StaticPool so every connection the
#    accessors open sees the same database
# 2. A fresh engine per test, so seeded rows never leak between tests
# 3. Tables are created from the service's own prefixed schema
# 4. Async tests run on anyio's pytest plugin (asyncio backend)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(name="settings")
def settings_fixture():
    return load_settings(database_url=TEST_DATABASE_URL, uploadDirectory=UPLOAD_DIRECTORY)


@pytest.fixture(name="engine")
async def engine_fixture(anyio_backend):
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    yield engine
    await engine.dispose()


@pytest.fixture(name="service")
async def service_fixture(settings, engine):
    """Query service over empty prefixed tables"""
    service = QueryService(settings, engine)
    async with engine.begin() as conn:
        await conn.run_sync(service.schema.metadata.create_all)
    return service


# ============================================================================
# Row factories (complete rows, so executemany sees one key set)
# ============================================================================


def post_row(id, post_name="", post_status="publish", post_type="post", post_title="", **kw):
    row = {
        "id": id,
        "post_author": 1,
        "post_date": None,
        "post_title": post_title,
        "post_content": "",
        "post_excerpt": "",
        "post_status": post_status,
        "post_type": post_type,
        "post_name": post_name,
        "post_parent": 0,
        "menu_order": 0,
        "guid": "",
    }
    row.update(kw)
    return row


def meta_row(meta_id, post_id, meta_key, meta_value):
    return {"meta_id": meta_id, "post_id": post_id, "meta_key": meta_key, "meta_value": meta_value}


def term_row(term_id, name, slug):
    return {"term_id": term_id, "name": name, "slug": slug, "term_group": 0}


def taxonomy_row(term_taxonomy_id, term_id, taxonomy, count=0, parent=0):
    return {
        "term_taxonomy_id": term_taxonomy_id,
        "term_id": term_id,
        "taxonomy": taxonomy,
        "description": "",
        "parent": parent,
        "count": count,
    }


def relationship_row(object_id, term_taxonomy_id, term_order=0):
    return {"object_id": object_id, "term_taxonomy_id": term_taxonomy_id, "term_order": term_order}


async def insert_rows(service: QueryService, table: str, rows):
    if not rows:
        return
    async with service.tables[table].engine.begin() as conn:
        await conn.execute(service.schema[table].insert(), rows)


def menu_meta(start_id, item_id, parent=0, item_type="custom", obj="custom", object_id=None, url=""):
    values = {
        "_menu_item_type": item_type,
        "_menu_item_menu_item_parent": str(parent),
        "_menu_item_object_id": str(object_id if object_id is not None else item_id),
        "_menu_item_object": obj,
        "_menu_item_url": url,
    }
    return [meta_row(start_id + i, item_id, key, value) for i, (key, value) in enumerate(values.items())]


SITE_POSTS = [
    post_row(1, "hello-world", post_title="Hello World"),
    post_row(2, "draft-post", post_status="draft", post_title="Draft"),
    post_row(3, "about", post_type="page", post_title="About"),
    post_row(4, "hero-image", post_status="inherit", post_type="attachment", post_title="Hero"),
    post_row(5, "second-post", post_title="Second"),
    post_row(6, "hello-world", post_status="draft", post_title="Hello Again"),
    post_row(7, "secret", post_status="draft", post_title="Secret"),
    # Main menu
    post_row(20, "home", post_type="nav_menu_item", post_title="Home", menu_order=1),
    post_row(21, "21", post_type="nav_menu_item", post_title="", menu_order=2),
    post_row(22, "team", post_type="nav_menu_item", post_title="Team", menu_order=2),
    post_row(23, "history", post_type="nav_menu_item", post_title="History", menu_order=1),
    post_row(24, "unsaved", post_status="draft", post_type="nav_menu_item", post_title="Unsaved"),
]

SITE_META = [
    meta_row(100, 1, "_thumbnail_id", "4"),
    meta_row(101, 4, "_wp_attached_file", "2024/05/hero.jpg"),
    meta_row(102, 1, "color", "blue"),
    meta_row(103, 1, "color", "red"),
    meta_row(104, 1, "subtitle", "Hi there"),
    meta_row(105, 999, "orphan", "nobody home"),
    meta_row(106, 5, "_thumbnail_id", "404"),
    meta_row(107, 3, "_thumbnail_id", "not-a-number"),
    *menu_meta(200, 20, url="/"),
    *menu_meta(210, 21, item_type="post_type", obj="page", object_id=3),
    *menu_meta(220, 22, parent=21, url="/about/team"),
    *menu_meta(230, 23, parent=21, url="/about/history"),
    *menu_meta(240, 24, url="/unsaved"),
]

SITE_TERMS = [
    term_row(1, "Main Menu", "main-menu"),
    term_row(2, "News", "news"),
    term_row(3, "Footer", "footer"),
    term_row(4, "Uncategorized", "uncategorized"),
]

SITE_TAXONOMY = [
    taxonomy_row(10, 1, "nav_menu", count=5),
    taxonomy_row(11, 2, "category", count=2),
    taxonomy_row(12, 3, "nav_menu"),
    taxonomy_row(13, 4, "category", count=1),
]

SITE_RELATIONSHIPS = [
    *[relationship_row(item_id, 10) for item_id in (20, 21, 22, 23, 24)],
    relationship_row(1, 11),
    relationship_row(1, 13),
    relationship_row(5, 11),
]


async def seed_site(service: QueryService):
    await insert_rows(service, "posts", SITE_POSTS)
    await insert_rows(service, "postmeta", SITE_META)
    await insert_rows(service, "terms", SITE_TERMS)
    await insert_rows(service, "term_taxonomy", SITE_TAXONOMY)
    await insert_rows(service, "term_relationships", SITE_RELATIONSHIPS)


@pytest.fixture(name="site")
async def site_fixture(service):
    """Query service over a small seeded site (posts, meta, menus, categories)"""
    await seed_site(service)
    return service
