"""Tags — the classic tags-and-items tutorial app on sprig.

Demonstrates:
1. Named path segments (``/tags/:tag_id/items/:id``)
2. Registration order as precedence (``/tags/new`` before ``/tags/:id``)
3. Body templates composed inside ``views/layout.html``
4. Models cataloged by the app's in-memory registry
5. ``_method`` override so an HTML form can PATCH

Run:
    pip install 'sprig-mvc[server]'
    sprig run app:app
"""

from dataclasses import dataclass, field
from itertools import count
from pathlib import Path

from sprig import ActionSet, App, AppConfig, Render

VIEWS_DIR = Path(__file__).parent / "views"

app = App(AppConfig(template_dir=VIEWS_DIR))
registry = app.registry

_tag_ids = count(1)
_item_ids = count(1)

# ---------------------------------------------------------------------------
# Models — every construction lands in the app's registry
# ---------------------------------------------------------------------------


@registry.model
@dataclass
class Tag:
    name: str
    id: int = field(default_factory=lambda: next(_tag_ids))


@registry.model
@dataclass
class Item:
    name: str
    tag_id: int
    notes_html: str = ""
    id: int = field(default_factory=lambda: next(_item_ids))


# ---------------------------------------------------------------------------
# Tag actions
# ---------------------------------------------------------------------------

tags = ActionSet("tags")


@tags.get("/tags")
def index(params, raw_input):
    return Render("tags/index.html", title="Tags", tags=registry.all(Tag))


# Must come before /tags/:id, which would otherwise capture "new"
@tags.get("/tags/new")
def new(params, raw_input):
    return Render("tags/new.html", title="New tag", name="", error=None)


@tags.post("/tags")
def create(params, raw_input):
    name = str(raw_input.get("name", "")).strip()
    if not name:
        return Render("tags/new.html", title="New tag", name=name, error="Name can't be blank")
    tag = Tag(name)
    return Render("tags/show.html", title=tag.name, tag=tag)


@tags.get("/tags/:id")
def show(params, raw_input):
    tag = registry.get(Tag, id=params["id"])
    return Render("tags/show.html", title=tag.name, tag=tag)


@tags.patch("/tags/:id")
def update(params, raw_input):
    tag = registry.get(Tag, id=params["id"])
    tag.name = str(raw_input.get("name", tag.name))
    return Render("tags/show.html", title=tag.name, tag=tag)


# ---------------------------------------------------------------------------
# Item actions — nested under a tag
# ---------------------------------------------------------------------------

items = ActionSet("items")


@items.get("/items")
def tag_items(params, raw_input):
    tag = registry.get(Tag, id=params["tag_id"])
    found = [item for item in registry.all(Item) if item.tag_id == tag.id]
    return Render("items/index.html", title=f"Items · {tag.name}", tag=tag, items=found)


@items.get("/items/:id")
def show_item(params, raw_input):
    tag = registry.get(Tag, id=params["tag_id"])
    item = registry.get(Item, id=params["id"], tag_id=tag.id)
    return Render("items/show.html", title=item.name, tag=tag, item=item)


app.include(tags)
app.include(items, prefix="/tags/:tag_id")


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_python = Tag("python")
_web = Tag("web")
Item("sprig", tag_id=_python.id, notes_html="<em>tiny</em> MVC")
Item("routing notes", tag_id=_web.id)


if __name__ == "__main__":
    app.run()
