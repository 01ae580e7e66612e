"""
Tests for the MongoDB workspace repository

Covers member set semantics, page index queries and the
"invalid id means None" contract.
"""
import pytest
from bson import ObjectId

from notion_clone.core.models.workspace import PageEntry, Workspace


def _entry(page_id, reference, path=None, title="page"):
    return PageEntry(page_id=page_id, reference=reference, path=path, icon="1F575", title=title)


class TestCreateAndFetch:
    """Tests for create / get_by_id / delete"""

    @pytest.mark.asyncio
    async def test_create_returns_string_id(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", icon="X"))

        assert isinstance(workspace_id, str)
        assert ObjectId.is_valid(workspace_id)

        workspace = await workspace_repo.get_by_id(workspace_id)
        assert workspace.id == workspace_id
        assert workspace.name == "W"
        assert workspace.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_names_allowed(self, workspace_repo):
        first = await workspace_repo.create(Workspace(name="W"))
        second = await workspace_repo.create(Workspace(name="W"))
        assert first != second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-an-id", "", "123"])
    async def test_invalid_id_returns_none(self, workspace_repo, bad_id):
        assert await workspace_repo.get_by_id(bad_id) is None
        assert await workspace_repo.get_all_members(bad_id) is None
        assert await workspace_repo.get_all_root_pages(bad_id) is None
        assert await workspace_repo.get_children(bad_id, "page") is None

    @pytest.mark.asyncio
    async def test_missing_workspace_returns_none(self, workspace_repo):
        missing = str(ObjectId())
        assert await workspace_repo.get_by_id(missing) is None
        assert await workspace_repo.get_all_members(missing) is None

    @pytest.mark.asyncio
    async def test_delete(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))

        assert await workspace_repo.delete(workspace_id) is True
        assert await workspace_repo.get_by_id(workspace_id) is None
        assert await workspace_repo.delete(workspace_id) is False


class TestMembers:
    """Tests for the member set"""

    @pytest.mark.asyncio
    async def test_add_member_is_idempotent(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", members=["owner"]))

        await workspace_repo.add_member(workspace_id, "member-1")
        await workspace_repo.add_member(workspace_id, "member-1")

        members = await workspace_repo.get_all_members(workspace_id)
        assert members.count("member-1") == 1
        assert set(members) == {"owner", "member-1"}

    @pytest.mark.asyncio
    async def test_add_member_upserts_missing_workspace(self, workspace_repo):
        missing = str(ObjectId())

        workspace = await workspace_repo.add_member(missing, "member-1")

        assert workspace.id == missing
        assert workspace.members == ["member-1"]

    @pytest.mark.asyncio
    async def test_remove_member(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", members=["a", "b"]))

        workspace = await workspace_repo.remove_member(workspace_id, "a")

        assert workspace.members == ["b"]

    @pytest.mark.asyncio
    async def test_remove_unknown_member_is_noop(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", members=["a", "b"]))

        workspace = await workspace_repo.remove_member(workspace_id, "nobody")

        assert workspace.members == ["a", "b"]


class TestPageIndex:
    """Tests for page summaries stored in the workspace"""

    @pytest.mark.asyncio
    async def test_add_page_uses_set_semantics(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        entry = _entry("p1", "root-1")

        await workspace_repo.add_page(workspace_id, entry)
        workspace = await workspace_repo.add_page(workspace_id, entry)

        assert len(workspace.pages) == 1

    @pytest.mark.asyncio
    async def test_add_page_to_missing_workspace(self, workspace_repo):
        assert await workspace_repo.add_page(str(ObjectId()), _entry("p1", "root-1")) is None

    @pytest.mark.asyncio
    async def test_root_pages_only_include_null_paths(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("p1", "root-1"))
        await workspace_repo.add_page(workspace_id, _entry("p2", "child-2", path="/,root-1,/"))
        await workspace_repo.add_page(workspace_id, _entry("p3", "root-3"))

        roots = await workspace_repo.get_all_root_pages(workspace_id)

        assert [entry.page_id for entry in roots] == ["p1", "p3"]

    @pytest.mark.asyncio
    async def test_children_include_descendants_but_not_parent(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("parent", "foo-123"))
        await workspace_repo.add_page(workspace_id, _entry("child", "bar-456", path="/,foo-123,/"))
        await workspace_repo.add_page(
            workspace_id, _entry("grandchild", "baz-789", path="/,foo-123,/,bar-456,/")
        )
        await workspace_repo.add_page(workspace_id, _entry("other", "qux-000", path="/,zzz-999,/"))

        children = await workspace_repo.get_children(workspace_id, "parent")

        ids = [entry.page_id for entry in children]
        assert ids == ["child", "grandchild"]
        assert "parent" not in ids

    @pytest.mark.asyncio
    async def test_children_of_leaf_is_empty(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("leaf", "leaf-1"))

        assert await workspace_repo.get_children(workspace_id, "leaf") == []

    @pytest.mark.asyncio
    async def test_children_of_unknown_page_is_none(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))

        assert await workspace_repo.get_children(workspace_id, "missing") is None

    @pytest.mark.asyncio
    async def test_update_page_entry_keeps_position(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        for index in range(3):
            await workspace_repo.add_page(workspace_id, _entry(f"p{index}", f"page-{index}"))

        workspace = await workspace_repo.update_page_entry(
            workspace_id, "p1", {"title": "Renamed", "reference": "Renamed-1"}
        )

        assert [entry.page_id for entry in workspace.pages] == ["p0", "p1", "p2"]
        assert workspace.pages[1].title == "Renamed"
        assert workspace.pages[1].reference == "Renamed-1"
        assert workspace.pages[1].icon == "1F575"

    @pytest.mark.asyncio
    async def test_update_page_entry_only_touches_matching_entry(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("p0", "page-0", title="first"))
        await workspace_repo.add_page(workspace_id, _entry("p1", "page-1", title="second"))

        workspace = await workspace_repo.update_page_entry(workspace_id, "p1", {"icon": "1F4A1"})

        assert [(entry.title, entry.icon) for entry in workspace.pages] == [
            ("first", "1F575"),
            ("second", "1F4A1"),
        ]

    @pytest.mark.asyncio
    async def test_update_unknown_page_entry(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("p0", "page-0"))

        assert await workspace_repo.update_page_entry(workspace_id, "missing", {"title": "x"}) is None
        assert (await workspace_repo.get_by_id(workspace_id)).pages[0].title == "page"

    @pytest.mark.asyncio
    async def test_remove_page(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("p1", "page-1"))
        await workspace_repo.add_page(workspace_id, _entry("p2", "page-2"))

        workspace = await workspace_repo.remove_page(workspace_id, "p1")

        assert [entry.page_id for entry in workspace.pages] == ["p2"]


class TestUpdate:
    """Tests for update"""

    @pytest.mark.asyncio
    async def test_update_merges_fields_and_stamps(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", icon="X", members=["a"]))

        workspace = await workspace_repo.update(workspace_id, {"name": "Renamed"})

        assert workspace.name == "Renamed"
        assert workspace.icon == "X"
        assert workspace.members == ["a"]
        assert workspace.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_ignores_structural_fields(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W", members=["a"]))

        workspace = await workspace_repo.update(workspace_id, {"members": [], "pages": []})

        assert workspace.members == ["a"]

    @pytest.mark.asyncio
    async def test_update_upserts_missing_workspace(self, workspace_repo):
        missing = str(ObjectId())

        workspace = await workspace_repo.update(missing, {"name": "Back"})

        assert workspace.id == missing
        assert workspace.name == "Back"


class TestArrayRewrite:
    """Compare-and-set rewrites replay the edit when the array changed underneath"""

    @pytest.mark.asyncio
    async def test_concurrent_write_is_not_lost(self, workspace_repo):
        workspace_id = await workspace_repo.create(Workspace(name="W"))
        await workspace_repo.add_page(workspace_id, _entry("p0", "page-0"))
        calls = []

        def edit(pages):
            if not calls:
                # Another writer appends an entry between the read and the write.
                workspace_repo.collection.update_one(
                    {"_id": ObjectId(workspace_id)},
                    {"$push": {"pages": _entry("p1", "page-1").model_dump()}},
                )
            calls.append(len(pages))
            pages[0]["title"] = "Renamed"
            return pages

        await workspace_repo._rewrite_array(ObjectId(workspace_id), "pages", edit)

        workspace = await workspace_repo.get_by_id(workspace_id)
        assert calls == [1, 2]
        assert [(entry.page_id, entry.title) for entry in workspace.pages] == [
            ("p0", "Renamed"),
            ("p1", "page"),
        ]

    @pytest.mark.asyncio
    async def test_gives_up_under_constant_contention(self, workspace_repo):
        from notion_clone.core.errors import ConcurrentUpdateError

        workspace_id = await workspace_repo.create(Workspace(name="W", members=["a"]))

        def edit(members):
            workspace_repo.collection.update_one(
                {"_id": ObjectId(workspace_id)}, {"$push": {"members": "other"}}
            )
            return [*members, "b"]

        with pytest.raises(ConcurrentUpdateError):
            await workspace_repo._rewrite_array(ObjectId(workspace_id), "members", edit)
