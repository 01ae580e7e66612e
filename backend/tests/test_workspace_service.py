"""
Tests for workspace use cases: creation, membership and cascading deletes
"""
import pytest
from bson import ObjectId

from notion_clone.api.v1.schemas.workspace import WorkspaceUpdate
from notion_clone.core.errors import (
    ForbiddenError,
    PageNotFoundError,
    PermissionDeniedError,
    UserNotFoundError,
    WorkspaceNotFoundError,
)


class TestCreateWorkspace:
    """Tests for workspace creation"""

    @pytest.mark.asyncio
    async def test_creates_default_root_page(self, workspace_service, page_repo, make_user):
        user_id = await make_user()

        workspace_id = await workspace_service.create_workspace("any_name", "any_icon", user_id=user_id)

        workspace = await workspace_service.get_workspace(workspace_id, user_id=user_id)
        assert workspace.name == "any_name"
        assert workspace.icon == "any_icon"
        assert workspace.members == [user_id]
        assert len(workspace.pages) == 1

        entry = workspace.pages[0]
        assert entry.title == "notion clone project"
        assert entry.icon == "1F575"
        assert entry.path is None

        page = await page_repo.get_by_id(entry.page_id)
        assert page.reference == entry.reference
        assert page.workspace_id == workspace_id
        assert page.page_settings.font == "serif"
        assert page.page_settings.small_text is True
        assert page.page_settings.full_width is True
        assert page.page_settings.lock is False

    @pytest.mark.asyncio
    async def test_grants_creator_access(self, workspace_service, user_repo, make_user):
        user_id = await make_user()

        workspace_id = await workspace_service.create_workspace("any_name", "any_icon", user_id=user_id)

        access = await user_repo.get_workspaces(user_id)
        assert [entry.workspace_id for entry in access] == [workspace_id]
        assert access[0].favorites == []

    @pytest.mark.asyncio
    async def test_default_page_not_readable(
        self, workspace_service, workspace_repo, page_repo, make_user, monkeypatch
    ):
        user_id = await make_user()
        created = []
        create = page_repo.create

        async def record_create(page):
            created.append(page.workspace_id)
            return await create(page)

        async def missing(page_id):
            return None

        monkeypatch.setattr(page_repo, "create", record_create)
        monkeypatch.setattr(page_repo, "get_by_id", missing)

        with pytest.raises(ForbiddenError):
            await workspace_service.create_workspace("W", "X", user_id=user_id)

        workspace = await workspace_repo.get_by_id(created[0])
        assert workspace.pages == []


class TestMembership:
    """Tests for member checks and member management"""

    @pytest.fixture
    async def owned(self, workspace_service, make_user):
        owner_id = await make_user(email="owner@example.com")
        workspace_id = await workspace_service.create_workspace("shared", "icon", user_id=owner_id)
        return owner_id, workspace_id

    @pytest.mark.asyncio
    async def test_non_member_is_denied(self, workspace_service, make_user, owned):
        _, workspace_id = owned
        stranger_id = await make_user(email="stranger@example.com")

        with pytest.raises(PermissionDeniedError):
            await workspace_service.get_workspace(workspace_id, user_id=stranger_id)
        with pytest.raises(PermissionDeniedError):
            await workspace_service.get_root_pages(workspace_id, user_id=stranger_id)

    @pytest.mark.asyncio
    async def test_unknown_workspace(self, workspace_service, owned):
        owner_id, _ = owned

        with pytest.raises(WorkspaceNotFoundError):
            await workspace_service.get_members(str(ObjectId()), user_id=owner_id)
        with pytest.raises(WorkspaceNotFoundError):
            await workspace_service.get_members("not-an-id", user_id=owner_id)

    @pytest.mark.asyncio
    async def test_add_member_grants_access(self, workspace_service, user_repo, make_user, owned):
        owner_id, workspace_id = owned
        member_id = await make_user(email="member@example.com")

        await workspace_service.add_member(workspace_id, member_id, user_id=owner_id)
        await workspace_service.add_member(workspace_id, member_id, user_id=owner_id)

        assert await workspace_service.get_members(workspace_id, user_id=member_id) == [owner_id, member_id]
        member = await user_repo.get_by_id(member_id)
        assert [access.workspace_id for access in member.workspaces] == [workspace_id]

    @pytest.mark.asyncio
    async def test_add_unknown_member(self, workspace_service, owned):
        owner_id, workspace_id = owned

        with pytest.raises(UserNotFoundError):
            await workspace_service.add_member(workspace_id, str(ObjectId()), user_id=owner_id)

    @pytest.mark.asyncio
    async def test_remove_member_revokes_access(self, workspace_service, user_repo, make_user, owned):
        owner_id, workspace_id = owned
        member_id = await make_user(email="member@example.com")
        await workspace_service.add_member(workspace_id, member_id, user_id=owner_id)

        await workspace_service.remove_member(workspace_id, member_id, user_id=owner_id)

        assert await workspace_service.get_members(workspace_id, user_id=owner_id) == [owner_id]
        assert await user_repo.get_workspaces(member_id) == []
        with pytest.raises(PermissionDeniedError):
            await workspace_service.get_workspace(workspace_id, user_id=member_id)

    @pytest.mark.asyncio
    async def test_last_member_cannot_leave(self, workspace_service, user_repo, owned):
        owner_id, workspace_id = owned

        with pytest.raises(ForbiddenError):
            await workspace_service.remove_member(workspace_id, owner_id, user_id=owner_id)

        assert await workspace_service.get_members(workspace_id, user_id=owner_id) == [owner_id]
        assert [access.workspace_id for access in await user_repo.get_workspaces(owner_id)] == [workspace_id]

    @pytest.mark.asyncio
    async def test_remove_non_member_is_noop(self, workspace_service, owned):
        owner_id, workspace_id = owned

        await workspace_service.remove_member(workspace_id, str(ObjectId()), user_id=owner_id)

        assert await workspace_service.get_members(workspace_id, user_id=owner_id) == [owner_id]


class TestWorkspaceQueries:
    """Tests for updates and page listings"""

    @pytest.mark.asyncio
    async def test_update_keeps_members_and_pages(self, workspace_service, make_user):
        user_id = await make_user()
        workspace_id = await workspace_service.create_workspace("old", "icon", user_id=user_id)

        workspace = await workspace_service.update_workspace(
            workspace_id, WorkspaceUpdate(name="new"), user_id=user_id
        )

        assert workspace.name == "new"
        assert workspace.icon == "icon"
        assert workspace.members == [user_id]
        assert len(workspace.pages) == 1

    @pytest.mark.asyncio
    async def test_root_pages_and_children(self, workspace_service, page_service, make_user):
        from notion_clone.api.v1.schemas.page import PageCreate

        user_id = await make_user()
        workspace_id = await workspace_service.create_workspace("ws", "icon", user_id=user_id)
        parent_id = await page_service.create_page(workspace_id, PageCreate(title="Parent"), user_id=user_id)
        child_id = await page_service.create_page(
            workspace_id, PageCreate(title="Child", parent_page_id=parent_id), user_id=user_id
        )

        roots = await workspace_service.get_root_pages(workspace_id, user_id=user_id)
        children = await workspace_service.get_children(workspace_id, parent_id, user_id=user_id)

        assert [entry.title for entry in roots] == ["notion clone project", "Parent"]
        assert [entry.page_id for entry in children] == [child_id]

    @pytest.mark.asyncio
    async def test_children_of_unknown_page(self, workspace_service, make_user):
        user_id = await make_user()
        workspace_id = await workspace_service.create_workspace("ws", "icon", user_id=user_id)

        with pytest.raises(PageNotFoundError):
            await workspace_service.get_children(workspace_id, str(ObjectId()), user_id=user_id)


class TestDeleteWorkspace:
    """Tests for the workspace delete cascade"""

    @pytest.mark.asyncio
    async def test_delete_cascades(self, workspace_service, workspace_repo, page_repo, user_repo, make_user):
        owner_id = await make_user(email="owner@example.com")
        member_id = await make_user(email="member@example.com")
        workspace_id = await workspace_service.create_workspace("ws", "icon", user_id=owner_id)
        await workspace_service.add_member(workspace_id, member_id, user_id=owner_id)
        page_id = (await workspace_repo.get_by_id(workspace_id)).pages[0].page_id

        await workspace_service.delete_workspace(workspace_id, user_id=member_id)

        assert await workspace_repo.get_by_id(workspace_id) is None
        assert await page_repo.get_by_id(page_id) is None
        assert await user_repo.get_workspaces(owner_id) == []
        assert await user_repo.get_workspaces(member_id) == []
