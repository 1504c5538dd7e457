"""Tests for local repository endpoints."""

import pytest

API = "/api/mcp/project-hub"


async def _post(client, command, **body):
    return await client.post(f"{API}/{command}", json=body)


class TestInitAndBranches:
    """Test init_local_repository and branch commands."""

    @pytest.mark.asyncio
    async def test_init_is_idempotent(self, client, project):
        first = await _post(client, "init_local_repository", projectId="P1")
        second = await _post(client, "init_local_repository", projectId="P1")

        assert first.status_code == 200
        assert first.json() == {"message": "Local repository initialized successfully"}
        assert second.status_code == 200
        assert second.json() == {"message": "Repository already initialized"}

        branches = (await _post(client, "list_local_branches", projectId="P1")).json()
        assert len(branches) == 1
        assert branches[0]["name"] == "main"
        assert branches[0]["isActive"] is True
        assert branches[0]["currentCommitId"].startswith("commit_")

    @pytest.mark.asyncio
    async def test_init_unknown_project(self, client):
        response = await _post(client, "init_local_repository", projectId="nope")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_and_switch_branch(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        created = await _post(client, "create_local_branch", projectId="P1", name="feature")
        assert created.status_code == 200
        assert created.json()["isActive"] is False

        switched = await _post(client, "switch_local_branch", projectId="P1", branchName="feature")
        assert switched.status_code == 200
        assert switched.json()["name"] == "feature"
        assert switched.json()["isActive"] is True

        branches = (await _post(client, "list_local_branches", projectId="P1")).json()
        assert [(b["name"], b["isActive"]) for b in branches] == [
            ("feature", True),
            ("main", False),
        ]

    @pytest.mark.asyncio
    async def test_duplicate_branch_conflict(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        response = await _post(client, "create_local_branch", projectId="P1", name="main")

        assert response.status_code == 409
        assert response.json() == {"detail": "Branch already exists"}

    @pytest.mark.asyncio
    async def test_create_branch_without_repository(self, client, project):
        response = await _post(client, "create_local_branch", projectId="P1", name="feature")

        assert response.status_code == 400
        assert response.json() == {"detail": "No active branch found"}

    @pytest.mark.asyncio
    async def test_switch_unknown_branch(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        response = await _post(client, "switch_local_branch", projectId="P1", branchName="ghost")

        assert response.status_code == 404
        assert response.json() == {"detail": "Branch not found"}


class TestCommits:
    """Test commit creation and history endpoints."""

    @pytest.mark.asyncio
    async def test_commit_flow(self, client, project, add_change):
        await _post(client, "init_local_repository", projectId="P1")
        await add_change(kind="add", description="new module")
        await add_change(kind="modify", description="tweak")

        pending = (await _post(client, "get_pending_changes", projectId="P1")).json()
        assert [c["description"] for c in pending] == ["tweak", "new module"]
        assert all(c["committed"] is False for c in pending)
        assert pending[0]["type"] == "modify"
        assert pending[0]["projectId"] == "P1"

        response = await _post(
            client,
            "create_local_commit",
            projectId="P1",
            message="first work",
            authorName="Ada",
            authorEmail="ada@example.com",
        )
        assert response.status_code == 200
        commit = response.json()
        assert commit["message"] == "first work"
        assert commit["authorName"] == "Ada"
        assert commit["pushedToRemote"] is False
        assert commit["parentCommitId"].startswith("commit_")
        assert sorted(c["type"] for c in commit["changes"]) == ["add", "modify"]

        assert (await _post(client, "get_pending_changes", projectId="P1")).json() == []

        history = (await _post(client, "get_local_commit_history", projectId="P1")).json()
        assert [c["message"] for c in history] == ["first work", "Initial commit"]
        assert history[0]["id"] == commit["id"]
        assert history[0]["parentCommitId"] == history[1]["id"]
        assert len(history[0]["changes"]) == 2
        assert history[1]["changes"] == []

        branches = (await _post(client, "list_local_branches", projectId="P1")).json()
        assert branches[0]["currentCommitId"] == commit["id"]

    @pytest.mark.asyncio
    async def test_nothing_to_commit(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        response = await _post(client, "create_local_commit", projectId="P1", message="empty")

        assert response.status_code == 400
        assert response.json() == {"detail": "No pending changes to commit"}

    @pytest.mark.asyncio
    async def test_commit_message_required(self, client, project):
        response = await _post(client, "create_local_commit", projectId="P1", message="")

        assert response.status_code == 422


class TestRestore:
    """Test restore endpoints."""

    @pytest.mark.asyncio
    async def test_restore_to_commit(self, client, project, add_change):
        await _post(client, "init_local_repository", projectId="P1")
        initial = (await _post(client, "list_local_branches", projectId="P1")).json()[0]
        await add_change()
        await _post(client, "create_local_commit", projectId="P1", message="work")

        response = await _post(
            client,
            "restore_to_local_commit",
            projectId="P1",
            commitId=initial["currentCommitId"],
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": f"Project restored to commit {initial['currentCommitId']}",
        }
        branches = (await _post(client, "list_local_branches", projectId="P1")).json()
        assert branches[0]["currentCommitId"] == initial["currentCommitId"]

    @pytest.mark.asyncio
    async def test_restore_to_missing_commit(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        response = await _post(
            client, "restore_to_local_commit", projectId="P1", commitId="commit_missing"
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Commit not found"}

    @pytest.mark.asyncio
    async def test_restore_to_branch(self, client, project, add_change):
        await _post(client, "init_local_repository", projectId="P1")
        await _post(client, "create_local_branch", projectId="P1", name="feature")
        await _post(client, "switch_local_branch", projectId="P1", branchName="feature")
        await add_change()
        feature_commit = (
            await _post(client, "create_local_commit", projectId="P1", message="feature work")
        ).json()
        await _post(client, "switch_local_branch", projectId="P1", branchName="main")

        response = await _post(
            client, "restore_to_local_branch", projectId="P1", branchName="feature"
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Project restored to branch feature"
        branches = (await _post(client, "list_local_branches", projectId="P1")).json()
        heads = {b["name"]: b["currentCommitId"] for b in branches}
        assert heads == {"main": feature_commit["id"], "feature": feature_commit["id"]}

    @pytest.mark.asyncio
    async def test_restore_to_missing_branch(self, client, project):
        await _post(client, "init_local_repository", projectId="P1")

        response = await _post(
            client, "restore_to_local_branch", projectId="P1", branchName="ghost"
        )

        assert response.status_code == 404
