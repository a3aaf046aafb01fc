"""Tests for the request tree manager."""

import json
from unittest.mock import AsyncMock

import pytest

from restspace.core.constants import HttpMethod
from restspace.core.fs_adapter import FileSystemAdapter
from restspace.core.rest_manager import RestManager
from restspace.db.schemas import FolderNode, RequestNode, TextBody

from conftest import write_request


def snapshot(root):
    """Relative paths of everything below ``root``."""
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


class TestScan:
    """Tests for get_requests()."""

    @pytest.mark.asyncio
    async def test_missing_root_is_created(self, rest, rest_root):
        assert not rest_root.exists()

        assert await rest.get_requests() == []
        assert rest_root.is_dir()

    @pytest.mark.asyncio
    async def test_scenario_folder_request_and_foreign_file(self, rest, rest_root):
        rest_root.mkdir()
        (rest_root / "folder1").mkdir()
        write_request(rest_root, "Login", "POST")
        (rest_root / "readme.txt").write_text("hello")

        nodes = await rest.get_requests()
        dumped = [n.model_dump(mode="json") for n in nodes]

        assert dumped == [
            {"name": "folder1", "path": str(rest_root / "folder1"), "method": None, "children": []},
            {"name": "Login.POST", "path": str(rest_root / "Login.POST"), "method": "POST", "children": None},
        ]

    @pytest.mark.asyncio
    async def test_recurses_into_folders(self, rest, populated_root):
        nodes = await rest.get_requests()

        users = nodes[0]
        assert isinstance(users, FolderNode)
        assert users.name == "Users"
        assert [c.name for c in users.children] == ["Admin", "List users.GET"]
        assert isinstance(users.children[0], FolderNode)
        assert users.children[0].children == []
        assert users.children[1].method == HttpMethod.GET

    @pytest.mark.asyncio
    async def test_one_node_per_request_file(self, rest, rest_root):
        rest_root.mkdir()
        for method in HttpMethod:
            write_request(rest_root, "Call", method.value)

        nodes = await rest.get_requests()

        assert len(nodes) == len(HttpMethod)
        for node in nodes:
            assert isinstance(node, RequestNode)
            assert node.name == f"Call.{node.method.value}"

    @pytest.mark.asyncio
    async def test_skips_unrecognised_entries(self, rest, rest_root):
        rest_root.mkdir()
        (rest_root / "lower.get").write_text("{}")
        (rest_root / ".GET").write_text("{}")
        (rest_root / "noextension").write_text("{}")
        (rest_root / "archive.tar.gz").write_text("")

        assert await rest.get_requests() == []

    @pytest.mark.asyncio
    async def test_last_extension_decides_method(self, rest, rest_root):
        rest_root.mkdir()
        write_request(rest_root, "v1.2 status", "GET")

        nodes = await rest.get_requests()

        assert [n.name for n in nodes] == ["v1.2 status.GET"]
        assert nodes[0].method == HttpMethod.GET

    @pytest.mark.asyncio
    async def test_folders_sort_before_requests(self, rest, rest_root):
        rest_root.mkdir()
        write_request(rest_root, "a", "GET")
        (rest_root / "z").mkdir()
        write_request(rest_root, "c", "POST")
        (rest_root / "b").mkdir()

        names = [n.name for n in await rest.get_requests()]

        assert names == ["b", "z", "a.GET", "c.POST"]

    @pytest.mark.asyncio
    async def test_mixed_case_names_sort_case_insensitively(self, rest, rest_root):
        rest_root.mkdir()
        for name in ("banana", "Apple", "cherry", "Banana2"):
            write_request(rest_root, name, "GET")
        (rest_root / "zeta").mkdir()
        (rest_root / "Alpha").mkdir()

        names = [n.name for n in await rest.get_requests()]

        assert names == ["Alpha", "zeta", "Apple.GET", "banana.GET", "Banana2.GET", "cherry.GET"]

    @pytest.mark.asyncio
    async def test_directory_named_like_request_is_a_folder(self, rest, rest_root):
        (rest_root / "odd.GET").mkdir(parents=True)

        nodes = await rest.get_requests()

        assert len(nodes) == 1
        assert isinstance(nodes[0], FolderNode)

    @pytest.mark.asyncio
    async def test_rescan_is_identical(self, rest, populated_root):
        first = await rest.get_requests()
        second = await rest.get_requests()

        assert first == second

    @pytest.mark.asyncio
    async def test_external_changes_visible_on_next_scan(self, rest, populated_root):
        await rest.get_requests()
        write_request(populated_root, "Added", "PUT")

        names = [n.name for n in await rest.get_requests()]

        assert "Added.PUT" in names


class TestAsTree:
    """Tests for get_as_tree()."""

    @pytest.mark.asyncio
    async def test_requests_have_no_children_key(self, rest, populated_root):
        elements = await rest.get_as_tree()
        dumped = [e.model_dump(exclude_none=True) for e in elements]

        assert dumped[0]["id"] == str(populated_root / "Users")
        assert dumped[0]["children"][0] == {"id": str(populated_root / "Users" / "Admin"), "name": "Admin", "children": []}
        assert dumped[1] == {"id": str(populated_root / "Login.POST"), "name": "Login.POST"}


class TestOpen:
    """Tests for open()."""

    @pytest.mark.asyncio
    async def test_missing_file_returns_none(self, rest, rest_root):
        assert await rest.open(str(rest_root / "Nope.GET")) is None

    @pytest.mark.asyncio
    async def test_valid_record(self, rest, rest_root):
        rest_root.mkdir()
        path = write_request(
            rest_root, "Login", "POST",
            url="https://example.com/login",
            headers=[{"key": "Accept", "value": "json"}, {"key": "Accept", "value": "xml"}],
            body={"text": "hello"},
        )

        entity = await rest.open(str(path))

        assert entity.name == "Login"
        assert entity.method == HttpMethod.POST
        assert entity.url == "https://example.com/login"
        assert [(h.key, h.value) for h in entity.headers] == [("Accept", "json"), ("Accept", "xml")]
        assert entity.body == TextBody(text="hello")
        assert entity.dirty is False

    @pytest.mark.asyncio
    async def test_corrupted_file_is_rebuilt(self, rest, rest_root):
        rest_root.mkdir()
        path = rest_root / "Foo.GET"
        path.write_text("{not json")

        entity = await rest.open(str(path))

        assert entity.name == "Foo"
        assert entity.method == HttpMethod.GET
        assert entity.url == ""
        assert entity.headers == []
        assert entity.body is None
        assert entity.response is None
        assert json.loads(path.read_text()) == entity.to_dict()

    @pytest.mark.asyncio
    async def test_foreign_json_is_rebuilt_from_filename(self, rest, rest_root):
        rest_root.mkdir()
        path = rest_root / "Upload.PUT"
        path.write_text(json.dumps({"hello": "world"}))

        entity = await rest.open(str(path))

        assert (entity.name, entity.method) == ("Upload", HttpMethod.PUT)
        assert json.loads(path.read_text())["method"] == "PUT"

    @pytest.mark.asyncio
    async def test_binary_content_is_rebuilt(self, rest, rest_root):
        rest_root.mkdir()
        path = rest_root / "Blob.POST"
        path.write_bytes(b"\xff\xfe\x00garbage")

        entity = await rest.open(str(path))

        assert (entity.name, entity.method) == ("Blob", HttpMethod.POST)
        assert json.loads(path.read_text())["name"] == "Blob"

    @pytest.mark.asyncio
    async def test_rebuild_defaults_for_unrecognised_name(self, rest, rest_root):
        rest_root.mkdir()
        path = rest_root / ".weird"
        path.write_text("")

        entity = await rest.open(str(path))

        assert entity.name == "New request"
        assert entity.method == HttpMethod.GET

    @pytest.mark.asyncio
    async def test_stale_stored_path_is_replaced(self, rest, rest_root):
        (rest_root / "moved").mkdir(parents=True)
        path = write_request(rest_root, "Login", "POST")
        target = rest_root / "moved" / "Login.POST"
        path.rename(target)

        entity = await rest.open(str(target))

        assert entity.path == str(target)


class TestCreate:
    """Tests for create()."""

    @pytest.mark.asyncio
    async def test_create_then_open_round_trip(self, rest):
        created = await rest.create("Login", HttpMethod.POST)
        opened = await rest.open(created.path)

        assert created.path.endswith("Login.POST")
        assert (opened.name, opened.method) == ("Login", HttpMethod.POST)
        assert (opened.url, opened.headers, opened.body, opened.response) == ("", [], None, None)

    @pytest.mark.asyncio
    async def test_create_accepts_method_string(self, rest, rest_root):
        entity = await rest.create("Ping", "HEAD")

        assert entity.method == HttpMethod.HEAD
        assert (rest_root / "Ping.HEAD").is_file()

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_method(self, rest):
        with pytest.raises(ValueError):
            await rest.create("Ping", "FETCH")

    @pytest.mark.asyncio
    async def test_create_folder_is_idempotent(self, rest, rest_root):
        assert await rest.create("Users") is None
        assert await rest.create("Users") is None

        assert (rest_root / "Users").is_dir()

    @pytest.mark.asyncio
    async def test_create_under_base_path(self, rest, rest_root):
        await rest.create("Users")
        entity = await rest.create("List", HttpMethod.GET, str(rest_root / "Users"))

        assert entity.path == str(rest_root / "Users" / "List.GET")

    @pytest.mark.asyncio
    async def test_create_overwrites_existing(self, rest, rest_root):
        rest_root.mkdir()
        write_request(rest_root, "Login", "POST", url="https://old")

        await rest.create("Login", HttpMethod.POST)

        assert json.loads((rest_root / "Login.POST").read_text())["url"] == ""


class TestCopyMove:
    """Tests for copy() and move()."""

    @pytest.mark.asyncio
    async def test_copy_into_folder(self, rest, populated_root):
        source = populated_root / "Login.POST"

        await rest.copy(str(source), str(populated_root / "Users"))

        assert source.exists()
        assert (populated_root / "Users" / "Login.POST").exists()

    @pytest.mark.asyncio
    async def test_copy_folder_tree(self, rest, populated_root):
        (populated_root / "Other").mkdir()

        await rest.copy(str(populated_root / "Users"), str(populated_root / "Other"))

        assert (populated_root / "Other" / "Users" / "List users.GET").exists()
        assert (populated_root / "Other" / "Users" / "Admin").is_dir()

    @pytest.mark.asyncio
    async def test_copy_collision_uses_target_name_suffix(self, rest, populated_root):
        users = populated_root / "Users"
        write_request(users, "Login", "POST", url="https://inside")
        source = populated_root / "Login.POST"

        await rest.copy(str(source), str(users))

        assert source.exists()
        copied = users / "Users - Copy"
        assert copied.is_file()
        assert copied.read_text() == source.read_text()
        assert json.loads((users / "Login.POST").read_text())["url"] == "https://inside"

    @pytest.mark.asyncio
    async def test_second_collision_reuses_suffixed_destination(self, rest, populated_root):
        users = populated_root / "Users"
        write_request(users, "Login", "POST")
        source = populated_root / "Login.POST"

        await rest.copy(str(source), str(users))
        await rest.copy(str(source), str(users))

        # No numbered suffixes: the second copy lands on the same destination
        assert sorted(p.name for p in users.iterdir()) == ["Admin", "List users.GET", "Login.POST", "Users - Copy"]

    @pytest.mark.asyncio
    async def test_move_into_folder(self, rest, populated_root):
        source = populated_root / "Logout.DELETE"

        await rest.move(str(source), str(populated_root / "Users"))

        assert not source.exists()
        assert (populated_root / "Users" / "Logout.DELETE").exists()

    @pytest.mark.asyncio
    async def test_move_collision_removes_original(self, rest, populated_root):
        users = populated_root / "Users"
        write_request(users, "Login", "POST")
        source = populated_root / "Login.POST"

        await rest.move(str(source), str(users))

        assert not source.exists()
        assert (users / "Users - Copy").is_file()

    @pytest.mark.asyncio
    async def test_missing_source_is_noop(self, rest, populated_root):
        before = snapshot(populated_root)

        await rest.copy(str(populated_root / "Ghost.GET"), str(populated_root / "Users"))
        await rest.move(str(populated_root / "Ghost.GET"), str(populated_root / "Users"))

        assert snapshot(populated_root) == before


class TestRename:
    """Tests for rename()."""

    @pytest.mark.asyncio
    async def test_rename_request_keeps_method(self, rest, populated_root):
        await rest.rename(str(populated_root / "Login.POST"), "Sign in", False)

        assert not (populated_root / "Login.POST").exists()
        assert (populated_root / "Sign in.POST").exists()

    @pytest.mark.asyncio
    async def test_rename_folder_in_place(self, rest, populated_root):
        await rest.rename(str(populated_root / "Users"), "Accounts", True)

        assert not (populated_root / "Users").exists()
        assert (populated_root / "Accounts" / "List users.GET").exists()

    @pytest.mark.asyncio
    async def test_rename_nested_folder_named_like_parent(self, rest, populated_root):
        nested = populated_root / "Users" / "Users"
        nested.mkdir()

        await rest.rename(str(nested), "Members", True)

        assert (populated_root / "Users" / "Members").is_dir()

    @pytest.mark.asyncio
    async def test_empty_name_or_missing_path_is_noop(self, rest, populated_root):
        before = snapshot(populated_root)

        await rest.rename(str(populated_root / "Login.POST"), "", False)
        await rest.rename(str(populated_root / "Ghost.GET"), "Other", False)

        assert snapshot(populated_root) == before


class TestDelete:
    """Tests for delete()."""

    @pytest.mark.asyncio
    async def test_delete_file(self, rest, populated_root):
        await rest.delete(str(populated_root / "Login.POST"))

        assert not (populated_root / "Login.POST").exists()

    @pytest.mark.asyncio
    async def test_delete_folder_recursively(self, rest, populated_root):
        await rest.delete(str(populated_root / "Users"))

        assert not (populated_root / "Users").exists()

    @pytest.mark.asyncio
    async def test_missing_path_is_noop(self, rest, populated_root):
        before = snapshot(populated_root)

        await rest.delete(str(populated_root / "Ghost"))

        assert snapshot(populated_root) == before


class TestFailurePropagation:
    """Filesystem errors reach the caller unchanged."""

    @pytest.mark.asyncio
    async def test_write_failure_propagates_from_create(self, rest_root):
        fs = FileSystemAdapter()
        fs.write_text_file = AsyncMock(side_effect=PermissionError("denied"))
        rest = RestManager(str(rest_root), fs)

        with pytest.raises(PermissionError):
            await rest.create("Login", HttpMethod.POST)

    @pytest.mark.asyncio
    async def test_rename_failure_propagates_from_move(self, populated_root):
        fs = FileSystemAdapter()
        fs.rename = AsyncMock(side_effect=OSError("disk full"))
        rest = RestManager(str(populated_root), fs)

        with pytest.raises(OSError, match="disk full"):
            await rest.move(str(populated_root / "Login.POST"), str(populated_root / "Users"))
