"""Tests for ToolHandlers: launch presets and the error boundary."""

from __future__ import annotations

import json

import pytest

from react_mcp.errors import ValidationError


def _write_manifest(directory, data) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(json.dumps(data))


# ── create-app ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_app_launches_scaffold(handlers, supervisor, tmp_path):
    result = await handlers.create_app("my-app", template="typescript")
    assert "error" not in result
    assert result["projectDir"] == str(tmp_path / "my-app")
    assert "my-app" in result["message"]

    code = await supervisor.wait(result["processId"], timeout=10)
    status = supervisor.status(result["processId"])
    assert code == 0
    assert status.output == "scaffold my-app --template typescript\n"
    assert status.directory == str(tmp_path)


@pytest.mark.asyncio
async def test_create_app_in_explicit_directory(handlers, supervisor, tmp_path):
    target = tmp_path / "projects"
    target.mkdir()
    result = await handlers.create_app("site", directory=str(target))
    assert result["projectDir"] == str(target / "site")
    assert supervisor.status(result["processId"]).directory == str(target)


@pytest.mark.asyncio
async def test_create_app_rejects_existing_directory(handlers, supervisor, tmp_path):
    (tmp_path / "taken").mkdir()
    result = await handlers.create_app("taken")
    assert "already exists" in result["error"]
    assert result["error"].startswith("Error creating React app:")
    assert supervisor.list_all() == []


@pytest.mark.asyncio
async def test_create_app_missing_base_directory(handlers, supervisor, tmp_path):
    result = await handlers.create_app("app", directory=str(tmp_path / "missing"))
    assert "does not exist" in result["error"]
    assert supervisor.list_all() == []


@pytest.mark.asyncio
async def test_create_app_requires_name(handlers):
    with pytest.raises(ValidationError):
        await handlers.create_app("")


# ── run-app ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_run_app_without_manifest(handlers, supervisor, tmp_path):
    project = tmp_path / "empty"
    project.mkdir()
    before = len(supervisor.list_all())

    result = await handlers.run_app(str(project))

    assert "package.json not found" in result["error"]
    assert len(supervisor.list_all()) == before


@pytest.mark.asyncio
async def test_run_app_without_react_dependency(handlers, supervisor, tmp_path):
    project = tmp_path / "vue-app"
    _write_manifest(project, {"dependencies": {"vue": "^3.0.0"}})
    result = await handlers.run_app(str(project))
    assert "react dependency not found" in result["error"]
    assert supervisor.list_all() == []


@pytest.mark.asyncio
async def test_run_app_with_broken_manifest(handlers, supervisor, tmp_path):
    project = tmp_path / "broken"
    project.mkdir()
    (project / "package.json").write_text("{not json")
    result = await handlers.run_app(str(project))
    assert "not valid JSON" in result["error"]
    assert supervisor.list_all() == []


@pytest.mark.asyncio
async def test_run_app_missing_directory(handlers, tmp_path):
    result = await handlers.run_app(str(tmp_path / "nowhere"))
    assert "does not exist" in result["error"]


@pytest.mark.asyncio
async def test_run_app_starts_dev_server(handlers, supervisor, tmp_path):
    project = tmp_path / "react-app"
    _write_manifest(project, {"dependencies": {"react": "^18.2.0"}})

    result = await handlers.run_app(str(project))

    assert "error" not in result
    assert "http://localhost:3000" in result["note"]
    await supervisor.wait(result["processId"], timeout=10)
    status = supervisor.status(result["processId"])
    assert status.output == "dev-server started\n"
    assert status.directory == str(project)


# ── install-package ────────────────────────────────────────────


@pytest.mark.asyncio
async def test_install_package_requires_manifest(handlers, tmp_path):
    result = await handlers.install_package("left-pad", directory=str(tmp_path))
    assert "package.json not found" in result["error"]


@pytest.mark.asyncio
async def test_install_package_builds_command(handlers, supervisor, tmp_path):
    _write_manifest(tmp_path, {"name": "demo"})
    result = await handlers.install_package("left-pad@1.3.0", directory=str(tmp_path), dev=True)
    assert result["command"] == "echo install left-pad@1.3.0 --save-dev"
    assert supervisor.status(result["processId"]).command == result["command"]


# ── run-command ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_run_command_success(handlers, tmp_path):
    result = await handlers.run_command("echo hi", directory=str(tmp_path))
    assert result == {
        "command": "echo hi",
        "directory": str(tmp_path),
        "output": "hi\n",
        "stderr": "",
    }


@pytest.mark.asyncio
async def test_run_command_failure_reports_stderr(handlers, tmp_path):
    result = await handlers.run_command(
        "echo visible; echo problem >&2; exit 1", directory=str(tmp_path),
    )
    assert result["error"].startswith("Error executing command:")
    assert result["stderr"] == "problem\n"
    assert "output" not in result


@pytest.mark.asyncio
async def test_run_command_missing_directory(handlers, tmp_path):
    result = await handlers.run_command("echo hi", directory=str(tmp_path / "gone"))
    assert "does not exist" in result["error"]


# ── process lifecycle ──────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_process_output_unknown_id(handlers):
    result = await handlers.get_process_output("fabricated-id")
    assert result == {
        "error": "Error getting process output: Process with ID fabricated-id not found",
    }


@pytest.mark.asyncio
async def test_get_process_output_shape(handlers, supervisor, tmp_path):
    record = await supervisor.launch("echo hello", cwd=str(tmp_path))
    await supervisor.wait(record.id, timeout=10)

    result = await handlers.get_process_output(record.id)
    assert result["processId"] == record.id
    assert result["isRunning"] is False
    assert result["exitCode"] == 0
    assert result["output"] == "hello\n"
    assert result["errorOutput"] == ""
    assert result["runTime"].endswith(" seconds")


@pytest.mark.asyncio
async def test_stop_process_unknown_id(handlers):
    result = await handlers.stop_process("fabricated-id")
    assert "fabricated-id" in result["error"]


@pytest.mark.asyncio
async def test_stop_process_is_idempotent(handlers, supervisor, tmp_path):
    record = await supervisor.launch("echo done", cwd=str(tmp_path))
    await supervisor.wait(record.id, timeout=10)

    first = await handlers.stop_process(record.id)
    second = await handlers.stop_process(record.id)
    assert first == second
    assert first["message"] == f"Process {record.id} stopped"
    assert first["command"] == "echo done"


@pytest.mark.asyncio
async def test_stop_process_with_wait(handlers, supervisor, tmp_path):
    record = await supervisor.launch("sleep 30", cwd=str(tmp_path))
    result = await handlers.stop_process(record.id, wait=True)
    assert result["exitCode"] == -15
    assert supervisor.status(record.id).is_running is False


@pytest.mark.asyncio
async def test_list_processes(handlers, supervisor, tmp_path):
    assert await handlers.list_processes() == {"processes": [], "count": 0}

    await supervisor.launch("echo a", cwd=str(tmp_path))
    await supervisor.launch("sleep 30", cwd=str(tmp_path))
    result = await handlers.list_processes()

    assert result["count"] == 2
    assert [p["processId"] for p in result["processes"]] == ["proc-1", "proc-2"]
    assert "output" not in result["processes"][0]


# ── files ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_edit_then_read_file(handlers, tmp_path):
    path = tmp_path / "src" / "App.js"
    written = await handlers.edit_file(str(path), "export default () => 'ü';\n")
    assert written["size"] == len("export default () => 'ü';\n".encode("utf-8"))
    assert written["message"] == f"File {path} updated successfully"

    read = await handlers.read_file(str(path))
    assert read["content"] == "export default () => 'ü';\n"
    assert read["size"] == written["size"]


@pytest.mark.asyncio
async def test_read_missing_file(handlers, tmp_path):
    result = await handlers.read_file(str(tmp_path / "missing.txt"))
    assert result["error"].startswith("Error reading file:")
    assert "does not exist" in result["error"]


@pytest.mark.asyncio
async def test_edit_file_allows_empty_content(handlers, tmp_path):
    result = await handlers.edit_file(str(tmp_path / "empty.txt"), "")
    assert result["size"] == 0
