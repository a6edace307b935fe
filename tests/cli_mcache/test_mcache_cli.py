"""Tests for the mcache command line interface."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from modcache.cli.main import cli
from modcache.hashing import source_code_hash

URL = "http://localhost:4545/testdata/a.ts"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def root(tmp_path):
    return tmp_path / "cache"


class TestInfo:
    def test_prints_directories(self, runner, root):
        result = runner.invoke(cli, ["info", "--root", str(root)])

        assert result.exit_code == 0
        assert f"gen:  {root / 'gen'}" in result.output
        assert f"deps: {root / 'deps'}" in result.output
        assert (root / "gen").is_dir()


class TestResolve:
    def test_local(self, runner, root):
        result = runner.invoke(
            cli,
            ["resolve", "./b.ts", "--containing-file", "/repo/a.ts", "--root", str(root)],
        )

        assert result.exit_code == 0
        assert "kind:        path" in result.output
        assert "/repo/b.ts" in result.output

    def test_url(self, runner, root):
        result = runner.invoke(cli, ["resolve", URL, "--root", str(root)])

        assert result.exit_code == 0
        assert "kind:        url" in result.output
        assert str(root / "deps" / "localhost" / "testdata" / "a.ts") in result.output

    def test_bad_containing_file_exits_1(self, runner, root):
        result = runner.invoke(
            cli, ["resolve", "b.ts", "--containing-file", "a.ts", "--root", str(root)]
        )
        assert result.exit_code == 1


class TestFetch:
    def test_local_module(self, runner, root, tmp_path):
        module = tmp_path / "main.ts"
        module.write_text("console.log(1);", encoding="utf-8")

        result = runner.invoke(cli, ["fetch", str(module), "--root", str(root)])

        assert result.exit_code == 0
        assert f"filename:    {module}" in result.output
        assert "cached:      no" in result.output

    def test_source_flag_prints_source(self, runner, root, tmp_path):
        module = tmp_path / "main.ts"
        module.write_text("console.log(1);", encoding="utf-8")

        result = runner.invoke(
            cli, ["fetch", str(module), "--source", "--root", str(root)]
        )

        assert result.exit_code == 0
        assert result.output == "console.log(1);"

    def test_remote_module_uses_requests(self, runner, root):
        with patch("modcache.fetch.requests.get") as mock_get:
            mock_get.return_value.content = b"export {};"
            result = runner.invoke(cli, ["fetch", URL, "--root", str(root)])

        assert result.exit_code == 0
        assert mock_get.call_args[0][0] == URL
        mirror = root / "deps" / "localhost" / "testdata" / "a.ts"
        assert mirror.read_text(encoding="utf-8") == "export {};"

    def test_missing_module_exits_1(self, runner, root, tmp_path):
        result = runner.invoke(
            cli, ["fetch", str(tmp_path / "missing.ts"), "--root", str(root)]
        )
        assert result.exit_code == 1


class TestHash:
    def test_prints_key_and_slot(self, runner, root, tmp_path):
        source = tmp_path / "src.ts"
        source.write_text("1+2", encoding="utf-8")

        result = runner.invoke(
            cli, ["hash", "hello.ts", str(source), "--root", str(root)]
        )

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "a3e29aece8d35a19bf9da2bb1c086af71fb36ed5"
        assert lines[1] == str(root / "gen" / f"{lines[0]}.js")

    def test_non_utf8_source_exits_1(self, runner, root, tmp_path):
        source = tmp_path / "src.ts"
        source.write_bytes(b"\xff\xfe1+2")

        result = runner.invoke(
            cli, ["hash", "hello.ts", str(source), "--root", str(root)]
        )

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)


class TestCacheCommands:
    def test_store_then_fetch_reports_cached(self, runner, root, tmp_path):
        module = tmp_path / "hello.ts"
        module.write_text("1+2", encoding="utf-8")
        output = tmp_path / "hello.js"
        output.write_text("compiled", encoding="utf-8")

        stored = runner.invoke(
            cli,
            ["cache", "store", str(module), str(module), str(output), "--root", str(root)],
        )
        fetched = runner.invoke(cli, ["fetch", str(module), "--root", str(root)])

        assert stored.exit_code == 0
        slot = root / "gen" / f"{source_code_hash(str(module), '1+2')}.js"
        assert slot.read_text(encoding="utf-8") == "compiled"
        assert "cached:      yes" in fetched.output

    def test_list_mirrored(self, runner, root):
        mirror = root / "deps" / "example.com" / "mod.ts"
        mirror.parent.mkdir(parents=True)
        mirror.write_text("x", encoding="utf-8")

        result = runner.invoke(cli, ["cache", "list", "--root", str(root)])

        assert result.exit_code == 0
        assert "http://example.com/mod.ts\t1\texample.com/mod.ts" in result.output

    def test_store_non_utf8_output_exits_1(self, runner, root, tmp_path):
        module = tmp_path / "hello.ts"
        module.write_text("1+2", encoding="utf-8")
        output = tmp_path / "hello.js"
        output.write_bytes(b"\xc3\x28")

        result = runner.invoke(
            cli,
            ["cache", "store", str(module), str(module), str(output), "--root", str(root)],
        )

        assert result.exit_code == 1
        assert list((root / "gen").glob("*.js")) == []
