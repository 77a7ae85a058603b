"""Tests for the vsix-reader command."""

import json
import logging

import pytest

from vsix_reader.cli import show
from vsix_reader.config import VSIXReaderConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[logging]\nlevel = "WARNING"\n')
    return path


def test_human_output(valid_vsix, config_file, capsys):
    exit_code = show.main([str(valid_vsix), "--config", str(config_file)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Name:         hello-world" in out
    assert "Publisher:    acme" in out
    assert "Tags:         greeting, hello, demo" in out
    assert "MISMATCH" not in out


def test_json_output(valid_vsix, config_file, package_json, capsys):
    exit_code = show.main([str(valid_vsix), "--json", "--config", str(config_file)])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["manifest"] == package_json
    assert payload["xml_manifest"]["identity"]["id"] == "hello-world"
    assert payload["mismatches"] == []


def test_mismatch_fails(make_vsix, package_json, vsixmanifest, config_file, capsys):
    package_json["version"] = "9.9.9"
    archive = make_vsix({
        "extension/package.json": package_json,
        "extension.vsixmanifest": vsixmanifest,
    })

    exit_code = show.main([str(archive), "--config", str(config_file)])

    assert exit_code == 1
    assert "MISMATCH: package.json version '9.9.9'" in capsys.readouterr().out


def test_mismatch_check_can_be_disabled(make_vsix, package_json, vsixmanifest, config_file):
    package_json["version"] = "9.9.9"
    archive = make_vsix({
        "extension/package.json": package_json,
        "extension.vsixmanifest": vsixmanifest,
    })

    assert show.main([str(archive), "--no-consistency-check", "--config", str(config_file)]) == 0


def test_read_failure(tmp_path, config_file, capsys):
    exit_code = show.main([str(tmp_path / "missing.vsix"), "--config", str(config_file)])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_bad_config_file(valid_vsix, tmp_path, capsys):
    exit_code = show.main([str(valid_vsix), "--config", str(tmp_path / "nope.toml")])

    assert exit_code == 2
    assert "Config file not found" in capsys.readouterr().err


def test_show_command_uses_config_chunk_size(valid_vsix, monkeypatch):
    seen = {}
    real_read = show.read_vsix_package

    async def spy(path, chunk_size):
        seen["chunk_size"] = chunk_size
        return await real_read(path, chunk_size=chunk_size)

    monkeypatch.setattr(show, "read_vsix_package", spy)
    config = VSIXReaderConfig(reader={"chunk_size": 128})

    assert show.show_command(config, valid_vsix) == 0
    assert seen["chunk_size"] == 128


def test_help_documents_exit_codes(capsys):
    with pytest.raises(SystemExit) as excinfo:
        show.main(["--help"])

    out = capsys.readouterr().out
    assert excinfo.value.code == 0
    assert "exit codes:" in out
    assert "2  configuration could not be loaded" in out


def test_show_command_tags_records_with_package(valid_vsix, caplog):
    config = VSIXReaderConfig()

    with caplog.at_level(logging.DEBUG, logger="vsix_reader"):
        show.show_command(config, valid_vsix)

    records = [r for r in caplog.records if r.name.startswith("vsix_reader")]
    assert records
    assert all(r.context_fields == {"package": str(valid_vsix)} for r in records)
