import logging

import pytest

from wrappy.cli import EXIT_INVALID, EXIT_OK, buildParser, main
from wrappy.containers.container import loadFromDirectory
from wrappy.core.logging import getLogContext


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    yield
    root.handlers[:] = saved[1]
    root.setLevel(saved[0])


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        buildParser().parse_args([])


def test_validate_ok(make_container_dir, capsys):
    root = make_container_dir("app")
    assert main(["validate", "--path", str(root)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Container validation successful!" in out
    assert "Container 'app' (v1.0.0) is valid" in out
    assert getLogContext() is None


def test_validate_verbose_details(make_container_dir, manifest_doc, capsys):
    doc = manifest_doc(dependencies=[{"name": "lib", "version": "1.0.0", "optional": True}])
    root = make_container_dir("app", doc)
    assert main(["validate", "-p", str(root), "-v"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Validating container at:" in out
    assert "Name: app" in out
    assert "default: scripts/default.sh" in out
    assert "lib: 1.0.0 (optional)" in out


def test_validate_uses_cwd(make_container_dir, monkeypatch, capsys):
    root = make_container_dir("app")
    monkeypatch.chdir(root)
    assert main(["validate"]) == EXIT_OK


def test_validate_failure(make_container_dir, capsys):
    root = make_container_dir("app", skip=("scripts/default.sh",))
    assert main(["validate", "-p", str(root), "--verbose"]) == EXIT_INVALID
    err = capsys.readouterr().err
    assert "Container validation failed:" in err
    assert "Error kind: MissingDefaultScript" in err
    assert "Suggestion: Ensure the default script exists" in err


def test_validate_missing_path(tmp_path, capsys):
    assert main(["validate", "-p", str(tmp_path / "missing")]) == EXIT_INVALID
    assert "Path does not exist" in capsys.readouterr().err


def test_init_creates_loadable_container(tmp_path, capsys):
    code = main(["init", "demo", "-p", str(tmp_path), "--version", "2.0.1", "--author", "Someone"])
    assert code == EXIT_OK
    assert "Created container 'demo'" in capsys.readouterr().out

    container = loadFromDirectory(tmp_path / "demo")
    assert str(container.version) == "2.0.1"
    assert container.manifest.author == "Someone"


def test_init_rejects_bad_input(tmp_path, capsys):
    assert main(["init", "demo", "-p", str(tmp_path), "--version", "1.0"]) == EXIT_INVALID
    assert main(["init", "bad name", "-p", str(tmp_path)]) == EXIT_INVALID
    assert main(["init", "again", "-p", str(tmp_path)]) == EXIT_OK
    assert main(["init", "again", "-p", str(tmp_path)]) == EXIT_INVALID
    assert "Container creation failed" in capsys.readouterr().err


def test_check_deps_ok(tmp_path, make_container_dir, manifest_doc, capsys):
    make_container_dir("lib", manifest_doc(name="lib", version="1.3.0"))
    make_container_dir("app", manifest_doc(name="app", dependencies=[{"name": "lib", "version": "1.1.0"}]))
    assert main(["check-deps", "-r", str(tmp_path)]) == EXIT_OK
    assert "Dependencies OK for 2 container(s)" in capsys.readouterr().out


def test_check_deps_conflict(tmp_path, make_container_dir, manifest_doc, capsys):
    make_container_dir("lib", manifest_doc(name="lib", version="1.0.0"))
    make_container_dir("app", manifest_doc(name="app", dependencies=[{"name": "lib", "version": "2.0.0"}]))
    assert main(["check-deps", "-r", str(tmp_path), "-n", "app"]) == EXIT_INVALID
    assert "Dependency check failed" in capsys.readouterr().err


def test_check_deps_cycle(tmp_path, make_container_dir, manifest_doc, capsys):
    make_container_dir("a", manifest_doc(name="a", dependencies=[{"name": "b", "version": "1.0.0"}]))
    make_container_dir("b", manifest_doc(name="b", dependencies=[{"name": "a", "version": "1.0.0"}]))
    assert main(["check-deps", "-r", str(tmp_path)]) == EXIT_INVALID
    assert "Circular dependency detected" in capsys.readouterr().err


def test_check_deps_reports_undecodable_manifest(tmp_path, make_container_dir, manifest_doc, capsys):
    make_container_dir("good", manifest_doc(name="good"))
    bad = make_container_dir("bad", manifest_doc(name="bad"))
    (bad / "manifest.json").write_bytes(b'{"name": "bad\xff"}')
    assert main(["check-deps", "-r", str(tmp_path)]) == EXIT_OK
    captured = capsys.readouterr()
    assert f"Skipped {bad}" in captured.err
    assert "Dependencies OK for 1 container(s)" in captured.out
