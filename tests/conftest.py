import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

from wrappy.app.settings import SETTINGS_ENV_VAR, loadSettings



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point settings at a file that does not exist so user config never leaks in."""
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "no-such-settings.json5"))
    loadSettings.cache_clear()
    yield
    loadSettings.cache_clear()



def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")



def base_manifest(name: str = "app", version: str = "1.0.0", **extra: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "name": name,
        "version": version,
        "scripts": {"default": "scripts/default.sh"},
    }
    doc.update(extra)
    return doc



@pytest.fixture()
def make_container_dir(tmp_path) -> Callable[..., Path]:
    """
    Builds a valid container directory under tmp_path and returns its path.

    `manifest` replaces the default document; `skip` lists relative paths
    that should NOT be created (e.g. "content", "config/environment.json").
    """
    def _make(
        dirName: str = "app",
        manifest: dict[str, Any] | None = None,
        *,
        skip: tuple[str, ...] = (),
    ) -> Path:
        root = tmp_path / dirName
        root.mkdir(parents=True, exist_ok=True)
        doc = manifest if manifest is not None else base_manifest(name=dirName)

        for sub in ("scripts", "content", "config"):
            if sub not in skip:
                (root / sub).mkdir(exist_ok=True)

        if "manifest.json" not in skip:
            write_json(root / "manifest.json", doc)

        for scriptPath in (doc.get("scripts") or {}).values():
            if not scriptPath or scriptPath in skip:
                continue
            target = root / scriptPath
            if target.parent.exists():
                target.write_text("#!/bin/sh\necho hi\n", encoding="utf-8")

        for rel in ("config/permissions.json", "config/environment.json"):
            if rel not in skip and (root / "config").is_dir():
                write_json(root / rel, {})
        return root

    return _make



@pytest.fixture()
def manifest_doc() -> Callable[..., dict[str, Any]]:
    return base_manifest
