import os
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'loadchain'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_loadchain_caches
from loadchain.core.context import BuildContext
from loadchain.core.resolve import CallableLoaderResolver


@pytest.fixture(autouse=True)
def _reset_loadchain_state(monkeypatch: pytest.MonkeyPatch):
    """Fresh caches and no LOADCHAIN_* env leakage for each test."""
    for key in list(os.environ):
        if key.startswith("LOADCHAIN_"):
            monkeypatch.delenv(key, raising=False)
    reset_loadchain_caches()
    yield
    reset_loadchain_caches()


@pytest.fixture
def isolated_project_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated project root with an empty ``.loadchain/config`` directory."""
    monkeypatch.setenv("LOADCHAIN_PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".loadchain" / "config").mkdir(parents=True, exist_ok=True)
    return tmp_path


class SequentialIdents:
    """Deterministic ident generator: ident0000, ident0001, ..."""

    def __init__(self) -> None:
        self.calls: List[int] = []

    def __call__(self, length: int) -> str:
        self.calls.append(length)
        return f"ident{len(self.calls) - 1:0{length - 5}d}"


@pytest.fixture
def idents() -> SequentialIdents:
    return SequentialIdents()


@pytest.fixture
def resolved_paths() -> Dict[str, str]:
    """Requests seen by the fake resolver, mapped to the paths it returned."""
    return {}


@pytest.fixture
def fake_resolver(resolved_paths: Dict[str, str]) -> CallableLoaderResolver:
    def _resolve(request: str, context: Path) -> str:
        resolved = f"/abs/{request}"
        resolved_paths[request] = resolved
        return resolved

    return CallableLoaderResolver(_resolve)


@pytest.fixture
def make_context(
    tmp_path: Path, fake_resolver: CallableLoaderResolver, idents: SequentialIdents
) -> Callable[..., BuildContext]:
    def _make(**overrides) -> BuildContext:
        kwargs = {
            "context_dir": tmp_path,
            "resolver": fake_resolver,
            "ident_generator": idents,
        }
        kwargs.update(overrides)
        return BuildContext(**kwargs)

    return _make


@pytest.fixture
def build_context(make_context) -> BuildContext:
    return make_context()
