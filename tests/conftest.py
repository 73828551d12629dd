# tests/conftest.py
import pytest

from propositions.registry import VariableRegistry


@pytest.fixture
def registry() -> VariableRegistry:
    """Fresh registry for one test."""
    return VariableRegistry()


@pytest.fixture
def proposition_file(tmp_path):
    """
    Factory writing proposition lines to a temporary file.

    Usage:
        path = proposition_file(["[A]", "( [A] => [B] )", "[B]"])
    """
    def _write(lines, name="theory.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep a developer's PROPCHECK_* settings out of the tests."""
    monkeypatch.setenv("PROPCHECK_CONFIG", str(tmp_path / "no-such-config.yaml"))
    monkeypatch.delenv("PROPCHECK_STRATEGY", raising=False)
    monkeypatch.delenv("PROPCHECK_BATCH_SIZE", raising=False)
