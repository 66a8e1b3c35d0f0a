import pytest

from total.config import TotalConfig


@pytest.fixture
def config(tmp_path):
    cfg = TotalConfig(base_dir=str(tmp_path / ".total"))
    cfg.ensure_dirs()
    return cfg


@pytest.fixture
def friends_path(config):
    return config.friends_path


@pytest.fixture
def fixed_ip(monkeypatch):
    """Pin local IP discovery so identity creation is deterministic."""
    monkeypatch.setattr("total.identity.discover_local_ipv4", lambda: "192.168.1.20")
    return "192.168.1.20"


@pytest.fixture
def scripted():
    """Build a prompt/read_line stand-in that replays lines, then raises EOFError."""

    def make(*lines):
        it = iter(lines)
        prompts = []

        def read(prompt=""):
            prompts.append(prompt)
            try:
                return next(it)
            except StopIteration:
                raise EOFError

        read.prompts = prompts
        return read

    return make
