import pytest

from builders import LogDir


@pytest.fixture
def logs(tmp_path):
    path = tmp_path / "Logs"
    path.mkdir()
    return LogDir(path)
