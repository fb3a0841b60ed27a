import pytest


@pytest.fixture
def write_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path."""
    def _write(name: str, data: bytes):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write
