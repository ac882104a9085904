import pytest


@pytest.fixture
def point_file(tmp_path):
    """Write the given lines to an input file and return its path as a string."""

    def _write(lines, name="points.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return str(path)

    return _write


@pytest.fixture
def output_path(tmp_path):
    return str(tmp_path / "labels.txt")
