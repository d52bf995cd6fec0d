import pytest


def _field_with(cells):
    """81-value field payload with the given {(row, col): player} filled in."""
    field = [0] * 81
    for (r, c), p in cells.items():
        field[r * 9 + c] = p
    return field


@pytest.fixture
def field_with():
    return _field_with
