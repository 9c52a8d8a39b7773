import pytest

from steply.value import is_empty


@pytest.mark.parametrize("value", [None, "", [], {}])
def test_empty_values(value):
    assert is_empty(value) is True


@pytest.mark.parametrize("value", ["text", ["a"], {"k": "v"}, True, False, 0, 42])
def test_non_empty_values(value):
    assert is_empty(value) is False


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        is_empty(3.5)