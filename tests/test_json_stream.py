import io

import pytest

from json_objects_csv.errors import JsonParseError
from json_objects_csv.json_stream import iter_json_values


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"", []),
        (b"   \n\t ", []),
        (b"{}", [{}]),
        (b"{}{}{}", [{}, {}, {}]),
        (b'{"a": 1}\n{"b": [true, null]}  ', [{"a": 1}, {"b": [True, None]}]),
        (b'  {"a": 1.5}{"a": "x"}', [{"a": 1.5}, {"a": "x"}]),
    ],
)
def test_iter_json_values(data, expected) -> None:
    assert list(iter_json_values(io.BytesIO(data))) == expected


def test_iter_json_values_accepts_bytes() -> None:
    assert list(iter_json_values(b'{"a": 1} 2')) == [{"a": 1}, 2]


def test_floats_are_floats() -> None:
    (value,) = iter_json_values(b'{"a": 3.14}')
    assert isinstance(value["a"], float)


def test_duplicate_keys_last_wins() -> None:
    assert list(iter_json_values(b'{"a": 1, "a": 2}')) == [{"a": 2}]


def test_values_are_decoded_lazily() -> None:
    """Values before a syntax error are yielded before the error is raised."""
    values = iter_json_values(b'{"a": 1} {"b": ')
    assert next(values) == {"a": 1}
    with pytest.raises(JsonParseError):
        next(values)


@pytest.mark.parametrize("data", [b"{", b'{"a": }', b"[1, 2", b"nope"])
def test_malformed_json(data) -> None:
    with pytest.raises(JsonParseError):
        list(iter_json_values(data))


def test_integers_wider_than_64_bits() -> None:
    assert list(iter_json_values(b'{"a": 18446744073709551615} {"a": -123456789012345678901}')) == [
        {"a": 18446744073709551615},
        {"a": -123456789012345678901},
    ]


def test_invalid_utf8() -> None:
    with pytest.raises(JsonParseError):
        list(iter_json_values(b'{"a": "\xff\xfe"}'))
