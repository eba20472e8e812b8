import pytest

from apigen.http_method import HttpMethod


@pytest.mark.parametrize("method", list(HttpMethod))
def test_round_trip_through_string(method):
    assert HttpMethod.parse(str(method)) is method


def test_parse_is_case_insensitive():
    assert HttpMethod.parse("PosT") is HttpMethod.POST
    assert HttpMethod.parse("get") is HttpMethod.GET
    assert HttpMethod.parse("dElEtE") is HttpMethod.DELETE


def test_renders_as_upper_case_name():
    assert str(HttpMethod.parse("patch")) == "PATCH"
    assert f"{HttpMethod.parse('put')}" == "PUT"


def test_parse_accepts_member():
    assert HttpMethod.parse(HttpMethod.PUT) is HttpMethod.PUT


def test_rejects_unknown_method():
    with pytest.raises(ValueError, match="INVALID_METHOD"):
        HttpMethod.parse("INVALID_METHOD")


def test_rejects_non_string():
    with pytest.raises(ValueError):
        HttpMethod.parse(42)