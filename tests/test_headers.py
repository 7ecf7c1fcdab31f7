import pytest

from freshness import Headers, has_no_cache_directive, normalize_etag, parse_etag_list


class TestHeaders:
    def test_case_insensitive_lookup(self):
        headers = Headers({"ETag": '"foo"'})
        assert headers["etag"] == '"foo"'
        assert headers.get("ETAG") == '"foo"'
        assert "Etag" in headers

    def test_absent_header_is_none(self):
        headers = Headers({"Cache-Control": ""})
        assert headers.get("ETag") is None
        assert headers.get("Cache-Control") == ""

    def test_multiple_values_are_folded(self):
        headers = Headers({"If-None-Match": ['"foo"', '"bar"']})
        assert headers["if-none-match"] == '"foo", "bar"'
        assert headers.get_list("If-None-Match") == ['"foo"', '"bar"']

    def test_from_raw_asgi_pairs(self):
        headers = Headers(
            [
                (b"ETag", b'"foo"'),
                (b"etag", b'"bar"'),
                (b"last-modified", b"Sat, 01 Jan 2000 00:00:00 GMT"),
            ]
        )
        assert headers["ETag"] == '"foo", "bar"'
        assert headers["Last-Modified"] == "Sat, 01 Jan 2000 00:00:00 GMT"
        assert len(headers) == 2

    def test_setitem_appends(self):
        headers = Headers()
        headers["Cache-Control"] = "no-cache"
        headers["cache-control"] = "no-store"
        assert headers["Cache-Control"] == "no-cache, no-store"

    def test_delitem(self):
        headers = Headers({"ETag": '"foo"'})
        del headers["etag"]
        assert "ETag" not in headers
        with pytest.raises(KeyError):
            headers["ETag"]

    def test_equality(self):
        assert Headers({"ETag": '"foo"'}) == Headers([("etag", '"foo"')])
        assert Headers({"ETag": '"foo"'}) != {"etag": '"foo"'}

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Headers({"ETag": '"foo"'}))

    def test_source_mapping_is_copied(self):
        source = {"If-None-Match": ['"foo"']}
        headers = Headers(source)
        headers["If-None-Match"] = '"bar"'
        assert source == {"If-None-Match": ['"foo"']}


@pytest.mark.parametrize(
    "etag, expected",
    [
        ('"foo"', "foo"),
        ('W/"foo"', "foo"),
        (' W/"foo" ', "foo"),
        ("foo", "foo"),
        ("*", "*"),
        ('""', ""),
    ],
)
def test_normalize_etag(etag, expected):
    assert normalize_etag(etag) == expected


def test_parse_etag_list():
    assert parse_etag_list(' "bar" , W/"foo",baz') == ["bar", "foo", "baz"]


def test_parse_etag_list_keeps_wildcard_token():
    assert parse_etag_list('*, "bar"') == ["*", "bar"]


@pytest.mark.parametrize(
    "cache_control",
    ["no-cache", " no-cache", "no-cache ", "max-age=0, no-cache", "no-cache,no-store", "public,  no-cache  , private"],
)
def test_has_no_cache_directive(cache_control):
    assert has_no_cache_directive(cache_control) is True


@pytest.mark.parametrize(
    "cache_control",
    ["", "no-store", "No-Cache", "no-cache-ext", "x-no-cache", 'private="no-cache"'],
)
def test_has_no_cache_directive_mismatch(cache_control):
    assert has_no_cache_directive(cache_control) is False
