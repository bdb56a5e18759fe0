import gzip

from kaiki.gcs import GcsLocation, build_gcs_key, gcs_report_url


def test_build_gcs_key_with_prefix():
    assert build_gcs_key("my-prefix", "abc123", "screenshot.png") == "my-prefix/abc123/screenshot.png"


def test_build_gcs_key_no_prefix():
    assert build_gcs_key(None, "abc123", "screenshot.png") == "abc123/screenshot.png"


def test_build_gcs_key_empty_prefix():
    assert build_gcs_key("", "abc123", "screenshot.png") == "abc123/screenshot.png"


def test_build_gcs_key_nested_path():
    assert build_gcs_key("prefix", "key1", "subdir/file.png") == "prefix/key1/subdir/file.png"


def test_gcs_report_url_with_prefix():
    url = gcs_report_url("my-bucket", "my-prefix", "abc123")
    assert url == "https://storage.googleapis.com/my-bucket/my-prefix/abc123/index.html"


def test_gcs_report_url_no_prefix():
    assert gcs_report_url("my-bucket", None, "abc123") == "https://storage.googleapis.com/my-bucket/abc123/index.html"


def test_gcs_report_url_empty_prefix():
    assert gcs_report_url("my-bucket", "", "abc123") == "https://storage.googleapis.com/my-bucket/abc123/index.html"


def test_location_build_key_and_url():
    location = GcsLocation(bucket_name="my-bucket", path_prefix="pre")
    assert location.build_key("k", "x/y.png") == "pre/k/x/y.png"
    assert location.build_key("k", "") == "pre/k/"
    assert location.report_url("k") == "https://storage.googleapis.com/my-bucket/pre/k/index.html"


def test_location_uploads(tmp_path):
    (tmp_path / "index.html").write_text("<html></html>", encoding="utf-8")
    (tmp_path / "diff").mkdir()
    (tmp_path / "diff" / "a.png").write_bytes(b"\x89PNG")
    (tmp_path / "readme.md").write_text("ignored", encoding="utf-8")

    location = GcsLocation(bucket_name="bucket")
    items = {item.relative_path: item for item in location.uploads("abc", tmp_path)}

    assert sorted(items) == ["diff/a.png", "index.html"]
    assert items["index.html"].key == "abc/index.html"
    assert items["diff/a.png"].key == "abc/diff/a.png"
    assert items["index.html"].content_type == "text/html"
    assert gzip.decompress(items["diff/a.png"].body) == b"\x89PNG"
    assert gzip.decompress(items["index.html"].body) == b"<html></html>"