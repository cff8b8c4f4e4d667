"""Tests for core utility functions."""

import pytest

from schema_templates.core.utils import (
    INDEX_MODULE,
    camel_case,
    ensure_dir,
    kebab_case,
    parse_token,
    token_to_module,
)


class TestEnsureDir:
    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        ensure_dir(target)
        assert target.is_dir()

    def test_idempotent(self, tmp_path):
        ensure_dir(tmp_path / "x")
        ensure_dir(tmp_path / "x")
        assert (tmp_path / "x").is_dir()

    def test_fails_on_file(self, tmp_path):
        (tmp_path / "file").write_text("")
        with pytest.raises(OSError):
            ensure_dir(tmp_path / "file")


class TestParseToken:
    def test_three_segments(self):
        assert parse_token("aws:s3/bucket:Bucket") == ("aws", "s3/bucket", "Bucket")

    def test_empty_module(self):
        assert parse_token("random::RandomId") == ("random", "", "RandomId")

    @pytest.mark.parametrize("token", ["aws:Bucket", "a:b:c:d", ":mod:Name", "pkg:mod:", ""])
    def test_invalid_tokens(self, token):
        with pytest.raises(ValueError, match="invalid token|token must"):
            parse_token(token)

    def test_non_string(self):
        with pytest.raises(ValueError, match="token must be a string"):
            parse_token(None)


class TestTokenToModule:
    @pytest.mark.parametrize(
        "token,module_format,expected",
        [
            ("aws:s3/bucket:Bucket", "(.*)(?:/[^/]*)", "s3"),
            ("aws:index/provider:Provider", "(.*)(?:/[^/]*)", INDEX_MODULE),
            ("demo:compute:Instance", None, "compute"),
            ("demo::Root", None, INDEX_MODULE),
            ("demo:index:Root", None, INDEX_MODULE),
            ("pulumi:providers:aws", None, INDEX_MODULE),
            ("demo:net/v2:Router", None, "net/v2"),
        ],
    )
    def test_modules(self, token, module_format, expected):
        assert token_to_module(token, module_format) == expected

    def test_format_without_match_uses_segment(self):
        assert token_to_module("demo:compute:Instance", "^x(.*)") == "compute"


class TestCasing:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Bucket", "bucket"),
            ("BucketObjectV2", "bucket-object-v2"),
            ("VPCEndpoint", "vpc-endpoint"),
            ("getBucket", "get-bucket"),
            ("Already_Snake", "already-snake"),
        ],
    )
    def test_kebab_case(self, name, expected):
        assert kebab_case(name) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Bucket", "bucket"),
            ("VPCEndpoint", "vpcEndpoint"),
            ("ID", "id"),
            ("bucket", "bucket"),
            ("S3Bucket", "s3Bucket"),
        ],
    )
    def test_camel_case(self, name, expected):
        assert camel_case(name) == expected
