"""
버킷 경계 파싱 단위 테스트
"""

import pytest

from nginx_request_exporter.core.buckets import DEFAULT_BUCKETS, parse_buckets
from nginx_request_exporter.core.errors import BucketConfigError


class TestParseBuckets:
    """parse_buckets 테스트"""

    def test_parse_in_order(self):
        assert parse_buckets(".005,.01,.025") == [0.005, 0.01, 0.025]

    def test_whitespace_is_trimmed(self):
        assert parse_buckets(" 0.1 , 1 ,10 ") == [0.1, 1.0, 10.0]

    def test_default_buckets(self):
        buckets = parse_buckets(DEFAULT_BUCKETS)

        assert buckets[0] == 0.005
        assert buckets[-1] == 10.0
        assert len(buckets) == 11

    def test_single_bucket(self):
        assert parse_buckets("1") == [1.0]

    @pytest.mark.parametrize("text", [
        ".005,abc,.025",
        "",
        "1,,2",
        "1,2,",
        "1,inf",
        "nan",
        "+Inf",
    ])
    def test_invalid_entries_fail(self, text):
        with pytest.raises(BucketConfigError):
            parse_buckets(text)

    @pytest.mark.parametrize("text", ["1,1", "2,1", "0.1,0.5,0.3"])
    def test_non_increasing_fails(self, text):
        with pytest.raises(BucketConfigError, match="strictly increasing"):
            parse_buckets(text)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_buckets("x")
