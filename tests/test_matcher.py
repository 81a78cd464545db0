"""Path matcher tests."""

import pytest
from roadroute_core.routing.matcher import MatchResult, PathMatcher


class TestPathMatcher:
    """Test segment-wise path matching."""

    def test_exact_match(self):
        """Test literal pattern."""
        matcher = PathMatcher()
        result = matcher.match("/home", "/home")

        assert result.matched
        assert result.parameters == {}

    def test_literal_mismatch(self):
        """Test differing literals."""
        matcher = PathMatcher()

        assert not matcher.matches("/home", "/detail")

    def test_path_parameter(self):
        """Test named parameter binding."""
        matcher = PathMatcher()

        assert matcher.extract("/detail/:id", "/detail/123") == {"id": "123"}

    def test_multiple_parameters(self):
        """Test several parameters in one pattern."""
        matcher = PathMatcher()
        params = matcher.extract("/user/:userId/post/:postId", "/user/456/post/789")

        assert params == {"userId": "456", "postId": "789"}

    def test_parameter_binds_any_value(self):
        """Test parameters have no type constraint."""
        matcher = PathMatcher()

        assert matcher.extract("/detail/:id", "/detail/abc-%20.x") == {"id": "abc-%20.x"}

    def test_segment_count_must_match(self):
        """Test longer or shorter paths never match."""
        matcher = PathMatcher()

        assert not matcher.matches("/detail/:id", "/detail/123/extra")
        assert not matcher.matches("/detail/:id", "/detail")
        assert not matcher.matches("/detail", "/detail/123")

    @pytest.mark.parametrize(
        "pattern,path",
        [
            ("/detail/:id", "/detail/123"),
            ("/product/:productId/info", "/product/9/info"),
            ("/home", "/home"),
            ("/home", "/away"),
        ],
    )
    def test_trailing_slash_ignored(self, pattern, path):
        """Test one trailing slash never changes the outcome."""
        matcher = PathMatcher()
        expected = matcher.match(pattern, path)

        assert matcher.match(pattern, path + "/") == expected
        assert matcher.match(pattern + "/", path) == expected

    def test_root_path(self):
        """Test root is never stripped."""
        matcher = PathMatcher()

        assert matcher.matches("/", "/")
        assert not matcher.matches("/", "/home")
        assert not matcher.matches("/home", "/")

    def test_extract_returns_none_on_miss(self):
        """Test extract distinguishes miss from empty match."""
        matcher = PathMatcher()

        assert matcher.extract("/a/:b", "/c/d") is None
        assert matcher.extract("/a", "/a") == {}

    def test_param_names(self):
        """Test listing parameter names."""
        matcher = PathMatcher()

        assert matcher.param_names("/user/:userId/post/:postId") == ["userId", "postId"]

    def test_match_result_truthiness(self):
        """Test MatchResult in boolean context."""
        assert MatchResult(matched=True)
        assert not MatchResult(matched=False)

    def test_cache_is_reused(self):
        """Test repeated matches give the same answer after cache clear."""
        matcher = PathMatcher()
        first = matcher.match("/detail/:id", "/detail/1")
        matcher.clear_cache()

        assert matcher.match("/detail/:id", "/detail/1") == first

    def test_miss_results_are_independent(self):
        """Test a miss never shares parameters with later misses."""
        matcher = PathMatcher()
        first = matcher.match("/a", "/b")

        with pytest.raises(TypeError):
            first.parameters["stray"] = "x"

        assert matcher.match("/c", "/d").parameters == {}
        assert matcher.match("/c", "/d") is not first

    def test_extract_returns_mutable_copy(self):
        """Test extracted parameters belong to the caller."""
        matcher = PathMatcher()
        params = matcher.extract("/detail/:id", "/detail/1")
        params["id"] = "changed"

        assert matcher.extract("/detail/:id", "/detail/1") == {"id": "1"}

    def test_match_result_hashable(self):
        """Test equal results hash alike."""
        matcher = PathMatcher()

        assert hash(matcher.match("/d/:id", "/d/1")) == hash(matcher.match("/d/:id", "/d/1"))
        assert len({matcher.match("/a", "/b"), matcher.match("/c", "/d")}) == 1

    def test_cache_is_bounded(self):
        """Test old patterns are evicted once the cache is full."""
        matcher = PathMatcher(max_cache_size=3)
        for i in range(10):
            matcher.match(f"/page{i}", "/page0")

        assert matcher.cache_size == 3
        assert matcher.matches("/page0", "/page0")

    def test_clear_single_pattern(self):
        """Test dropping one compiled pattern."""
        matcher = PathMatcher()
        matcher.match("/a", "/a")
        matcher.match("/b", "/b")
        matcher.clear_cache("/a")

        assert matcher.cache_size == 1
