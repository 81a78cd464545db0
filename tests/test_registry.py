"""Route registry tests."""

import threading

import pytest
from roadroute_core.routing.registry import RouteRegistry


def handler_a(context, params):
    return True


def handler_b(context, params):
    return True


class TestRouteRegistry:
    """Test route registration and lookup."""

    def test_register_normalizes_pattern(self):
        """Test leading slash is added."""
        registry = RouteRegistry()
        registry.register("home", handler_a)

        assert "/home" in registry
        assert "home" in registry
        assert registry.get_routes()[0].pattern == "/home"

    def test_lookup_returns_route_and_params(self):
        """Test lookup with path parameters."""
        registry = RouteRegistry()
        registry.register("detail/:id", handler_a)

        route, params = registry.lookup("/detail/42")

        assert route.handler is handler_a
        assert params == {"id": "42"}

    def test_lookup_miss(self):
        """Test unmatched path."""
        registry = RouteRegistry()
        registry.register("/home", handler_a)

        assert registry.lookup("/elsewhere") is None

    def test_reregister_replaces_handler(self):
        """Test last registration wins and keeps its position."""
        registry = RouteRegistry()
        registry.register("/user/:id", handler_a)
        registry.register("/user/me", handler_a)
        registry.register("user/:id", handler_b)

        assert len(registry) == 2
        route, _ = registry.lookup("/user/me")
        assert route.pattern == "/user/:id"
        assert route.handler is handler_b

    def test_first_registered_wins(self):
        """Test overlapping patterns resolve in registration order."""
        registry = RouteRegistry()
        registry.register("/user/me", handler_a)
        registry.register("/user/:id", handler_b)

        route, params = registry.lookup("/user/me")

        assert route.handler is handler_a
        assert params == {}

    def test_priority_overrides_order(self):
        """Test higher priority is tried first."""
        registry = RouteRegistry()
        registry.register("/user/:id", handler_a)
        registry.register("/user/me", handler_b, priority=10)

        route, _ = registry.lookup("/user/me")

        assert route.handler is handler_b
        assert [r.pattern for r in registry.get_routes()] == ["/user/me", "/user/:id"]

    def test_unregister(self):
        """Test removing a route."""
        registry = RouteRegistry()
        registry.register("/home", handler_a)

        assert registry.unregister("home") is True
        assert registry.unregister("home") is False
        assert registry.lookup("/home") is None

    def test_register_default_overwrites(self):
        """Test only the latest default is kept."""
        registry = RouteRegistry()
        registry.register_default(handler_a)
        registry.register_default(handler_b)

        assert registry.default_handler is handler_b

    def test_clear_empties_everything(self):
        """Test clear removes routes and all handlers."""
        registry = RouteRegistry()
        registry.register("/home", handler_a)
        registry.register_default(handler_a)
        registry.register_data("/user/:id", lambda params: {})
        registry.register_default_data(lambda params: {})
        registry.set_data_handler(lambda uri, params, completion: None)

        registry.clear()

        assert len(registry) == 0
        assert registry.default_handler is None
        assert registry.default_data_handler is None
        assert registry.data_handler is None
        assert registry.get_data_routes() == []

    def test_clear_is_idempotent(self):
        """Test clearing an empty registry."""
        registry = RouteRegistry()
        registry.clear()
        registry.clear()

        assert len(registry) == 0

    def test_lookup_data_returns_all_matches(self):
        """Test data lookup keeps every candidate in order."""
        registry = RouteRegistry()
        registry.register_data("/user/:id", lambda params: None)
        registry.register_data("/user/me", lambda params: None)

        matches = registry.lookup_data("/user/me")

        assert [route.pattern for route, _ in matches] == ["/user/:id", "/user/me"]
        assert matches[0][1] == {"id": "me"}

    def test_register_during_lookup(self):
        """Test concurrent registration and lookup."""
        registry = RouteRegistry()
        registry.register("/detail/:id", handler_a)
        errors = []

        def writer():
            for i in range(200):
                registry.register(f"/page{i}", handler_b)

        def reader():
            for _ in range(200):
                try:
                    assert registry.lookup("/detail/1") is not None
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(registry) == 201

    def test_clear_prunes_matcher_cache(self):
        """Test clear drops compiled patterns."""
        registry = RouteRegistry()
        registry.register("/detail/:id", handler_a)
        registry.lookup("/detail/1")

        registry.clear()

        assert registry.matcher.cache_size == 0

    def test_unregister_prunes_matcher_cache(self):
        """Test unregister drops the removed pattern only."""
        registry = RouteRegistry()
        registry.register("/detail/:id", handler_a)
        registry.register("/home", handler_b)
        registry.lookup("/home")

        registry.unregister("/detail/:id")

        assert registry.matcher.cache_size == 1
        assert registry.lookup("/home") is not None
