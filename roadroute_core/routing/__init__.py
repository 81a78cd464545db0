"""Routing module - URI parsing, path matching and route registry."""

from roadroute_core.routing.parser import ParsedURI, URIParser, parse_uri
from roadroute_core.routing.matcher import MatchResult, PathMatcher, PatternMatcher
from roadroute_core.routing.registry import Route, RouteRegistry

__all__ = [
    "ParsedURI",
    "URIParser",
    "parse_uri",
    "MatchResult",
    "PathMatcher",
    "PatternMatcher",
    "Route",
    "RouteRegistry",
]
