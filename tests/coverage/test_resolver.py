"""Tests for PathResolver."""

from collections.abc import Callable

from covimport.coverage.models import ProjectFile
from covimport.coverage.resolver import PathResolver


class TestPathResolver:
    def test_exact_match(self, make_file: Callable[..., ProjectFile]) -> None:
        foo = make_file("com/example/Foo.java")
        resolver = PathResolver([("com/example/Foo.java", foo)])

        assert resolver.resolve("com/example", "Foo.java") is foo

    def test_missing_is_none(self, make_file: Callable[..., ProjectFile]) -> None:
        resolver = PathResolver([("com/example/Foo.java", make_file("com/example/Foo.java"))])

        assert resolver.resolve("com/example", "Bar.java") is None
        assert resolver.resolve("example", "Foo.java") is None

    def test_case_sensitive(self, make_file: Callable[..., ProjectFile]) -> None:
        resolver = PathResolver([("com/example/Foo.java", make_file("com/example/Foo.java"))])

        assert resolver.resolve("com/Example", "Foo.java") is None
        assert resolver.resolve("com/example", "foo.java") is None

    def test_no_suffix_matching(self, make_file: Callable[..., ProjectFile]) -> None:
        resolver = PathResolver([("app/com/example/Foo.java", make_file("app/com/example/Foo.java"))])

        assert resolver.resolve("com/example", "Foo.java") is None

    def test_default_package(self, make_file: Callable[..., ProjectFile]) -> None:
        main = make_file("Main.java")
        resolver = PathResolver([("Main.java", main)])

        assert resolver.resolve("", "Main.java") is main

    def test_backslash_keys_normalized(self, make_file: Callable[..., ProjectFile]) -> None:
        foo = make_file("com/example/Foo.java")
        resolver = PathResolver([("com\\example\\Foo.java", foo)])

        assert resolver.resolve("com/example", "Foo.java") is foo
        assert "com/example/Foo.java" in resolver

    def test_first_source_root_wins(self, make_file: Callable[..., ProjectFile]) -> None:
        main = make_file("com/example/Foo.java")
        other = make_file("com/example/Foo.java", line_count=5)
        resolver = PathResolver([("com/example/Foo.java", main), ("com/example/Foo.java", other)])

        assert len(resolver) == 1
        assert resolver.resolve("com/example", "Foo.java") is main

    def test_repeated_calls_identical(self, make_file: Callable[..., ProjectFile]) -> None:
        foo = make_file("a/Foo.java")
        resolver = PathResolver([("a/Foo.java", foo)])

        assert resolver.resolve("a", "Foo.java") is resolver.resolve("a", "Foo.java")
