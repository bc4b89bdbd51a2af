"""Tests for the non-constant method registry."""

from costlens.changes.registry import NonConstantRegistry


class TestNonConstantRegistry:
    """Tests for NonConstantRegistry."""

    def test_initial_names(self) -> None:
        registry = NonConstantRegistry(["sort", "scan"])
        assert "sort" in registry
        assert "get" not in registry
        assert len(registry) == 2
        assert list(registry) == ["scan", "sort"]

    def test_record_costs_keeps_non_constant_only(self, make_entry) -> None:
        registry = NonConstantRegistry()
        added = registry.record_costs(
            [
                make_entry("sort", degree=1),
                make_entry("get", polynomial="1", degree=0),
                make_entry("spin", polynomial="Top", degree=None),
            ]
        )
        assert added == 2
        assert registry.names() == frozenset({"sort", "spin"})

    def test_reset_all(self) -> None:
        registry = NonConstantRegistry(["sort", "scan"])
        registry.reset_all()
        assert len(registry) == 0

    def test_reset_for_file_keeps_other_files(self) -> None:
        registry = NonConstantRegistry(["sort", "scan"])
        registry.reset_for_file(["sort", "unknown"])
        assert registry.names() == frozenset({"scan"})

    def test_add(self) -> None:
        registry = NonConstantRegistry()
        registry.add("walk")
        assert "walk" in registry
