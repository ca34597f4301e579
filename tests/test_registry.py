"""Tests for plugin registration and lookup."""

import threading
import time

import pytest

from tersify import PluginError, PluginRegistry, Summary, TersifyPlugin, get_default_registry, reset_default_registry, type_name_of


class Gadget:
    pass


class Widget:
    pass


class NamedPlugin:
    def __init__(self, handles, label="plugin"):
        self._handles = handles
        self.label = label

    def handles(self):
        return self._handles

    def describe(self, obj):
        return self.label


class CountingSource:
    def __init__(self, plugins, delay=0.0):
        self.plugins = plugins
        self.delay = delay
        self.calls = 0

    def __call__(self):
        self.calls += 1
        time.sleep(self.delay)
        return self.plugins


class TestInitialization:
    def test_discovery_runs_once(self):
        source = CountingSource([NamedPlugin("a.B")])
        registry = PluginRegistry(discover=source)

        registry.resolve("a.B")
        registry.resolve("c.D")
        registry.initialize()

        assert source.calls == 1

    def test_lazy_until_first_use(self):
        source = CountingSource([])
        registry = PluginRegistry(discover=source)
        assert source.calls == 0
        assert not registry.initialized

    def test_empty_plugin_set_counts_as_initialized(self):
        source = CountingSource([])
        registry = PluginRegistry(discover=source)
        registry.resolve("a.B")
        registry.resolve("a.B")
        assert registry.initialized
        assert source.calls == 1

    def test_concurrent_callers_populate_once(self):
        source = CountingSource([NamedPlugin("a.B")], delay=0.05)
        registry = PluginRegistry(discover=source)
        results = []

        def lookup():
            results.append(registry.resolve("a.B"))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert source.calls == 1
        assert len(results) == 8
        assert all(result is source.plugins[0] for result in results)


class TestResolution:
    def test_single_type_name(self):
        plugin = NamedPlugin("a.B")
        registry = PluginRegistry.from_plugins([plugin])
        assert registry.resolve("a.B") is plugin
        assert registry.resolve("a.C") is None

    def test_list_of_type_names(self):
        plugin = NamedPlugin(["a.B", "c.D"])
        registry = PluginRegistry.from_plugins([plugin])
        assert registry.resolve("a.B") is plugin
        assert registry.resolve("c.D") is plugin

    def test_classes_are_normalized_to_type_names(self):
        plugin = NamedPlugin([Gadget, "x.Y"])
        registry = PluginRegistry.from_plugins([plugin])
        assert registry.resolve(type_name_of(Gadget)) is plugin
        assert registry.resolve_for(Gadget()) is plugin
        assert type_name_of(Gadget) in registry

    def test_exact_match_only(self):
        registry = PluginRegistry.from_plugins([NamedPlugin("a.B")])
        assert registry.resolve("a.B.C") is None
        assert registry.resolve("a") is None

    def test_later_plugin_wins(self):
        first = NamedPlugin("a.B", "first")
        second = NamedPlugin(["a.B", "c.D"], "second")
        registry = PluginRegistry.from_plugins([first, second])
        assert registry.resolve("a.B") is second

    def test_handled_types_is_sorted(self):
        plugin = NamedPlugin(["z.Z", "a.A"])
        registry = PluginRegistry.from_plugins([plugin])
        assert list(registry.handled_types()) == ["a.A", "z.Z"]


class TestContractViolations:
    def test_bad_handles_return_type(self):
        registry = PluginRegistry.from_plugins([NamedPlugin({"a.B": True})])
        with pytest.raises(PluginError, match="handles"):
            registry.initialize()

    def test_bad_handled_entry(self):
        registry = PluginRegistry.from_plugins([NamedPlugin(["a.B", 42])])
        with pytest.raises(PluginError, match="invalid handled type"):
            registry.initialize()

    def test_missing_describe(self):
        class HalfPlugin:
            def handles(self):
                return "a.B"

        registry = PluginRegistry.from_plugins([HalfPlugin()])
        with pytest.raises(PluginError):
            registry.initialize()

    def test_abstract_base_requires_both_methods(self):
        class Incomplete(TersifyPlugin):
            def handles(self):
                return "a.B"

        with pytest.raises(TypeError):
            Incomplete()


class TestSummarize:
    def test_summary_format(self):
        registry = PluginRegistry.from_plugins([NamedPlugin(Widget, "shiny")])
        summary = registry.summarize(Widget(), identity=lambda obj: "ID")
        assert isinstance(summary, Summary)
        assert summary == f"{type_name_of(Widget)} (ID) shiny"

    def test_unhandled_object_gives_none(self):
        registry = PluginRegistry.from_plugins([NamedPlugin(Widget)])
        assert registry.summarize(Gadget()) is None


class TestDefaultRegistry:
    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()

    def test_reset_builds_a_fresh_registry(self):
        before = get_default_registry()
        reset_default_registry()
        assert get_default_registry() is not before

    def test_default_registry_includes_builtins(self, monkeypatch):
        monkeypatch.setattr("tersify.plugins.discovery.entry_points", lambda group: [])
        assert "datetime.datetime" in get_default_registry()
