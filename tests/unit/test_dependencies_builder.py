"""
Unit tests for dependencies/builder.py

Tests registration, last-write-wins overwrites, and build().
"""

import pytest

from depper import (
    Dependencies,
    DependenciesBuilder,
    DepperConfig,
    ValidationConfig,
)
from depper.errors import CyclicDependencyError, MissingDependencyError


class TestRegistration:
    """Test element registration."""

    def test_register_is_chainable(self, config):
        builder = DependenciesBuilder(config)
        assert builder.register("a", []) is builder
        assert builder.add_element("b", ["a"]) is builder

    def test_builder_classmethod(self, config):
        assert isinstance(Dependencies.builder(config), DependenciesBuilder)

    def test_default_dependencies_empty(self, config):
        builder = DependenciesBuilder(config).register("a")
        assert builder.graph.get_dependencies("a") == ()

    def test_duplicate_dependencies_tolerated(self, config):
        dependencies = (
            DependenciesBuilder(config)
            .register("a", ["b", "b", "b"])
            .register("b", [])
            .build()
        )
        assert dependencies.get_dependencies("a") == ("b",)
        assert dependencies.generate_tranches() == [["b"], ["a"]]

    def test_accepts_any_iterable(self, config):
        builder = DependenciesBuilder(config).register("a", ("b", "c")).register("b", iter(["c"]))
        builder.register("c", set())
        assert builder.build().generate_tranches() == [["c"], ["b"], ["a"]]

    def test_invalid_names_rejected(self, config):
        builder = DependenciesBuilder(config)
        with pytest.raises(ValueError):
            builder.register("", [])
        with pytest.raises(TypeError):
            builder.register("a", "b")

    def test_registration_not_validated_early(self, config):
        """Forward references are fine until build()."""
        builder = DependenciesBuilder(config).register("a", ["b"])
        builder.register("b", [])
        builder.build()


class TestBuild:
    """Test build() and check()."""

    def test_simple_tree(self, config):
        builder = (
            DependenciesBuilder(config)
            .register("a", ["b", "c"])
            .register("b", ["c"])
            .register("c", [])
        )
        assert builder.build().generate_tranches() == [["c"], ["b"], ["a"]]

    def test_complex_tree(self, config):
        builder = (
            DependenciesBuilder(config)
            .register("a", ["b", "c"])
            .register("b", ["c"])
            .register("c", ["d", "e"])
            .register("d", ["e"])
            .register("e", [])
        )
        assert builder.build().generate_tranches() == [["e"], ["d"], ["c"], ["b"], ["a"]]

    def test_missing_dependencies(self, config):
        builder = DependenciesBuilder(config).register("a", ["b", "c"]).register("b", ["c"])
        with pytest.raises(MissingDependencyError) as exc_info:
            builder.build()
        assert exc_info.value.missing_names == {"c"}

    def test_cyclic_dependencies(self, config):
        builder = (
            DependenciesBuilder(config)
            .register("a", ["b", "c"])
            .register("b", ["c"])
            .register("c", ["a", "b"])
        )
        with pytest.raises(CyclicDependencyError):
            builder.build()

    def test_build_and_validate_alias(self, config):
        builder = DependenciesBuilder(config).register("a", [])
        assert builder.build_and_validate().generate_tranches() == [["a"]]

    def test_overwrite_fixes_cycle(self, config):
        """Test last-write-wins resolves an earlier cyclic declaration."""
        builder = DependenciesBuilder(config).register("a", ["b"]).register("b", ["a"])
        with pytest.raises(CyclicDependencyError):
            builder.build()

        builder.register("b", [])
        assert builder.build().generate_tranches() == [["b"], ["a"]]

    def test_build_snapshot_isolated_from_builder(self, config):
        builder = DependenciesBuilder(config).register("a", [])
        dependencies = builder.build()

        builder.register("b", ["a"])
        builder.register("a", ["b"])

        assert dependencies.generate_tranches() == [["a"]]
        assert "b" not in dependencies

    def test_build_can_be_repeated(self, config):
        builder = DependenciesBuilder(config).register("a", ["b"]).register("b", [])
        assert builder.build().generate_tranches() == builder.build().generate_tranches()

    def test_check_reports_without_raising(self, config):
        builder = DependenciesBuilder(config).register("a", ["ghost"])
        report = builder.check()
        assert not report.is_valid
        assert report.missing == {"a": {"ghost"}}

        with pytest.raises(MissingDependencyError):
            report.raise_first()

    def test_build_logs_summary(self, config, caplog):
        builder = DependenciesBuilder(config).register("a", ["b"]).register("b", [])
        with caplog.at_level("INFO", logger="depper.dependencies.builder"):
            builder.build()
        assert "Dependencies built: 2 elements, 1 edges" in caplog.text

    def test_default_config_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEPPER_REPORT_CYCLES", "false")
        builder = DependenciesBuilder().register("a", ["a"])

        with pytest.raises(CyclicDependencyError) as exc_info:
            builder.build()
        assert exc_info.value.cycles == []

    def test_default_config_ignores_files_in_working_directory(self, tmp_path, monkeypatch):
        """Only explicitly loaded config files affect a builder."""
        (tmp_path / "depper.json").write_text('{"tranches": {"ordering": "alphabetical"}}')
        monkeypatch.chdir(tmp_path)

        dependencies = Dependencies.builder().register("b", []).register("a", []).build()
        assert dependencies.generate_tranches() == [["b", "a"]]

    def test_malformed_file_in_working_directory_ignored(self, tmp_path, monkeypatch):
        (tmp_path / "depper.json").write_text("{not json")
        monkeypatch.chdir(tmp_path)

        assert Dependencies.builder().register("a", []).build().generate_tranches() == [["a"]]

    def test_explicit_config(self):
        config = DepperConfig(validation=ValidationConfig(max_reported_cycles=1))
        builder = DependenciesBuilder(config).register("a", ["a"]).register("b", ["b"])
        with pytest.raises(CyclicDependencyError) as exc_info:
            builder.build()
        assert exc_info.value.cycles == [["a", "a"]]
