"""Tests for TOML config file loading and NavigatorConfig construction."""

from __future__ import annotations

from heapwalk.core.types.config import ClassNamesConfig, NavigatorConfig, load_config


class TestLoadConfig:
    def test_nonexistent_file_returns_defaults(self):
        config = load_config("/nonexistent/path/heapwalk.toml")
        assert config.classes.weak_reference == "java.lang.ref.Reference"
        assert config.reachable_excludes_file is None

    def test_none_path_returns_defaults(self):
        config = load_config(None)
        assert isinstance(config, NavigatorConfig)

    def test_load_full_toml(self, tmp_path):
        toml_file = tmp_path / "heapwalk.toml"
        toml_file.write_text(
            'verbose = true\n'
            'reachable_excludes_file = "/tmp/excludes.txt"\n'
            '\n'
            '[classes]\n'
            'weak_reference = "java.lang.ref.Reference"\n'
            'legacy_weak_reference = "sun.misc.Ref"\n'
            'referent_field = "referent"\n'
            'finalizer = "java.lang.ref.FinalizerReference"\n'
            'string = "java.lang.String"\n'
            'char_array = "char[]"\n'
            'class_mirror = "java.lang.Class"\n'
        )
        config = load_config(str(toml_file))
        assert config.verbose is True
        assert config.reachable_excludes_file == "/tmp/excludes.txt"
        assert config.classes.finalizer == "java.lang.ref.FinalizerReference"

    def test_load_partial_toml(self, tmp_path):
        """Only [classes] with one key; everything else keeps its default."""
        toml_file = tmp_path / "heapwalk.toml"
        toml_file.write_text('[classes]\nfinalizer = "java.lang.Daemons$FinalizerDaemon"\n')
        config = load_config(str(toml_file))
        assert config.classes.finalizer == "java.lang.Daemons$FinalizerDaemon"
        assert config.classes.string == "java.lang.String"
        assert config.verbose is False

    def test_default_file_name(self, tmp_path, monkeypatch):
        (tmp_path / "heapwalk.toml").write_text("verbose = true\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().verbose is True

    def test_load_empty_toml(self, tmp_path):
        toml_file = tmp_path / "heapwalk.toml"
        toml_file.write_text("")
        config = load_config(str(toml_file))
        assert config.classes.class_mirror == "java.lang.Class"


class TestNavigatorConfigConstruction:
    def test_defaults(self):
        config = NavigatorConfig()
        assert config.classes.legacy_weak_reference == "sun.misc.Ref"
        assert config.classes.referent_field == "referent"
        assert config.classes.char_array == "char[]"
        assert config.verbose is False

    def test_custom_classes(self):
        config = NavigatorConfig(classes=ClassNamesConfig(string="kotlin.String"))
        assert config.classes.string == "kotlin.String"
