"""Integration tests for ConfigManager."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from scoped_config import ConfigManager
from scoped_config import ConfigParseError
from scoped_config import ConfigPaths
from scoped_config import ConfigValidationError
from scoped_config import Scope


class TestConfigIntegration:
    """Integration tests for realistic configuration scenarios."""

    @pytest.fixture
    def temp_paths(self):
        """Create temporary paths for testing."""
        with TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            paths = ConfigPaths(
                global_path=tmpdir_path / "home" / ".mytool" / "config.json",
                project_path=tmpdir_path / "repo" / ".mytool" / "config.json",
            )
            yield paths

    @pytest.fixture
    def manager(self, temp_paths):
        """Create ConfigManager with temp paths."""
        return ConfigManager(temp_paths)

    def test_realistic_workflow_model_selection(self, manager):
        """Test a user default model overridden by one repository."""
        # 1. User picks a provider and model globally
        manager.set(Scope.GLOBAL, "provider", "openai")
        manager.set(Scope.GLOBAL, "model", "gpt-4o-mini")

        # 2. Repository pins a stronger model
        manager.set(Scope.PROJECT, "model", "gpt-4o")
        assert manager.get("provider") == "openai"
        assert manager.get("model") == "gpt-4o"

        # 3. Repository drops its pin, user default applies again
        manager.remove(Scope.PROJECT, "model")
        assert manager.get("model") == "gpt-4o-mini"

    def test_realistic_workflow_commit_options(self, manager):
        """Test commit options deep merge while ignore globs replace."""
        manager.set(Scope.GLOBAL, "commit", {"conventional": True, "maxLength": 72})
        manager.set(Scope.GLOBAL, "ignore", ["*.lock"])

        manager.set(Scope.PROJECT, "commit.maxLength", 50)
        manager.set(Scope.PROJECT, "ignore", ["dist/"])

        assert manager.get("commit") == {"conventional": True, "maxLength": 50}
        assert manager.get("ignore") == ["dist/"]

    def test_extensions_across_scopes(self, manager, temp_paths):
        """Test extension settings merge and mutate like any object key."""
        temp_paths.global_path.parent.mkdir(parents=True)
        temp_paths.global_path.write_text(
            json.dumps({"model": "gpt-4", "extensions": {"agentA": {"timeout": 5000}}}), encoding="utf-8"
        )
        temp_paths.project_path.parent.mkdir(parents=True)
        temp_paths.project_path.write_text(
            json.dumps({"extensions": {"agentA": {"timeout": 3000}, "agentB": {"x": 1}}}), encoding="utf-8"
        )

        assert manager.get_effective() == {
            "model": "gpt-4",
            "extensions": {"agentA": {"timeout": 3000}, "agentB": {"x": 1}},
        }

        global_before = temp_paths.global_path.read_bytes()
        manager.set(Scope.PROJECT, "extensions.agentA.timeout", 9000)
        assert manager.get("extensions.agentA.timeout") == 9000
        assert temp_paths.global_path.read_bytes() == global_before

        # A fresh invocation sees the same thing from disk
        assert ConfigManager(temp_paths).get("extensions.agentA.timeout") == 9000

    def test_extension_any_shape(self, manager):
        """Test deep and oddly named extension paths are accepted."""
        manager.set(Scope.GLOBAL, "extensions.my-ext.v2.nested_list", [1, {"a": None}])
        manager.set(Scope.PROJECT, "extensions.my-ext.v2.enabled", False)

        assert manager.get("extensions.my-ext") == {"v2": {"nested_list": [1, {"a": None}], "enabled": False}}

    def test_unknown_key_rejected_everywhere(self, manager, temp_paths):
        """Test one unregistered key is refused by get, set, remove and load."""
        with pytest.raises(ConfigValidationError):
            manager.get("agentA")
        with pytest.raises(ConfigValidationError):
            manager.set(Scope.GLOBAL, "agentA", 1)
        with pytest.raises(ConfigValidationError):
            manager.remove(Scope.GLOBAL, "agentA")

        temp_paths.global_path.parent.mkdir(parents=True)
        temp_paths.global_path.write_text('{"agentA": 1}', encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            manager.reload()

    def test_broken_project_blocks_reads(self, manager, temp_paths):
        """Test a broken project file is surfaced rather than skipped."""
        manager.set(Scope.GLOBAL, "model", "gpt-4")

        temp_paths.project_path.parent.mkdir(parents=True)
        temp_paths.project_path.write_text('{"model": "x",}', encoding="utf-8")

        with pytest.raises(ConfigParseError) as exc_info:
            manager.reload()
        assert exc_info.value.scope == "project"

        # Still broken on the next read, never a partial view
        with pytest.raises(ConfigParseError):
            manager.get("model")

    def test_paths_for_app(self):
        """Test standard locations and the home-directory rule."""
        with TemporaryDirectory() as tmpdir:
            home = Path(tmpdir) / "home"
            repo = Path(tmpdir) / "repo"
            home.mkdir()
            repo.mkdir()

            paths = ConfigPaths.for_app(".mytool", cwd=repo, home=home)
            assert paths.global_path == home / ".mytool" / "config.json"
            assert paths.project_path == repo / ".mytool" / "config.json"

            at_home = ConfigPaths.for_app(".mytool", cwd=home, home=home)
            assert at_home.project_path is None

            manager = ConfigManager(at_home)
            manager.set(Scope.GLOBAL, "language", "de")
            assert manager.get("language") == "de"
            assert at_home.global_path.exists()
