from __future__ import annotations

import dataclasses

import pytest

from projclean.config.defaults import default_config
from projclean.config.schema import AppConfig, CleanupOptions, clamp_field


class TestToDict:
    def test_keys_present(self) -> None:
        d = default_config().to_dict()
        expected_keys = {
            "directories",
            "essentialPatterns",
            "essentialDirectories",
            "artifactExtensions",
            "accessThresholdDays",
            "backupDir",
            "backupRetentionDays",
            "logFile",
            "extraEmptyDirectories",
            "analysisSkipDirectories",
            "largeFileBytes",
            "unusedFactor",
            "options",
        }
        assert set(d.keys()) == expected_keys

    def test_options_keys(self) -> None:
        d = CleanupOptions(prompt_before_deletion=False).to_dict()
        assert d == {"promptBeforeDeletion": False, "removeEmptyDirectories": True, "createBackups": True}


class TestFromDict:
    def test_empty_payload_uses_defaults(self) -> None:
        defaults = default_config()
        assert AppConfig.from_dict({}, defaults) == defaults

    def test_round_trip(self) -> None:
        original = default_config()
        restored = AppConfig.from_dict(original.to_dict(), AppConfig())
        assert restored == original

    def test_values_override_defaults(self) -> None:
        payload = {
            "directories": {"app": "app"},
            "essentialPatterns": [r"\.keep$"],
            "essentialDirectories": ["vendor"],
            "artifactExtensions": [".LOG", ".Cache"],
            "accessThresholdDays": 7,
            "backupDir": "bk",
            "backupRetentionDays": 3,
            "logFile": "logs/cleanup.txt",
            "options": {"promptBeforeDeletion": False},
        }
        cfg = AppConfig.from_dict(payload, default_config())
        assert cfg.directories == {"app": "app"}
        assert cfg.essential_patterns == (r"\.keep$",)
        assert cfg.essential_directories == frozenset({"vendor"})
        assert cfg.artifact_extensions == frozenset({".log", ".cache"})
        assert cfg.access_threshold_days == 7
        assert cfg.backup_dir == "bk"
        assert cfg.backup_retention_days == 3
        assert cfg.log_file == "logs/cleanup.txt"
        assert cfg.options.prompt_before_deletion is False
        assert cfg.options.create_backups is True

    def test_numeric_clamping(self) -> None:
        cfg = AppConfig.from_dict({"accessThresholdDays": -5, "unusedFactor": 0}, default_config())
        assert cfg.access_threshold_days == 0
        assert cfg.unused_factor == 1

    def test_invalid_pattern_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid essential pattern"):
            AppConfig.from_dict({"essentialPatterns": ["(unclosed"]}, default_config())

    def test_non_list_rejected(self) -> None:
        with pytest.raises(ValueError, match="essentialDirectories"):
            AppConfig.from_dict({"essentialDirectories": "src"}, default_config())

    @pytest.mark.parametrize("key", ["promptBeforeDeletion", "removeEmptyDirectories", "createBackups"])
    def test_option_flags_must_be_booleans(self, key: str) -> None:
        with pytest.raises(ValueError, match=key):
            AppConfig.from_dict({"options": {key: "false"}}, default_config())

    def test_remove_empty_frontend_false_clears_extra_dirs(self) -> None:
        cfg = AppConfig.from_dict({"options": {"removeEmptyFrontend": False}}, default_config())
        assert cfg.extra_empty_directories == ()

    def test_explicit_extra_dirs_win_over_legacy_flag(self) -> None:
        payload = {"extraEmptyDirectories": ["client"], "options": {"removeEmptyFrontend": False}}
        cfg = AppConfig.from_dict(payload, default_config())
        assert cfg.extra_empty_directories == ("client",)


class TestDerived:
    def test_thresholds(self) -> None:
        cfg = dataclasses.replace(default_config(), access_threshold_days=30, unused_factor=3)
        assert cfg.access_threshold_seconds == 30 * 86400
        assert cfg.unused_threshold_seconds == 90 * 86400

    def test_compiled_patterns(self) -> None:
        cfg = default_config()
        assert len(cfg.compiled_patterns) == len(cfg.essential_patterns)
        assert any(p.search(".env.local") for p in cfg.compiled_patterns)

    def test_config_is_immutable(self) -> None:
        cfg = default_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.access_threshold_days = 1  # type: ignore[misc]


class TestClampField:
    def test_known_field(self) -> None:
        assert clamp_field(-1, "backup_retention_days") == 0

    def test_unknown_field_passthrough(self) -> None:
        assert clamp_field(-1, "whatever") == -1
