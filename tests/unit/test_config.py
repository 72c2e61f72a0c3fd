"""
Tests for SyncConfig and config file loading.
"""
import pytest
from pydantic import ValidationError

from clapless.models.config import SyncConfig, load_config


class TestSyncConfig:

    def test_defaults(self):
        config = SyncConfig()
        assert config.segment_duration == 600
        assert config.downsample_factor == 50
        assert config.min_confidence == 0.3
        assert config.finetune_enabled is True
        assert config.finetune_target_seconds == 60.0
        assert config.finetune_min_seconds == 30.0
        assert config.max_workers is None
        assert config.output_suffix == "_synced"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("downsample_factor", 0),
            ("segment_duration", 0),
            ("min_confidence", -0.1),
            ("finetune_target_seconds", 0.0),
            ("max_workers", 0),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            SyncConfig(**{field: value})

    def test_min_must_not_exceed_target(self):
        with pytest.raises(ValidationError, match="finetune_min_seconds"):
            SyncConfig(finetune_min_seconds=90.0)

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            SyncConfig(downsample=10)


class TestLoadConfig:

    def test_without_file(self):
        assert load_config() == SyncConfig()

    def test_none_overrides_are_ignored(self):
        config = load_config(downsample_factor=None, min_confidence=0.5)
        assert config.downsample_factor == 50
        assert config.min_confidence == 0.5

    def test_yaml_file_with_overrides(self, tmp_path):
        path = tmp_path / "sync.yaml"
        path.write_text(
            "downsample_factor: 20\n"
            "finetune_target_seconds: 10\n"
            "finetune_min_seconds: 5\n"
            "output_suffix: _aligned\n"
        )
        config = load_config(path, downsample_factor=25, output_suffix=None)
        assert config.downsample_factor == 25
        assert config.finetune_target_seconds == 10.0
        assert config.finetune_min_seconds == 5.0
        assert config.output_suffix == "_aligned"

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SyncConfig()

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)
