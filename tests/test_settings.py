"""Tests for tolerance configuration and YAML settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lintelmark.exceptions import InvalidConfiguration
from lintelmark.settings import Settings, get_settings
from lintelmark.unify.config import ToleranceConfig

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


def test_tolerance_defaults():
    config = ToleranceConfig()
    assert config.tolerances == (25, 50, 300)
    assert config.max_total_deviation == 500
    assert config.min_viable_size == 5
    assert config.min_group_count == 1
    assert config.target_group_size is None
    assert config.tolerance_mode == "strict"
    assert config.label_prefix == "PR-"
    assert sum(config.normalized_weights) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"thick_tolerance": 0},
        {"width_tolerance": -5},
        {"max_total_deviation": 0},
        {"height_weight": -0.1},
        {"thick_weight": 0},
        {"width_weight": 0.0},
        {"thick_weight": 0, "width_weight": 0, "height_weight": 0},
        {"height_weight": float("nan")},
        {"group_size_weight": 1.5},
        {"min_viable_size": 0},
        {"min_group_count": 0},
        {"target_group_size": 3},
    ],
)
def test_out_of_range_values_raise(overrides):
    with pytest.raises(InvalidConfiguration):
        ToleranceConfig(**overrides)


def test_wrong_types_raise_pydantic_error():
    with pytest.raises(ValidationError):
        ToleranceConfig(thick_tolerance="wide")
    with pytest.raises(ValidationError):
        ToleranceConfig(tolerance_mode="loose")


def test_config_is_frozen():
    config = ToleranceConfig()
    with pytest.raises(ValidationError):
        config.thick_tolerance = 10


def test_check_catches_unvalidated_config():
    config = ToleranceConfig.model_construct(group_size_weight=2.0)
    with pytest.raises(InvalidConfiguration) as excinfo:
        config.check()
    assert "group_size_weight" in excinfo.value.details


def test_zero_axis_weight_is_reported_by_name():
    with pytest.raises(InvalidConfiguration) as excinfo:
        ToleranceConfig(thick_weight=0)
    assert excinfo.value.details == {"thick_weight": "must be a finite number > 0"}


def test_load_default_yaml():
    settings = Settings.load(DEFAULT_CONFIG)
    assert settings.unification.rounding.as_tuple() == (1, 50, 100)
    assert settings.unification.tolerances == (25, 50, 300)
    assert settings.logging.level == "INFO"


def test_load_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "lintels.yaml"
    path.write_text(
        "unification:\n"
        "  thick_tolerance: 10\n"
        "  label_prefix: 'L-'\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("LINTELMARK_CONFIG", str(path))
    settings = Settings.load()
    assert settings.unification.thick_tolerance == 10
    assert settings.unification.label_prefix == "L-"
    assert settings.logging.level == "DEBUG"


def test_empty_yaml_uses_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert Settings.load(path).unification == ToleranceConfig()


def test_invalid_yaml_values(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("unification:\n  min_viable_size: 0\n", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        Settings.load(path)

    path.write_text("unification:\n  thick_tolerance: wide\n", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        Settings.load(path)

    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        Settings.load(path)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        Settings.load(tmp_path / "nope.yaml")


def test_get_settings_is_cached():
    get_settings.cache_clear()
    first = get_settings(str(DEFAULT_CONFIG))
    assert get_settings(str(DEFAULT_CONFIG)) is first
    get_settings.cache_clear()


def test_configure_logging_writes_to_file(tmp_path: Path):
    from loguru import logger

    log_file = tmp_path / "run.log"
    settings = Settings(logging={"level": "info", "log_file": str(log_file)})
    settings.configure_logging()
    try:
        logger.debug("not written")
        logger.info("written")
    finally:
        logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "written" in text
    assert "not written" not in text
