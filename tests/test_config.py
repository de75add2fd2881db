# tests/test_config.py
import pytest

from tatorscout.config import (
    AnalysisConfig,
    ConfigError,
    GridConfig,
    SectionsConfig,
    TatorScoutConfig,
    default_config,
    get_default_config_path,
    load_config,
)
from tatorscout.grid import DEFAULT_GRID


def test_load_config_from_valid_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('''
[grid]
size = 400
sample_rate = 4

[sections]
auto = [0, 10]
teleop = [10, 90]
endgame = [90, 100]

[analysis]
stationary_threshold = 0.25
histogram_bins = 5

[season]
year = 2024
''')

    config = load_config(config_file)

    assert config.grid.size == 400
    assert config.sections.teleop == (10, 90)
    assert config.analysis.stationary_threshold == 0.25
    assert config.analysis.histogram_bins == 5
    assert config.season.year == 2024
    config.validate()


def test_missing_sections_fall_back_to_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('[season]\nyear = 2024\n')

    config = load_config(config_file)

    assert config.grid == GridConfig()
    assert config.sections == SectionsConfig()
    assert config.analysis == AnalysisConfig()
    assert config.season.year == 2024


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.toml")


def test_load_config_invalid_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[grid\nsize = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(config_file)


def test_default_config_is_valid_and_builds_default_grid():
    config = default_config()
    config.validate()

    assert config.build_grid() == DEFAULT_GRID


def test_build_grid_converts_section_seconds_to_indices():
    config = TatorScoutConfig(
        grid=GridConfig(size=400),
        sections=SectionsConfig(auto=(0, 10), teleop=(10, 90), endgame=(90, 100)),
    )

    grid = config.build_grid()

    assert grid.size == 400
    assert grid.sections == {"auto": (0, 40), "teleop": (40, 360), "endgame": (360, 400)}


def test_validate_grid_size_upper_bound():
    """The codec cannot address more than 1000 time slots."""
    config = TatorScoutConfig(grid=GridConfig(size=1001))

    with pytest.raises(ConfigError, match="grid size"):
        config.validate()


def test_validate_grid_size_positive():
    config = TatorScoutConfig(grid=GridConfig(size=0))

    with pytest.raises(ConfigError, match="grid size"):
        config.validate()


def test_validate_sample_rate():
    config = TatorScoutConfig(grid=GridConfig(sample_rate=0))

    with pytest.raises(ConfigError, match="sample_rate"):
        config.validate()


def test_validate_field_dimensions():
    config = TatorScoutConfig(grid=GridConfig(field_width=-1.0))

    with pytest.raises(ConfigError, match="Field dimensions"):
        config.validate()


def test_validate_section_order():
    config = TatorScoutConfig(sections=SectionsConfig(auto=(15, 0)))

    with pytest.raises(ConfigError, match="auto"):
        config.validate()


def test_validate_section_past_grid_end():
    config = TatorScoutConfig(sections=SectionsConfig(endgame=(135, 200)))

    with pytest.raises(ConfigError, match="after the grid"):
        config.validate()


def test_validate_section_shape():
    config = TatorScoutConfig(sections=SectionsConfig(teleop=(15, 60, 135)))

    with pytest.raises(ConfigError, match="teleop"):
        config.validate()


def test_validate_analysis_settings():
    with pytest.raises(ConfigError, match="stationary_threshold"):
        TatorScoutConfig(
            analysis=AnalysisConfig(stationary_threshold=-0.1)
        ).validate()

    with pytest.raises(ConfigError, match="histogram_bins"):
        TatorScoutConfig(analysis=AnalysisConfig(histogram_bins=0)).validate()


def test_default_config_path():
    path = get_default_config_path()

    assert path.name == "config.toml"
    assert path.parent.name == ".tatorscout"


def test_grid_size_must_be_an_integer(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('[grid]\nsize = "600"\n')

    config = load_config(config_file)

    with pytest.raises(ConfigError, match="grid.size must be an integer"):
        config.validate()


@pytest.mark.parametrize(
    "toml, message",
    [
        ("[grid]\nfield_width = true\n", "grid.field_width must be a number"),
        ("[analysis]\nhistogram_bins = 2.5\n", "analysis.histogram_bins"),
        ('[analysis]\nstationary_threshold = "low"\n', "stationary_threshold"),
        ('[season]\nyear = "2024"\n', "season.year"),
        ('[sections]\nauto = ["0", 15]\n', "sections.auto start"),
    ],
)
def test_wrong_value_types_fail_validation(tmp_path, toml, message):
    config_file = tmp_path / "config.toml"
    config_file.write_text(toml)

    with pytest.raises(ConfigError, match=message):
        load_config(config_file).validate()


@pytest.mark.parametrize("value", ["15", "[0, 5, 15]", '"0-15"'])
def test_section_must_be_a_pair(tmp_path, value):
    config_file = tmp_path / "config.toml"
    config_file.write_text(f"[sections]\nauto = {value}\n")

    with pytest.raises(ConfigError, match="Section 'auto' must be"):
        load_config(config_file)


def test_table_must_be_a_table(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("grid = 5\n")

    with pytest.raises(ConfigError, match=r"\[grid\] must be a table"):
        load_config(config_file)
