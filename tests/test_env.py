"""
Tests for environment variable overlay.
"""

from layerconf.exceptions import EnvParseError
from layerconf.sources import EnvBinder

from conftest import make_sample


def test_reference_overrides(sample_config):
    """Test the reference environment overrides"""
    environ = {
        "INT_FIELD_2": "-321",
        "STRING_FIELD_1": "test string 1",
        "BOOL_FIELD_2": "true",
        "FLOAT_64_FIELD_1": "123.123",
        "INTERNAL.VALUE": "4444",
    }

    applied = EnvBinder(environ).overlay(sample_config)

    assert applied == ["INT_FIELD_2", "STRING_FIELD_1", "BOOL_FIELD_2", "FLOAT_64_FIELD_1", "INTERNAL.VALUE"]
    assert sample_config.int_field_2 == -321
    assert sample_config.string_field_1 == "test string 1"
    assert sample_config.bool_field_2 is True
    assert sample_config.float64_field_1 == 123.123
    assert sample_config.internal.value == 4444

    # Everything else keeps its default
    defaults = make_sample()
    assert sample_config.int_field_1 == defaults.int_field_1
    assert sample_config.string_field_2 == defaults.string_field_2
    assert sample_config.bool_field_1 == defaults.bool_field_1
    assert sample_config.float64_field_2 == defaults.float64_field_2


def test_empty_value_ignored(sample_config):
    """Test that empty variables do not override"""
    EnvBinder({"STRING_FIELD_1": "", "INT_FIELD_1": ""}).overlay(sample_config)

    assert sample_config.string_field_1 == "some string 1"
    assert sample_config.int_field_1 == 123


def test_unparseable_value_skips_only_that_field(sample_config, caplog):
    """Test that a bad value is logged and other fields are still applied"""
    environ = {
        "INT_FIELD_1": "not a number",
        "BOOL_FIELD_1": "maybe",
        "INTERNAL.VALUE": "4444",
    }

    with caplog.at_level("ERROR", logger="layerconf.sources.env"):
        applied = EnvBinder(environ).overlay(sample_config)

    assert applied == ["INTERNAL.VALUE"]
    assert sample_config.int_field_1 == 123
    assert sample_config.bool_field_1 is True
    assert sample_config.internal.value == 4444
    assert 'wrong value type for field "INT_FIELD_1", need int' in caplog.text
    assert 'wrong value type for field "BOOL_FIELD_1", need bool' in caplog.text


def test_parse_error_details(sample_config):
    """Test EnvParseError carries the variable and kind"""
    from layerconf.schema import leaf_fields

    leaf = leaf_fields(sample_config)[0]
    binder = EnvBinder({})

    try:
        binder.parse(leaf, "1.5")
    except EnvParseError as e:
        assert e.name == "INT_FIELD_1"
        assert e.value == "1.5"
        assert e.kind == "int"
        assert isinstance(e, ValueError)
    else:
        raise AssertionError("EnvParseError not raised")


def test_defaults_to_process_environment(sample_config, isolated_env):
    """Test that os.environ is used when no mapping is given"""
    isolated_env.setenv("STRING_FIELD_2", "from process env")

    EnvBinder().overlay(sample_config)

    assert sample_config.string_field_2 == "from process env"
