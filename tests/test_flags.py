"""
Tests for switch registration and application.
"""

import argparse

import pytest
from pydantic import BaseModel, Field

from layerconf.sources import FlagRegistry

from conftest import make_sample


class PartlyDescribed(BaseModel):
    port: int = Field(default=8080, description="listen port")
    secret_token: str = Field(default="hidden-default-value")
    verbose: bool = Field(default=False, description="verbose output")
    ratio: float = Field(default=0.5, description="ratio in %")


def make_parser():
    return argparse.ArgumentParser(prog="test-app", allow_abbrev=False)


def test_register_described_leaves(sample_config):
    """Test one switch per described leaf"""
    registry = FlagRegistry(make_parser())
    bindings = registry.register(sample_config)

    assert [b.flag_name for b in bindings] == [
        "int-field-1",
        "int-field-2",
        "string-field-1",
        "string-field-2",
        "bool-field-1",
        "bool-field-2",
        "float-64-field-1",
        "float-64-field-2",
        "internal-value",
    ]


def test_undescribed_leaf_not_in_help(caplog):
    """Test that leaves without description never reach help output"""
    parser = make_parser()
    registry = FlagRegistry(parser)

    with caplog.at_level("INFO", logger="layerconf.sources.flags"):
        registry.register(PartlyDescribed())

    help_text = parser.format_help()
    assert "--port" in help_text
    assert "--secret-token" not in help_text
    assert "hidden-default-value" not in help_text
    assert "No description for field secret_token" in caplog.text


def test_help_shows_defaults():
    """Test that help shows description and compiled default"""
    parser = make_parser()
    FlagRegistry(parser).register(PartlyDescribed())

    help_text = parser.format_help()
    assert "listen port (default 8080)" in help_text
    assert "ratio in % (default 0.5)" in help_text


def test_apply_supplied_only():
    """Test that only supplied switches are copied back"""
    config = PartlyDescribed()
    parser = make_parser()
    registry = FlagRegistry(parser)
    registry.register(config)

    # Simulate a lower layer changing the value after registration
    config.ratio = 0.75

    namespace = parser.parse_args(["--port", "9000"])
    applied = registry.apply(namespace, config)

    assert applied == ["port"]
    assert config.port == 9000
    assert config.ratio == 0.75


def test_apply_nested_and_typed(sample_config):
    """Test typed parsing and nested paths"""
    parser = make_parser()
    registry = FlagRegistry(parser)
    registry.register(sample_config)

    namespace = parser.parse_args([
        "--internal-value", "77",
        "--float-64-field-2", "2.5",
        "--string-field-2", "from flag",
        "--bool-field-1", "false",
        "--bool-field-2",
    ])
    registry.apply(namespace, sample_config)

    assert sample_config.internal.value == 77
    assert sample_config.float64_field_2 == 2.5
    assert sample_config.string_field_2 == "from flag"
    assert sample_config.bool_field_1 is False
    assert sample_config.bool_field_2 is True


def test_invalid_value_rejected_by_parser(sample_config):
    """Test that a bad switch value is a parser error"""
    parser = make_parser()
    FlagRegistry(parser).register(sample_config)

    with pytest.raises(SystemExit):
        parser.parse_args(["--int-field-1", "abc"])


def test_invalid_bool_message(sample_config, capsys):
    """Test that a bad bool switch value names the bool type"""
    parser = make_parser()
    FlagRegistry(parser).register(sample_config)

    with pytest.raises(SystemExit):
        parser.parse_args(["--bool-field-1", "maybe"])

    err = capsys.readouterr().err
    assert "invalid bool value: 'maybe'" in err


def test_clash_with_host_switch_skipped(sample_config, caplog):
    """Test that a switch clashing with a host switch is logged and skipped"""
    parser = make_parser()
    parser.add_argument("--internal-value", help="host switch")
    registry = FlagRegistry(parser)

    with caplog.at_level("ERROR", logger="layerconf.sources.flags"):
        bindings = registry.register(sample_config)

    assert "internal-value" not in [b.flag_name for b in bindings]
    assert len(bindings) == 8
    assert "Cannot register switch --internal-value" in caplog.text


def test_separate_registries_do_not_collide():
    """Test that loading twice with fresh parsers is safe"""
    for _ in range(2):
        parser = make_parser()
        registry = FlagRegistry(parser)
        registry.register(make_sample())
        config = make_sample()
        registry.apply(parser.parse_args(["--int-field-1", "5"]), config)
        assert config.int_field_1 == 5
