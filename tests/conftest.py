"""
Shared fixtures: a sample schema covering every leaf kind plus a nested record.
"""

import tempfile
from pathlib import Path

import pytest
from pydantic import BaseModel, Field


class Internal(BaseModel):
    value: int = Field(default=0, title="Value", description="struct internal int field")


class SampleConfig(BaseModel):
    int_field_1: int = Field(default=0, title="IntField1", description="int field # 1")
    int_field_2: int = Field(default=0, title="IntField2", description="int field # 2")
    string_field_1: str = Field(default="", title="StringField1", description="string field # 1")
    string_field_2: str = Field(default="", title="StringField2", description="string field # 2")
    bool_field_1: bool = Field(default=False, title="BoolField1", description="bool field # 1")
    bool_field_2: bool = Field(default=False, title="BoolField2", description="bool field # 2")
    float64_field_1: float = Field(default=0.0, title="Float64Field1", description="float64 field # 1")
    float64_field_2: float = Field(default=0.0, title="Float64Field2", description="float64 field # 2")
    internal: Internal = Field(default_factory=Internal, title="Internal", description="struct field")


def make_sample(internal_value: int = 9832) -> SampleConfig:
    """Sample config with the reference compiled defaults"""
    return SampleConfig(
        int_field_1=123,
        int_field_2=-123,
        string_field_1="some string 1",
        string_field_2="some string 2",
        bool_field_1=True,
        bool_field_2=False,
        float64_field_1=123.123,
        float64_field_2=-123.123,
        internal=Internal(value=internal_value),
    )


@pytest.fixture
def sample_config():
    """Fresh sample config with reference defaults"""
    return make_sample()


@pytest.fixture
def sample_factory():
    """Factory producing fresh sample configs"""
    return make_sample


@pytest.fixture
def temp_dir():
    """Create a temporary directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_env(monkeypatch):
    """Remove the sample schema's variables from the environment"""
    for name in (
        "INT_FIELD_1",
        "INT_FIELD_2",
        "STRING_FIELD_1",
        "STRING_FIELD_2",
        "BOOL_FIELD_1",
        "BOOL_FIELD_2",
        "FLOAT_64_FIELD_1",
        "FLOAT_64_FIELD_2",
        "INTERNAL.VALUE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
