"""Unit tests for configuration loading, typed readers and the input table."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from airframe.config import (
    load_config,
    read_matrix3x3,
    read_scalar,
    read_string,
    read_vector3,
    require_section,
)
from airframe.errors import ConfigurationError, InputNotFoundError
from airframe.inputs import InputHandle, InputTable

# =============================================================================
# Loading
# =============================================================================


class TestLoadConfig:
    """Test YAML document loading."""

    def test_load_sample(self, r44_path):
        """Sample document loads as nested dictionaries."""
        document = load_config(r44_path)
        assert document["aircraft"]["name"] == "R44"
        assert len(document["aircraft"]["mass"]["variable_masses"]) == 4

    def test_missing_file(self, tmp_path):
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML is a configuration error."""
        path = tmp_path / "bad.yaml"
        path.write_text("aircraft: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_root_must_be_mapping(self, tmp_path):
        """A list at the root is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)


# =============================================================================
# Typed Readers
# =============================================================================


class TestReaders:
    """Test typed field readers."""

    def test_scalar(self):
        """Integers and numeric strings coerce to float."""
        node = {"a": 3, "b": "2.5"}
        assert read_scalar(node, "a", "test") == 3.0
        assert read_scalar(node, "b", "test") == 2.5

    def test_scalar_default(self):
        """Default is used for absent fields."""
        assert read_scalar({}, "a", "test", default=1.5) == 1.5

    @pytest.mark.parametrize("raw", ["abc", True, None, [1.0], float("nan")])
    def test_scalar_invalid(self, raw):
        """Non-numeric, boolean, missing and non-finite values are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            read_scalar({"a": raw}, "a", "test", prefix="section")

        assert exc_info.value.component == "test"
        assert exc_info.value.field == "section.a"

    def test_vector3(self):
        """Three numbers make a float64 vector."""
        vector = read_vector3({"v": [1, 2, 3]}, "v", "test")
        assert vector.dtype == np.float64
        assert_allclose(vector, [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("raw", [[1.0, 2.0], "1 2 3", {"x": 1}, 5.0, [1.0, "y", 3.0]])
    def test_vector3_invalid(self, raw):
        """Wrong length or element types are rejected."""
        with pytest.raises(ConfigurationError):
            read_vector3({"v": raw}, "v", "test")

    def test_matrix_rows(self):
        """Matrix given as three rows."""
        matrix = read_matrix3x3({"m": [[1, 2, 3], [4, 5, 6], [7, 8, 9]]}, "m", "test")
        assert_allclose(matrix, np.arange(1.0, 10.0).reshape(3, 3))

    def test_matrix_flat(self):
        """Matrix given as nine numbers."""
        matrix = read_matrix3x3({"m": list(range(9))}, "m", "test")
        assert_allclose(matrix, np.arange(9.0).reshape(3, 3))

    def test_matrix_bad_element_reports_position(self):
        """Element errors carry row and column."""
        with pytest.raises(ConfigurationError) as exc_info:
            read_matrix3x3({"m": [[1, 2, 3], [4, "x", 6], [7, 8, 9]]}, "m", "test")
        assert exc_info.value.field == "m[1][1]"

    def test_matrix_ragged(self):
        """Rows must have three entries."""
        with pytest.raises(ConfigurationError):
            read_matrix3x3({"m": [[1, 2], [4, 5, 6], [7, 8, 9]]}, "m", "test")

    def test_string(self):
        """Strings are stripped; blanks are rejected."""
        assert read_string({"s": " fuel "}, "s", "test") == "fuel"
        with pytest.raises(ConfigurationError):
            read_string({"s": "  "}, "s", "test")
        with pytest.raises(ConfigurationError):
            read_string({"s": 5}, "s", "test")

    def test_require_section(self):
        """Sections must exist and be mappings."""
        assert require_section({"a": {"b": 1}}, "a", "test") == {"b": 1}
        with pytest.raises(ConfigurationError, match="Missing"):
            require_section({}, "a", "test")
        with pytest.raises(ConfigurationError, match="mapping"):
            require_section({"a": [1]}, "a", "test")


# =============================================================================
# Input Table
# =============================================================================


class TestInputTable:
    """Test named external inputs."""

    def test_bind_creates_zero(self):
        """Binding a new name creates it at zero."""
        inputs = InputTable()
        handle = inputs.bind("mass/fuel")

        assert isinstance(handle, InputHandle)
        assert inputs[handle] == 0.0
        assert "mass/fuel" in inputs
        assert len(inputs) == 1

    def test_bind_existing_returns_same_handle(self):
        """Binding twice resolves to the same slot."""
        inputs = InputTable()
        assert inputs.bind("a") == inputs.bind("a")
        assert len(inputs) == 1

    def test_set_and_get(self):
        """Values are readable by name or handle."""
        inputs = InputTable()
        handle = inputs.bind("a")
        inputs.set("a", 0.25)

        assert inputs.get(handle) == 0.25
        assert inputs["a"] == 0.25

        inputs.set(handle, 0.5)
        assert inputs["a"] == 0.5

    def test_initial_values(self):
        """Table can be seeded from a dictionary."""
        inputs = InputTable({"a": 1.0, "b": 2.0})
        assert inputs.names == ["a", "b"]
        assert inputs["b"] == 2.0

    def test_unknown_name(self):
        """Unknown names raise a KeyError subclass."""
        inputs = InputTable()
        with pytest.raises(InputNotFoundError):
            inputs.handle("missing")
        with pytest.raises(KeyError):
            inputs.set("missing", 1.0)
