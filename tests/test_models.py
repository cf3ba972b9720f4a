"""Tests for service data models."""

from __future__ import annotations

import dataclasses

import pytest

from servicify.models import ServiceDefinition, ServiceKind, UnitState


class TestServiceKind:
    """Tests for ServiceKind."""

    def test_from_string(self) -> None:
        assert ServiceKind.from_string("forking") is ServiceKind.FORKING
        assert ServiceKind.from_string("SIMPLE") is ServiceKind.SIMPLE

    def test_from_string_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid service type"):
            ServiceKind.from_string("daemon")

    def test_choices_include_simple_and_forking(self) -> None:
        choices = ServiceKind.choices()
        assert "simple" in choices
        assert "forking" in choices


class TestUnitState:
    def test_states_in_lifecycle_order(self) -> None:
        assert [state.value for state in UnitState] == [
            "absent",
            "written",
            "reloaded",
            "enabled",
            "running",
        ]


class TestServiceDefinition:
    """Tests for ServiceDefinition."""

    def test_defaults(self) -> None:
        definition = ServiceDefinition(
            name="sleep",
            exec_command="/bin/sleep 100",
            working_directory="/tmp",
        )

        assert definition.description == "sleep"
        assert definition.service_kind is ServiceKind.SIMPLE
        assert definition.run_as_user is None
        assert definition.run_as_group is None
        assert definition.environment_assignments == ()
        assert definition.unit_name == "sleep.service"
        assert definition.restart_policy["restart"] == "always"
        assert definition.restart_policy["restart_sec"] == 5

    def test_is_immutable(self) -> None:
        definition = ServiceDefinition(name="a", exec_command="/bin/a", working_directory="/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.name = "b"

    def test_lists_are_stored_as_tuples(self) -> None:
        definition = ServiceDefinition(
            name="a",
            exec_command="/bin/a",
            working_directory="/",
            environment_assignments=["A=1", "B=2"],
            environment_files=["/etc/a.env"],
        )
        assert definition.environment_assignments == ("A=1", "B=2")
        assert definition.environment_files == ("/etc/a.env",)

    def test_service_kind_string_is_coerced(self) -> None:
        definition = ServiceDefinition(
            name="a", exec_command="/bin/a", working_directory="/", service_kind="oneshot"
        )
        assert definition.service_kind is ServiceKind.ONESHOT

    @pytest.mark.parametrize("name", ["", "has space", "a/b", "a.b", "a\\b", "tab\there"])
    def test_rejects_bad_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            ServiceDefinition(name=name, exec_command="/bin/a", working_directory="/")

    def test_rejects_relative_executable(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            ServiceDefinition(name="a", exec_command="bin/a --x", working_directory="/")

    def test_rejects_relative_working_directory(self) -> None:
        with pytest.raises(ValueError, match="Working directory"):
            ServiceDefinition(name="a", exec_command="/bin/a", working_directory="srv")

    def test_to_dict_omits_unset_identity(self) -> None:
        definition = ServiceDefinition(name="a", exec_command="/bin/a", working_directory="/")
        d = definition.to_dict()
        assert "run_as_user" not in d
        assert "run_as_group" not in d
        assert d["service_kind"] == "simple"

    def test_to_dict_includes_identity(self) -> None:
        definition = ServiceDefinition(
            name="a",
            exec_command="/bin/a",
            working_directory="/",
            run_as_user="www-data",
            run_as_group="www-data",
        )
        d = definition.to_dict()
        assert d["run_as_user"] == "www-data"
        assert d["run_as_group"] == "www-data"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"description": "x\nExecStartPre=/bin/evil"},
            {"working_directory": "/srv\n[Install]"},
            {"run_as_user": "app\nUser=root"},
            {"run_as_group": "staff\rGroup=root"},
            {"exec_command": "/bin/app\nExecStartPre=/bin/evil"},
            {"environment_files": ("/etc/a.env", "/etc/b.env\nUser=root")},
        ],
    )
    def test_rejects_line_breaks(self, overrides: dict) -> None:
        fields = {"name": "a", "exec_command": "/bin/a", "working_directory": "/"}
        fields.update(overrides)
        with pytest.raises(ValueError, match="line breaks"):
            ServiceDefinition(**fields)
