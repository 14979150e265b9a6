# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from typing import Literal

import pytest
from pydantic import BaseModel
from task_models import BuildTask, LogLevel, PlainTask, ReleaseTask, UnsupportedCustomType

from taskopts import (
    NO_VALUE,
    FieldOptionElement,
    MethodOptionElement,
    OptionField,
    OptionReader,
    OptionValidationError,
    TypeConversionError,
    UnknownOptionError,
    option,
)
from taskopts.log import setup_logging

setup_logging()


def test_get_options_sorted() -> None:
    names = [e.option_name for e in OptionReader().get_options(BuildTask)]
    assert names == [
        "color",
        "compression",
        "dry-run",
        "logLevel",
        "tags",
        "tests",
        "threads",
        "verbose",
    ]


def test_element_kinds() -> None:
    reader = OptionReader()

    assert isinstance(reader.get_option(BuildTask, "verbose"), FieldOptionElement)
    assert isinstance(reader.get_option(BuildTask, "dry-run"), MethodOptionElement)


def test_option_metadata() -> None:
    reader = OptionReader()

    level = reader.get_option(BuildTask, "logLevel")
    assert level.description == "Set the log level"
    assert level.option_type is LogLevel
    assert level.available_values == ["DEBUG", "INFO", "WARN"]

    verbose = reader.get_option(BuildTask, "verbose")
    assert verbose.description == "Enable verbose output"
    assert verbose.option_type is NO_VALUE
    assert verbose.available_values == []

    assert reader.get_option(BuildTask, "threads").option_type is int
    assert reader.get_option(BuildTask, "tags").option_type == list[str]
    assert reader.get_option(BuildTask, "color").option_type is NO_VALUE
    assert reader.get_option(BuildTask, "dry-run").option_type is NO_VALUE
    assert reader.get_option(BuildTask, "compression").available_values == ["none", "zstd", "gzip"]


def test_get_options_cached() -> None:
    reader = OptionReader()

    first = reader.get_options(BuildTask)
    second = reader.get_options(BuildTask)

    assert first == second
    assert all(a is b for a, b in zip(first, second, strict=True))
    assert first is not second


def test_unknown_option() -> None:
    with pytest.raises(UnknownOptionError, match="no option 'missing' in class 'BuildTask'"):
        OptionReader().get_option(BuildTask, "missing")


def test_inherited_options() -> None:
    reader = OptionReader()
    names = [e.option_name for e in reader.get_options(ReleaseTask)]

    assert "sign" in names
    assert "tests" in names
    assert "verbose" in names
    assert reader.get_option(ReleaseTask, "sign").declaring_class is ReleaseTask
    assert reader.get_option(ReleaseTask, "tests").declaring_class is BuildTask
    assert reader.get_option(ReleaseTask, "verbose").declaring_class is BuildTask


def test_plain_class() -> None:
    reader = OptionReader()
    names = [e.option_name for e in reader.get_options(PlainTask)]

    assert names == ["explode", "include", "label", "ports"]
    assert reader.get_option(PlainTask, "label").option_type is str


def test_duplicate_option_name() -> None:
    class Task(BaseModel):
        output: str = OptionField("out", description="Output directory")

        @option(name="output", description="Output directory, again")
        def set_output_dir(self, value: str) -> None:
            pass

    with pytest.raises(OptionValidationError, match="Option 'output' linked to multiple elements"):
        OptionReader().get_options(Task)


def test_field_without_description() -> None:
    class Task(BaseModel):
        output: str = OptionField("out")

    with pytest.raises(OptionValidationError) as excinfo:
        OptionReader().get_options(Task)

    assert "No description set on option 'output'" in str(excinfo.value)
    assert excinfo.value.declaring_class is Task


def test_method_without_description() -> None:
    class Task:
        @option()
        def verbose(self) -> None:
            pass

    with pytest.raises(OptionValidationError, match="No description set on option 'verbose'"):
        OptionReader().get_options(Task)


def test_unsupported_field_type() -> None:
    class Task(BaseModel, arbitrary_types_allowed=True):
        threshold: UnsupportedCustomType | None = OptionField(None, description="A threshold")

    with pytest.raises(OptionValidationError) as excinfo:
        OptionReader().get_options(Task)

    assert "threshold" in str(excinfo.value)
    assert "UnsupportedCustomType" in str(excinfo.value)


def test_multiple_parameters() -> None:
    class Task:
        @option(description="Set a range")
        def range(self, start: int, end: int) -> None:
            pass

    with pytest.raises(OptionValidationError, match="cannot take multiple parameters"):
        OptionReader().get_options(Task)


def test_variadic_parameters() -> None:
    class Task:
        @option(description="Set values")
        def values(self, *values: str) -> None:
            pass

    with pytest.raises(OptionValidationError, match="cannot take variadic parameters"):
        OptionReader().get_options(Task)


def test_keyword_only_parameter() -> None:
    class Task:
        @option(description="Set the retry count")
        def retries(self, *, count: int) -> None:
            pass

    with pytest.raises(OptionValidationError, match="cannot take keyword-only parameters"):
        OptionReader().get_options(Task)


@pytest.mark.parametrize("annotation", ["list[", "UndefinedType"])
def test_unresolvable_annotation(annotation: str) -> None:
    def threshold(self: object, value: int) -> None:
        pass

    threshold.__annotations__["value"] = annotation
    Task = type("Task", (), {"threshold": option(description="A threshold")(threshold)})

    with pytest.raises(OptionValidationError, match="unresolvable type annotation") as excinfo:
        OptionReader().get_options(Task)

    assert excinfo.value.__cause__ is not None


@pytest.mark.parametrize("wrapper", [staticmethod, classmethod])
def test_static_method(wrapper: type) -> None:
    def flag(*args: object) -> None:
        pass

    decorated = wrapper(option(description="A flag")(flag))
    Task = type("Task", (), {"flag": decorated})

    with pytest.raises(OptionValidationError, match="static method or classmethod"):
        OptionReader().get_options(Task)


def test_method_apply() -> None:
    reader = OptionReader()
    task = BuildTask()

    assert reader.get_option(BuildTask, "tests").apply(task, ["unit"]) == "unit"
    reader.get_option(BuildTask, "dry-run").apply(task, [])
    reader.get_option(BuildTask, "color").apply(task, [])
    reader.get_option(BuildTask, "compression").apply(task, ["zstd"])

    assert task.tags == ["tests=unit", "dry-run", "color=True", "compression=zstd"]


def test_method_apply_repeated() -> None:
    element = OptionReader().get_option(BuildTask, "dry-run")
    task = BuildTask()

    element.apply(task, [])
    element.apply(task, [])

    assert task.tags == ["dry-run", "dry-run"]


def test_field_apply() -> None:
    reader = OptionReader()
    task = BuildTask()

    reader.get_option(BuildTask, "verbose").apply(task, [])
    reader.get_option(BuildTask, "logLevel").apply(task, ["warn"])
    reader.get_option(BuildTask, "threads").apply(task, ["8"])
    reader.get_option(BuildTask, "tags").apply(task, ["nightly", "arm64"])

    assert task.verbose is True
    assert task.log_level is LogLevel.WARN
    assert task.threads == 8
    assert task.tags == ["nightly", "arm64"]


def test_field_apply_uses_setter() -> None:
    class Task(BaseModel):
        mode: Literal["fast", "slow"] = OptionField("fast", description="Execution mode")
        history: list[str] = []

        def set_mode(self, value: str) -> None:
            self.history.append(value)
            self.mode = value  # type: ignore[assignment]

    task = Task()
    OptionReader().get_option(Task, "mode").apply(task, ["slow"])

    assert task.mode == "slow"
    assert task.history == ["slow"]


def test_multi_valued_method() -> None:
    reader = OptionReader()
    task = PlainTask()

    reader.get_option(PlainTask, "include").apply(task, ["a.py", "b.py"])
    reader.get_option(PlainTask, "ports").apply(task, ["22", "80"])

    assert task.calls == [("include", ["a.py", "b.py"]), ("ports", (22, 80))]


def test_flag_rejects_value() -> None:
    with pytest.raises(TypeConversionError):
        OptionReader().get_option(BuildTask, "verbose").apply(BuildTask(), ["true"])


def test_invalid_value() -> None:
    task = BuildTask()

    with pytest.raises(TypeConversionError):
        OptionReader().get_option(BuildTask, "threads").apply(task, ["many"])

    assert task.threads is None


def test_dispatch_error_propagates() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        OptionReader().get_option(PlainTask, "explode").apply(PlainTask(), [])
