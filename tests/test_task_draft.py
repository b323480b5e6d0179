"""Tests for draft transitions and the draft controller."""

from __future__ import annotations

import datetime

import pytest

from taskboard.errors import DraftFieldError, InvalidRepeatTransition
from taskboard.tasks import draft as draft_ops
from taskboard.tasks.draft import TaskDraftController
from taskboard.tasks.models import CustomRepeat, IntervalRepeat, Task

UTC = datetime.timezone.utc
NOW = datetime.datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


def _fixed_clock() -> datetime.datetime:
    return NOW


@pytest.fixture
def controller() -> TaskDraftController:
    return TaskDraftController(clock=_fixed_clock)


def _assert_repeat_shape(task: Task) -> None:
    data = task.repeat_data
    assert task.repeat is True
    if isinstance(data, IntervalRepeat):
        assert data.type in {"day", "week", "month", "year"}
        assert data.interval >= 1
    else:
        assert isinstance(data, CustomRepeat)
        assert data.from_ <= data.to


def test_transitions_do_not_mutate_input():
    original = Task(created_at=NOW)

    updated = draft_ops.set_repeat(original, True)

    assert original.repeat is False
    assert original.repeat_data is None
    assert updated is not original


def test_set_field_replaces_editable_field(controller):
    controller.set_field("title", "Buy milk")
    task = controller.set_field("priority", "high")

    assert task.title == "Buy milk"
    assert task.priority == "high"


@pytest.mark.parametrize("name", ["repeat", "repeat_data", "due_at", "id", "created_at", "unknown"])
def test_set_field_rejects_non_editable_fields(controller, name):
    before = controller.draft

    with pytest.raises(DraftFieldError):
        controller.set_field(name, "x")

    assert controller.draft == before


def test_set_field_rejects_invalid_priority(controller):
    with pytest.raises(DraftFieldError):
        controller.set_field("priority", "urgent")


def test_enable_repeat_installs_default(controller):
    task = controller.set_repeat(True)

    assert task.repeat is True
    assert task.repeat_data == IntervalRepeat(type="day", interval=1)


def test_disable_repeat_removes_config(controller):
    controller.set_repeat(True)
    task = controller.set_repeat(False)

    assert task.repeat is False
    assert task.repeat_data is None


def test_reenabling_repeat_discards_previous_edits(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("month")
    controller.set_repeat_interval(3)

    task = controller.set_repeat(True)

    assert task.repeat_data == IntervalRepeat(type="day", interval=1)


def test_disable_enable_cycle_starts_fresh(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("custom")
    controller.set_repeat(False)

    task = controller.set_repeat(True)

    assert task.repeat_data == IntervalRepeat(type="day", interval=1)


def test_switch_to_custom_installs_one_week_window(controller):
    controller.set_repeat(True)

    task = controller.set_repeat_type("custom")

    assert task.repeat_data == CustomRepeat(from_=NOW, to=NOW + datetime.timedelta(days=7))


def test_custom_window_length_is_configurable():
    controller = TaskDraftController(clock=_fixed_clock, window_days=14)
    controller.set_repeat(True)

    task = controller.set_repeat_type("custom")

    assert task.repeat_data.to - task.repeat_data.from_ == datetime.timedelta(days=14)


@pytest.mark.parametrize("start", ["day", "week", "month", "year"])
@pytest.mark.parametrize("end", ["day", "week", "month", "year"])
def test_round_trip_through_custom_resets_interval(controller, start, end):
    controller.set_repeat(True)
    controller.set_repeat_type(start)
    controller.set_repeat_interval(5)

    controller.set_repeat_type("custom")
    task = controller.set_repeat_type(end)

    assert task.repeat_data == IntervalRepeat(type=end, interval=1)


def test_switch_between_interval_types_resets_interval(controller):
    controller.set_repeat(True)
    controller.set_repeat_interval(4)

    task = controller.set_repeat_type("week")

    assert task.repeat_data == IntervalRepeat(type="week", interval=1)


def test_set_repeat_type_requires_repeat_enabled(controller):
    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_type("week")

    assert controller.draft.repeat_data is None


def test_set_repeat_interval_updates_interval(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("year")

    task = controller.set_repeat_interval(2)

    assert task.repeat_data == IntervalRepeat(type="year", interval=2)


def test_set_repeat_interval_rejected_on_custom(controller):
    controller.set_repeat(True)
    before = controller.set_repeat_type("custom")

    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_interval(3)

    assert controller.draft == before


def test_set_repeat_interval_rejects_non_positive(controller):
    controller.set_repeat(True)

    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_interval(0)


def test_set_repeat_range_replaces_range(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("custom")
    start = NOW + datetime.timedelta(days=2)
    end = NOW + datetime.timedelta(days=30)

    task = controller.set_repeat_range(start, end)

    assert task.repeat_data == CustomRepeat(from_=start, to=end)


def test_set_repeat_range_rejected_on_interval(controller):
    controller.set_repeat(True)

    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_range(NOW, NOW + datetime.timedelta(days=1))


def test_set_repeat_range_rejects_reversed_range(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("custom")

    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_range(NOW, NOW - datetime.timedelta(days=1))


def test_repeat_shape_holds_across_edit_sequence(controller):
    controller.set_repeat(True)
    steps = [
        lambda: controller.set_repeat_type("week"),
        lambda: controller.set_repeat_interval(3),
        lambda: controller.set_repeat_type("custom"),
        lambda: controller.set_repeat_range(NOW, NOW + datetime.timedelta(days=3)),
        lambda: controller.set_repeat_type("month"),
        lambda: controller.set_repeat_interval(6),
    ]
    for step in steps:
        _assert_repeat_shape(step())


def test_toggle_due_at_twice_restores_absence(controller):
    first = controller.toggle_due_at()
    second = controller.toggle_due_at()

    assert first.due_at == NOW
    assert second.due_at is None


def test_set_due_at_value_parses_input_strings(controller):
    controller.toggle_due_at()

    task = controller.set_due_at_value("2024-04-02T18:15")

    assert task.due_at == datetime.datetime(2024, 4, 2, 18, 15, tzinfo=UTC)


def test_set_due_at_value_rejects_garbage(controller):
    with pytest.raises(DraftFieldError):
        controller.set_due_at_value("not a date")


def test_due_at_is_independent_of_repeat(controller):
    controller.toggle_due_at()
    controller.set_repeat(True)
    task = controller.set_repeat(False)

    assert task.due_at == NOW


def test_controller_reset_keeps_preselected_theme():
    controller = TaskDraftController("t1", clock=_fixed_clock)
    controller.set_field("title", "Plan sprint")

    task = controller.reset()

    assert task.title == ""
    assert task.theme == "t1"


@pytest.mark.parametrize("interval", [True, False, 2.0, "2"])
def test_set_repeat_interval_requires_an_integer(controller, interval):
    before = controller.set_repeat(True)

    with pytest.raises(InvalidRepeatTransition):
        controller.set_repeat_interval(interval)

    assert controller.draft == before


def test_reversed_range_error_names_the_cause(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("custom")

    with pytest.raises(InvalidRepeatTransition, match="must not end before it starts"):
        controller.set_repeat_range(NOW, NOW - datetime.timedelta(days=1))


def test_unparseable_range_bound_error_names_the_cause(controller):
    controller.set_repeat(True)
    controller.set_repeat_type("custom")

    with pytest.raises(InvalidRepeatTransition) as excinfo:
        controller.set_repeat_range("not a date", NOW)

    assert "must not end before it starts" not in str(excinfo.value)
    assert "datetime" in str(excinfo.value)
