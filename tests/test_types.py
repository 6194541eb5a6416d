import time

import pytest

from difiko.app.picker import Picker
from difiko.app.types import (
    BranchSlot,
    DiffMode,
    Modal,
    ModalKind,
    Screen,
    SetupField,
    Toast,
    ToastKind,
)


def test_picker_modals_expose_their_picker():
    picker = Picker(["a", "b"])
    for kind in (ModalKind.FILE_FILTER, ModalKind.COMMAND_PALETTE):
        modal = Modal(kind, picker=picker)
        assert modal.picker_or_none() is picker
        assert modal.is_overlay() is False


def test_branch_picker_modal_keeps_slot():
    picker = Picker(["main"])
    modal = Modal(ModalKind.BRANCH_PICKER, picker=picker, which=BranchSlot.COMPARE)
    assert modal.which is BranchSlot.COMPARE
    assert modal.picker_or_none() is picker
    assert not modal.is_overlay()


def test_overlays_have_no_picker():
    help_modal = Modal(ModalKind.HELP_OVERLAY)
    error_modal = Modal(ModalKind.ERROR, message="boom")
    assert help_modal.is_overlay() and error_modal.is_overlay()
    assert help_modal.picker_or_none() is None
    assert error_modal.picker_or_none() is None
    assert error_modal.message == "boom"


def test_overlay_ignores_stray_picker():
    modal = Modal(ModalKind.HELP_OVERLAY, picker=Picker(["x"]))
    assert modal.picker_or_none() is None


@pytest.mark.parametrize(
    "kind", [ModalKind.BRANCH_PICKER, ModalKind.FILE_FILTER, ModalKind.COMMAND_PALETTE]
)
def test_picker_modal_without_picker_is_rejected(kind):
    with pytest.raises(ValueError):
        Modal(kind, which=BranchSlot.BASE)


def test_branch_picker_without_slot_is_rejected():
    with pytest.raises(ValueError):
        Modal(ModalKind.BRANCH_PICKER, picker=Picker([]))


def test_toast_records_creation_time():
    before = time.monotonic()
    toast = Toast("hello", ToastKind.ERROR)
    after = time.monotonic()
    assert before <= toast.created <= after
    assert toast.message == "hello"
    assert toast.kind is ToastKind.ERROR


def test_enums_are_distinct_members():
    assert len(set(SetupField)) == 5
    assert len(set(Screen)) == 3
    assert DiffMode("split") is DiffMode.SPLIT