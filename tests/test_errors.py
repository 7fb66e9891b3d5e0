import pytest

from demexlight.errors import (
    ActionRunError,
    ChannelNotFoundError,
    DuplicateChannelTypeError,
    EmptyPatchError,
    FixtureAddressOverlapError,
    FixtureAlreadyExistsError,
    FixtureError,
    FixtureHandlerError,
    FixtureHandlerUpdateError,
    FixtureNotFoundError,
    FixtureSelectorError,
    InvalidDataLengthError,
    PresetAlreadyExistsError,
    PresetHandlerError,
    PresetNotFoundError,
)


def test_fixture_error_messages():
    assert str(EmptyPatchError()) == "Patch is empty"
    assert str(DuplicateChannelTypeError()) == "Duplicate channel type"
    assert str(InvalidDataLengthError()) == "Invalid data length"


def test_channel_not_found_keeps_channel_name():
    err = ChannelNotFoundError("Intensity")
    assert err.channel == "Intensity"
    assert "Intensity" in str(err)
    assert str(err).endswith("not found")
    assert isinstance(err, FixtureError)


def test_channel_not_found_without_name():
    err = ChannelNotFoundError()
    assert err.channel is None
    assert "None" in str(err)


def test_fixture_handler_error_messages():
    assert str(FixtureNotFoundError(7)) == "Fixture 7 not found"
    assert str(FixtureAlreadyExistsError()) == "Fixture already exists"
    overlap = FixtureAddressOverlapError(1, 10, 12)
    assert str(overlap) == "Fixture address overlap (U1): 10 - 12"
    assert (overlap.universe, overlap.start, overlap.end) == (1, 10, 12)
    assert isinstance(overlap, FixtureHandlerError)


def test_update_error_wraps_cause():
    cause = OSError("port closed")
    err = FixtureHandlerUpdateError(cause)
    assert err.error is cause
    assert str(err) == "Fixture handler update error: port closed"


def test_preset_error_messages():
    assert str(PresetAlreadyExistsError(3)) == "Group with id 3 already exists"
    missing = PresetNotFoundError(4)
    assert str(missing) == "Group with id 4 not found"
    assert missing.preset_id == 4
    assert isinstance(missing, PresetHandlerError)


def test_fixture_selector_error_message():
    inner = PresetNotFoundError(2)
    err = FixtureSelectorError(inner)
    assert err.error is inner
    assert str(err) == "PresetHandlerError: Group with id 2 not found"


@pytest.mark.parametrize(
    "inner, prefix",
    [
        (FixtureNotFoundError(5), "Fixture handler error: "),
        (EmptyPatchError(), "Fixture error: "),
        (PresetNotFoundError(5), "Preset handler error: "),
        (FixtureSelectorError(PresetNotFoundError(5)), "Fixture selector error: "),
    ],
)
def test_action_run_error_prefix(inner, prefix):
    err = ActionRunError(inner)
    assert str(err) == prefix + str(inner)
    assert err.error is inner
    assert err.__cause__ is inner


def test_action_run_error_rejects_unrelated_errors():
    with pytest.raises(TypeError):
        ActionRunError(ValueError("nope"))