# demexlight

The core of a small lighting console, written in pure Python with no runtime
dependencies. It models DMX fixtures and their channels. It stores groups,
colour presets, position presets and cue sequences. It runs console actions
against a patch and renders every fixture into 512-slot DMX universes. Those
universes go to pluggable outputs.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `demexlight.channel`

This module holds the channels that make up a fixture's patch. Every
channel is a subclass of `FixtureChannel` and has these methods:

- `home()` resets the value.
- `is_home()` reports whether the channel holds its home value.
- `address_bandwidth()` returns the number of DMX addresses the channel uses.
- `type_id()` returns the channel type.
- `name()` returns the display name.
- `generate_data_packet(fixture_id, preset_handler)` returns the channel's
  DMX bytes.

| Channel | Value | Addresses (coarse / fine) |
|---|---|---|
| `IntensityChannel(is_fine, value)` | float 0.0–1.0 | 1 / 2 |
| `StrobeChannel(value)` | float 0.0–1.0 | 1 |
| `ZoomChannel(is_fine, value)` | float 0.0–1.0 | 1 / 2 |
| `ColorRgbChannel(is_fine, value)` | `Rgbw` or `ColorPresetRef` | 3 / 6 |
| `PositionPanTiltChannel(is_fine, value)` | `PanTilt` or `PositionPresetRef` | 2 / 4 |
| `MaintenanceChannel(channel_name, value)` | raw byte | 1 |
| `ToggleFlagsChannel(flags, active)` | name of the active flag | 1 |

Values are encoded as follows:

- Fine channels send a coarse byte followed by a fine byte.
- Colour channels send red, green and blue only. The white component is not
  output.
- A colour or position that refers to a preset is resolved through the
  preset handler for that fixture. If the preset or the fixture's entry is
  missing, the channel sends zeros.
- The type id of a `MaintenanceChannel` comes from its name: the low 16 bits
  of `stable_hash(name)`, a SipHash-1-3 with a zero key. Two maintenance
  channels with different names therefore normally differ in type.
- A toggle-flags channel outputs the byte of its active flag, or 0 when no
  flag is active.

The module also provides these helpers:

- `channel_name_by_id(channel_id)`
- `color_from_rgb(rgb)`
- `describe(preset_handler)` on each value type, which returns a short text
  form.

### `demexlight.fixture`

`Fixture(id, name, patch, universe, start_address)` validates its patch. It
raises `EmptyPatchError` if the patch is empty and
`DuplicateChannelTypeError` if two channels share a type id. It exposes
`address_bandwidth` and the sorted `channel_types`.

Readers:

- `intensity()`
- `color()`
- `position_pan_tilt()`
- `maintenance(name)`
- `channel_single_value(type_id)`
- `toggle_flags()`
- `channel_name(type_id)`
- `is_home()`

Writers:

- `set_intensity(value)`
- `set_color(value)`
- `set_position_pan_tilt(value)`
- `set_maintenance(name, value)`
- `set_channel_single_value(type_id, value)`
- `set_toggle_flag(name)`
- `unset_toggle_flags()`
- `home()`

`update_channel(channel)` replaces the channel of the same type with a copy
of the one given, and `update_channels(channels)` does this for each channel
in turn. When a fixture lacks the channel asked for, these methods raise
`ChannelNotFoundError`. `describe(preset_handler)` returns a multi-line
summary of the name, the id, the address and the current state.

### `demexlight.handler`

`FixtureHandler(outputs, fixtures)` rejects patches whose addresses overlap
within a universe, raising `FixtureAddressOverlapError`.

- `fixture(fixture_id)` returns the fixture with that id, or `None`.
- `home_all()` homes every fixture.
- `grand_master` is a byte from 0 to 255 and defaults to 255. Setting it
  outside that range raises `ValueError`.

`update(preset_handler, delta_time)` does the following:

- It renders each fixture and scales every byte by the grand master.
- It writes the result into that fixture's universe.
- It sends only the universes that changed to every output.
- If an output fails, it raises `FixtureHandlerUpdateError`.
- If a fixture does not fit inside 512 slots, it raises `IndexError`.

### `demexlight.dmx`

`DMXOutput` is the abstract sink, with one method: `send(universe, data)`.
`DebugDummyOutput(verbose)` prints each universe it receives to standard
output. When `verbose` is set, it prints the full data as well.

### `demexlight.selector`

Selectors resolve to a list of fixture ids through
`get_fixtures(preset_handler)`. There are two kinds.

Atomic parts:

- `SingleFixture(id)`
- `FixtureRange(begin, end)`, which includes both ends.
- `GroupRef(group_id)`. It raises `FixtureSelectorError` when the group is
  unknown.
- `SelectorGroup(selector)`, a nested selector.

Compound selectors:

- `Atomic(part)`
- `Additive(first, rest)`, which concatenates the two lists.
- `Subtractive(first, rest)`, which keeps the ids of `first` that are not in
  `rest`.
- `Modulus(part, divisor, invert)`, which keeps every `divisor`-th entry by
  position, or every other entry when `invert` is set.

### `demexlight.presets`

`PresetHandler` stores groups, colour presets, position presets and
sequences, each keyed by id:

- Groups: `record_group`, `get_group`, `rename_group`.
- Colour presets: `record_color`, `get_color`, `get_color_for_fixture`,
  `rename_color`.
- Position presets: `record_position`, `get_position`,
  `get_position_for_fixture`, `rename_position`.
- Sequences: `add_sequence`, `sequence`.

Recording an id that is already taken raises `PresetAlreadyExistsError`.
Looking up or renaming an unknown id raises `PresetNotFoundError`.

Recording a colour or position preset captures the current values of the
selected fixtures. Fixtures that lack that channel are skipped. A value that
itself refers to a preset is first resolved to plain numbers. Recorded
presets are `FixtureColorPreset` and `FixturePositionPreset`. Groups are
`FixtureGroup`.

### `demexlight.sequence`

- `Cue(data)` maps fixture ids to lists of channels.
- `Sequence(id)` is an ordered list of cues.
- `SequenceRuntime(sequence)` plays a sequence:
  - `play()` starts playback.
  - `next_cue()` advances, wrapping back to the first cue.
  - `update(fixture_handler, preset_handler, delta_time)` applies the current
    cue once, when it becomes current. It raises `FixtureNotFoundError` for
    an unknown fixture id.

### `demexlight.actions`

Each action is a frozen dataclass with a `run(fixture_handler,
preset_handler)` method. `run` returns an `ActionRunResult`. On failure it
raises `ActionRunError`, which wraps the underlying fixture, handler, preset
or selector error.

Setting values:

- `SetIntensity(selector, percent)`
- `SetColor(selector, rgbw)`
- `SetPosition(selector, (pan, tilt))`
- `ManSet(selector, channel_name, percent)`

Applying presets:

- `SetColorPreset(selector, preset_id)`
- `SetPositionPreset(selector, preset_id)`

Homing:

- `GoHome(selector)`
- `GoHomeAll()`

Recording:

- `RecordGroup(selector, id)`
- `RecordColor(selector, id)`
- `RecordPosition(selector, id)`

Renaming:

- `RenameGroup(id, name)`
- `RenameColorPreset(id, name)`
- `RenamePositionPreset(id, name)`

Session-only actions, which leave fixture state unchanged:

- `SelectFixtures(selector)`
- `ClearAll()`
- `Test(command)`

Ids in a selection that match no fixture are skipped. The colour and
position actions also skip fixtures that lack the channel. `SetIntensity`
and `ManSet` fail on such fixtures.

### `demexlight.session`

`Session(fixture_handler, preset_handler)` holds the show state.

`run_action(action)` first updates the session:

- `SelectFixtures` sets `global_fixture_select`.
- `ClearAll` clears it.
- `Test("start")` starts a copy of sequence 1.
- `Test("next")` advances the most recently started sequence.

It then runs the action.

`update(delta_time)` pushes fixture state to the outputs and advances every
running sequence. It logs output failures instead of raising them.

`build_demo_fixture_handler()` and `build_demo_preset_handler()` build a
demo rig. The rig has two moving washes (ids 1–2) and eight single-channel
PARs (ids 3–10) on universe 1. It has the groups "Washes" and "PARs" and a
four-cue intensity chase as sequence 1.

## Quick start

```python
from demexlight.actions import SetIntensity, SetColor
from demexlight.selector import Atomic, GroupRef
from demexlight.session import (
    Session,
    build_demo_fixture_handler,
    build_demo_preset_handler,
)

fixture_handler = build_demo_fixture_handler()
preset_handler = build_demo_preset_handler()
session = Session(fixture_handler, preset_handler)

washes = Atomic(GroupRef(1))
session.run_action(SetIntensity(washes, 75.0))
session.run_action(SetColor(washes, (1.0, 0.5, 0.0, 0.0)))

wash = fixture_handler.fixture(1)
print(wash.describe(preset_handler))
print(wash.generate_data_packet(preset_handler))

# Render all fixtures and push changed universes to the outputs.
session.update(1 / 60)
```

## Errors

All failures are exceptions from `demexlight.errors`:

- `FixtureError` and its subclasses: `ChannelNotFoundError`,
  `EmptyPatchError`, `DuplicateChannelTypeError`, `InvalidDataLengthError`
- `FixtureHandlerError` and its subclasses: `FixtureNotFoundError`,
  `FixtureAlreadyExistsError`, `FixtureHandlerUpdateError`,
  `FixtureAddressOverlapError`
- `PresetHandlerError` and its subclasses: `PresetAlreadyExistsError`,
  `PresetNotFoundError`
- `FixtureSelectorError`
- `ActionRunError`

## What this package does not do

- **No command line.** It has no command-line program and no text command
  language. Actions and selectors are built as Python objects.
- **No interface.** It has no graphical or interactive operator interface.
- **No hardware output.** The only output included is `DebugDummyOutput`.
  To drive real DMX hardware, write a subclass of `DMXOutput`.
- **No storage.** Shows, presets and sequences live in memory only. Nothing
  is saved or loaded.
- **No timing.** Sequences step cue by cue without fades, and the handler
  does not run its own update loop. Call `Session.update` yourself.