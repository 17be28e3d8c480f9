# enginekit

Building blocks for a small real-time game engine. None of them depends on a
window system or a graphics API.

## Modules

- `enginekit.enumset.EnumSet` is a set of bit flags taken from an enum. Its value is stored as an
  unsigned integer of `bits` width, 32 by default. It has `set`, `set_to`, `reset`, `any`, `all`
  and `none`, plus comparison and the operators `& | ^ + - << >> ~`. Arithmetic and shifts wrap
  modulo `2 ** bits`.
- `enginekit.ringqueue.RingQueue` is a FIFO queue whose capacity must be a power of two.
  - `push` returns `False` and leaves the queue unchanged when the queue is full.
  - `pop`, `front` and `back` raise `IndexError` when the queue is empty.
- `enginekit.mathutil` provides:
  - `is_power_of_two`
  - `safe_add`, which raises `OverflowError` when the sum leaves the `bits`-wide signed or unsigned range
  - `sq`
  - `wrap_angle`
  - `interpolate`
  - `to_rad`
  - the constants `PI` and `PI_D`
- `enginekit.timer.Timer` times frames using `time.perf_counter`.
  - `mark()` returns the seconds since the previous mark and starts a new interval.
  - `peek()` returns the elapsed seconds without resetting.
- `enginekit.events` holds `Producer` and the abstract `Consumer`.
  - A producer keeps its consumers by weak reference. Consumers that have been collected are
    dropped the next time `produce` runs.
  - `create_consumer` builds a consumer, registers it and returns the strong reference.
- `enginekit.settings` reads settings from an INI file.
  - The first letter of a key gives its type: `b` bool, `i` int, `u` unsigned int, `f` float,
    `s` string. Keys of any other type are logged and skipped, and so are values that do not parse.
  - A missing file is logged and leaves the settings empty.
  - `get_settings()` returns the process-wide `Settings` object.
  - `Settings.get` raises `KeyError` when no value of the requested kind is stored.
  - `get_or_default` and `ConfigModule.get` return the default when no value of the default's type is stored.
  - `parse_str` parses a single value.
- `enginekit.keyboard.Keyboard` is a producer of `KeyEvent`s.
  - It tracks which of the 256 key codes are held and raises `ValueError` for codes outside that range.
  - It queues `DOWN` and `UP` events, and queues typed characters as `CharEvent`s.
  - `dispatch_input_events` sends the queued key events, then one `PRESSED` event for each held key.
  - `utf16_to_utf32` decodes UTF-16 code units into code points.
- `enginekit.mouse.Mouse` is a producer of `MouseEvent`s.
  - It accumulates relative motion into a position and keeps `StateFlags` for the buttons and for
    whether the pointer is inside the window.
  - It keeps a wheel offset. That offset stays unchanged when adding a delta would overflow a
    32-bit signed integer.
  - `dispatch_input_events` sends the queued events, then a `*_HELD` event for each button that is down.
- `enginekit.camera.Camera` is a consumer of both key and mouse events.
  - W, A, S and D (key codes 87, 65, 83, 68) move the camera while the key is `PRESSED`.
  - Mouse movement turns it. Yaw wraps around; pitch is clamped just short of vertical.
  - Holding the left or right button moves it up or down.
  - `matrix()` returns the left-handed view matrix.
- `enginekit.transforms` builds 4×4 numpy matrices for row vectors, applied as `v @ M`:
  - `identity`
  - `translation`
  - `scaling`
  - `rotation_x`
  - `rotation_z`
  - `rotation_roll_pitch_yaw`
  - `look_at_lh`
  - `transform_point`
- `enginekit.trianglelist` holds `IndexedTriangleList` and `SimpleVertex`.
  - `transform` moves every vertex position by a matrix.
  - `set_normals_independent_flat` gives each triangle's vertices the triangle's face normal.
- `enginekit.sphere` provides:
  - `make_tesselated(lat_div, long_div)`, which builds a unit sphere. Both divisions must be at
    least 3, and the vertex count must fit 16-bit indices.
  - `make()`, which builds the sphere with 12 latitude and 24 longitude divisions.
- `enginekit.vertex` describes vertex data.
  - `VertexLayout` is an ordered list of `ElementType`s laid end to end without padding.
    `d3d_layout()` describes each element as an `InputElementDesc`.
  - `VertexBuffer` stores vertices of one layout as packed little-endian bytes. `data()` returns
    the bytes, and `Vertex.attr` reads one attribute back.

## Installation

```
pip install .
```

## Example

```python
from enginekit.camera import Camera
from enginekit.keyboard import Keyboard
from enginekit.mouse import Mouse

kbd = Keyboard()
mouse = Mouse()
camera = Camera()          # keep a reference: producers hold consumers weakly
kbd.register_consumer(camera)
mouse.register_consumer(camera)

kbd.on_key_down(ord("W"))
mouse.on_mouse_move(10, 0)

kbd.dispatch_input_events()
mouse.dispatch_input_events()

view = camera.matrix()     # 4x4 numpy array
```

Settings:

```python
from enginekit.settings import get_settings

settings = get_settings()
settings.read_all_settings("config/settings.ini")
width = settings.module("Window").get("uWidth", 800)
```

Vertex data:

```python
from enginekit.vertex import ElementType, VertexBuffer, VertexLayout

layout = VertexLayout().append(ElementType.POSITION_3D).append(ElementType.NORMAL)
vbuf = VertexBuffer(layout)
vbuf.emplace_back((0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
payload = vbuf.data()      # 24 bytes
```

## What it does not do

enginekit is a library only. It has:

- no command to run
- no window
- no rendering
- no shader or texture handling
- no model loading

Input has to be fed in by calling the `on_*` methods of `Keyboard` and `Mouse` from whatever
window or event loop the application uses. The matrices, triangle lists and vertex buffers it
builds are plain data, and drawing them is left to the caller.

## Tests

```
pip install .[test]
pytest
```