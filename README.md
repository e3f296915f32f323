# cgscene

A compact scene graph and rasterisation toolkit in pure Python, with no
third-party dependencies.

## Modules

- **`cgscene.objects`**: `SceneObject`, a named base object. An object made
  without a name is called `SceneObject<n>` from a shared counter.
  `to_dict()` / `load_dict()` round-trip its name. `Callback` is a hook whose
  `run(obj, data)` returns its `enabled` flag.
- **`cgscene.render_state`**: render attributes `Color`, `PointSize`,
  `LineWidth`, `LineStipple` and `PolygonModeState`. They are gathered in a
  `RenderStateSet` together with capability switches (`Capability`).
  `RenderStateSet.apply(state)` writes into a `GLState` record: the current
  colour, sizes, stipple, polygon modes and enables, plus a `calls` log of every
  change in order. Render states are kept per kind and per unit index
  (`RenderStateSlot`). `EnableSet` is a standalone set of switches. The
  enumerations are `RenderStateType`, `PolygonFace`, `ColorMaterial`,
  `PolygonMode`, `ShadeModel` and `FrontFace`.
- **`cgscene.tessellation`**: `TessellationHints`, a dataclass with slice and
  stack counts (default 40 and 20) and flags for normals, texture coordinates
  and shape parts.
- **`cgscene.raster`**: rasterisation algorithms that return lists of integer
  points:
  - lines: `dda_line`, `midpoint_line`, `bresenham_line`
  - circles and arcs: `midpoint_circle`, `bresenham_circle`, `arc_points`
  - polygon fill: `scanline_fill`, with vertex y values in `[0, 2048)`

  `Canvas` is a pixel grid with `get`, `set` and `plot`. `boundary_fill` and
  `flood_fill` work on a canvas with a four-connected fill. `demo_names()` lists
  the built-in demo drawings: points, lines, strip, loop, triangles,
  triangle_strip, triangle_fan, quads, quad_strip, polygon and star.
  `demo_scene(name)` returns a demo as `(Primitive, vertices)` batches.
  `star_triangles()` gives the ten triangles of the star.
- **`cgscene.node`**: `Node` has several parents, stale-bound propagation
  (`dirty_bound`), `world_matrix()` and a lazily created `RenderStateSet`.
  `Renderable` compiles `build_display_list()` once, when its display list is
  enabled, and replays it on `render(context, camera)`. It saves and restores
  the `GLState` around its own render states.
- **`cgscene.geometry`**: `LineSegment` and `LineStrip`, with `translate`,
  `rotate` (degrees, counter-clockwise) and `scale` about `(cx, cy)`.
  - `LineStrip.rotate` composes translate(-c), rotate, translate(c). Its fixed
    point is therefore `(-cx, -cy)`.
  - `LineStrip` serialises with `to_bytes()` / `from_bytes()`: a little-endian
    uint64 count followed by x, y, z doubles. It also round-trips through
    `to_dict()` / `load_dict()`.
- **`cgscene.sphere`**: `Sphere` builds quad strips from pole to pole,
  following its `TessellationHints`. Changing the radius or the hints object
  marks the display list stale.
- **`cgscene.events`**: `EventHandler` is a command model with one current
  command (`set_command`, `current_command`, `delete_command`) and class-level
  callbacks for keys, mouse buttons, cursor moves and scrolling. Escape cancels
  the current command. `Model2DTransform` does three things:
  - dragging with the right button rotates a node, using the step from
    `rotation_delta`;
  - Ctrl + scroll scales the node by 1.1 or 0.9;
  - Shift + left click sets the pivot for both.

## Example

```python
from cgscene.raster import Canvas, bresenham_line, scanline_fill
from cgscene.geometry import LineStrip

canvas = Canvas(64, 64, (1.0, 1.0, 1.0))
canvas.plot(bresenham_line(0, 0, 10, 4), (0.0, 0.0, 0.0))

square = [(10, 10), (10, 20), (20, 20), (20, 10)]
canvas.plot(scanline_fill(square), (1.0, 0.0, 0.0))

strip = LineStrip([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)])
strip.rotate(90.0, 0.0, 0.0)
restored = LineStrip.from_bytes(strip.to_bytes())
```

## What it does not do

- There is no window, GUI or command-line program. Nothing is drawn to a
  screen. Rendering records state changes and drawing calls in a `GLState`,
  and rasterisation writes to a `Canvas` in memory.
- There are no camera, group, transform-node or scene-container classes.
  `render` only checks that a camera object is given.
- `Node.world_matrix()` returns the identity unless the first parent is a
  transform node.
- The event handlers expect the caller to supply the window and view objects
  that are described in the `cgscene.events` docstring.

## Running the tests

```
pip install -e ".[test]"
pytest
```