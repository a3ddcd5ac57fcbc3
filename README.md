# vuengine

vuengine provides building blocks for a small real-time 3D renderer. It is
written in plain Python with numpy. It does no drawing itself. It supplies
the bookkeeping and the math that a renderer needs.

## What is in it

- **`vuengine.allocators`**: allocators that hand out integer addresses
  from a simulated address range:
  - `LinearAllocator` allocates front to back. Its `free` always raises, so
    use `clear` instead.
  - `StackAllocator` stores a one-byte header before each block. Blocks
    must be freed in reverse order.
  - `PoolAllocator` serves fixed-size, fixed-alignment slots. Its
    `capacity` property gives the total number of slots.

  The module also has `align_forward(address, alignment)` and
  `get_adjustment(address, alignment, extra=0)`. Every allocator keeps
  `used_memory` and `allocation_count` up to date. An allocator that runs
  out of memory, or that is misused, raises `AllocatorError`, which is a
  subclass of `MemoryError`. A bad size or alignment raises `ValueError`.
- **`vuengine.memory_manager.MemoryManager`**: a global allocator backed by
  a stack, 128 MB by default. `free` accepts addresses in any order. An
  address freed out of order is released once every allocation made after
  it has also been freed. `check_memory_leaks()` logs the allocations that
  were never freed and returns them as `(user, address)` pairs. The manager
  works as a context manager: leaving the `with` block calls `close()`.
  Messages go to the standard `logging` module.
- **`vuengine.chunk_memory.ChunkMemoryManager`**: slots for fixed-size
  objects, spread over `PoolAllocator` chunks. A new chunk is added when
  all existing chunks are full. It has `create_object`, `destroy_object`,
  `len()`, iteration over the live addresses, and `close()`.
- **`vuengine.camera.Camera`**: keeps `projection`, `view` and
  `inverse_view` as 4x4 numpy arrays indexed `[row, column]`, so a point
  transforms as `matrix @ point`. Clip-space depth runs from 0 to 1. The
  camera offers:
  - `set_orthographic_projection`
  - `set_perspective_projection`
  - `set_view_direction`
  - `set_view_target`
  - `set_view_yxz`, which takes Tait–Bryan angles
  - `position()`
- **`vuengine.buffer`**: `aligned_instance_size(instance_size,
  min_offset_alignment=1)` and `BufferLayout`. `BufferLayout` works out
  `alignment_size`, `buffer_size`, `offset_for_index` and
  `range_for_index` for instances stored back to back.
- **`vuengine.gameobject`**: `TransformComponent`, with `to_mat4()` and
  `normal_matrix()`; `PointLightComponent`; `RigidBody2dComponent`;
  `GameObject`, with `create()` and `create_as_point_light()`;
  `PointLight`; and `GlobalUbo`. `GlobalUbo.add_point_light` accepts at
  most `MAX_LIGHTS` (10) lights.
- **`vuengine.systems`**:
  - `ColorSystem` gives each object a random colour from a six-colour
    palette every `flicker_rate` seconds. You can pass your own
    `random.Random`.
  - `GravityPhysicsSystem` simulates mutual attraction between objects in
    the XY plane. Its `update` method takes an optional number of
    substeps.
- **`vuengine.model`**:
  - `Vertex` holds position, colour, normal and texture coordinate, stored
    at 32-bit float precision. `Vertex.attribute_layout()` lists the shader
    input attributes, and `VERTEX_STRIDE` gives the size of one vertex.
  - `hash_combine(seed, *args)` mixes hashes into a seed.
  - `build_indexed_mesh(vertices)` removes duplicate vertices.
  - `load_obj(path)` reads a Wavefront OBJ file and returns the unique
    vertices and the triangle indices. Polygons are split into fans.
    Texture `v` is flipped to `1 - v`. Vertices with no colour are white.

## What it does not do

vuengine has no window, no GPU device, and no shader or pipeline handling.
It draws nothing. The allocators do not reserve any real memory. They only
compute addresses within the range you give them. `BufferLayout` computes
sizes and offsets but holds no data. `GameObject.model` and
`GameObject.diffuse_map` are plain attributes for whatever objects your
renderer uses. There is no command-line program.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Example

```python
import math

from vuengine.allocators import StackAllocator
from vuengine.camera import Camera
from vuengine.gameobject import GameObject

stack = StackAllocator(1024, 0x1000)
first = stack.allocate(64, 8)
second = stack.allocate(32, 16)
stack.free(second)
stack.free(first)

camera = Camera()
camera.set_perspective_projection(math.radians(50), 16 / 9, 0.1, 100.0)
camera.set_view_target((0.0, -1.0, -3.0), (0.0, 0.0, 0.0), (0.0, -1.0, 0.0))

cube = GameObject.create()
cube.transform.translation[:] = (0.0, 0.5, 2.5)
model_matrix = cube.transform.to_mat4()
clip = camera.projection @ camera.view @ model_matrix
```

## Running the tests

```
pytest
```