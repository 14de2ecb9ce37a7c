# brdfscene

`brdfscene` is the scene and resource layer of a real-time BRDF renderer. It
describes what a renderer works with: transforms, input events, cameras, lights,
shader parameters, materials, meshes, textures and uniform blocks. It keeps all of
this as plain Python and numpy data.

## What is in the package

- `brdfscene.utils` holds the math and image helpers.
  - It builds 4×4 matrices with numpy: `translate`, `rotate`, `scale`,
    `perspective`, `look_at`, `rotation_matrix` and `model_matrix`.
  - It reads values back out of a model matrix: `position_from_model`,
    `rotation_from_model` and `scale_from_model`.
  - `vec_to_string` and `mat_to_string` format vectors and matrices as text.
  - `read_image` loads 8-bit images and `read_image_hdr` loads float images. Both
    read Pillow-supported formats and Radiance `.hdr` files, and both raise
    `OSError` when decoding fails.
  - `Channels` flags describe pixel formats. `WrappingMode` and `FilteringMode`
    describe sampling.
- `brdfscene.events` defines the events and their dispatch.
  - The event types are `KeyboardEvent`, `MouseMoveEvent`, `ScrollEvent` and
    `FrameResizeEvent`.
  - `EventManager` is the dispatcher. Callbacks run in the order they were
    registered, and an event whose `done` flag is set stops further delivery.
- `brdfscene.shader_param` holds typed `ShaderParam` values collected in a
  `ShaderParamList`. Lists iterate in name order and merge with `+`. A lookup of an
  unknown name raises `ShaderParamError`.
- `brdfscene.render_api` is the backend registry and global render state.
  - `register_create`, `create`, `init`, `viewport`, `clear`, `depth_test` and
    `face_culling` work with the registered backend.
  - It also provides the `ArrayBuffer`, `UniformBuffer` and `FrameBuffer` classes.
- `brdfscene.texture` provides `Texture2D` and `TextureCube`. They keep their
  pixels as arrays and build box-filtered mip chains when filtering is `MIPMAP`.
- These modules cover shaders, pipelines and materials:
  - `brdfscene.shader` defines `Shader` and `Pipeline`. A pipeline records the
    uniform values sent to it and assigns texture units.
  - `brdfscene.shader_manager` holds named shaders. They are built lazily, and an
    unknown name raises `ShaderNotFoundError`.
  - `brdfscene.pipeline_manager` caches one pipeline per combination of shader
    names.
  - `brdfscene.material` defines `Material`, which owns a copy of its pipeline's
    parameters plus its depth-test and face-culling state.
  - `brdfscene.shader_catalog` registers the stock shader set through
    `register_builtin_shaders`, with the parameters each shader declares.
- `brdfscene.mesh` defines `Mesh`, which holds interleaved vertices, an optional
  index buffer and a vertex layout. Built-in shapes are `Shape.CUBE` and
  `Shape.QUAD`. `Mesh.draw` binds the material and returns how many vertices would
  be drawn.
- `brdfscene.uniforms` defines `CameraBlock`, `LightsBlock` and the other uniform
  blocks. Each packs to std140 bytes with `pack()`.
- These modules cover scene objects:
  - `brdfscene.objects` defines `SceneObject`, `Actor` and `GameObject`.
  - `brdfscene.camera` defines `Camera` and `FlyCamera`. WASD moves the camera,
    dragging with the right mouse button turns it, and scrolling changes its speed.
  - `brdfscene.light` defines `PointLight`, which writes its values into a
    `LightsBlock`.
  - `brdfscene.scene` defines `SceneNode` hierarchies, scripts (`ScriptBase`,
    `register_script`, `ScriptRegistry`) and the entity/component `SceneManager`.
  - `brdfscene.scripts` registers `TestScript`, which prints on start and on every
    update.
- `brdfscene.image_manager` and `brdfscene.mesh_manager` are caches keyed by path
  or by name.

## Installation

```
pip install brdfscene
```

## Examples

A node hierarchy:

```python
from brdfscene.scene import SceneNode
from brdfscene.utils import position_from_model

parent = SceneNode(position=(1.2, 4.0, 0.0))
child = SceneNode(position=(0.0, 2.0, 0.0))
child.attach(parent)

print(position_from_model(child.world_model()))   # [1.2 6.  0. ]
```

Events and the camera:

```python
from brdfscene.camera import FlyCamera, ProjectMode
from brdfscene.events import EventManager, KeyboardEvent, KeyCode, PressType

camera = FlyCamera(75.0, 16 / 9, ProjectMode.PERSP)
events = EventManager()
events.register(camera.callback)

events.trigger(KeyboardEvent(KeyCode.W, PressType.Press, 0))
camera.tick(0.01)   # moves the camera along camera.forward()
```

Built-in shaders and a material:

```python
from brdfscene.material import Material
from brdfscene.pipeline_manager import PipelineManager
from brdfscene.shader_catalog import register_builtin_shaders
from brdfscene.shader_manager import ShaderManager

shaders = ShaderManager()
register_builtin_shaders(shaders)
pipelines = PipelineManager(shaders)

phong = Material.from_shaders(pipelines, "a_default_vs", "a_Blinn_Phong_BRDF_fs", True)
phong.set_param("mt_shininess", 32.0)
```

## What the package does not do

- It opens no window and talks to no GPU. There is no command to run.
- No graphics backend is included. `render_api.init(GraphicsAPI.OPENGL)` needs a
  `RenderBackend` subclass registered first with
  `register_create("RenderBackend_GL", factory)`. Until then, `create` raises
  `RenderAPIError`.
- Pipelines, textures and frame buffers only record state and data. Nothing
  compiles shaders or rasterises triangles.
- There is no loader for 3D model files. Meshes come from the built-in shapes or
  from arrays you supply.

## Running the tests

```
pip install "brdfscene[test]"
pytest
```