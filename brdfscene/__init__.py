"""Scene graph, camera, lighting, shader parameters, materials, meshes and render resources for a BRDF renderer."""

__version__ = "0.1.0"