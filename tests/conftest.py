from pathlib import Path

import pytest
from PIL import Image

from sparrow_obj.scene.types import Entity, Material, Mesh

CUBE_OBJ = """\
# cube with a textured material
mtllib cube.mtl
o Cube
v -1.0 -1.0 1.0
v 1.0 -1.0 1.0
v 1.0 1.0 1.0
v -1.0 1.0 1.0
v -1.0 -1.0 -1.0
v 1.0 -1.0 -1.0
v 1.0 1.0 -1.0
v -1.0 1.0 -1.0
vt 0.0 0.0
vt 1.0 0.0
vt 1.0 1.0
vt 0.0 1.0
vn 0.0 0.0 1.0
vn 0.0 0.0 -1.0
vn 1.0 0.0 0.0
vn -1.0 0.0 0.0
vn 0.0 1.0 0.0
vn 0.0 -1.0 0.0
usemtl Material
s off
f 1/1/1 2/2/1 3/3/1 4/4/1
f 6/1/2 5/2/2 8/3/2 7/4/2
f 2/1/3 6/2/3 7/3/3 3/4/3
f 5/1/4 1/2/4 4/3/4 8/4/4
f 4/1/5 3/2/5 7/3/5 8/4/5
f 5/1/6 6/2/6 2/3/6 1/4/6
"""

CUBE_MTL = """\
# cube material
newmtl Material
Ns 96.0
Ka 1.0 1.0 1.0
Kd 0.8 0.8 0.8
Ks 0.5 0.5 0.5
illum 2
map_Kd textures/diffuse.png
norm textures/normal.png
"""


def write_png(path: Path, color: str = "red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (2, 2), color=color).save(path)
    return path


@pytest.fixture
def cube_obj(tmp_path):
    """Cube OBJ + MTL with a diffuse and a normal map on disk."""
    write_png(tmp_path / "textures" / "diffuse.png")
    write_png(tmp_path / "textures" / "normal.png", color="blue")
    (tmp_path / "cube.mtl").write_text(CUBE_MTL)
    obj = tmp_path / "cube.obj"
    obj.write_text(CUBE_OBJ)
    return obj


@pytest.fixture
def texture(tmp_path):
    return write_png(tmp_path / "textures" / "rough.png").resolve()


@pytest.fixture
def triangle_mesh():
    return Mesh(
        positions=[0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0],
        normals=[0.0, 0.0, 1.0] * 3,
        texcoords=[0.0, 0.0, 1.0, 0.0, 0.0, 1.0],
        indices=[0, 1, 2],
    )


@pytest.fixture
def triangle(triangle_mesh):
    return Entity(name="Triangle", mesh=triangle_mesh, material=Material("Plain"))
