from pathlib import Path

import numpy as np
import pytest

from sparrow_obj.errors import InvalidDataError
from sparrow_obj.scene.types import Entity, MapSlot, Material, MaterialBuilder, Mesh


def test_mesh_stores_flat_typed_arrays(triangle_mesh):
    assert triangle_mesh.positions.dtype == np.float32
    assert triangle_mesh.indices.dtype == np.uint32
    assert triangle_mesh.vertex_count == 3
    assert triangle_mesh.normal_count == 3
    assert triangle_mesh.texcoord_count == 3
    assert triangle_mesh.triangle_count == 1


def test_mesh_buffers_are_read_only(triangle_mesh):
    with pytest.raises(ValueError):
        triangle_mesh.positions[0] = 5.0


def test_mesh_rejects_partial_triples():
    with pytest.raises(InvalidDataError, match="positions length 4"):
        Mesh(positions=[0.0, 0.0, 0.0, 1.0])


def test_mesh_rejects_out_of_range_index():
    with pytest.raises(InvalidDataError, match="out of range"):
        Mesh(positions=[0.0] * 9, indices=[0, 1, 3])


def test_mesh_allows_missing_attributes():
    mesh = Mesh(positions=[0.0] * 9, indices=[0, 1, 2])

    assert mesh.normal_count == 0
    assert mesh.texcoord_count == 0


def test_material_structural_equality():
    a = Material("Brick", {MapSlot.DIFFUSE: Path("/tex/brick.png")})
    b = MaterialBuilder().name("Brick").diffuse_color_map("/tex/brick.png").build()
    c = MaterialBuilder().name("Brick").normal_map("/tex/brick.png").build()

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a.has_same_maps(b)
    assert not a.has_same_maps(c)


def test_material_absent_slot_is_not_a_key():
    mat = MaterialBuilder().name("Plain").roughness_map("/tex/r.png").build()

    assert MapSlot.ROUGHNESS in mat.maps
    assert MapSlot.DIFFUSE not in mat.maps
    assert mat.map(MapSlot.DIFFUSE) is None


def test_material_is_immutable():
    mat = Material("Plain")

    with pytest.raises(TypeError):
        mat.maps[MapSlot.DIFFUSE] = Path("x.png")


def test_builder_copies_then_overrides():
    original = MaterialBuilder().name("Brick").bump_map("/tex/bump.png").build()

    renamed = (
        MaterialBuilder.from_material(original)
        .name("Brick-Wall")
        .without(MapSlot.BUMP)
        .sheen_map("/tex/sheen.png")
        .build()
    )

    assert original.name == "Brick"
    assert set(original.maps) == {MapSlot.BUMP}
    assert renamed.name == "Brick-Wall"
    assert set(renamed.maps) == {MapSlot.SHEEN}


def test_entities_share_mesh_and_material(triangle_mesh):
    mat = Material("Shared")
    a = Entity("A", triangle_mesh, mat)
    b = Entity("B", triangle_mesh, mat)

    assert a.mesh is b.mesh
    assert a.material is b.material
