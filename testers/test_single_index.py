# -*- coding: utf-8 -*-
import numpy as np
import pytest

from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.faces import Quad, Triangle, VertexIndices as VI
from objmesh.loader.options import LoadOptions
from objmesh.loader.single_index import export_faces

POS = [0, 0, 0, 1, 0, 0, 1, 1, 0, 0, 1, 0]


def test_quad_triangulated():
    faces = [Quad(VI(0), VI(1), VI(2), VI(3))]
    mesh = export_faces(POS, [], [], [], faces, None, LoadOptions(triangulate=True))
    assert mesh.indices.tolist() == [0, 1, 2, 0, 2, 3]
    assert mesh.positions.tolist() == POS
    assert len(mesh.face_arities) == 0
    assert mesh.indices.dtype == np.uint32


def test_vertices_first_seen_order():
    faces = [Triangle(VI(3), VI(1), VI(2))]
    mesh = export_faces(POS, [], [], [], faces, None, LoadOptions())
    assert mesh.positions.tolist() == [0, 1, 0, 1, 0, 0, 1, 1, 0]
    assert mesh.indices.tolist() == [0, 1, 2]


def test_same_position_different_normal_duplicates_vertex():
    normals = [0, 0, 1, 0, 0, -1]
    faces = [
        Triangle(VI(0, None, 0), VI(1, None, 0), VI(2, None, 0)),
        Triangle(VI(0, None, 1), VI(1, None, 0), VI(2, None, 0)),
    ]
    mesh = export_faces(POS, [], [], normals, faces, 7, LoadOptions())
    assert mesh.indices.tolist() == [0, 1, 2, 3, 1, 2]
    assert mesh.num_vertices == 4
    assert mesh.normals.tolist() == [0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, -1]
    assert mesh.material_id == 7


def test_texcoords_copied():
    texcoords = [0, 0, 1, 0, 1, 1]
    faces = [Triangle(VI(0, 0), VI(1, 1), VI(2, 2))]
    mesh = export_faces(POS, [], texcoords, [], faces, None, LoadOptions())
    assert mesh.texcoords.tolist() == texcoords


def test_attribute_reference_without_data_is_ignored():
    faces = [Triangle(VI(0, 0, 0), VI(1, 0, 0), VI(2, 0, 0))]
    mesh = export_faces(POS, [], [], [], faces, None, LoadOptions())
    assert len(mesh.texcoords) == 0
    assert len(mesh.normals) == 0


@pytest.mark.parametrize("face, kind", [
    (Triangle(VI(0), VI(1), VI(99)), ErrorKind.FACE_VERTEX_OUT_OF_BOUNDS),
    (Triangle(VI(0), VI(1), VI(-1)), ErrorKind.FACE_VERTEX_OUT_OF_BOUNDS),
    (Triangle(VI(0, 0), VI(1, 0), VI(2, 5)), ErrorKind.FACE_TEXCOORD_OUT_OF_BOUNDS),
    (Triangle(VI(0, None, 0), VI(1, None, 3), VI(2, None, 0)), ErrorKind.FACE_NORMAL_OUT_OF_BOUNDS),
])
def test_out_of_bounds(face, kind):
    with pytest.raises(LoadError) as err:
        export_faces(POS, [], [0, 0], [0, 0, 1], [face], None, LoadOptions())
    assert err.value.kind is kind


def test_uniform_vertex_color():
    faces = [Triangle(VI(0), VI(1), VI(2))]
    mesh = export_faces(POS, [0.5, 0.5, 0.5], [], [], faces, None, LoadOptions())
    assert mesh.vertex_color.tolist() == [0.5] * 9


def test_per_vertex_color_follows_position():
    colors = [1, 0, 0, 0, 1, 0, 0, 0, 1, 1, 1, 1]
    faces = [Triangle(VI(2), VI(0), VI(3))]
    mesh = export_faces(POS, colors, [], [], faces, None, LoadOptions())
    assert mesh.vertex_color.tolist() == [0, 0, 1, 1, 0, 0, 1, 1, 1]


def test_missing_vertex_color():
    colors = [1, 0, 0, 0, 1, 0]
    faces = [Triangle(VI(0), VI(1), VI(2))]
    with pytest.raises(LoadError) as err:
        export_faces(POS, colors, [], [], faces, None, LoadOptions())
    assert err.value.kind is ErrorKind.FACE_COLOR_OUT_OF_BOUNDS


def test_float64_output():
    faces = [Triangle(VI(0), VI(1), VI(2))]
    mesh = export_faces(POS, [], [], [], faces, None, LoadOptions(), dtype=np.float64)
    assert mesh.positions.dtype == np.float64
    assert mesh.vertex_color.dtype == np.float32


def test_accepts_numpy_buffers():
    faces = [Triangle(VI(0, 0, 0), VI(1, 1, 0), VI(2, 2, 0))]
    mesh = export_faces(np.array(POS, dtype=np.float32),
                        np.array([0.5, 0.5, 0.5], dtype=np.float32),
                        np.array([0, 0, 1, 0, 1, 1], dtype=np.float32),
                        np.array([0, 0, 1], dtype=np.float32),
                        faces, None, LoadOptions())
    assert mesh.positions.tolist() == POS[:9]
    assert mesh.texcoords.tolist() == [0, 0, 1, 0, 1, 1]
    assert mesh.normals.tolist() == [0, 0, 1] * 3
    assert mesh.vertex_color.tolist() == [0.5] * 9
    assert mesh.indices.tolist() == [0, 1, 2]


def test_accepts_empty_numpy_attributes():
    empty = np.zeros(0, dtype=np.float32)
    faces = [Triangle(VI(0, 0, 0), VI(1), VI(2))]
    mesh = export_faces(np.array(POS), empty, empty, empty, faces, None, LoadOptions())
    assert len(mesh.texcoords) == 0
    assert len(mesh.normals) == 0
    assert len(mesh.vertex_color) == 0
