import pytest

from core.math import Vec3, FLOAT_EPS
from core.material import GROUND_COLOR
from scene_builders.obj_scene_builder import ObjSceneBuilder

MESH = """\
# small test mesh
o test
v 0 10 0
v 1 10 0
v 0 10 1
v 1 10 1
v 2 10 0
vt 0 0
vn 0 1 0
f 1 2 3
f 2/1 4/1/1 3//1
f 1 2 5
f 1 2 4 3
"""


def _write(tmp_path, text, name="mesh.obj"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_parses_faces_and_adds_ground(tmp_path, capsys):
    builder = ObjSceneBuilder(_write(tmp_path, MESH))
    scene = builder.build_scene()

    mesh_surfaces = [s for s in scene.surfaces if s.color == (255, 100, 100)]
    ground = [s for s in scene.surfaces if s.color == GROUND_COLOR]
    # 1 + 1 + (퇴화 삼각형 건너뜀) + 사각형 2
    assert len(mesh_surfaces) == 4
    assert len(ground) == 2
    assert builder.skipped == 1
    assert capsys.readouterr().err != ""

    # y_offset 만큼 내려서 메쉬는 y = 0
    first = mesh_surfaces[0].triangle
    assert first.vertices == (Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 0, 1))
    # 사각형은 첫 꼭짓점 기준 부채꼴 분할
    assert mesh_surfaces[2].triangle.vertices == (Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(1, 0, 1))
    assert mesh_surfaces[3].triangle.vertices == (Vec3(0, 0, 0), Vec3(1, 0, 1), Vec3(0, 0, 1))

    for surface in ground:
        for v in surface.triangle.vertices:
            assert v.y == pytest.approx(-2 * FLOAT_EPS)
            assert abs(v.x) == pytest.approx(30.0)


def test_ground_sits_below_lowest_vertex(tmp_path):
    text = "v 0 0 0\nv 1 2 0\nv 0 1 1\nf 1 2 3\n"
    scene = ObjSceneBuilder(_write(tmp_path, text), y_offset=10.0).build_scene()
    ground = scene.surfaces[-1].triangle
    assert ground.vertices[0].y == pytest.approx(-10.0 - 2 * FLOAT_EPS)


def test_negative_indices_are_relative(tmp_path):
    text = "v 0 0 0\nv 1 0 0\nv 0 0 1\nf -3 -2 -1\n"
    builder = ObjSceneBuilder(_write(tmp_path, text), y_offset=0.0)
    surfaces = builder.parse_wavefront()
    assert surfaces[0].triangle.vertices == (Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 0, 1))


def test_builder_uses_custom_color_and_environment(tmp_path):
    builder = ObjSceneBuilder(_write(tmp_path, "v 0 0 0\nv 1 0 0\nv 0 0 1\nf 1 2 3\n"),
                              color=(10, 20, 30))
    scene = builder.build_scene()
    assert scene.surfaces[0].color == (10, 20, 30)
    assert scene.origin == Vec3(-5, 70, 0)
    assert scene.sun == Vec3(-80, 150, 80)
    assert scene.ambient_light == 0.4
    assert scene.diffuse_light == 0.2
    assert scene.grid_size == 40.0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ObjSceneBuilder(tmp_path / "nope.obj").build_scene()


@pytest.mark.parametrize("text", [
    "v 0 0 0\nv 1 0 0\nv 0 0 1\nf 1 2 9\n",
    "v 0 0 0\nv 1 0 0\nv 0 0 1\nf 0 1 2\n",
    "v 0 0 0\nv 1 a 0\n",
    "v 0 0\n",
    "v 0 0 0\nv 1 0 0\nf 1 2\n",
    "v 0 0 0\nv 1 0 0\nv 0 0 1\nf 1 x 3\n",
])
def test_malformed_records_raise_value_error(tmp_path, text):
    with pytest.raises(ValueError):
        ObjSceneBuilder(_write(tmp_path, text)).build_scene()
