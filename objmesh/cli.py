# objmesh/cli.py
"""
Командная строка: загрузить OBJ и вывести сводку по моделям и материалам.

    python -m objmesh model.obj --triangulate --single-index
"""

import dataclasses
import sys
from argparse import ArgumentParser
from pathlib import Path

import numpy as np

from objmesh.loader.errors import LoadError
from objmesh.loader.obj_reader import load_obj
from objmesh.loader.options import LoadOptions
from objmesh.utils.config import Config
from objmesh.utils.logger import set_log_level

# без --config точки и линии отбрасываются, пока не попросят --keep-*
_BASE_OPTIONS = LoadOptions(ignore_points=True, ignore_lines=True)


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="objmesh", description="Load a Wavefront OBJ file and summarise it.")
    parser.add_argument("path", help="OBJ file to load")
    parser.add_argument("--triangulate", action="store_true", help="split faces into triangles")
    parser.add_argument("--single-index", action="store_true", help="one index stream for all attributes")
    parser.add_argument("--merge", action="store_true", help="merge bit-identical points")
    parser.add_argument("--reorder", action="store_true", help="reorder normals/texcoords to the position index")
    parser.add_argument("--keep-points", action="store_true", help="do not drop single-vertex faces")
    parser.add_argument("--keep-lines", action="store_true", help="do not drop two-vertex faces")
    parser.add_argument("--f64", action="store_true", help="store attributes as float64")
    parser.add_argument("--config", metavar="PATH", help="JSON config with load_options/dtype/log_level")
    parser.add_argument("--textures", action="store_true", help="load material textures next to the OBJ file")
    return parser


def _resolve(args):
    options = _BASE_OPTIONS
    dtype = np.float32
    if args.config:
        Config.reset()
        config = Config(args.config)
        options = LoadOptions.from_config(config)
        dtype = np.dtype(config["dtype"])
        set_log_level(config["log_level"])

    enabled = {
        "triangulate": args.triangulate,
        "single_index": args.single_index,
        "merge_identical_points": args.merge,
        "reorder_data": args.reorder,
    }
    options = dataclasses.replace(options, **{k: True for k, v in enabled.items() if v})
    if args.keep_points:
        options = dataclasses.replace(options, ignore_points=False)
    if args.keep_lines:
        options = dataclasses.replace(options, ignore_lines=False)
    if args.f64:
        dtype = np.float64
    return options, dtype


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        options, dtype = _resolve(args)
        result = load_obj(args.path, options, dtype)
    except (LoadError, ValueError, TypeError) as exc:
        print(f"objmesh: {exc}", file=sys.stderr)
        return 1

    for i, model in enumerate(result.models):
        mesh = model.mesh
        print(f"model[{i}] {model.name}: material={mesh.material_id} "
              f"faces={mesh.num_faces} vertices={mesh.num_vertices}")
    for i, material in enumerate(result.materials):
        print(f"material[{i}] {material.name}")
    if args.textures:
        for i, maps in enumerate(result.load_textures(Path(args.path).parent)):
            for slot, data in maps.items():
                print(f"texture[{i}] {slot}: {data.shape[1]}x{data.shape[0]}")
    if result.material_error is not None:
        print(f"objmesh: materials: {result.material_error}", file=sys.stderr)
    return 0
