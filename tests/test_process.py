import gzip
import json

import numpy as np
import pytest
import yaml

import build_cubespheres
from cubesphere_generation import process
from cubesphere_generation import (
    execute_mesh_generation, generate_mesh, generate_mesh_file_code, initialize_config, load_yaml,
)


class TestInitializeConfig:
    def test_defaults(self):
        config = initialize_config({})
        assert config["generator"] == "cubesphere"
        assert config["subdivisions"] == 4
        assert config["index_dtype"] == "uint16"
        assert config["weld"] is False
        assert config["output"]["directory"] == "./cubespheres/"

    def test_partial_output_keeps_defaults(self):
        config = initialize_config({"output": {"filename": "sphere"}})
        assert config["output"] == {"directory": "./cubespheres/", "filename": "sphere"}

    def test_does_not_mutate_input(self):
        raw = {"generator": "plane", "output": {"directory": "out"}}
        initialize_config(raw)
        assert raw == {"generator": "plane", "output": {"directory": "out"}}

    def test_unknown_generator(self):
        with pytest.raises(ValueError, match="generator"):
            initialize_config({"generator": "torus"})

    def test_unknown_index_dtype(self):
        with pytest.raises(ValueError, match="index_dtype"):
            initialize_config({"index_dtype": "int8"})

    @pytest.mark.parametrize("subdivisions", [-1, 1.5, "3", True])
    def test_invalid_subdivisions(self, subdivisions):
        with pytest.raises(ValueError, match="subdivisions"):
            initialize_config({"subdivisions": subdivisions})

    def test_depth_bounded_by_index_width(self):
        with pytest.raises(ValueError, match="overflow"):
            initialize_config({"subdivisions": 7})
        assert initialize_config({"subdivisions": 7, "index_dtype": "uint32"})["subdivisions"] == 7

    def test_icosphere_depth_not_bounded_by_cube_counts(self):
        assert initialize_config({"generator": "icosphere", "subdivisions": 5})["subdivisions"] == 5

    def test_icosphere_depth_bounded_by_index_width(self):
        with pytest.raises(ValueError, match="overflow"):
            initialize_config({"generator": "icosphere", "subdivisions": 7})
        config = initialize_config({"generator": "icosphere", "subdivisions": 7, "index_dtype": "uint32"})
        assert config["subdivisions"] == 7


class TestFileCode:
    @pytest.mark.parametrize("config,expected", [
        ({"generator": "cubesphere", "subdivisions": 4}, "cubesphere_s4"),
        ({"generator": "icosphere", "subdivisions": 2}, "icosphere_s2"),
        ({"generator": "plane", "subdivisions": 4}, "plane"),
        ({"generator": "cubesphere", "subdivisions": 2, "weld": True}, "cubesphere_s2_welded"),
    ])
    def test_codes(self, config, expected):
        assert generate_mesh_file_code(config) == expected


class TestGeneration:
    def test_generate_each_generator(self):
        for generator, vertices in [("cubesphere", 54), ("icosphere", 42), ("plane", 4)]:
            mesh = generate_mesh(initialize_config({"generator": generator, "subdivisions": 1}))
            assert mesh.vertex_count == vertices

    @pytest.mark.parametrize("generator", ["cubesphere", "icosphere", "plane"])
    def test_index_dtype_reaches_every_generator(self, generator):
        config = initialize_config({"generator": generator, "subdivisions": 1, "index_dtype": "uint32"})
        assert generate_mesh(config).index_buffer().dtype == np.uint32

    def test_weld_option(self):
        mesh = generate_mesh(initialize_config({"subdivisions": 2, "weld": True}))
        assert mesh.vertex_count == 150

    def test_execute(self):
        mesh, mesh_dict, file_code = execute_mesh_generation(initialize_config({"subdivisions": 1}))
        assert file_code == "cubesphere_s1"
        assert len(mesh_dict["vertices"]) == mesh.vertex_count == 54
        assert len(mesh_dict["faces"]) == len(mesh_dict["face_centroid"]) == 48
        assert sorted(set(mesh_dict["tex_layer"])) == [0, 1, 2, 3, 4, 5]
        json.dumps(mesh_dict)


class TestCli:
    def write_config(self, tmp_path, **config):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(config))
        return str(path)

    def test_load_yaml(self, tmp_path):
        path = self.write_config(tmp_path, generator="plane")
        assert load_yaml(path) == {"generator": "plane"}

    def test_writes_json(self, tmp_path):
        path = self.write_config(tmp_path, subdivisions=1)
        outdir = tmp_path / "out"

        build_cubespheres.main(["--config", path, "--outdir", str(outdir), "--validate"])

        with open(outdir / "cubesphere_s1.json") as f:
            data = json.load(f)
        assert len(data["vertices"]) == 54

    def test_gzip_and_filename(self, tmp_path):
        path = self.write_config(tmp_path, generator="plane", gzip=True,
                                 output={"filename": "flat"})
        outdir = tmp_path / "out"

        build_cubespheres.main(["--config", path, "--outdir", str(outdir)])

        with gzip.open(outdir / "flat.json.gz", "rt") as f:
            data = json.load(f)
        assert data["faces"] == [[0, 1, 3], [1, 3, 2]]

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_cubespheres.main(["--config", str(tmp_path / "missing.yaml")])

    def test_debug_writes_summary(self, tmp_path):
        path = self.write_config(tmp_path, subdivisions=1)
        outdir = tmp_path / "out"

        build_cubespheres.main(["--config", path, "--outdir", str(outdir), "--debug"])

        with open(outdir / "cubesphere_s1_debug.json") as f:
            summary = json.load(f)
        assert summary["mesh_name"] == "cubesphere_s1"
        assert summary["mesh_overview"]["total_vertices"] == 54

    def test_no_debug_summary_by_default(self, tmp_path):
        path = self.write_config(tmp_path, subdivisions=1)
        outdir = tmp_path / "out"

        build_cubespheres.main(["--config", path, "--outdir", str(outdir)])

        assert not (outdir / "cubesphere_s1_debug.json").exists()

    def test_config_initialized_once(self, tmp_path, monkeypatch):
        calls = []
        initialize = process.initialize_config

        def counting(config):
            calls.append(config)
            return initialize(config)

        monkeypatch.setattr(process, "initialize_config", counting)
        path = self.write_config(tmp_path, generator="plane")

        build_cubespheres.main(["--config", path, "--outdir", str(tmp_path / "out")])

        assert len(calls) == 1
