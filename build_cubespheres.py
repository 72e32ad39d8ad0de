import os
import json
import logging

logger = logging.getLogger(__name__)

CONFIG_DIR = "./configs/"


def argparse_setup(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="Generate a cubesphere mesh and write it as json.")
    parser.add_argument(
        "--config",
        default=CONFIG_DIR + "config.yaml",
        dest="config_path",
        help="Path to the configuration file."
    )
    parser.add_argument(
        "--configs_all",
        action="store_true",
        default=False,
        help="If set, process all config files in the ./configs/ directory."
    )
    parser.add_argument(
        "--outdir",
        default=None,
        dest="outdir",
        help="Output directory for the generated mesh files, overrides the config."
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        default=False,
        help="Show a 3D preview of every generated mesh."
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        default=False,
        help="Open the keyboard driven viewer on the last generated mesh."
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        default=False,
        help="Validate every generated mesh before saving it."
    )
    parser.add_argument("--debug", action="store_true", default=False, help="Enable debug logging")
    return vars(parser.parse_args(argv))


def save_mesh(config: dict, mesh_dict: dict, filename: str) -> str:
    from cubesphere_generation.utils import gzip_file

    directory = config["output"].get("directory") or "./cubespheres/"
    os.makedirs(directory, exist_ok=True, mode=0o755)
    location = os.path.join(directory, f"{filename}.json")
    with open(location, 'w') as f:
        json.dump(mesh_dict, f)
    logger.info("Generated mesh saved to %s", location)

    if config.get("gzip", False):
        location = gzip_file(location)
        logger.info("Generated mesh saved to %s", location)
    return location


def collect_configs(args: dict) -> list:
    from cubesphere_generation.utils import load_yaml

    if args["configs_all"]:
        paths = sorted(os.path.join(CONFIG_DIR, f) for f in os.listdir(CONFIG_DIR) if f.endswith(".yaml"))
    else:
        if not os.path.exists(args["config_path"]):
            raise FileNotFoundError(f"Config file {args['config_path']} does not exist.")
        paths = [args["config_path"]]

    configs = []
    for path in paths:
        config = load_yaml(path) or {}
        if "output" not in config or config["output"] is None:
            config["output"] = {}
        if args["outdir"]:
            config["output"]["directory"] = args["outdir"]
        configs.append(config)
    return configs


def main(argv=None):
    from cubesphere_generation.process import execute_mesh_generation, initialize_config
    from cubesphere_generation.validate_mesh import validate_mesh, save_mesh_debug

    args = argparse_setup(argv)
    level = logging.DEBUG if args["debug"] else logging.INFO
    logging.basicConfig(level=level)

    mesh = None
    for config in collect_configs(args):
        config = initialize_config(config)
        mesh, mesh_dict, file_code = execute_mesh_generation(config)

        if args["validate"]:
            validate_mesh(file_code, mesh_dict, check_radius=config["generator"] != "plane")

        filename = config["output"].get("filename") or file_code
        location = save_mesh(config, mesh_dict, filename)

        if args["debug"]:
            save_mesh_debug(file_code, mesh_dict,
                            os.path.join(os.path.dirname(location), f"{filename}_debug.json"))

        if args["preview"]:
            from visuals.d3 import visualize_mesh_3d
            visualize_mesh_3d(mesh, title=file_code)

    if args["interactive"] and mesh is not None:
        from visuals.viewer import MeshViewer
        MeshViewer(mesh).show()


if __name__ == "__main__":
    main()
