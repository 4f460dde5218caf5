import argparse
import logging
import os

import yaml

from mtxread.data.matrix import resolve_scalar

logger = logging.getLogger("mtxread")

BANNER_MODES = ("auto", "required", "none")

DEFAULTS = {
    "files": [],
    "scalar": "float",
    "ndim": 2,
    "strict": False,
    "banner": "auto",
    "log_level": "INFO",
    "log_to_console": True,
    "save_logs": False,
    "log_file": "logs/mtxread.log",
}


def parse_arguments(argv: list = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv (list, optional): Arguments to parse instead of ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Read Matrix Market files and report their contents."
    )
    parser.add_argument(
        "--config",
        type=str,
        default=os.path.join(os.path.dirname(os.path.dirname(__file__)), "config.yaml"),
        help="Path to the config file",
    )
    parser.add_argument(
        "cli_files",
        nargs="*",
        metavar="FILE",
        help="Matrix files to read, overriding the 'files' list of the config",
    )

    return parser.parse_args(argv)


def load_yaml_into_namespace(
    yaml_file: str, namespace: argparse.Namespace
) -> argparse.Namespace:
    """
    Load a YAML file and merge its content into the given argparse Namespace.

    Keys missing from the file take their value from ``DEFAULTS``.

    Args:
        yaml_file (str): Path to the YAML file.
        namespace (argparse.Namespace): The current Namespace object.

    Returns:
        argparse.Namespace: Updated Namespace with the values from the YAML file.
    """
    with open(yaml_file, "r") as file:
        yaml_data = yaml.safe_load(file) or {}
    if not isinstance(yaml_data, dict):
        raise ValueError(f"Config file {yaml_file} must contain a mapping")

    namespace_dict = dict(DEFAULTS)
    namespace_dict.update(vars(namespace))
    namespace_dict.update(yaml_data)
    if namespace_dict.get("cli_files"):
        namespace_dict["files"] = namespace_dict["cli_files"]
    logger.debug(f"Loaded YAML file: {yaml_file} as config")
    return argparse.Namespace(**namespace_dict)


def build_options(namespace: argparse.Namespace) -> dict:
    """
    Validate the parser settings of a config namespace.

    Returns:
        dict: Keyword arguments ``scalar``, ``ndim`` and ``strict`` for the loaders.
    """
    if namespace.banner not in BANNER_MODES:
        raise ValueError(
            f"banner must be one of {BANNER_MODES}, got {namespace.banner!r}"
        )
    if not isinstance(namespace.ndim, int) or namespace.ndim < 1:
        raise ValueError(f"ndim must be a positive integer, got {namespace.ndim!r}")
    if not isinstance(namespace.files, list):
        raise ValueError("files must be a list of paths")

    return {
        "scalar": resolve_scalar(namespace.scalar),
        "ndim": namespace.ndim,
        "strict": bool(namespace.strict),
    }
