import sys

from mtxread.data.load_files import load_matrices
from mtxread.utils.config import build_options, load_yaml_into_namespace, parse_arguments
from mtxread.utils.logger import setup_logger
from mtxread.utils.utils import describe


def main(argv: list = None) -> int:
    args = parse_arguments(argv)
    args = load_yaml_into_namespace(args.config, args)

    logger = setup_logger(
        name="mtxread",
        log_file=args.log_file if args.save_logs else None,
        level=args.log_level,
        log_to_console=args.log_to_console,
    )

    options = build_options(args)
    logger.info(
        f"Reading {len(args.files)} file(s) with banner={args.banner}, ndim={args.ndim}"
    )

    matrices, failures = load_matrices(args.files, args.banner, **options)
    for path, matrix in matrices.items():
        logger.info(f"{path}: {describe(matrix)}")
    for path, error in failures.items():
        logger.error(f"{path}: {type(error).__name__}: {error}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
