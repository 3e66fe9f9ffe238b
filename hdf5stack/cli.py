"""Console scripts for converting between HDF5 datasets and ImageJ TIFFs.

Console Scripts:
    h52tif: Convert an HDF5 dataset to an ImageJ TIFF hyperstack
    tif2h5: Convert a TIFF image to an HDF5 dataset
"""

import argparse
import sys
from pathlib import Path

from hdf5stack.codec import (
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_DATASET_NAME,
    list_datasets,
    read_dataset,
    write_dataset,
)
from hdf5stack.axes import DEFAULT_AXIS_ORDER
from hdf5stack.logging import configure_logging
from hdf5stack.tiff import read_tiff, write_tiff


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dataset",
        type=str,
        default=DEFAULT_DATASET_NAME,
        help=f"Dataset path inside the HDF5 file (default: {DEFAULT_DATASET_NAME})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Enable library logging at this level",
    )


def h52tif(argv=None):
    """Console script to convert an HDF5 dataset to an ImageJ TIFF hyperstack.

    Wrapper around read_dataset() and write_tiff().
    """
    parser = argparse.ArgumentParser(
        description="Convert an HDF5 dataset to an ImageJ TIFF hyperstack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  h52tif input.h5 output.tif
  h52tif input.h5 output.tif --dataset exported_data --axis-order ztyxc
  h52tif input.h5 --list
        """,
    )
    parser.add_argument("input", help="Input HDF5 file")
    parser.add_argument("output", nargs="?", default=None, help="Output TIFF file")
    _add_common_arguments(parser)
    parser.add_argument(
        "--axis-order",
        type=str,
        default=None,
        help="Axis order of the dataset, e.g. 'tzyxc' "
        "(default: the order recorded in the file)",
    )
    parser.add_argument(
        "--list", action="store_true", help="List the datasets in the file and exit"
    )

    args = parser.parse_args(argv)
    if args.log_level:
        configure_logging(level=args.log_level)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input path '{input_path}' does not exist", file=sys.stderr)
        sys.exit(1)

    try:
        if args.list:
            for info in list_datasets(input_path):
                order = info.axis_order or "-"
                print(f"{info.name}\t{info.shape}\t{info.dtype}\t{order}")
            return

        if args.output is None:
            parser.error("the output argument is required unless --list is given")

        print(f"Loading dataset '{args.dataset}' from: {input_path}")
        image = read_dataset(input_path, args.dataset, args.axis_order)
        print(f"Loaded image with dimensions: {image.dims}")

        print(f"Saving to TIFF: {args.output}")
        write_tiff(image, args.output)
        print("Conversion completed successfully!")

    except Exception as e:
        print(f"Error during conversion: {e}", file=sys.stderr)
        sys.exit(1)


def tif2h5(argv=None):
    """Console script to convert a TIFF image to an HDF5 dataset.

    Wrapper around read_tiff() and write_dataset().
    """
    parser = argparse.ArgumentParser(
        description="Convert a TIFF image to an HDF5 dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tif2h5 input.tif output.h5
  tif2h5 input.tif output.h5 --compression 4 --axis-order tzyxc
  tif2h5 input.tif output.h5 --dataset raw --append
        """,
    )
    parser.add_argument("input", help="Input TIFF file")
    parser.add_argument("output", help="Output HDF5 file")
    _add_common_arguments(parser)
    parser.add_argument(
        "--axis-order",
        type=str,
        default=DEFAULT_AXIS_ORDER,
        help=f"Axis order of the written dataset (default: {DEFAULT_AXIS_ORDER})",
    )
    parser.add_argument(
        "--compression",
        type=int,
        default=DEFAULT_COMPRESSION_LEVEL,
        help=f"gzip level 0-9 (default: {DEFAULT_COMPRESSION_LEVEL})",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Add the dataset to an existing file instead of replacing the file",
    )

    args = parser.parse_args(argv)
    if args.log_level:
        configure_logging(level=args.log_level)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input path '{input_path}' does not exist", file=sys.stderr)
        sys.exit(1)

    try:
        print(f"Loading TIFF from: {input_path}")
        image = read_tiff(input_path)
        print(f"Loaded image with dimensions: {image.dims}")

        print(f"Saving to HDF5: {args.output}:{args.dataset}")
        write_dataset(
            image,
            args.output,
            dataset_name=args.dataset,
            compression_level=args.compression,
            axis_order=args.axis_order,
            mode="a" if args.append else "w",
        )
        print("Conversion completed successfully!")

    except Exception as e:
        print(f"Error during conversion: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "h52tif":
        h52tif(sys.argv[2:])
    elif len(sys.argv) > 1 and sys.argv[1] == "tif2h5":
        tif2h5(sys.argv[2:])
    else:
        print("Usage: python -m hdf5stack.cli [h52tif|tif2h5] ...")
        sys.exit(1)
