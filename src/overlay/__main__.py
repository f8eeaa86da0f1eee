import argparse
import logging
import sys
from typing import Optional

from overlay import LayerStack
from overlay.api.assets import AssetCatalog, default_paths
from overlay.api.resolver import Resolver
from overlay.composite import composite_pil
from overlay.errors import OverlayError
from overlay.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="overlay command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--assets",
        action="append",
        metavar="DIR",
        help="Asset directory to search, may be repeated. "
        "Defaults to $OVERLAY_ASSET_PATH or the current directory.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    composite_parser = subparsers.add_parser(
        "composite", help="Composite layers, bottom first, into one image"
    )
    composite_parser.add_argument("output_file", help="Output image file")
    composite_parser.add_argument(
        "layers", nargs="+", help="Asset names or image paths, bottom layer first"
    )

    show_parser = subparsers.add_parser("show", help="Show the layer stack")
    show_parser.add_argument(
        "layers", nargs="+", help="Asset names or image paths, bottom layer first"
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("overlay")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    resolver = Resolver(AssetCatalog(args.assets or default_paths()))
    try:
        stack = LayerStack.from_images(args.layers, resolver=resolver)
    except OverlayError as e:
        logger.error(str(e))
        return 1

    if args.command == "composite":
        image = composite_pil(stack)
        if image:
            image.save(args.output_file)
            logger.info("Saved %d layer(s) to %s" % (stack.count, args.output_file))

    elif args.command == "show":
        print(repr(stack))
        for index, raster in enumerate(stack):
            print("%d: %s %dx%d at %s" % (index, raster.name, *raster.size, raster.offset))

    return None


if __name__ == "__main__":
    sys.exit(main())
