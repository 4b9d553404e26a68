#!/usr/bin/env python3
"""
Crop an image with a one-step pipeline and write the result.
"""

import logging
import sys

from imgraph.constants import C
from imgraph.crop import CropOperation,Origin
from imgraph.image_utils import image_read,image_write
from imgraph.pipeline import SingleThreadedPipeline

def crop_file(infile, outfile, *, x, y, width, height, origin, verbose=False, debug=False):
    """Returns the Step so that the caller can see if it failed."""
    op = CropOperation()
    with SingleThreadedPipeline(verbose=verbose, debug=debug, out=sys.stderr) as p:
        step = p.add_step(op)
        op.x_socket.set_value(x)
        op.y_socket.set_value(y)
        op.width_socket.set_value(width)
        op.height_socket.set_value(height)
        op.origin_socket.set_value(origin)
        p.set_value(op.input_socket, image_read(infile))
    if step.error is None:
        image_write(outfile, op.output_socket.value)
    return step

if __name__=="__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Crop an image to an exact size",
                                     formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument("infile", help='Image to crop.')
    parser.add_argument("outfile", help="Where to write the cropped image. Format is chosen by extension.")
    parser.add_argument("--x", type=float, default=C.DEFAULT_CROP_X)
    parser.add_argument("--y", type=float, default=C.DEFAULT_CROP_Y)
    parser.add_argument("--width", type=float, default=C.DEFAULT_CROP_WIDTH)
    parser.add_argument("--height", type=float, default=C.DEFAULT_CROP_HEIGHT)
    parser.add_argument("--origin", help="Point that --x and --y refer to",
                        choices=[o.label for o in Origin], default=Origin.CENTER.label)
    parser.add_argument("--verbose", help="Print stats and each step as it runs", action='store_true')
    parser.add_argument("--debug", action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    step = crop_file(args.infile, args.outfile,
                     x=args.x, y=args.y, width=args.width, height=args.height,
                     origin=Origin.from_label(args.origin), verbose=args.verbose, debug=args.debug)
    if step.error is not None:
        print(f"Cannot crop '{args.infile}': {step.error}", file=sys.stderr)
        sys.exit(1)
