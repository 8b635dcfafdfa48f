#!/usr/bin/env python3
"""
SP3 Studio - precise orbit file toolbox
Command line entry point
"""

import argparse
import logging
import sys

from sp3core.errors import Sp3Error
from sp3core.global_config import get_global_config, update_general_settings
from sp3core.gnss_time import Epoch
from sp3core.interpolation import interpolate_position
from sp3core.merge import merge
from sp3core.sp3_models import Vehicle
from sp3core.sp3_reader import from_file
from sp3core.sp3_writer import to_file

logger = logging.getLogger("sp3_main")


def cmd_info(args):
    dataset = from_file(args.file)
    header = dataset.header
    print(f"Version        : SP3-{str(header.version)}")
    print(f"Data type      : {header.data_type}")
    print(f"Data used      : {header.data_used}")
    print(f"Agency         : {header.agency}")
    print(f"Orbit type     : {header.orbit_type}")
    print(f"Coord. system  : {header.coord_system}")
    print(f"Constellation  : {header.constellation.name}")
    print(f"Time scale     : {header.time_scale.name}")
    print(f"Week counter   : {header.week_counter[0]} {header.week_counter[1]:.8f}")
    print(f"MJD start      : {header.mjd_start[0]} {header.mjd_start[1]:.13f}")
    print(f"Epoch interval : {header.epoch_interval.total_seconds():.3f} s")
    print(f"Epochs         : {dataset.nb_epochs()} ({dataset.first_epoch()} -> {dataset.last_epoch()})")
    print(f"Vehicles       : {' '.join(str(sv) for sv in dataset.sv())}")
    for comment in dataset.comments():
        print(f"Comment        : {comment}")
    return 0


def cmd_merge(args):
    merged = from_file(args.files[0])
    for path in args.files[1:]:
        merged = merge(merged, from_file(path))
    to_file(merged, args.output)
    return 0


def cmd_interpolate(args):
    dataset = from_file(args.file)
    sv = Vehicle.from_str(args.sv)
    epoch = Epoch.from_str(args.epoch).to_time_scale(dataset.header.time_scale)
    position = interpolate_position(dataset, epoch, sv, args.order)
    if position is None:
        logger.error(f"{epoch} is not covered by a complete interpolation window for {sv}")
        return 1
    print(f"{sv} {epoch} {position[0]:14.6f} {position[1]:14.6f} {position[2]:14.6f}")
    return 0


def cmd_plot(args):
    from sp3view.orbit_plot import save_track_plot

    dataset = from_file(args.file)
    save_track_plot(dataset, Vehicle.from_str(args.sv), args.output, args.order, args.step)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sp3-studio", description="SP3 precise orbit file toolbox")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_info = sub.add_parser("info", help="print header and coverage of a file")
    p_info.add_argument("file")
    p_info.set_defaults(func=cmd_info)

    p_merge = sub.add_parser("merge", help="merge files (later files win on conflicts)")
    p_merge.add_argument("files", nargs="+")
    p_merge.add_argument("-o", "--output", required=True)
    p_merge.set_defaults(func=cmd_merge)

    p_interp = sub.add_parser("interpolate", help="interpolate a vehicle position")
    p_interp.add_argument("file")
    p_interp.add_argument("sv", help="vehicle, e.g. G01")
    p_interp.add_argument("epoch", help="e.g. \"2019-10-27T00:02:30 GPST\"")
    p_interp.add_argument("--order", type=int, default=None)
    p_interp.set_defaults(func=cmd_interpolate)

    p_plot = sub.add_parser("plot", help="plot a vehicle track to an image file")
    p_plot.add_argument("file")
    p_plot.add_argument("sv")
    p_plot.add_argument("-o", "--output", required=True)
    p_plot.add_argument("--order", type=int, default=None)
    p_plot.add_argument("--step", type=float, default=None, help="sweep step in seconds")
    p_plot.set_defaults(func=cmd_plot)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        update_general_settings({'log_level': 'DEBUG'})
    logging.basicConfig(
        level=getattr(logging, get_global_config().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (Sp3Error, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
