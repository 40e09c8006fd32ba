# src/numnotation/cli.py

"""
Number Notations - alternative ways of writing (very) large numbers

Description:
    Formats each VALUE in one notation (or all of them with --all):
    prime factorizations and power towers of them, engineering, Greek
    letters, emoji, binary.

usage: see numnotation -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import sys
import textwrap
import traceback
from decimal import Decimal
from importlib.resources import files as pkg_files
from time import perf_counter

from colorama import Fore, Style
from colorama import init as colorama_init

from numnotation import __version__ as _ver
from numnotation.config import list_profiles_with_descriptions, load_settings
from numnotation.expreval import parse_magnitude
from numnotation.factor import factorize, residual_is_prime
from numnotation.fmt import format_duration, strip_ansi
from numnotation.magnitude import floor_int, is_infinite
from numnotation.notations.base import Notation
from numnotation.notations.prime import PrimeNotation
from numnotation.output_manager import OutputManager
from numnotation.registry import Index, discover, get_notation
from numnotation.runtime import APPLY, CFG, ensure_runtime_deps
from numnotation.runtime import current as _rt_current
from numnotation.tower import build_tower, classify
from numnotation.utility import UserInputError, flatten_dotted, typename
from numnotation.workspace import seed_workspace, workspace_dir


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    print(f"{Fore.BLUE}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folders and copy the packaged profiles if missing.

      init overwrite
          Meant for developers. Requires environment variable NUMNOTATION_DEV=1.
          Replaces the workspace profiles with the packaged ones.

      list
          List all available notations.

      where
          Show the workspace and package paths.

    values:
      12   1e20000   "1,000,000"   10^10^5   2**64-1
    """)

    p = argparse.ArgumentParser(
        prog="numnotation",
        description="Number Notations: alternative ways of writing large numbers",
        usage=(
            "numnotation [VALUE ...] [-n NOTATION | --all] [--places N] [--profile NAME]\n"
            "                   [--output OUTPUT] [--quiet] [--no-color] [--debug]\n"
            "       numnotation list | where | init [overwrite]\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="VALUE", help="numbers or expressions to format")
    p.add_argument("-n", "--notation", default=None,
                   help="notation key (default: DISPLAY.DEFAULT_NOTATION from the profile)")
    p.add_argument("--all", action="store_true", help="Format every value in every notation")
    p.add_argument("--places", type=int, default=None, help="Decimals for values of 1000 and above")
    p.add_argument("--profile", default=None, help="Settings profile (default: 'default')")
    p.add_argument("--output", default=None, help="Append results to a file (also prints unless --quiet)")
    p.add_argument("--quiet", action="store_true", help="Suppress screen output")
    p.add_argument("--no-color", action="store_true", help="Plain output without ANSI colors")
    p.add_argument("--debug", action="store_true", help="Show regimes, tower levels and timings")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- commands ----

def _cmd_init(items: list[str]) -> int:
    overwrite = len(items) > 1 and items[1] == "overwrite"
    if overwrite and os.environ.get("NUMNOTATION_DEV") != "1":
        raise UserInputError("'init overwrite' requires NUMNOTATION_DEV=1.")
    root, copied = seed_workspace(overwrite=overwrite)
    print(f"Workspace: {root}")
    for sub, cnt in copied.items():
        print(f"  {sub:<10} {cnt} file(s) copied")
    return 0


def _cmd_list(index: Index) -> int:
    width = max((len(k) for k in index.notations), default=0)
    for key, nt in index.notations.items():
        src = index.sources.get(key, "")
        tag = f" {Fore.YELLOW}[{src}]{Style.RESET_ALL}" if src.startswith("ws:") else ""
        print(f"{Style.BRIGHT}{key:<{width}}{Style.RESET_ALL}  {nt.name}: {index.descriptions.get(key, '')}{tag}")
    for src, err in index.failed:
        print(f"{Fore.RED}failed{Style.RESET_ALL} {src}: {err}", file=sys.stderr)
    print()
    print("Profiles:")
    for name, desc in list_profiles_with_descriptions():
        print(f"  {name}: {desc}")
    return 0


def _cmd_where() -> int:
    print(f"Workspace: {workspace_dir()}")
    print(f"Package:   {pkg_files('numnotation')}")
    return 0


# ---- formatting ----

def _format_line(item: str, nt: Notation, text: str, *, color: bool, show_name: bool) -> str:
    label = f"{nt.name}: " if show_name else ""
    line = f"{Fore.CYAN}{item}{Style.RESET_ALL} → {label}{Style.BRIGHT}{text}{Style.RESET_ALL}"
    return line if color else strip_ansi(line)


def _debug_prime(value: Decimal) -> None:
    """Regime, tower levels and residual check for the prime notation."""
    if is_infinite(value) or value < 0:
        return
    regime = classify(value)
    _debug(f"regime {regime}")
    if regime in ("ZERO", "ONE"):
        return
    bound = PrimeNotation.factor_bound()
    levels = build_tower(value) if regime.startswith("TOWER") else (floor_int(value),)
    if len(levels) > 1:
        _debug(f"tower levels {list(levels)}")
    for lv in levels:
        if not residual_is_prime(factorize(lv, bound), bound):
            _debug(f"{Fore.YELLOW}{lv}: residual above the factor bound {bound} is composite{Style.RESET_ALL}")


def _main_impl(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    colorama_init()
    _install_loud_error_handlers(args.debug)

    items = args.items
    if items and items[0] == "init":
        return _cmd_init(items)
    if items and items[0] == "where":
        return _cmd_where()

    try:
        settings = load_settings(args.profile)
    except FileNotFoundError as e:
        raise UserInputError(str(e)) from None
    APPLY(settings)
    rt = _rt_current()
    if args.debug:
        rt.debug = True
        _debug(f"profile {rt.profile_name} from {rt.source}")
        for k, v in flatten_dotted(rt.settings).items():
            _debug(f"  {k:.<40} {v!r} ({typename(v)})")

    if not ensure_runtime_deps():
        return 1

    index = discover(workspace_dir())
    if items and items[0] == "list":
        return _cmd_list(index)
    if not items:
        raise UserInputError("no value given. Try: numnotation 12 or numnotation -h")

    color = bool(CFG("DISPLAY.COLOR", True)) and not args.no_color
    places = args.places if args.places is not None else int(CFG("FORMATTING.PLACES", 2))
    places_under_1000 = int(CFG("FORMATTING.PLACES_UNDER_1000", 0))

    if args.all:
        notations = list(index.notations.values())
    else:
        notations = [get_notation(args.notation or str(CFG("DISPLAY.DEFAULT_NOTATION", "prime")), index)]

    with OutputManager(output_file=args.output, quiet=args.quiet) as om:
        for item in items:
            value = parse_magnitude(item)
            for nt in notations:
                t0 = perf_counter()
                text = nt.format(value, places, places_under_1000)
                elapsed = perf_counter() - t0
                om.write(_format_line(item, nt, text, color=color, show_name=args.all))
                if rt.debug:
                    _debug(f"{nt.key}: {format_duration(elapsed)}")
                    if isinstance(nt, PrimeNotation):
                        _debug_prime(value)
    return 0
