"""
Application entry point: CLI parsing, dependency checks, Qt launch.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="chickensoup",
        description="Healing Chicken Soup: merge drifting oil droplets on a bowl of broth.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                      # golden broth, Chinese texts\n"
            "  %(prog)s --lang en            # English texts\n"
            "  %(prog)s --scheme miso        # different broth\n"
            "  %(prog)s --seed 7             # reproducible droplets\n"
            "  %(prog)s --list-schemes       # show available colour schemes\n"
            "  %(prog)s -v                   # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--scheme", type=str, default="golden", help="Colour scheme")
    p.add_argument("--lang", type=str, default="zh", choices=["zh", "en"], help="UI language")
    p.add_argument("--seed", type=int, default=None, help="RNG seed (default: random)")
    p.add_argument("--fps", type=int, default=60, help="Target frame rate (10–120, default 60)")
    p.add_argument("--list-schemes", action="store_true", help="List colour schemes and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("chickensoup")

    # List schemes
    if args.list_schemes:
        from .palettes import SCHEMES, list_schemes
        print("Available colour schemes:")
        for key in list_schemes():
            s = SCHEMES[key]
            print(f"  {key:10s}  {s.name:16s}  broth=rgb{s.broth}  oil=rgba{s.oil_fill}")
        sys.exit(0)

    # Dependency check
    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    # Validate
    if not (10 <= args.fps <= 120):
        print("ERROR: --fps must be 10–120.", file=sys.stderr)
        sys.exit(1)

    from .palettes import SCHEMES, get_scheme
    if args.scheme not in SCHEMES:
        from .palettes import list_schemes
        avail = ", ".join(list_schemes())
        print(f"ERROR: Unknown scheme '{args.scheme}'. Available: {avail}", file=sys.stderr)
        sys.exit(1)

    # Launch
    logger.info("Starting Healing Chicken Soup v%s", __version__)
    logger.info("Scheme: %s, Language: %s, Seed: %s", args.scheme, args.lang, args.seed)

    from PyQt5.QtWidgets import QApplication
    from .main_window import MainWindow
    from .simulation import SimulationLoop
    from .texts import Language

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Healing Chicken Soup")
    app.setApplicationVersion(__version__)

    scheme = get_scheme(args.scheme)
    r, g, b = scheme.backdrop
    app.setStyleSheet(f"""
        QMainWindow {{
            background: rgb({r}, {g}, {b});
        }}
        QMenuBar {{
            background: rgb({r}, {g}, {b});
            color: #7a4a0a;
        }}
        QMenuBar::item:selected {{
            background: rgba(255, 255, 255, 120);
        }}
        QMenu {{
            background: #fff6dc;
            color: #7a4a0a;
        }}
        QMenu::item:selected {{
            background: #f4c430;
        }}
        QStatusBar {{
            color: #7a4a0a;
            font-size: 11px;
        }}
    """)

    loop = SimulationLoop(scheme=scheme, seed=args.seed)
    window = MainWindow(loop, language=Language(args.lang), fps=args.fps)
    window.resize(900, 600)
    window.show()

    sys.exit(app.exec_())
