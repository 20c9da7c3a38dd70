from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

import numpy as np

from svgplot import Figure, load_figure


def build_demo_figure(seed: int | None = None) -> Figure:
    rng = np.random.default_rng(seed)
    n = 100
    xs = np.arange(n + 1, dtype=np.float64)
    ys = rng.standard_normal(xs.size) * 60 + 100

    fig = Figure(width=640, height=480)

    ax = fig.add_axis((0.2, 0.1, 0.75, 0.35), (-n * 0.01, n * 1.01, -10, 180), fill="#dedede")
    ax.text("Data sampled from a normal distribution", 0.5, 1.1, text_anchor="middle", font_size="20pt")
    ax.ticks([0, n // 2, n], [0, 50, 100, 150, 200])
    ax.text("sample", 0.5, -0.2, text_anchor="middle")
    ax.text("value", -0.15, 0.5, angle=270.0, text_anchor="middle")
    ax.line(ys, x=xs, stroke="blue")
    ax.scatter(ys, x=xs, r="4px", fill="red")

    ax = fig.add_axis((0.2, 0.55, 0.75, 0.35), (-20, 220, 0, 1), fill="#dedede")
    ax.ticks([], [])
    ax.text("value", 0.5, -0.2, text_anchor="middle")
    ax.text("frequency", -0.15, 0.5, angle=270.0, text_anchor="middle")
    ax.histogram(ys, -20, 220, 10, width=12, fill="magenta", stroke="black")
    return fig


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="svgplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a TOML chart description to SVG.")
    render.add_argument("config", type=Path)
    render.add_argument("-o", "--output", type=Path, default=None, help="Output file. Default: stdout.")
    render.add_argument("--html", action="store_true", help="Wrap the SVG in an <html> document.")

    demo = sub.add_parser("demo", help="Render the built-in demo figure.")
    demo.add_argument("-o", "--output", type=Path, default=None, help="Output file. Default: stdout.")
    demo.add_argument("--seed", type=int, default=None)
    demo.add_argument("--html", action="store_true", help="Wrap the SVG in an <html> document.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        fig = load_figure(args.config)
    else:
        fig = build_demo_figure(args.seed)

    if args.output is not None:
        fig.save(args.output, html=args.html)
    else:
        sys.stdout.write(fig.to_html() if args.html else fig.render())
        sys.stdout.write("\n")
    return 1 if fig.last_failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
