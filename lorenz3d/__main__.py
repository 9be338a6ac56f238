from __future__ import annotations

import argparse

from lorenz3d.ui.app import LorenzApp


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="lorenz3d", description="Interactive Lorenz attractor viewer")
    parser.add_argument("--params", type=str, default=None, help="JSON file overriding default parameters")
    parser.add_argument("--fps", type=int, default=None, help="Target frames per second")
    args = parser.parse_args(argv)

    app = LorenzApp(params_path=args.params)
    if args.fps is not None:
        app.params.target_fps = args.fps
        app.params.clamp()
    app.run()


if __name__ == "__main__":
    main()
