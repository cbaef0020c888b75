from __future__ import annotations

import argparse

from sandbox3d.app_config import load_config
from sandbox3d.common.logs import configure_logging
from sandbox3d.game import run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sandbox3d",
        description=(
            "Text-command 3D sandbox. Reads one command per line from stdin until quit/exit/q.\n"
            "Optional settings: ~/.sandbox3d/config.json (dir override: SANDBOX3D_CONFIG_DIR).\n"
            "Log level: SANDBOX3D_LOG_LEVEL (default WARNING)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.parse_args(argv)

    configure_logging()
    run(load_config())


if __name__ == "__main__":
    main()
