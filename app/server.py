import argparse
import logging
import os
import subprocess
import sys

from flightstats import config

logger = logging.getLogger(__name__)

APP_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(APP_DIR)
UI_PATH = os.path.join(APP_DIR, "ui.py")


def build_parser():
    parser = argparse.ArgumentParser(description="Launch the flight time dashboard.")
    parser.add_argument("--file", default=config.FLIGHTS_FILE,
                        help=f"JSON flight file shown on start-up (default: {config.FLIGHTS_FILE})")
    parser.add_argument("--overnight", action="store_true", default=config.ROLL_OVERNIGHT,
                        help="start with overnight arrivals rolled to the next day")
    parser.add_argument("--port", type=int, default=None, help="port for the Streamlit server")
    return parser


def build_env(args, base=None):
    """
    Environment for the dashboard process.

    The dashboard reads its defaults from flightstats.config, so the chosen
    file and overnight flag are passed as FLIGHTS_FILE and ROLL_OVERNIGHT.
    The project root goes on PYTHONPATH so `flightstats` imports without an install.
    """
    env = dict(os.environ if base is None else base)
    env["FLIGHTS_FILE"] = os.path.abspath(args.file)
    env["ROLL_OVERNIGHT"] = "1" if args.overnight else "0"
    paths = [PROJECT_ROOT] + [p for p in env.get("PYTHONPATH", "").split(os.pathsep) if p]
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def build_command(args):
    command = [sys.executable, "-m", "streamlit", "run", UI_PATH]
    if args.port is not None:
        command += ["--server.port", str(args.port)]
    return command


def main(argv=None):
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.file):
        logger.warning("Flight file %s does not exist yet; the dashboard will report it", args.file)

    logger.info("Launching dashboard for %s (overnight roll %s)", args.file, "on" if args.overnight else "off")
    try:
        subprocess.run(build_command(args), env=build_env(args), check=True)
    except subprocess.CalledProcessError as e:
        logger.error("Streamlit exited with status %d", e.returncode)
        return e.returncode
    return 0


if __name__ == "__main__":
    sys.exit(main())
