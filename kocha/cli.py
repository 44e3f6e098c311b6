"""The ``kocha`` launcher and the ``kocha generate`` dispatcher.

Both find an executable named after the requested subcommand on the search
path and run it with the remaining arguments.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
import sysconfig
from typing import Optional, Sequence

COMMAND_PREFIX = "kocha-"
GENERATOR_PREFIX = "kocha-generate-"

ALIASES = {
    "g": "generate",
    "b": "build",
}

_KOCHA_USAGE = """Usage: {name} [OPTIONS] COMMAND [argument...]

Commands:
    new               create a new application
    generate          generate files (alias: "g")
    build             build your application (alias: "b")
    run               run the your application
    migrate           run the migrations

Options:
    -h, --help        display this help and exit

"""

_GENERATE_USAGE = """Usage: {name} [OPTIONS] GENERATOR [argument...]

Generate the skeleton files.

Generators:
    controller
    migration
    model
    unit

Options:
    -h, --help        display this help and exit

"""


class CommandError(Exception):
    """Raised when a subcommand is missing or cannot be found."""


def _extend_path() -> None:
    """Put the interpreter's script directories in front of ``PATH``."""
    dirs = [sysconfig.get_path("scripts"), os.path.dirname(sys.executable)]
    current = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    paths: list[str] = []
    for path in [*dirs, *current]:
        if path and path not in paths:
            paths.append(path)
    os.environ["PATH"] = os.pathsep.join(paths)


def find_command(name: str, prefix: str) -> Optional[str]:
    """Return the path of the executable ``prefix + name``, or None."""
    return shutil.which(prefix + name)


def _launch(filename: str, args: Sequence[str]) -> int:
    return subprocess.run([filename, *args]).returncode


def run_command(args: Sequence[str]) -> int:
    """Run the ``kocha-<COMMAND>`` executable and return its exit status."""
    if not args or not args[0]:
        raise CommandError("no COMMAND given")
    _extend_path()
    name = ALIASES.get(args[0], args[0])
    filename = find_command(name, COMMAND_PREFIX)
    if filename is None:
        raise CommandError(f"command not found: {name}")
    return _launch(filename, args[1:])


def run_generator(args: Sequence[str]) -> int:
    """Run the ``kocha-generate-<GENERATOR>`` executable and return its status."""
    if not args or not args[0]:
        raise CommandError("no GENERATOR given")
    name = args[0]
    _extend_path()
    filename = find_command(name, GENERATOR_PREFIX)
    if filename is None:
        raise CommandError(f"could not found generator: {name}")
    return _launch(filename, args[1:])


def _dispatch(argv: Sequence[str], usage: str, runner, name: str) -> int:
    if argv and argv[0] in ("-h", "--help"):
        sys.stdout.write(usage)
        return 0
    try:
        return runner(argv)
    except CommandError as exc:
        sys.stderr.write(usage)
        print(f"{name}: {exc}", file=sys.stderr)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of ``kocha``."""
    args = list(sys.argv[1:] if argv is None else argv)
    name = os.path.basename(sys.argv[0]) or "kocha"
    return _dispatch(args, _KOCHA_USAGE.format(name=name), run_command, name)


def generate_main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of ``kocha generate``."""
    args = list(sys.argv[1:] if argv is None else argv)
    name = "kocha generate"
    return _dispatch(args, _GENERATE_USAGE.format(name=name), run_generator, name)


if __name__ == "__main__":
    sys.exit(main())