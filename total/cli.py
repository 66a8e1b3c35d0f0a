"""Interactive command loop for the Total node."""

import argparse
import logging
from typing import Callable, Optional

from . import __version__
from .config import TotalConfig
from .errors import InvalidFormat
from .friends import add_friend, load_address_book
from .identity import load_or_create_identity
from .listener import start_listener
from .models import DEFAULT_PORT, AddressBook, Identity

logger = logging.getLogger(__name__)

PROMPT = "total> "

HELP_TEXT = """Available commands:
  help                - Show this help message
  friends             - List all friends
  friendadd <user@ip> - Add a new friend
  exit / quit         - Exit the program"""


def show_banner(identity: Identity):
    print(f"\n  TOTAL v{__version__}")
    print(f"  You: {identity.address}\n")


def show_friends(friends: AddressBook):
    if not friends:
        print("No friends yet.")
        return
    print("Friends:")
    for i, (name, address) in enumerate(friends.items(), start=1):
        print(f"  [{i}] {name} ({address})")


def handle_command(line: str, config: TotalConfig) -> bool:
    """Run one command line. Returns False when the loop should stop."""
    parts = line.split()
    if not parts:
        return True

    command, args = parts[0], parts[1:]
    if command == "help":
        print(HELP_TEXT)
    elif command == "friends":
        show_friends(load_address_book(config.friends_path))
    elif command == "friendadd":
        if not args:
            print("Usage: friendadd username@ip:port")
            return True
        try:
            username, _ = add_friend(config.friends_path, args[0])
        except InvalidFormat:
            print("Invalid format. Use username@ip:port")
            return True
        except OSError as e:
            logger.error(f"Could not save friend to {config.friends_path}: {e}")
            print(f"Could not save friend: {e}")
            return True
        print(f"Friend added: {username}")
    elif command in ("exit", "quit"):
        print("bye 👋")
        return False
    else:
        print(f"Unknown command: {command}. Type 'help' for available commands.")
    return True


def repl(config: TotalConfig, read_line: Callable[[str], str] = input):
    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not handle_command(line, config):
            return


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="total", description="Total peer-to-peer chat node")
    parser.add_argument("--data-dir", default=None, help="Base directory (default: $TOTAL_HOME or ~/.total)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port saved on first run (default: 4040)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log informational messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = TotalConfig(base_dir=args.data_dir) if args.data_dir else TotalConfig()
    try:
        config.ensure_dirs()
    except OSError as e:
        logger.warning(f"Could not create base directory {config.base_dir}: {e}")
    logger.info(f"Base directory: {config.base_dir}")

    try:
        identity = load_or_create_identity(config.config_path, port=args.port)
    except (EOFError, KeyboardInterrupt):
        print("\nNo username given, exiting.")
        return 1

    start_listener(identity.port)
    show_banner(identity)
    repl(config)
    return 0
