"""
News Assistant - terminal client

Usage: python main.py [--offline]

Commands: /new, /list, /switch N, /delete N, /reset, /history, /help, /exit
"""

import argparse
import asyncio
import sys

from newsassist.backends import BaseBackend, HttpBackendClient, MockBackendClient
from newsassist.core import (
    LastSessionError,
    Message,
    SessionController,
    ValidationError,
)
from newsassist.storage import InMemoryStore, JsonFileStore
from newsassist.utils.logger import get_logger
from newsassist.utils.config import get_config

logger = get_logger(__name__)
config = get_config()

COMMANDS = "/new, /list, /switch N, /delete N, /reset, /history, /help, /exit"


def print_banner(offline: bool):
    print("\n" + "=" * 70)
    print("  News Assistant" + ("  [offline]" if offline else ""))
    print("=" * 70)
    print(f"\nCommands: {COMMANDS}")
    print("Type your message and press Enter to chat.\n")


def print_message(message: Message):
    speaker = "You" if message.role == "user" else "Bot"
    print(f"{speaker}: {message.content}")
    if message.sources:
        print("   Sources:")
        for source in message.sources:
            print(f"   - {source.source} <{source.link}>")


def print_transcript(controller: SessionController):
    print("\n" + "-" * 70)
    print(f"Session: {controller.active_session_id}")
    print("-" * 70)
    for message in controller.transcript:
        print_message(message)
    print()


def print_directory(controller: SessionController):
    entries = controller.directory.entries
    if not entries:
        print("\n[No chats yet]\n")
        return

    print("\nRecent Chats")
    for i, entry in enumerate(entries, 1):
        marker = "*" if entry.id == controller.active_session_id else " "
        print(f" {marker} {i}. Chat {entry.label}")
    print()


def print_errors(controller: SessionController):
    for error in controller.drain_errors():
        print(f"\n[!] {error.message}\n")


def pick_entry(controller: SessionController, argument: str):
    entries = controller.directory.entries
    try:
        index = int(argument)
    except ValueError:
        return None
    if 1 <= index <= len(entries):
        return entries[index - 1]
    return None


async def ask(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


async def confirm(prompt: str) -> bool:
    answer = (await ask(f"{prompt} [y/N] ")).strip().lower()
    return answer in ("y", "yes")


async def handle_command(controller: SessionController, line: str) -> bool:
    """Run one slash command. Returns False when the user wants to quit."""
    command, _, argument = line.partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("/exit", "/quit"):
        return False

    if command == "/help":
        print(f"\nCommands: {COMMANDS}\n")

    elif command == "/new":
        if await controller.create_session():
            print(f"\nNew chat: {controller.active_session_id}\n")
            print_transcript(controller)

    elif command == "/list":
        print_directory(controller)

    elif command == "/history":
        print_transcript(controller)

    elif command == "/switch":
        entry = pick_entry(controller, argument)
        if entry is None:
            print("\nUsage: /switch N (see /list)\n")
        else:
            await controller.load_session(entry.id)
            print_transcript(controller)

    elif command == "/delete":
        entry = pick_entry(controller, argument)
        if entry is None:
            print("\nUsage: /delete N (see /list)\n")
        elif await confirm("Are you sure you want to delete this chat?"):
            await controller.delete_session(entry.id)
            print_directory(controller)

    elif command == "/reset":
        if await confirm("Clear this chat's history? All messages in the current conversation will be deleted."):
            await controller.reset_active_session()
            print_transcript(controller)

    else:
        print(f"\nUnknown command: {command}. Commands: {COMMANDS}\n")

    return True


def build_backend(offline: bool) -> BaseBackend:
    if offline:
        return MockBackendClient()
    return HttpBackendClient()


async def run_interactive_chat(offline: bool = False):
    print_banner(offline)

    backend = build_backend(offline)
    store = InMemoryStore() if offline else JsonFileStore()
    controller = SessionController(backend=backend, store=store)

    try:
        await controller.initialize()
        print_errors(controller)
        if controller.active_session_id is None:
            print("Could not start a session. Is the news service running at "
                  f"{config.API_BASE_URL}? Use /new to retry.\n")
        else:
            print_transcript(controller)

        while True:
            try:
                user_input = (await ask("You: ")).strip()
            except EOFError:
                print("\nGoodbye!\n")
                break

            if not user_input:
                continue

            try:
                if user_input.startswith("/"):
                    if not await handle_command(controller, user_input):
                        print("\nGoodbye!\n")
                        break
                else:
                    reply = await controller.send_message(user_input)
                    if reply is not None:
                        print_message(reply)
                        print()
            except (LastSessionError, ValidationError) as e:
                print(f"\n{e.message}\n")

            print_errors(controller)
    finally:
        await backend.close()


def main():
    parser = argparse.ArgumentParser(description="Terminal client for the news assistant")
    parser.add_argument("--offline", action="store_true",
                        help="use a built-in fake backend and keep state in memory")
    args = parser.parse_args()

    try:
        config.validate()
    except ValueError as e:
        print(f"\nInvalid configuration: {e}\n")
        sys.exit(1)

    try:
        asyncio.run(run_interactive_chat(offline=args.offline))
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!\n")


if __name__ == "__main__":
    main()
