"""
Interactive music player shell.

Owns one PlaybackSession for the lifetime of the shell. User commands and
output events are both handled on the asyncio loop thread, so they never
interleave.
"""

import asyncio
from contextlib import suppress
from typing import List

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.patch_stdout import patch_stdout

from sparkle_stories.core.config import Config
from sparkle_stories.core.console import print_table, safe_print
from sparkle_stories.core.preferences import PreferenceStore
from sparkle_stories.domain.playback import (
    PlaybackSession,
    create_output,
    format_time,
)
from sparkle_stories.utils.parsers import (
    parse_command,
    parse_percent,
    parse_seconds,
    parse_track_number,
)

# Format: 'command': ('usage', 'description')
COMMANDS = {
    "play": ("play", "Start or resume the current track"),
    "pause": ("pause", "Pause playback"),
    "toggle": ("toggle", "Play/pause"),
    "next": ("next | skip", "Skip to the next track"),
    "previous": ("prev", "Go back to the previous track"),
    "select": ("select <n>", "Play track number n"),
    "vol": ("vol <0-100>", "Set volume"),
    "up": ("up", "Volume +10"),
    "down": ("down", "Volume -10"),
    "mute": ("mute", "Mute/unmute"),
    "seek": ("seek <s | m:ss>", "Jump within the current track"),
    "list": ("list", "Show the playlist"),
    "status": ("status", "Show what is playing"),
    "reload": ("reload", "Reload the music file"),
    "help": ("help", "Show this help"),
    "quit": ("quit", "Leave the player"),
}


def print_help() -> None:
    print_table(
        "Player commands",
        ["Command", "Description"],
        [(usage, description) for usage, description in COMMANDS.values()],
    )


def print_playlist(session: PlaybackSession) -> None:
    if not session.playlist:
        safe_print("No music available", style="yellow")
        return

    rows = []
    for i, track in enumerate(session.playlist):
        marker = ""
        if i == session.current_index:
            marker = "▶" if session.is_playing else "•"
        rows.append((marker, str(i + 1), track.title, track.artist, track.duration_str))
    print_table("Playlist", ["", "#", "Title", "Artist", "Length"], rows)


def print_status(session: PlaybackSession) -> None:
    snapshot = session.snapshot()
    if snapshot.current_track is None:
        safe_print("Nothing loaded", style="dim")
        return

    track = snapshot.current_track
    state = "Playing" if snapshot.is_playing else "Paused"
    volume = "muted" if snapshot.is_muted else f"{round(snapshot.volume * 100)}%"
    safe_print(
        f"{state}: [bold]{track.title}[/bold] - {track.artist} "
        f"({format_time(snapshot.position)} / {format_time(snapshot.duration)}) "
        f"[dim]vol {volume}[/dim]"
    )


def handle_command(
    session: PlaybackSession, config: Config, command: str, args: List[str]
) -> bool:
    """Run one shell command against the session.

    Returns:
        False when the shell should exit, True otherwise
    """
    if command == "quit":
        return False

    if command == "help":
        print_help()
    elif command == "play":
        if not session.play():
            safe_print("Nothing to play", style="yellow")
    elif command == "pause":
        session.pause()
    elif command == "toggle":
        session.toggle_play()
    elif command == "next":
        session.next()
    elif command == "previous":
        session.previous()
    elif command == "select":
        index = parse_track_number(args)
        if index is None or not session.select_track(index):
            safe_print(
                f"Usage: select <1-{len(session.playlist)}>", style="yellow"
            )
    elif command == "vol":
        volume = parse_percent(args)
        if volume is None:
            safe_print("Usage: vol <0-100>", style="yellow")
        else:
            session.set_volume(volume)
    elif command == "up":
        session.volume_up()
    elif command == "down":
        session.volume_down()
    elif command == "mute":
        session.toggle_mute()
    elif command == "seek":
        position = parse_seconds(args)
        if position is None or not session.seek(position):
            safe_print("Usage: seek <seconds | m:ss> (needs a loaded track)", style="yellow")
    elif command == "list":
        print_playlist(session)
        return True
    elif command == "status":
        pass
    elif command == "reload":
        count = session.load_playlist_file(config.catalog.music_path)
        safe_print(f"Loaded {count} tracks")
    else:
        safe_print(f"Unknown command: {command}. Type 'help' for commands.", style="red")
        return True

    if command != "help":
        print_status(session)
    return True


async def poll_events(session: PlaybackSession, interval: float) -> None:
    """Apply output events and announce automatic track changes."""
    while True:
        before = session.current_index
        if session.process_events() and session.current_index != before:
            print_status(session)
        await asyncio.sleep(interval)


async def run_shell(session: PlaybackSession, config: Config) -> None:
    prompt = PromptSession(completer=WordCompleter(sorted(COMMANDS)))
    poller = asyncio.create_task(poll_events(session, config.player.poll_interval))

    try:
        with patch_stdout():
            while True:
                try:
                    user_input = await prompt.prompt_async("♪ ")
                except (EOFError, KeyboardInterrupt):
                    break

                command, args = parse_command(user_input)
                if not command:
                    continue
                logger.debug(f"Shell command: {command} {args}")
                if not handle_command(session, config, command, args):
                    break
    finally:
        poller.cancel()
        with suppress(asyncio.CancelledError):
            await poller


def run_player_shell(config: Config) -> int:
    """Start the player shell; the session lives exactly as long as the shell."""
    output = create_output(config.player)
    with PlaybackSession(
        output, PreferenceStore(), default_volume=config.player.default_volume
    ) as session:
        session.load_playlist_file(config.catalog.music_path)
        safe_print("[bold magenta]Sparkle Stories music player[/bold magenta]")
        safe_print("Type 'help' for commands, 'quit' to exit.", style="dim")
        print_playlist(session)
        asyncio.run(run_shell(session, config))
    return 0
