"""
Local Playlists CLI - Entry point with IPC support

Runs playlist requests directly against the playlist directory, or, with
--remote, sends them to a running `local-playlists serve` instance.
"""

import argparse
import random
import signal
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from local_playlists import ipc
from local_playlists.context import AppContext
from local_playlists.core import config as config_module
from local_playlists.core.console import get_console, safe_print
from local_playlists.core.output import log, setup_loguru
from local_playlists.domain import playback, playlists
from local_playlists.ipc import handlers
from local_playlists.domain.playlists import Playlist
from local_playlists.ui import ConsoleUIAdapter, render, show_detail, show_list
from local_playlists.ui.state import ViewState, find_playlist


def _print_response(response: Dict[str, Any]) -> int:
    """Print a handler response and map it to an exit code."""
    message = str(response.get('message', ''))
    if response.get('success'):
        safe_print(message)
        return 0
    print(message, file=sys.stderr)
    return 1


def run_request(
    registry: ipc.HandlerRegistry, remote: bool, request: str, args: List[Any]
) -> Dict[str, Any]:
    """Dispatch a request locally or over IPC."""
    if remote:
        return ipc.send_request(request, args)
    return registry.dispatch(request, args)


def load_view_state(
    ctx: AppContext, registry: ipc.HandlerRegistry, remote: bool
) -> Optional[ViewState]:
    """
    Fetch all playlists through get-local-playlists into a list view state.

    With remote set the records come from the running server, so commands
    see the server's store rather than the local one.

    Returns:
        The list view state, or None after printing the failure
    """
    response = run_request(registry, remote, handlers.GET_LOCAL_PLAYLISTS, [])
    if not response.get('success'):
        _print_response(response)
        return None

    try:
        records = [Playlist.from_dict(record) for record in response.get('playlists') or []]
    except (ValueError, AttributeError) as e:
        logger.error(f"Invalid playlist record in response: {e}")
        print(f"Invalid playlist record: {e}", file=sys.stderr)
        return None
    return show_list(ctx.view_state, records)


def lookup_playlist(
    ctx: AppContext, registry: ipc.HandlerRegistry, remote: bool, name: str
) -> Tuple[bool, Optional[Playlist]]:
    """Find a playlist by exact name. The flag is False when fetching failed."""
    state = load_view_state(ctx, registry, remote)
    if state is None:
        return False, None
    return True, find_playlist(state, name)


def cmd_list(ctx: AppContext, registry: ipc.HandlerRegistry, remote: bool) -> int:
    state = load_view_state(ctx, registry, remote)
    if state is None:
        return 1
    ConsoleUIAdapter(ctx.console).show_page(render(state))
    return 0


def cmd_show(
    ctx: AppContext, registry: ipc.HandlerRegistry, remote: bool, name: str
) -> int:
    fetched, playlist = lookup_playlist(ctx, registry, remote, name)
    if not fetched:
        return 1

    adapter = ConsoleUIAdapter(ctx.console)
    if playlist is None:
        adapter.alert("Playlist not found")
        return 1
    adapter.show_page(render(show_detail(ctx.view_state, playlist)))
    return 0


def cmd_export(
    ctx: AppContext,
    registry: ipc.HandlerRegistry,
    remote: bool,
    name: str,
    format_type: str,
    output: Optional[str],
) -> int:
    fetched, playlist = lookup_playlist(ctx, registry, remote, name)
    if not fetched:
        return 1
    if playlist is None:
        print("Playlist not found", file=sys.stderr)
        return 1

    destination = output or str(
        Path.cwd() / playlists.default_export_filename(playlist, format_type)
    )
    return _print_response(
        run_request(
            registry,
            remote,
            handlers.EXPORT_PLAYLIST_FILE,
            [playlist.to_dict(), format_type, str(Path(destination).resolve())],
        )
    )


def cmd_play(
    ctx: AppContext,
    registry: ipc.HandlerRegistry,
    remote: bool,
    name: str,
    shuffle: bool,
    seed: Optional[int],
) -> int:
    fetched, playlist = lookup_playlist(ctx, registry, remote, name)
    if not fetched:
        return 1

    # Playback always happens on this machine
    rng = random.Random(seed) if seed is not None else None
    outcome = playback.play_playlist(
        playlist, playback.BrowserPlayer(), shuffle=shuffle, rng=rng
    )
    return _print_response({'success': outcome.success, 'message': outcome.message})


def cmd_serve(config: config_module.Config, registry: ipc.HandlerRegistry) -> int:
    if not config.ipc.enabled:
        print("IPC is disabled in the configuration ([ipc] enabled = false)", file=sys.stderr)
        return 1

    server = ipc.IPCServer(registry, notifications_config=config.notifications)
    stop_event = threading.Event()

    def _shutdown(signum, _frame):
        logger.info(f"Received signal {signum}, shutting down")
        stop_event.set()

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    try:
        server.start()
    except OSError as e:
        log(f"Could not listen on {server.socket_path}: {e}", level="error")
        return 1
    log(f"Serving playlist requests on {server.socket_path}")
    try:
        stop_event.wait()
    finally:
        server.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='local-playlists',
        description="Local Playlists - JSON playlist store with import/export",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--config',
        type=Path,
        help='Path to config.toml (default: ./config.toml or ~/.config/local-playlists)'
    )
    parser.add_argument(
        '--remote',
        action='store_true',
        help='Send the request to a running `local-playlists serve` instance'
    )

    subparsers = parser.add_subparsers(dest='subcommand', help='Available commands')
    subparsers.required = True

    subparsers.add_parser('list', help='List local playlists')

    show_parser = subparsers.add_parser('show', help='Show the songs of a playlist')
    show_parser.add_argument('name', nargs='+', help='Playlist name')

    import_parser = subparsers.add_parser(
        'import', help='Import a .json, .csv, .txt or .m3u playlist file'
    )
    import_parser.add_argument('path', help='File to import')

    export_parser = subparsers.add_parser('export', help='Export a playlist to a file')
    export_parser.add_argument('name', help='Playlist name')
    export_parser.add_argument(
        'format', nargs='?', default=None,
        help=f"Export format ({', '.join(config_module.EXPORT_FORMATS)}; default from config)"
    )
    export_parser.add_argument(
        '-o', '--output', help='Destination file (default: ./<name>.<format>)'
    )

    delete_parser = subparsers.add_parser('delete', help='Delete a playlist')
    delete_parser.add_argument('name', nargs='+', help='Playlist name')

    play_parser = subparsers.add_parser('play', help='Play a playlist in the browser')
    play_parser.add_argument('name', nargs='+', help='Playlist name')
    play_parser.add_argument('--shuffle', action='store_true', help='Shuffle play order')
    play_parser.add_argument('--seed', type=int, help='Random seed for --shuffle')

    subparsers.add_parser('serve', help='Serve playlist requests over a Unix socket')

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the local-playlists command."""
    args = build_parser().parse_args(argv)

    config = config_module.load_config(args.config)
    setup_loguru(
        config_module.get_log_file_path(config),
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )
    config_module.ensure_directories(config)

    ctx = AppContext.create(config, console=get_console())
    registry = handlers.create_playlist_handlers(ctx.playlists_dir)
    remote = args.remote

    if args.subcommand == 'list':
        sys.exit(cmd_list(ctx, registry, remote))

    elif args.subcommand == 'show':
        sys.exit(cmd_show(ctx, registry, remote, ' '.join(args.name)))

    elif args.subcommand == 'import':
        path = str(Path(args.path).expanduser().resolve())
        sys.exit(_print_response(
            run_request(registry, remote, handlers.IMPORT_PLAYLIST_FILE, [path])
        ))

    elif args.subcommand == 'export':
        format_type = (args.format or config.export.default_format).lower()
        sys.exit(cmd_export(ctx, registry, remote, args.name, format_type, args.output))

    elif args.subcommand == 'delete':
        sys.exit(_print_response(
            run_request(registry, remote, handlers.DELETE_PLAYLIST, [' '.join(args.name)])
        ))

    elif args.subcommand == 'play':
        sys.exit(cmd_play(ctx, registry, remote, ' '.join(args.name), args.shuffle, args.seed))

    elif args.subcommand == 'serve':
        sys.exit(cmd_serve(config, registry))


if __name__ == "__main__":
    main()
