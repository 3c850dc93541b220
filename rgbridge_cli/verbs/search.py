"""rgbridge search <pattern> [path] [-i] [-w] [-E] [--hidden] [--max-depth N]"""

import asyncio
import signal

from rgbridge_cli.output import die, print_result, run_async


def register(subparsers):
    p = subparsers.add_parser("search", help="Search files with ripgrep")
    p.add_argument("pattern", help="Search term or regular expression")
    p.add_argument("path", nargs="?", default=None,
                   help="File or directory to search (default: configured path, then .)")
    p.add_argument("-i", "--ignore-case", dest="case_insensitive", action="store_true",
                   help="Case-insensitive match")
    p.add_argument("-w", "--word", dest="whole_word", action="store_true",
                   help="Match whole words only")
    p.add_argument("-E", "--regex", dest="regex", action="store_true",
                   help="Enable the extended regex engine")
    p.add_argument("--hidden", dest="ignore_hidden", action="store_true",
                   help="Include hidden files and directories")
    p.add_argument("--max-depth", type=int, default=0,
                   help="Directory depth limit (default: 0, no limit)")
    p.add_argument("--type", dest="include_types", action="append", default=[],
                   metavar="TYPE", help="Only search files of this ripgrep type")
    p.add_argument("--type-not", dest="exclude_types", action="append", default=[],
                   metavar="TYPE", help="Skip files of this ripgrep type")
    p.add_argument("--compact", action="store_true", help="Single-line JSON output")
    p.add_argument("--no-history", action="store_true",
                   help="Do not record this search in the history")
    p.set_defaults(handler=handle)


async def _run(service, request):
    """Run a search; SIGINT cancels the child instead of killing the CLI."""
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError):
        pass  # Windows event loops have no signal handlers
    try:
        return await service.search(request, cancel_event)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass


def run_search(service, request, compact=False):
    """Run request, print the JSON response; errors exit nonzero."""
    response = run_async(_run(service, request))

    if response.error is not None:
        die(response.error.rstrip())
    if response.cancelled:
        die("search cancelled", code=130)
    print_result(response.to_dict(), compact=compact)


def handle(args, config):
    from rgbridge.history import SearchHistory
    from rgbridge.primitives.errors import InvalidRequestError
    from rgbridge.search import SearchRequest, SearchService

    root_path = args.path or config.default_search_path or "."
    try:
        request = SearchRequest(
            root_path=root_path,
            pattern=args.pattern,
            case_insensitive=args.case_insensitive,
            whole_word=args.whole_word,
            regex=args.regex,
            ignore_hidden=args.ignore_hidden,
            max_depth=args.max_depth,
            include_types=tuple(args.include_types),
            exclude_types=tuple(args.exclude_types),
        )
    except InvalidRequestError as e:
        die(e.message)

    history = None
    if not args.no_history:
        history = SearchHistory(config.history_dir())
        history.load()

    service = SearchService(
        binary=config.rg_binary,
        max_results=config.max_results,
        history=history,
    )
    run_search(service, request, compact=args.compact)
