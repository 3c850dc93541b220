"""rgbridge history list|clear|cleanup|set-path|rerun"""

from rgbridge_cli.output import die, print_result


def register(subparsers):
    p = subparsers.add_parser("history", help="Manage the search history")
    actions = p.add_subparsers(dest="action", required=True)

    actions.add_parser("list", help="Print recorded searches, newest first")
    actions.add_parser("clear", help="Delete all recorded searches")

    cleanup = actions.add_parser("cleanup", help="Drop old entries")
    cleanup.add_argument("--days", type=int, default=None,
                         help="Maximum entry age in days (default: 30)")

    set_path = actions.add_parser("set-path", help="Move the history file")
    set_path.add_argument("directory", nargs="?", default=None,
                          help="New directory (omit to use the default)")

    rerun = actions.add_parser("rerun", help="Run a recorded search again")
    rerun.add_argument("id", help="Entry id, as printed by 'history list'")
    rerun.add_argument("--compact", action="store_true", help="Single-line JSON output")

    p.set_defaults(handler=handle)


def handle(args, config):
    from rgbridge.config import save_config
    from rgbridge.constants import MAX_HISTORY_DAYS
    from rgbridge.history import SearchHistory
    from rgbridge.primitives.errors import HistoryError

    history = SearchHistory(config.history_dir())
    history.load()

    try:
        if args.action == "list":
            print_result({
                "history": [e.to_dict() for e in history.entries],
                "total": len(history.entries),
            })
        elif args.action == "clear":
            history.clear()
            print_result({"cleared": True})
        elif args.action == "cleanup":
            days = args.days if args.days is not None else MAX_HISTORY_DAYS
            removed = history.cleanup(max_days=days)
            print_result({"removed": removed, "total": len(history.entries)})
        elif args.action == "rerun":
            _rerun(args, config, history)
        elif args.action == "set-path":
            ok, message = history.relocate(args.directory)
            if not ok:
                die(message)
            config.history_path = str(history.directory) if args.directory else None
            save_config(config)
            print_result({"path": str(history.path), "message": message})
    except HistoryError as e:
        die(e.message)


def _rerun(args, config, history):
    from rgbridge.primitives.errors import InvalidRequestError
    from rgbridge.search import SearchService
    from rgbridge_cli.verbs.search import run_search

    entry = history.get(args.id)
    if entry is None:
        die(f"No history entry with id {args.id}")
    try:
        request = entry.to_request()
    except InvalidRequestError as e:
        die(f"History entry {args.id} is invalid: {e.message}")

    service = SearchService(
        binary=config.rg_binary,
        max_results=config.max_results,
        history=history,
    )
    run_search(service, request, compact=args.compact)
