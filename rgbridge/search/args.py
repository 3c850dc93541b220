"""Translate a SearchRequest into ripgrep arguments."""

from typing import List

from rgbridge.constants import Flag
from rgbridge.search.models import SearchRequest


def build_args(request: SearchRequest) -> List[str]:
    """Build the argument list for one search, binary excluded.

    Order is fixed: pattern, root path, optional flags, then the output
    format flag last. The pattern is never quoted or escaped.
    """
    args = [request.pattern, request.root_path]

    if request.case_insensitive:
        args.append(Flag.CASE_INSENSITIVE)
    if request.whole_word:
        args.append(Flag.WHOLE_WORD)
    if request.regex:
        args.append(Flag.REGEX)
    if request.ignore_hidden:
        args.append(Flag.HIDDEN)
    if request.max_depth > 0:
        args.append(Flag.MAX_DEPTH.format(depth=request.max_depth))

    args.extend(Flag.TYPE.format(name=name) for name in request.include_types)
    args.extend(Flag.TYPE_NOT.format(name=name) for name in request.exclude_types)

    args.append(Flag.OUTPUT_FORMAT)
    return args
