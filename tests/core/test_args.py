"""Tests for SearchRequest -> ripgrep argument translation."""

from rgbridge.search.args import build_args
from rgbridge.search.models import SearchRequest


def request(**kwargs):
    kwargs.setdefault("root_path", "/src")
    kwargs.setdefault("pattern", "needle")
    return SearchRequest(**kwargs)


class TestBuildArgs:

    def test_no_options(self):
        assert build_args(request()) == ["needle", "/src", "--vimgrep"]

    def test_case_insensitive(self):
        assert build_args(request(case_insensitive=True)) == [
            "needle", "/src", "-i", "--vimgrep",
        ]

    def test_whole_word(self):
        assert build_args(request(whole_word=True)) == [
            "needle", "/src", "-w", "--vimgrep",
        ]

    def test_regex(self):
        assert build_args(request(regex=True)) == [
            "needle", "/src", "--engine=auto", "--vimgrep",
        ]

    def test_hidden(self):
        assert build_args(request(ignore_hidden=True)) == [
            "needle", "/src", "--hidden", "--vimgrep",
        ]

    def test_max_depth(self):
        args = build_args(request(max_depth=5))
        assert "--max-depth=5" in args
        assert args == ["needle", "/src", "--max-depth=5", "--vimgrep"]

    def test_zero_depth_has_no_flag(self):
        assert not any(a.startswith("--max-depth") for a in build_args(request()))

    def test_all_options_in_fixed_order(self):
        args = build_args(
            request(
                case_insensitive=True,
                whole_word=True,
                regex=True,
                ignore_hidden=True,
                max_depth=3,
                include_types=("py", "rust"),
                exclude_types=("md",),
            )
        )
        assert args == [
            "needle",
            "/src",
            "-i",
            "-w",
            "--engine=auto",
            "--hidden",
            "--max-depth=3",
            "--type=py",
            "--type=rust",
            "--type-not=md",
            "--vimgrep",
        ]

    def test_pattern_is_passed_verbatim(self):
        pattern = "it's a \"quoted\" $VAR | (x|y)*"
        args = build_args(request(pattern=pattern, root_path="C:\\My Files"))
        assert args[0] == pattern
        assert args[1] == "C:\\My Files"

    def test_output_format_flag_always_last(self):
        assert build_args(request(max_depth=1, exclude_types=("js",)))[-1] == "--vimgrep"

    def test_same_request_same_args(self):
        r = request(case_insensitive=True, max_depth=2)
        assert build_args(r) == build_args(r)
