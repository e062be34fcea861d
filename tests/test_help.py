import io
import pytest
from llava_server.command_line import (
    OptionDefinitionError,
    REQUIRED,
    default_valued_option,
    format_help,
    integer,
    show_help,
    string,
    switch_option,
    valued_option,
)
from llava_server.command_line.help import (
    build_option_name_to_syntax_map,
    program_name,
    syntax_description,
)


class TestSyntax:
    @pytest.mark.parametrize(
        "argv,expected",
        [
            (["prog"], "prog"),
            (["/usr/local/bin/llava-server"], "llava-server"),
            (["C:/tools/prog.exe", "--help"], "prog"),
            ([], ""),
        ],
    )
    def test_program_name(self, argv, expected):
        assert program_name(argv) == expected

    def test_syntax_description(self):
        option = valued_option("--size", integer("Width"), "Size", "Size.")
        assert syntax_description("--size", option) == "--size=<width>"

    def test_syntax_map(self):
        options = [
            switch_option(["--verbose", "--chatty"], "Verbose", "Print more.", short_names=["-v"]),
            default_valued_option("--timeout", integer(1, 3600), "30", "Timeout", "Timeout."),
        ]
        assert build_option_name_to_syntax_map(options) == {
            "--verbose": "  --verbose ",
            "--chatty": "    --chatty  ",
            "-v": "    -v  ",
            "--timeout": "  --timeout=<value> ",
        }


class TestFormatHelp:
    def test_verbose_and_timeout(self, verbose_timeout_options):
        assert format_help(verbose_timeout_options, ["prog"]) == [
            "Usage: prog [options]",
            "",
            "Options:",
            "  --verbose" + " " * 9 + "Print more.",
            "  --timeout=<value> Request timeout in seconds. [Default: 30]",
        ]

    def test_required_options_in_usage(self, verbose_timeout_options):
        options = [valued_option("--model", string("file"), "Model", "Model file.", REQUIRED)] + verbose_timeout_options
        assert format_help(options, ["prog"])[0] == "Usage: prog --model=<file> [options]"

    def test_all_required_omits_options_marker(self):
        options = [valued_option("--model", string("file"), "Model", "Model file.", REQUIRED)]
        assert format_help(options, ["prog"])[0] == "Usage: prog --model=<file>"

    def test_usage_wraps_under_prefix(self):
        options = [
            valued_option(f"--option-number-{n}", string(), f"Option{n}", "An option.", REQUIRED)
            for n in range(1, 4)
        ]
        lines = format_help(options, ["prog"])
        assert lines[0] == "Usage: prog --option-number-1=<value> --option-number-2=<value>"
        assert lines[1] == "       --option-number-3=<value>"

    def test_aliases_listed_beneath_primary(self):
        options = [switch_option(["--verbose", "--chatty"], "Verbose", "Print more.", short_names=["-v"])]
        assert format_help(options, ["prog"])[3:] == [
            "  --verbose   Print more.",
            "    --chatty  ",
            "    -v  ",
        ]

    def test_default_on_its_own_line(self):
        options = [
            switch_option("--verbose", "Verbose", "Print more."),
            default_valued_option("--timeout", integer(1, 3600), "30", "Timeout", "x" * 50),
        ]
        assert format_help(options, ["prog"])[4:] == [
            "  --timeout=<value> " + "x" * 50,
            " " * 20 + "[Default: 30]",
        ]

    def test_long_syntax_overruns_onto_own_line(self):
        long_name = "--" + "x" * 40
        options = [
            switch_option("--verbose", "Verbose", "Print more."),
            switch_option(long_name, "Long", "A long option."),
        ]
        assert format_help(options, ["prog"])[3:] == [
            "  --verbose ".ljust(36) + "Print more.",
            f"  {long_name}  ",
            " " * 36 + "A long option.",
        ]

    def test_long_description_wraps_within_display(self, verbose_timeout_options):
        description = " ".join(["word"] * 40)
        options = verbose_timeout_options + [switch_option("--wordy", "Wordy", description)]
        lines = format_help(options, ["prog"])
        wordy = lines[5:]
        assert len(wordy) > 1
        assert all(len(line) < 80 for line in wordy)
        assert all(line.startswith(" " * 20) for line in wordy[1:])
        assert " ".join(line.strip() for line in wordy).endswith(description)

    def test_empty_option_set(self):
        assert format_help([], ["prog"]) == ["Usage: prog"]

    def test_invalid_definition_raises(self):
        options = [switch_option("--a", "A", "A."), switch_option("--a", "B", "B.")]
        with pytest.raises(OptionDefinitionError):
            format_help(options, ["prog"])


class TestShowHelp:
    def test_writes_lines(self, verbose_timeout_options):
        out = io.StringIO()
        show_help(verbose_timeout_options, ["prog"], out)
        assert out.getvalue() == "\n".join(format_help(verbose_timeout_options, ["prog"])) + "\n"

    def test_defaults_to_stdout(self, verbose_timeout_options, capsys):
        show_help(verbose_timeout_options, ["prog"])
        assert capsys.readouterr().out.startswith("Usage: prog [options]\n")
