import json

import pytest

from visualencer.nodes.helpers import (
    ConfigView,
    chain_call,
    ease_delay_options,
    escape_string_literal,
    escape_template_literal,
    format_number,
    object_literal,
    resolve_target,
    split_list,
    to_number,
)


class TestNumbers:

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "12px", float("nan"), float("inf"), "1_000", [1]])
    def test_to_number_falls_back_to_zero(self, value):
        """Anything that is not a finite number coerces to 0."""
        assert to_number(value) == 0

    def test_to_number_parses_strings_and_booleans(self):
        assert to_number("  12.5 ") == 12.5
        assert to_number("-3") == -3
        assert to_number("0x10") == 16
        assert to_number(True) == 1
        assert to_number(False) == 0

    @pytest.mark.parametrize("value, expected", [
        (1000.0, "1000"),
        (-0.0, "0"),
        (0.5, "0.5"),
        (-2.5, "-2.5"),
        (0.000015, "0.000015"),
        (1e-7, "1e-7"),
        (1e21, "1e+21"),
        (123456789012, "123456789012"),
        (2 ** 53, "9007199254740992"),
        (1e16, "10000000000000000"),
        (1.2345678901234568e20, "123456789012345680000"),
        ("250", "250"),
        ("nope", "0"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected


class TestEscaping:

    def test_string_literal_escapes_backslash_before_quote(self):
        """Backslashes are doubled first so the quote escapes are not doubled again."""
        assert escape_string_literal('a\\b"c') == 'a\\\\b\\"c'

    def test_string_literal_coerces_values(self):
        assert escape_string_literal(None) == ""
        assert escape_string_literal(True) == "true"
        assert escape_string_literal(2.0) == "2"

    @pytest.mark.parametrize("text", [
        "plain",
        "C:\\\\tokens\\\\",
        'say "hi"',
        '\\"',
        'mixed \\\\" and \\" "quotes" \\',
    ])
    def test_string_literal_parses_back_to_the_input(self, text):
        assert json.loads('"' + escape_string_literal(text) + '"') == text

    def test_template_literal_escapes_backticks_only(self):
        assert escape_template_literal('say `hi` "there"') == 'say \\`hi\\` "there"'


class TestCallBuilders:

    def test_ease_delay_options(self):
        assert ease_delay_options(None, None) == ""
        assert ease_delay_options("  ", "x") == ""
        assert ease_delay_options("easeInOutQuad", 0) == '{ ease: "easeInOutQuad" }'
        assert ease_delay_options("", 250) == "{ delay: 250 }"
        assert ease_delay_options("linear", -100) == '{ ease: "linear", delay: -100 }'
        assert ease_delay_options(False, 0) == ""
        assert ease_delay_options(0, 250) == "{ delay: 250 }"

    def test_chain_call_short_and_long_form(self):
        assert chain_call("file", '"a.webm"') == '  .file("a.webm")'
        assert chain_call("async") == "  .async()"
        assert chain_call("atLocation", "t", options=[]) == "  .atLocation(t)"
        assert chain_call("atLocation", "t", options=["local: true"]) == "  .atLocation(t, { local: true })"

    def test_object_literal(self):
        assert object_literal(["a: 1", "b: 2"]) == "{ a: 1, b: 2 }"

    def test_split_list(self):
        assert split_list("Alice, Bob ,,") == ["Alice", "Bob"]
        assert split_list(["x", " ", "y"]) == ["x", "y"]
        assert split_list(None) == []


class TestConfigView:

    def test_inline_fallbacks(self):
        c = ConfigView({"a": None, "b": "", "n": "7", "f": 0})
        assert c.text("a", "dflt") == "dflt"
        assert c.text("b", "dflt") == ""
        assert c.num("n") == 7
        assert c.num("missing") == 0
        assert c.flag("f") is False
        assert c.flag("missing", True) is True

    def test_finite_distinguishes_absent_from_zero(self):
        c = ConfigView({"zero": 0, "blank": "", "bad": "x"})
        assert c.finite("zero") == 0
        assert c.finite("blank") is None
        assert c.finite("bad") is None
        assert c.finite("missing") is None

    def test_non_mapping_config_is_empty(self):
        assert ConfigView(None).text("x") == ""


class TestResolveTarget:

    MODES = ("selected-token", "token-id", "point", "stored-name", "name")

    def test_symbolic_and_lookup_targets(self):
        assert resolve_target(ConfigView({"mode": "selected-token"}), self.MODES) == "canvas.tokens.controlled[0]"
        assert resolve_target(ConfigView({"mode": "token-id", "tokenId": 'ab"c'}), self.MODES) == \
            'canvas.tokens.get("ab\\"c")'
        assert resolve_target(ConfigView({"mode": "point", "x": "5", "y": None}), self.MODES) == "{ x: 5, y: 0 }"
        assert resolve_target(ConfigView({"mode": "name", "storedName": "impact"}), self.MODES) == '"impact"'

    def test_blank_required_field_yields_no_target(self):
        assert resolve_target(ConfigView({"mode": "token-id", "tokenId": "   "}), self.MODES) is None
        assert resolve_target(ConfigView({"mode": "stored-name"}), self.MODES) is None

    def test_mode_outside_allowed_set_yields_no_target(self):
        assert resolve_target(ConfigView({"mode": "tile-id", "tileId": "t1"}), self.MODES) is None

    def test_missing_mode_uses_default(self):
        assert resolve_target(ConfigView({}), self.MODES, default_mode="selected-token") == \
            "canvas.tokens.controlled[0]"
        assert resolve_target(ConfigView({}), self.MODES) is None
