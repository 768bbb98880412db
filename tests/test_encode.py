"""Tests for the minimal and attribute encoding policies."""

import io
import random
import unittest

from escaper import (
    ATTRIBUTE,
    MINIMAL,
    EncodingPolicy,
    StringSink,
    decode_html,
    encode_attribute,
    encode_attribute_into,
    encode_into,
    encode_minimal,
    encode_minimal_into,
)

ROUND_TRIP_SAMPLES = [
    "",
    "plain",
    "<em>Hej!</em>",
    "a & b && c;",
    "&amp; is already escaped",
    "&#65; &notin &zzz;",
    "\"double\" and 'single'",
    "tab\tnewline\ncarriage\rnul\x00bell\x07esc\x1b",
    "caf\xe9 \u2209 \U0001f600",
    "".join(chr(code) for code in range(0x80)),
]

# Heavy in reference syntax, markup, control and non-ASCII characters.
SWEEP_ALPHABET = list("&;#xX<>\"'ampltgquo0169") + ["\x00", "\t", "\n", "\r", "\x1f", "\xe9", "\u2209", "\U0001f600"]


class TestEncodeMinimal(unittest.TestCase):
    def test_escapes_markup_characters(self):
        assert encode_minimal("<em>Hej!</em>") == "&lt;em&gt;Hej!&lt;/em&gt;"
        assert encode_minimal("a & b") == "a &amp; b"

    def test_other_characters_pass_through(self):
        text = "\"quotes\" 'too' \x00\x1f caf\xe9 \U0001f600"
        assert encode_minimal(text) == text

    def test_not_idempotent(self):
        """A second pass re-escapes the "&" of every reference; this is expected."""
        once = encode_minimal("a&b<c")
        twice = encode_minimal(once)
        assert once == "a&amp;b&lt;c"
        assert twice == "a&amp;amp;b&amp;lt;c"
        assert twice != once
        assert decode_html(twice) == once

    def test_into_sink(self):
        sink = StringSink()
        encode_minimal_into("1 < 2", sink)
        encode_minimal_into(" & 3 > 2", sink)
        assert sink.getvalue() == "1 &lt; 2 &amp; 3 &gt; 2"

    def test_into_text_writer(self):
        out = io.StringIO()
        encode_minimal_into("<b>", out)
        assert out.getvalue() == "&lt;b&gt;"


class TestEncodeAttribute(unittest.TestCase):
    def test_quotes(self):
        assert encode_attribute('"No", he said.') == "&quot;No&quot;, he said."
        assert encode_attribute("it's") == "it&#39;s"

    def test_includes_minimal_set(self):
        assert encode_attribute("<a&b>") == "&lt;a&amp;b&gt;"

    def test_control_characters(self):
        assert encode_attribute("a\tb\nc\rd\x00e\x1f") == "a\tb\nc&#13;d&#0;e&#31;"

    def test_space_and_del_pass_through(self):
        assert encode_attribute(" \x7f") == " \x7f"

    def test_into_sink(self):
        sink = StringSink()
        encode_attribute_into("x='1'", sink)
        assert sink.getvalue() == "x=&#39;1&#39;"


class TestRoundTrip(unittest.TestCase):
    def test_minimal_round_trip(self):
        for text in ROUND_TRIP_SAMPLES:
            with self.subTest(text=text):
                assert decode_html(encode_minimal(text)) == text

    def test_attribute_round_trip(self):
        for text in ROUND_TRIP_SAMPLES:
            with self.subTest(text=text):
                assert decode_html(encode_attribute(text)) == text

    def test_every_escape_is_terminated(self):
        for ch in set(ATTRIBUTE.entities) | set(ATTRIBUTE.numeric):
            with self.subTest(ch=ch):
                assert ATTRIBUTE.render(ch).endswith(";")

    def test_random_text_round_trips(self):
        rng = random.Random(20240611)
        for _ in range(2000):
            text = "".join(rng.choice(SWEEP_ALPHABET) for _ in range(rng.randrange(40)))
            with self.subTest(text=text):
                assert decode_html(encode_minimal(text)) == text
                assert decode_html(encode_attribute(text)) == text

    def test_random_text_without_markup_is_unchanged(self):
        rng = random.Random(7)
        alphabet = [ch for ch in SWEEP_ALPHABET if ch not in "&<>"]
        for _ in range(2000):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randrange(40)))
            with self.subTest(text=text):
                assert encode_minimal(text) == text


class TestEncodingPolicy(unittest.TestCase):
    def test_predicate(self):
        assert MINIMAL.needs_escape("&")
        assert not MINIMAL.needs_escape('"')
        assert ATTRIBUTE.needs_escape('"')
        assert ATTRIBUTE.needs_escape("\r")
        assert not ATTRIBUTE.needs_escape("\n")

    def test_render(self):
        assert MINIMAL.render("<") == "&lt;"
        assert ATTRIBUTE.render("\x0b") == "&#11;"

    def test_custom_policy(self):
        policy = EncodingPolicy("nbsp", {"\xa0": "&nbsp;"}, numeric=["\u200b"])
        sink = StringSink()
        encode_into("a\xa0b\u200bc<", sink, policy)
        assert sink.getvalue() == "a&nbsp;b&#8203;c<"
        assert isinstance(policy.numeric, frozenset)

    def test_policies_are_hashable(self):
        assert hash(MINIMAL) == hash(EncodingPolicy("minimal", {"&": "&amp;", "<": "&lt;", ">": "&gt;"}))
        assert len({MINIMAL, ATTRIBUTE, MINIMAL}) == 2
        assert MINIMAL == EncodingPolicy("minimal", {"&": "&amp;", "<": "&lt;", ">": "&gt;"})

    def test_entities_are_read_only(self):
        source = {"<": "&lt;"}
        policy = EncodingPolicy("lt", source)
        source["<"] = "&#60;"
        assert policy.render("<") == "&lt;"
        with self.assertRaises(TypeError):
            policy.entities["<"] = "&#60;"

    def test_empty_policy_copies_input(self):
        policy = EncodingPolicy("none", {})
        assert policy.pattern is None
        sink = StringSink()
        encode_into("<&>", sink, policy)
        assert sink.getvalue() == "<&>"

    def test_multi_character_key_rejected(self):
        with self.assertRaises(ValueError):
            EncodingPolicy("bad", {"ab": "&ab;"})

    def test_sink_errors_propagate(self):
        class BrokenSink:
            def write(self, text):
                raise OSError("disk full")

        with self.assertRaises(OSError):
            encode_attribute_into("<x>", BrokenSink())


if __name__ == "__main__":
    unittest.main()
