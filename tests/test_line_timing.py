import pytest

from ttml_lyrics.convert.line_timing import convert_line_timed
from ttml_lyrics.errors import MalformedTimestamp, NoSynchronizedLyrics
from ttml_lyrics.ttml.model import (
    Fragment,
    LyricUnit,
    MetadataBlock,
    Section,
    Span,
    TimedDocument,
    TimingMode,
    Variant,
)


def _doc(*units, lang="ja", translations=(), transliterations=()):
    meta = MetadataBlock(translations=tuple(translations), transliterations=tuple(transliterations))
    return TimedDocument(lang=lang, timing=TimingMode.LINE, sections=(Section(units=units),), metadata=meta)


def _unit(key, begin, text):
    return LyricUnit(key=key, begin=begin, text_attr=None, nodes=(text,))


def _variant(lang, **texts):
    return Variant.from_fragments(lang, [Fragment(key=k, text_attr=v) for k, v in texts.items()])


def test_plain_line():
    doc = _doc(_unit("L1", "01:02.345", "Hello"), lang="en")
    assert convert_line_timed(doc) == ["[01:02.34]Hello"]


def test_no_metadata_block():
    doc = TimedDocument(
        lang="en",
        timing=TimingMode.LINE,
        sections=(Section(units=(_unit("L1", "00:01.000", "a"), _unit("L2", "00:02.000", "b"))),),
    )
    assert convert_line_timed(doc) == ["[00:01.00]a", "[00:02.00]b"]


def test_cjk_line_gets_translation_and_transliteration():
    doc = _doc(
        _unit("L1", "00:10.000", "こんにちは"),
        translations=[_variant("en", L1="Hello")],
        transliterations=[_variant("ja-Latn", L1="konnichiwa")],
    )
    assert convert_line_timed(doc) == [
        "[00:10.00]こんにちは",
        "[00:10.00]Hello",
        "[00:10.00]konnichiwa",
    ]


def test_transliteration_skipped_for_non_cjk_text():
    doc = _doc(
        _unit("L1", "00:10.000", "Hello"),
        lang="en",
        translations=[_variant("fr", L1="Bonjour")],
        transliterations=[_variant("en-Latn", L1="heh-loh")],
    )
    assert convert_line_timed(doc) == ["[00:10.00]Hello", "[00:10.00]Bonjour"]


def test_only_first_translation_variant_is_used():
    doc = _doc(
        _unit("L1", "00:01.000", "愛"),
        translations=[_variant("en", L1="love"), _variant("de", L1="Liebe")],
    )
    assert convert_line_timed(doc) == ["[00:01.00]愛", "[00:01.00]love"]


def test_missing_fragment_suppresses_only_that_line():
    doc = _doc(
        _unit("L1", "00:01.000", "一"),
        _unit("L2", "00:02.000", "二"),
        translations=[_variant("en", L2="two")],
    )
    assert convert_line_timed(doc) == ["[00:01.00]一", "[00:02.00]二", "[00:02.00]two"]


def test_unit_without_key_has_no_side_channels():
    doc = _doc(_unit(None, "00:01.000", "一"), translations=[_variant("en", L1="one")])
    assert convert_line_timed(doc) == ["[00:01.00]一"]


def test_span_children_are_concatenated():
    unit = LyricUnit(
        key="L1",
        begin="00:01.000",
        text_attr=None,
        nodes=(Span("span", None, None, "Hel"), Span("span", None, None, "lo"), " there"),
    )
    assert convert_line_timed(_doc(unit, lang="en")) == ["[00:01.00]Hello there"]


def test_text_attribute_wins_over_children():
    unit = LyricUnit(key="L1", begin="00:01.000", text_attr="attr", nodes=("child",))
    assert convert_line_timed(_doc(unit, lang="en")) == ["[00:01.00]attr"]


class TestSimplifiedOnly:
    def test_only_simplified_translation_is_emitted(self):
        doc = _doc(
            _unit("L1", "00:05.000", "繁體字"),
            lang="zh-Hant",
            translations=[_variant("en", L1="Traditional"), _variant("zh-Hans", L1="繁体字")],
            transliterations=[_variant("zh-Latn", L1="fan ti zi")],
        )
        assert convert_line_timed(doc) == ["[00:05.00]繁体字"]

    def test_unit_without_simplified_fragment_emits_nothing(self):
        doc = _doc(
            _unit("L1", "00:05.000", "一"),
            _unit("L2", "00:06.000", "二"),
            lang="zh-Hant",
            translations=[_variant("zh-Hans", L2="二")],
        )
        assert convert_line_timed(doc) == ["[00:06.00]二"]

    def test_traditional_without_simplified_variant_is_normal(self):
        doc = _doc(
            _unit("L1", "00:05.000", "愛"),
            lang="zh-Hant",
            translations=[_variant("en", L1="love")],
            transliterations=[_variant("zh-Latn", L1="ai")],
        )
        assert convert_line_timed(doc) == ["[00:05.00]愛", "[00:05.00]love", "[00:05.00]ai"]


def test_missing_begin_aborts_whole_conversion():
    doc = _doc(_unit("L1", "00:01.000", "ok"), _unit("L2", None, "untimed"), lang="en")
    with pytest.raises(NoSynchronizedLyrics):
        convert_line_timed(doc)


def test_bad_begin_raises():
    doc = _doc(_unit("L1", "soon", "x"), lang="en")
    with pytest.raises(MalformedTimestamp):
        convert_line_timed(doc)
