import pytest

from unisplit import ByteRange, locate_boundaries, split_boundaries
from unisplit.boundaries import BoundaryIterationAdapter, BoundaryKind, normalize_locale, parse_kind
from unisplit.errors import InvalidArgumentError, RecyclingError, SegmenterConstructionError


@pytest.mark.parametrize(
    "name,expected",
    [
        ("word", BoundaryKind.WORD),
        ("char", BoundaryKind.CHARACTER),
        ("line", BoundaryKind.LINE_BREAK),
        ("s", BoundaryKind.SENTENCE),
        (BoundaryKind.WORD, BoundaryKind.WORD),
    ],
)
def test_parse_kind(name, expected):
    assert parse_kind(name) is expected


@pytest.mark.parametrize("name", ["", "title", "words"])
def test_parse_kind_rejects_unknown(name):
    with pytest.raises(InvalidArgumentError, match="boundary"):
        parse_kind(name)


def test_normalize_locale():
    assert normalize_locale(None) is None
    assert normalize_locale("", "de_DE") == "de_DE"
    assert normalize_locale("sr_Latn_RS@collation=standard") == "sr_Latn_RS@collation=standard"
    with pytest.raises(InvalidArgumentError, match="locale"):
        normalize_locale("en US")


def test_word_boundaries_cover_everything(fake_settings):
    assert split_boundaries("Hi there.", "word", settings=fake_settings) == [
        ["Hi", " ", "there", "."]
    ]


def test_empty_string_gives_one_empty_piece(fake_settings):
    assert split_boundaries("", "character", settings=fake_settings) == [[""]]
    assert locate_boundaries("", "word", settings=fake_settings) == [[ByteRange(0, 0)]]


def test_byte_ranges_for_multibyte_text(fake_settings):
    assert locate_boundaries("żó", "character", settings=fake_settings) == [
        [ByteRange(0, 2), ByteRange(2, 4)]
    ]


def test_na_string_or_kind(fake_settings):
    result = split_boundaries(["a b", None, "c"], ["word", "word", None], settings=fake_settings)
    assert result == [["a", " ", "b"], [None], [None]]


def test_segmenter_reused_until_kind_changes(fake_builds, fake_settings):
    split_boundaries(
        ["a", "b", "c", "d", "e"],
        ["word", "word", "sentence", "sentence", "word"],
        locale="en_GB",
        settings=fake_settings,
    )
    assert fake_builds == [
        (BoundaryKind.WORD, "en_GB"),
        (BoundaryKind.SENTENCE, "en_GB"),
        (BoundaryKind.WORD, "en_GB"),
    ]


def test_na_elements_do_not_trigger_rebuilds(fake_builds, fake_settings):
    split_boundaries(["a", None, "b"], "line_break", settings=fake_settings)
    assert fake_builds == [(BoundaryKind.LINE_BREAK, None)]


def test_default_locale_comes_from_settings(fake_builds, fake_settings):
    settings = fake_settings.model_copy(update={"locale": "pl_PL"})
    split_boundaries("a", "word", settings=settings)
    assert fake_builds == [(BoundaryKind.WORD, "pl_PL")]


def test_invalid_kind_fails_before_any_segmenter_is_built(fake_builds, fake_settings):
    with pytest.raises(InvalidArgumentError):
        split_boundaries(["a", "b"], ["word", "paragraph"], settings=fake_settings)
    assert fake_builds == []


def test_recycling_mismatch(fake_settings):
    with pytest.raises(RecyclingError):
        split_boundaries(["a", "b", "c"], ["word", "character"], settings=fake_settings)


def test_construction_failure_aborts_call(fake_settings, failing_locale):
    with pytest.raises(SegmenterConstructionError):
        split_boundaries(["a", "b"], "word", locale=failing_locale, settings=fake_settings)


def test_unknown_backend():
    with pytest.raises(InvalidArgumentError, match="backend"):
        BoundaryIterationAdapter(backend="missing")


def test_adapter_releases_handle(fake_builds):
    with BoundaryIterationAdapter(backend="fake") as adapter:
        occ = adapter.scan("x y".encode("utf-8"), BoundaryKind.WORD)
        assert adapter.rebuilds == 1
        assert [tuple(r) for r in occ] == [(0, 1), (1, 2), (2, 3)]
    adapter.scan(b"z", BoundaryKind.WORD)
    assert adapter.rebuilds == 2


def test_adapter_handle_dropped_after_failed_rebuild(failing_locale):
    adapter = BoundaryIterationAdapter(locale=failing_locale, backend="fake")
    with pytest.raises(SegmenterConstructionError):
        adapter.scan(b"a", BoundaryKind.WORD)
    assert adapter.rebuilds == 0


def test_failed_rebuild_mid_call_aborts(fake_builds, fake_settings, no_sentence_locale):
    with pytest.raises(SegmenterConstructionError, match="sentence"):
        split_boundaries(
            ["a", "b", "c"], ["word", "sentence", "word"], no_sentence_locale, settings=fake_settings
        )
    assert fake_builds == [(BoundaryKind.WORD, no_sentence_locale)]


def test_failed_rebuild_releases_held_handle(fake_builds, no_sentence_locale):
    adapter = BoundaryIterationAdapter(locale=no_sentence_locale, backend="fake")
    adapter.scan(b"a b", BoundaryKind.WORD)
    assert adapter._handle is not None
    with pytest.raises(SegmenterConstructionError):
        adapter.scan(b"a. b.", BoundaryKind.SENTENCE)
    assert adapter._handle is None
    assert adapter._kind is None
    assert adapter.rebuilds == 1


def test_locale_with_empty_component():
    assert normalize_locale("de__PHONEBOOK") == "de__PHONEBOOK"
    assert normalize_locale("en_US_POSIX") == "en_US_POSIX"
