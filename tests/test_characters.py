from __future__ import annotations

import logging

import pytest

from glyphspec.core.diagnostics import NullEmitter
from glyphspec.core.documents import parse_document
from glyphspec.core.exceptions import EncodingError, TranslationError
from glyphspec.fonts.characters import CodePointSets, decode_code_points, resolve_characters
from glyphspec.fonts.usage import FontUsage


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        raise AssertionError(message)

    def event(self, name: str, payload) -> None:
        return


def _usage(**fonts: tuple[int, ...]) -> FontUsage:
    entries = {
        text_id: tuple(index in indices for index in range(3))
        for text_id, indices in fonts.items()
    }
    return FontUsage(entries, font_count=3)


def _translations(body: str):
    return parse_document(f"<xliff>{body}</xliff>")


def test_decode_code_points_from_bytes_and_text() -> None:
    assert decode_code_points("é".encode()) == [0xE9]
    assert decode_code_points("Aé€😀") == [0x41, 0xE9, 0x20AC, 0x1F600]


def test_decode_code_points_rejects_invalid_utf8() -> None:
    with pytest.raises(EncodingError, match="Invalid UTF-8"):
        decode_code_points(b"\xc3\x28")


def test_decode_code_points_rejects_lone_surrogates() -> None:
    with pytest.raises(EncodingError):
        decode_code_points("\ud800")


def test_code_points_land_only_in_fonts_using_the_text() -> None:
    sets = resolve_characters(
        _usage(T1=(1,)),
        _translations('<trans-unit name="T1"><source>é</source></trans-unit>'),
        font_count=3,
        emitter=NullEmitter(),
    )
    assert 0xE9 in sets[1]
    assert sets[0] == set()
    assert sets[2] == set()


def test_text_shared_by_several_fonts_fans_out() -> None:
    sets = resolve_characters(
        _usage(T1=(0, 2)),
        _translations('<trans-unit name="T1"><source>ab</source><target>ba</target></trans-unit>'),
        font_count=3,
        emitter=NullEmitter(),
    )
    assert sets[0] == {ord("a"), ord("b")}
    assert sets[2] == {ord("a"), ord("b")}
    assert sets[1] == set()


def test_repeated_text_does_not_grow_sets() -> None:
    usage = _usage(T1=(0,))
    document = _translations('<trans-unit name="T1"><source>hello</source></trans-unit>')
    sets = resolve_characters(usage, document, font_count=3, emitter=NullEmitter())
    size = len(sets[0])
    resolve_characters(usage, document, font_count=3, emitter=NullEmitter(), into=sets)
    assert len(sets[0]) == size == 4


def test_missing_unit_name_is_fatal() -> None:
    with pytest.raises(TranslationError):
        resolve_characters(
            _usage(T1=(0,)),
            _translations("<trans-unit><source>x</source></trans-unit>"),
            font_count=3,
            emitter=NullEmitter(),
        )


def test_empty_content_warns_and_continues() -> None:
    emitter = RecordingEmitter()
    sets = resolve_characters(
        _usage(T1=(0,)),
        _translations('<trans-unit name="T1"><source/><target>Q</target></trans-unit>'),
        font_count=3,
        emitter=emitter,
    )
    assert sets[0] == {ord("Q")}
    assert len(emitter.warnings) == 1
    assert "Empty <source>" in emitter.warnings[0]


def test_unused_translation_warns_and_skips_unit() -> None:
    emitter = RecordingEmitter()
    sets = resolve_characters(
        _usage(T2=(2,)),
        _translations(
            '<trans-unit name="ghost"><source>x</source><target>y</target></trans-unit>'
            '<trans-unit name="T2"><source>k</source></trans-unit>'
        ),
        font_count=3,
        emitter=emitter,
    )
    assert emitter.warnings == ["Unused translation 'ghost': no screen renders it."]
    assert sets[2] == {ord("k")}
    assert sets.total() == 1


def test_units_nested_below_file_elements_are_found() -> None:
    sets = resolve_characters(
        _usage(T1=(0,)),
        _translations('<file><body><trans-unit name="T1"><source>m</source></trans-unit></body></file>'),
        font_count=3,
        emitter=NullEmitter(),
    )
    assert sets[0] == {ord("m")}


def test_namespaced_xliff_units_are_resolved() -> None:
    emitter = RecordingEmitter()
    root = parse_document(
        '<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2"><file><body>'
        '<trans-unit name="T1"><source>n</source><target/></trans-unit>'
        "</body></file></xliff>"
    )
    sets = resolve_characters(_usage(T1=(1,)), root, font_count=3, emitter=emitter)
    assert sets[1] == {ord("n")}
    assert emitter.warnings == ["Empty <target> in translation unit 'T1'."]


def test_default_emitter_logs_warnings(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        resolve_characters(
            _usage(),
            _translations('<trans-unit name="ghost"><source>x</source></trans-unit>'),
            font_count=3,
        )
    assert any("Unused translation 'ghost'" in record.message for record in caplog.records)


def test_code_point_sets_helpers() -> None:
    sets = CodePointSets(2)
    sets.update((True, True), [66, 65, 66])
    sets.add(1, 67)
    assert len(sets) == 2
    assert sets.sorted(0) == [65, 66]
    assert sets.sorted(1) == [65, 66, 67]
    assert sets.total() == 5


def test_into_with_mismatched_font_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_characters(
            _usage(),
            _translations(""),
            font_count=3,
            into=CodePointSets(2),
        )
