from __future__ import annotations

import pytest

from glyphspec.core.diagnostics import NullEmitter
from glyphspec.core.documents import parse_document
from glyphspec.core.exceptions import MetadataError
from glyphspec.fonts.metadata import FontMetadata, load_font_metadata, parse_font_name


def _font(name: str = "FONT0", **overrides: str | None) -> str:
    attributes = {
        "Name": name,
        "TrueTypeLib": "arial.ttf",
        "Size": "12",
        "Width": "8",
        "Height": "10",
        "StartX": "0",
        "StartY": "0",
    }
    attributes.update(overrides)
    rendered = " ".join(f'{key}="{value}"' for key, value in attributes.items() if value is not None)
    return f"<Font {rendered}/>"


def _load(*fonts: str, font_count: int = 1, **kwargs):
    root = parse_document(f"<Physical><Fonts>{''.join(fonts)}</Fonts></Physical>")
    return load_font_metadata(root, font_count=font_count, emitter=NullEmitter(), **kwargs)


def test_loads_every_attribute() -> None:
    assert _load(_font()) == [
        FontMetadata(index=0, path="arial.ttf", size=12, width=8, height=10, x=0, y=0)
    ]


def test_fonts_may_appear_in_any_order() -> None:
    records = _load(
        _font("FONT1", TrueTypeLib="b.ttf"),
        _font("FONT0", TrueTypeLib="a.ttf"),
        font_count=2,
    )
    assert [(record.index, record.path) for record in records] == [(0, "a.ttf"), (1, "b.ttf")]


def test_missing_index_is_reported() -> None:
    with pytest.raises(MetadataError, match="FONT1, FONT2"):
        _load(_font("FONT0"), font_count=3)


def test_index_out_of_range_fails() -> None:
    with pytest.raises(MetadataError, match="out of range"):
        _load(_font("FONT0"), _font("FONT3"), font_count=3)


@pytest.mark.parametrize("name", ["FONT", "font0", "FONT-1", "XFONT1", "FONT1a"])
def test_name_must_match_pattern(name: str) -> None:
    with pytest.raises(MetadataError, match="FONT<n>"):
        parse_font_name(name)


@pytest.mark.parametrize("attribute", ["Size", "Width", "Height", "StartX", "StartY"])
def test_missing_numeric_attribute_fails(attribute: str) -> None:
    with pytest.raises(MetadataError, match=f"missing '{attribute}'"):
        _load(_font(**{attribute: None}))


@pytest.mark.parametrize("value", ["-1", "ten", "1.5", ""])
def test_non_numeric_attribute_fails(value: str) -> None:
    with pytest.raises(MetadataError, match="unsigned integer"):
        _load(_font(Size=value))


def test_missing_path_fails_but_empty_path_is_kept() -> None:
    with pytest.raises(MetadataError, match="TrueTypeLib"):
        _load(_font(TrueTypeLib=None))
    assert _load(_font(TrueTypeLib=""))[0].path == ""


def test_overlong_path_is_rejected_instead_of_truncated() -> None:
    with pytest.raises(MetadataError, match="limit 8"):
        _load(_font(TrueTypeLib="fonts/arial.ttf"), max_path_length=8)


def test_missing_container_fails() -> None:
    with pytest.raises(MetadataError, match="<Fonts>"):
        load_font_metadata(parse_document("<Physical/>"), font_count=1)


def test_container_may_be_the_root() -> None:
    root = parse_document(f"<Fonts>{_font()}</Fonts>")
    assert load_font_metadata(root, font_count=1)[0].size == 12


def test_duplicate_index_keeps_last_and_warns() -> None:
    warnings: list[str] = []

    class Emitter(NullEmitter):
        def warning(self, message: str, exc: BaseException | None = None) -> None:
            warnings.append(message)

    root = parse_document(
        f"<Fonts>{_font(TrueTypeLib='old.ttf')}{_font(TrueTypeLib='new.ttf')}</Fonts>"
    )
    records = load_font_metadata(root, font_count=1, emitter=Emitter())
    assert records[0].path == "new.ttf"
    assert warnings == ["Font index 0 is described more than once."]


@pytest.mark.parametrize("path", ["a&#10;b&#9;c.ttf", "fonts&#9;arial.ttf", "arial.ttf&#13;"])
def test_path_with_record_separators_is_rejected(path: str) -> None:
    with pytest.raises(MetadataError, match="tabs or line breaks"):
        _load(_font(TrueTypeLib=path))


def test_zero_padded_numbers_are_accepted() -> None:
    record = _load(_font(name="FONT" + "0" * 5000, Size="0" * 5000 + "12"))[0]
    assert record.index == 0
    assert record.size == 12


def test_oversized_numbers_fail_with_metadata_error() -> None:
    with pytest.raises(MetadataError, match="too large"):
        _load(_font(Width="9" * 5000))
    with pytest.raises(MetadataError, match="oversized index"):
        parse_font_name("FONT" + "9" * 5000)


def test_namespaced_attributes_document_is_read() -> None:
    root = parse_document(
        '<p:Physical xmlns:p="urn:example:physical">'
        f'<p:Fonts>{_font().replace("<Font ", "<p:Font ")}</p:Fonts>'
        "</p:Physical>"
    )
    assert load_font_metadata(root, font_count=1)[0].path == "arial.ttf"
