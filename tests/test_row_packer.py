from __future__ import annotations

import math
import random

import pytest

from rowgallery.core.row_packer import pack_rows, round_px
from rowgallery.errors import InvalidDimensionsError
from rowgallery.models.types import ImageRecord, LayoutConfiguration


def _records(ratios: list[float]) -> list[ImageRecord]:
    return [
        ImageRecord(id=f"img{index}", width=int(ratio * 1000), height=1000)
        for index, ratio in enumerate(ratios, start=1)
    ]


def test_reference_gallery_rows() -> None:
    images = _records([1.6, 1.0, 2.0, 0.75, 1.3, 1.0, 1.8])
    rows = pack_rows(images, 1200, LayoutConfiguration())

    assert [row.ids() for row in rows] == [
        ["img1", "img2"],
        ["img3", "img4"],
        ["img5", "img6"],
        ["img7"],
    ]
    assert [row.row_height for row in rows] == [451, 426, 494, 380]
    assert [[item.calculated_width for item in row] for row in rows] == [
        [721, 451],
        [852, 320],
        [642, 494],
        [684],
    ]
    assert [row.is_justified for row in rows] == [True, True, False, False]
    assert [row.is_final for row in rows] == [False, False, False, True]
    assert rows[0].content_width(28) == 1200
    assert rows[1].content_width(28) == 1200
    for row in rows:
        for item in row:
            assert abs(round_px(item.calculated_height * item.aspect_ratio) - item.calculated_width) <= 1


def test_row_below_minimum_accepts_overflowing_image() -> None:
    config = LayoutConfiguration(target_row_height=200, min_row_height=50)
    rows = pack_rows(_records([4.0, 1.0, 1.0]), 600, config)

    assert [row.ids() for row in rows] == [["img1", "img2"], ["img3"]]
    first = rows[0]
    assert first.row_height == 114
    assert [item.calculated_width for item in first] == [458, 114]
    assert first.content_width(config.gap) == 600
    assert rows[1].row_height == 200
    assert rows[1].items[0].calculated_width == 200


def test_row_closes_at_maximum_even_when_not_full() -> None:
    rows = pack_rows(_records([1.0] * 5), 10000)

    assert [len(row) for row in rows] == [3, 2]
    assert rows[0].row_height == 494
    assert rows[0].is_justified is False
    assert rows[1].row_height == 380


def test_single_image_uses_target_height_when_container_is_wide() -> None:
    rows = pack_rows(_records([1.5]), 1200)

    assert len(rows) == 1
    (item,) = rows[0].items
    assert (item.calculated_width, item.calculated_height) == (570, 380)
    assert rows[0].is_final is True


def test_single_image_shrinks_to_container_width() -> None:
    rows = pack_rows(_records([1.5]), 450)

    (item,) = rows[0].items
    assert (item.calculated_width, item.calculated_height) == (450, 300)
    assert rows[0].is_justified is True


def test_minimum_height_floor_is_respected() -> None:
    rows = pack_rows(_records([2.0]), 300)

    assert rows[0].row_height == 200
    assert rows[0].items[0].calculated_width == 400
    assert rows[0].is_justified is False


def test_caps_are_configurable() -> None:
    config = LayoutConfiguration(interior_height_cap=2.0, final_height_cap=1.5)
    rows = pack_rows(_records([1.3, 1.0, 1.8]), 1200, config)

    # Without the default 1.3 cap the first row stretches to fill the width.
    assert rows[0].row_height == 510
    assert rows[0].is_justified is True
    assert rows[1].row_height == 570


@pytest.mark.parametrize("width", [0, -10, math.nan, math.inf, None])
def test_unusable_container_width_returns_no_rows(width) -> None:
    assert pack_rows(_records([1.0, 1.0]), width) == []


def test_empty_input_returns_no_rows() -> None:
    assert pack_rows([], 1200) == []


@pytest.mark.parametrize(
    "record",
    [
        ImageRecord(id="zero-height", width=100, height=0),
        ImageRecord(id="negative", width=-100, height=100),
        ImageRecord(id="huge", width=60000, height=100),
        ImageRecord(id="bad-ratio", width=100, height=100, aspect_ratio=-1.0),
        ImageRecord(id="nan-ratio", width=100, height=100, aspect_ratio=math.nan),
        ImageRecord(id="inf-ratio", width=100, height=100, aspect_ratio=math.inf),
    ],
)
def test_invalid_dimensions_fail_fast(record: ImageRecord) -> None:
    with pytest.raises(InvalidDimensionsError) as excinfo:
        pack_rows([*_records([1.0]), record], 1200)
    assert excinfo.value.record_id == record.id


def test_invalid_dimensions_can_be_skipped(caplog: pytest.LogCaptureFixture) -> None:
    rejected: list[str] = []
    images = _records([1.0, 1.0])
    images.insert(1, ImageRecord(id="broken", width=0, height=0))

    rows = pack_rows(
        images,
        1200,
        skip_invalid=True,
        on_rejected=lambda record, error: rejected.append(record.id),
    )

    assert rejected == ["broken"]
    assert [row.ids() for row in rows] == [["img1", "img2"]]
    assert "broken" in caplog.text


def test_pack_is_deterministic() -> None:
    images = _records([1.6, 1.0, 2.0, 0.75, 1.3, 1.0, 1.8])
    assert pack_rows(images, 1111) == pack_rows(images, 1111)


def test_layout_properties_hold_for_mixed_gallery() -> None:
    rng = random.Random(7)
    images = [
        ImageRecord(id=f"r{index}", width=rng.randint(400, 6000), height=rng.randint(400, 6000))
        for index in range(80)
    ]
    config = LayoutConfiguration()
    container_width = 1280

    rows = pack_rows(images, container_width, config)

    assert [item.id for row in rows for item in row] == [image.id for image in images]
    for position, row in enumerate(rows):
        is_last = position == len(rows) - 1
        assert row.is_final is is_last
        assert all(item.calculated_height == row.row_height for item in row)
        assert row.row_height >= config.min_row_height
        for item in row:
            # Height and width are rounded independently from the same float
            # height, so the drift grows with the aspect ratio.
            drift = abs(item.calculated_height * item.aspect_ratio - item.calculated_width)
            assert drift <= 0.5 * item.aspect_ratio + 0.5 + 1e-9
        if not is_last:
            assert config.min_images_per_row <= len(row) <= config.max_images_per_row
            if row.is_justified:
                assert abs(row.content_width(config.gap) - container_width) <= len(row)


def test_panoramas_stay_within_aspect_tolerance() -> None:
    config = LayoutConfiguration()
    images = [
        ImageRecord(id="pano-a", width=4000, height=1000),
        ImageRecord(id="pano-b", width=4000, height=1000),
    ]

    for container_width in range(600, 2400):
        (row,) = pack_rows(images, container_width, config)
        for item in row:
            drift = abs(item.calculated_height * item.aspect_ratio - item.calculated_width)
            assert drift <= 0.5 * item.aspect_ratio + 0.5 + 1e-9, container_width
        if row.is_justified:
            assert abs(row.content_width(config.gap) - container_width) <= len(row)
