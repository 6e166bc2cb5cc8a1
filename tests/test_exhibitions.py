"""Tests for exhibition classification and view helpers."""

from datetime import date

import pytest

from outsider_gallery.domain.exhibitions import (
    ExhibitionCard,
    artist_link,
    card_from_metaobject,
    classify_exhibitions,
    filter_exhibitions,
    heading_parts,
    hero_labels,
    installation_images,
    is_group_show,
    phase_label,
    pick_hero,
)
from outsider_gallery.domain.fields import parse_fields, parse_metaobject
from tests.conftest import exhibition_node, image_ref, metaobject_ref, text_field

TODAY = date(2025, 6, 15)


def _card(handle: str, start: date | None, end: date | None, **kwargs: object) -> ExhibitionCard:
    return ExhibitionCard(handle=handle, title=handle.title(), start=start, end=end, **kwargs)  # type: ignore[arg-type]


def test_card_from_metaobject_reads_aliases() -> None:
    raw = exhibition_node(
        "night-garden",
        "Night Garden",
        artist="Jane Doe",
        start="2025-06-01",
        end="2025-06-30",
        extra=[
            text_field("short_text", "A summary"),
            text_field("address", "12 Gallery Lane"),
            text_field("heroImage", "https://cdn.example.com/hero.jpg"),
            {
                "key": "artistRef",
                "type": "metaobject_reference",
                "value": None,
                "reference": metaobject_ref("jane-doe"),
            },
        ],
    )
    node = parse_metaobject(raw)
    assert node is not None

    card = card_from_metaobject(node)

    assert card.title == "Night Garden"
    assert card.start == date(2025, 6, 1)
    assert card.end == date(2025, 6, 30)
    assert card.summary == "A summary"
    assert card.location == "12 Gallery Lane"
    assert card.hero is not None
    assert card.artist_handles == ("jane-doe",)


def test_classify_picks_latest_current_and_orders_lists() -> None:
    older_current = _card("older", date(2025, 5, 1), date(2025, 7, 1))
    newer_current = _card("newer", date(2025, 6, 10), None)
    soon = _card("soon", date(2025, 7, 1), date(2025, 8, 1))
    later = _card("later", date(2025, 9, 1), None)
    recent_past = _card("recent", date(2025, 4, 1), date(2025, 5, 1))
    old_past = _card("old", date(2024, 1, 1), date(2024, 2, 1))
    undated = _card("undated", None, None)

    result = classify_exhibitions(
        [old_past, later, older_current, undated, soon, newer_current, recent_past], TODAY
    )

    assert result.current is newer_current
    assert [card.handle for card in result.upcoming] == ["soon", "later"]
    assert [card.handle for card in result.past] == ["recent", "old"]


def test_end_date_counts_as_current_for_the_whole_day() -> None:
    closing = _card("closing", date(2025, 6, 1), TODAY)

    assert classify_exhibitions([closing], TODAY).current is closing
    assert phase_label(closing.start, closing.end, TODAY) == "CURRENT EXHIBITION"
    assert phase_label(date(2025, 7, 1), None, TODAY) == "UPCOMING EXHIBITION"
    assert phase_label(None, date(2025, 6, 14), TODAY) == "PAST EXHIBITION"


def test_filter_exhibitions_by_year_and_page() -> None:
    cards = [
        _card(f"show-{month}", date(2024, month, 1), date(2024, month, 20))
        for month in range(1, 6)
    ]
    cards.append(_card("show-2023", date(2023, 3, 1), date(2023, 3, 20)))

    page = filter_exhibitions(cards, "past", TODAY, year=2024, page=2, page_size=2)

    assert page.total == 5
    assert page.page == 2
    assert [card.handle for card in page.items] == ["show-3", "show-2"]


def test_pick_hero_falls_back_to_upcoming_then_past() -> None:
    upcoming = [_card("a", date(2025, 7, 1), None), _card("b", date(2025, 8, 1), None)]
    past = [_card("c", date(2025, 1, 1), date(2025, 2, 1))]

    from_upcoming = pick_hero([], upcoming, past)
    from_past = pick_hero([], [], past)

    assert from_upcoming.hero is upcoming[0]
    assert from_upcoming.hero_label == "UPCOMING EXHIBITION"
    assert from_upcoming.upcoming_after_hero == [upcoming[1]]
    assert from_past.hero_label == "PAST EXHIBITION"
    assert from_past.past_after_hero == []
    assert pick_hero([], [], []).hero is None
    assert hero_labels("UPCOMING EXHIBITION").button == "View details"
    assert hero_labels(None).top == "Exhibition"


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"artist": "Jane Doe"}, False),
        ({"artist": "Jane Doe & John Roe"}, True),
        ({"artist": "Various Artists"}, True),
        ({"artist": "Jane Doe", "variant": "Group"}, True),
        ({"artist": "Jane Doe", "is_group": True}, True),
        ({}, False),
    ],
)
def test_is_group_show(kwargs: dict[str, object], expected: bool) -> None:
    assert is_group_show(_card("show", None, None, **kwargs)) is expected


def test_heading_parts_swap_for_group_shows() -> None:
    solo = _card("solo", None, None, artist="Jane Doe")
    group = _card("group", None, None, artist="Jane Doe, John Roe")

    assert heading_parts(solo).primary == "Jane Doe"
    assert heading_parts(solo).secondary == "Solo"
    assert heading_parts(group).primary == "Group"
    assert heading_parts(group).is_group is True


def test_installation_images_prefers_install_shots_list() -> None:
    fields = parse_fields(
        [
            {
                "key": "installShots",
                "type": "list.file_reference",
                "references": {"nodes": [image_ref("https://cdn.example.com/shot1.jpg")]},
            },
            text_field("installation_view", "https://cdn.example.com/view.jpg"),
        ]
    )
    fallback = parse_fields(
        [
            text_field("installation_view", "https://cdn.example.com/view.jpg"),
            text_field("hero_install", "https://cdn.example.com/hero.jpg"),
        ]
    )

    assert [image.url for image in installation_images(fields)] == [
        "https://cdn.example.com/shot1.jpg"
    ]
    assert [image.url for image in installation_images(fallback)] == [
        "https://cdn.example.com/view.jpg"
    ]


def test_artist_link_keeps_expanded_reference_or_handle() -> None:
    expanded = parse_fields(
        [
            {
                "key": "artist_ref",
                "type": "metaobject_reference",
                "reference": metaobject_ref("jane-doe", [text_field("name", "Jane Doe")]),
            }
        ]
    )
    by_id = parse_fields([text_field("artistRef", "gid://shopify/Metaobject/42")])

    link = artist_link(expanded)
    assert link is not None
    assert link.handle == "jane-doe"
    assert link.reference is not None

    fallback = artist_link(by_id)
    assert fallback is not None
    assert fallback.reference is None
    assert fallback.handle == "gid://shopify/Metaobject/42"
    assert artist_link(()) is None
