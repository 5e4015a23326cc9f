import pytest

from nyayasetu.models import AdvocateContact, AdvocateWithDetails, Location, PracticeArea
from nyayasetu.storage import MemoryStorage
from nyayasetu.storage.filters import AdvocateFilter, apply_filters, matches, parse_experience


def _details(
    n: int,
    *,
    city: str = "Patna",
    state: str = "Bihar",
    experience: int = 5,
    areas: tuple[str, ...] = (),
    bio: str = "General practice",
    name: str | None = None,
) -> AdvocateWithDetails:
    return AdvocateWithDetails(
        id=str(n),
        user_id=str(100 + n),
        location_id=str(n),
        bio=bio,
        experience=experience,
        bar_council_number=f"BR/{n}/2015",
        user=AdvocateContact(full_name=name or f"Advocate {n}", email=f"a{n}@example.com"),
        location=Location(id=str(n), city=city, state=state),
        specialties=[PracticeArea(id=str(i), name=a) for i, a in enumerate(areas, start=1)],
    )


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5-10", (5, 10)),
        (" 0 - 2 ", (0, 2)),
        ("15+", (15, None)),
        ("20 +", (20, None)),
        ("", None),
        (None, None),
        ("ten", None),
        ("5", None),
        ("5-", None),
    ],
)
def test_parse_experience(value, expected) -> None:
    assert parse_experience(value) == expected


def test_empty_filter_returns_everything() -> None:
    advocates = [_details(1), _details(2)]
    assert AdvocateFilter().is_empty()
    assert apply_filters(advocates, AdvocateFilter()) == advocates


def test_location_matches_city_or_state_case_insensitive() -> None:
    delhi = _details(1, city="New Delhi", state="Delhi")
    ranchi = _details(2, city="Ranchi", state="Jharkhand")

    assert matches(delhi, AdvocateFilter(location="delhi"))
    assert matches(ranchi, AdvocateFilter(location="JHARK"))
    assert not matches(ranchi, AdvocateFilter(location="delhi"))


def test_experience_range_is_inclusive() -> None:
    f = AdvocateFilter(experience="5-10")
    assert matches(_details(1, experience=5), f)
    assert matches(_details(2, experience=10), f)
    assert not matches(_details(3, experience=4), f)
    assert not matches(_details(4, experience=11), f)


def test_experience_open_range_and_unparsable() -> None:
    assert matches(_details(1, experience=15), AdvocateFilter(experience="15+"))
    assert not matches(_details(2, experience=14), AdvocateFilter(experience="15+"))
    assert matches(_details(3, experience=0), AdvocateFilter(experience="junior"))


def test_search_query_covers_name_bio_and_specialties() -> None:
    advocate = _details(1, areas=("Tax Law",), bio="Handles GST appeals", name="Priya Sharma")

    assert matches(advocate, AdvocateFilter(search_query="priya"))
    assert matches(advocate, AdvocateFilter(search_query="gst"))
    assert matches(advocate, AdvocateFilter(search_query="tax"))
    assert not matches(advocate, AdvocateFilter(search_query="divorce"))


def test_filters_combine_with_and() -> None:
    advocates = [
        _details(1, city="New Delhi", state="Delhi", experience=12),
        _details(2, city="New Delhi", state="Delhi", experience=3),
        _details(3, city="Patna", state="Bihar", experience=25),
    ]
    result = apply_filters(advocates, AdvocateFilter(location="Delhi", experience="10+"))
    assert [a.id for a in result] == ["1"]


@pytest.mark.asyncio
async def test_practice_area_filter_over_store() -> None:
    storage = MemoryStorage()
    family = await storage.create_practice_area(name="Family Law")
    criminal = await storage.create_practice_area(name="Criminal Law")
    location = await storage.create_location(city="Patna", state="Bihar")

    family_ids = []
    for n in range(12):
        user = await storage.create_user(
            username=f"adv{n}", password="x", email=f"adv{n}@example.com", full_name=f"Advocate {n}", role="advocate"
        )
        advocate = await storage.create_advocate(
            user_id=user.id, location_id=location.id, bio="Practice", experience=n, bar_council_number=f"BR/{n}"
        )
        if n in (3, 8):
            await storage.add_specialty_to_advocate(advocate.id, family.id)
            family_ids.append(advocate.id)
        else:
            await storage.add_specialty_to_advocate(advocate.id, criminal.id)

    result = await storage.get_advocates_by_filter(AdvocateFilter(practice_area="Family Law"))

    assert sorted(a.id for a in result) == sorted(family_ids)
    assert all(any(s.name == "Family Law" for s in a.specialties) for a in result)
