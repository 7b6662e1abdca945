import pytest

from traitmatch.schemas.trait import TraitCategory
from traitmatch.services.trait_library_service import LIBRARY_VERSION, trait_library_service


def test_library_contents():
    library = trait_library_service.get_trait_library()

    assert library.version == LIBRARY_VERSION == "1.0.0"
    assert len(library.traits) == 12
    assert all(t.min_value == 1 and t.max_value == 10 for t in library.traits)
    assert library.last_updated.tzinfo is not None


def test_lookup_by_id():
    trait = trait_library_service.get_trait_by_id("deep_focus")

    assert trait.name == "Deep Focus"
    assert trait.category is TraitCategory.COGNITIVE
    assert trait_library_service.get_trait_by_id("telepathy") is None
    assert trait_library_service.is_valid_trait_id("quiet_office")
    assert not trait_library_service.is_valid_trait_id("telepathy")


def test_traits_by_category():
    environmental = trait_library_service.get_traits_by_category(TraitCategory.ENVIRONMENTAL)

    assert {t.id for t in environmental} == {"quiet_office", "working_from_home"}


def test_all_trait_ids_are_unique():
    ids = trait_library_service.get_all_trait_ids()

    assert len(ids) == len(set(ids)) == 12
    assert "attention_to_detail" in ids


@pytest.mark.parametrize(
    "traits, expected",
    [
        ({"autonomy": 1, "empathy": 10}, {}),
        ({"autonomy": 0}, {"autonomy": "Value must be between 1 and 10"}),
        ({"autonomy": 11}, {"autonomy": "Value must be between 1 and 10"}),
        ({"telepathy": 5}, {"telepathy": "Unknown trait ID"}),
        ({}, {}),
    ],
)
def test_validate_trait_map(traits, expected):
    assert trait_library_service.validate_trait_map(traits) == expected
