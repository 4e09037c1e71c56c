from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from src.common.exceptions import BadRequestException
from src.properties.filters import PropertyQuery, max_pages
from src.properties.models import Property


def compile_query(query: PropertyQuery):
    stmt = (
        select(Property)
        .where(*query.conditions())
        .order_by(*query.order_by())
    )
    return stmt.compile(dialect=postgresql.dialect())


def test_empty_params_build_no_conditions():
    query = PropertyQuery.from_params({})

    assert query.conditions() == []
    assert not query.is_paginated
    assert query.limit is None


def test_comma_lists_become_membership():
    query = PropertyQuery.from_params(
        {'propertyTypes': 'Villa, Apartment', 'cities': 'Pune'},
    )

    compiled = compile_query(query)

    assert query.property_types == ('Villa', 'Apartment')
    assert 'property.type IN' in str(compiled)
    assert 'property.city IN' in str(compiled)


def test_price_range_bounds_are_independent():
    lower = PropertyQuery.from_params({'priceFrom': '1000'})
    both = PropertyQuery.from_params({'priceFrom': '1000', 'priceTo': '5000'})

    assert len(lower.conditions()) == 1
    assert len(both.conditions()) == 2
    assert (both.price_from, both.price_to) == (1000.0, 5000.0)


def test_non_numeric_values_are_dropped():
    query = PropertyQuery.from_params(
        {'bedRooms': 'two', 'bathRooms': '', 'priceTo': 'cheap', 'rating': 'x'},
    )

    assert query.bedrooms is None
    assert query.bathrooms is None
    assert query.price_to is None
    assert query.min_rating is None
    assert query.conditions() == []


def test_exact_match_scalars():
    query = PropertyQuery.from_params(
        {'bedRooms': '3', 'bathRooms': '2', 'listingType': 'rent'},
    )

    compiled = str(compile_query(query))

    assert (query.bedrooms, query.bathrooms) == (3, 2)
    assert 'property.bedrooms =' in compiled
    assert 'property.listing_type =' in compiled


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [('true', True), ('FALSE', False), ('yes', None), ('1', None)],
)
def test_is_verified_parsing(raw, expected):
    query = PropertyQuery.from_params({'isVerified': raw})

    assert query.is_verified is expected


def test_rating_is_lower_bound():
    query = PropertyQuery.from_params({'rating': '4.5'})

    compiled = compile_query(query)

    assert query.min_rating == 4.5
    assert 'property.rating >=' in str(compiled)


def test_title_is_case_insensitive_substring():
    query = PropertyQuery.from_params({'title': '50%_off'})

    compiled = str(compile_query(query))

    assert 'property.title' in compiled
    assert 'LIKE' in compiled
    assert "ESCAPE '/'" in compiled


def test_tags_require_all_values():
    query = PropertyQuery.from_params({'amenities': 'pool, gym'})

    compiled = compile_query(query)
    sql = str(compiled)

    assert query.amenities == ('pool', 'gym')
    assert 'regexp_split_to_array' in sql
    assert '@>' in sql
    assert ['pool', 'gym'] in compiled.params.values()


def test_available_from_is_parsed_to_date():
    query = PropertyQuery.from_params({'availableFrom': '2025-03-01T10:00:00'})

    assert query.available_from == date(2025, 3, 1)


def test_invalid_available_from_is_rejected():
    with pytest.raises(BadRequestException):
        PropertyQuery.from_params({'availableFrom': '01/03/2025'})


def test_default_sort_is_available_from_ascending():
    sql = str(compile_query(PropertyQuery.from_params({})))

    assert 'ORDER BY property.available_from ASC, property.listing_id ASC' in sql


@pytest.mark.parametrize(
    ('params', 'expected'),
    [
        (
            {'sortBy': 'priceLowToHigh', 'sortOrder': 'asc'},
            'property.price ASC NULLS LAST',
        ),
        ({'sortBy': 'priceLowToHigh'}, 'property.price DESC NULLS LAST'),
        ({'sortBy': 'rating', 'sortOrder': 'desc'}, 'property.rating DESC'),
        ({'sortBy': 'area', 'sortOrder': 'asc'}, 'property.area_sq_ft ASC'),
        ({'sortBy': 'unknown'}, 'property.available_from ASC'),
    ],
)
def test_sorting(params, expected):
    sql = str(compile_query(PropertyQuery.from_params(params)))

    assert expected in sql


@pytest.mark.parametrize(
    ('raw', 'page', 'offset'),
    [('1', 1, 0), ('3', 3, 20), ('0', 1, 0), ('abc', 1, 0), ('-2', 1, 0)],
)
def test_page_parsing(raw, page, offset):
    query = PropertyQuery.from_params({'page': raw})

    assert query.is_paginated
    assert query.page == page
    assert query.offset == offset
    assert query.limit == 10


@pytest.mark.parametrize('params', [{'Page': '2'}, {'page': '2'}])
def test_page_accepts_capitalized_name(params):
    query = PropertyQuery.from_params(params)

    assert query.is_paginated
    assert query.page == 2
    assert query.offset == 10


@pytest.mark.parametrize('raw', ['', '   '])
def test_blank_page_is_not_paginated(raw):
    query = PropertyQuery.from_params({'page': raw})

    assert not query.is_paginated
    assert query.page is None
    assert query.limit is None


@pytest.mark.parametrize(
    ('total', 'pages'),
    [(0, 0), (1, 1), (10, 1), (11, 2), (25, 3)],
)
def test_max_pages(total, pages):
    assert max_pages(total) == pages


def test_unknown_params_are_ignored():
    query = PropertyQuery.from_params({'foo': 'bar', 'cities': 'Pune'})

    assert query.cities == ('Pune',)
    assert len(query.conditions()) == 1
