import pytest

from src.cache.exceptions import CacheError


@pytest.mark.asyncio
async def test_set_then_get_returns_equal_value(cache_client):
    value = {'properties': [{'id': 'P1', 'price': 10.5}], 'pages': None}

    stored = await cache_client.set('k', value, ttl=60)
    result = await cache_client.get('k')

    assert stored.ok and stored.value is True
    assert result.ok
    assert result.value == value


@pytest.mark.asyncio
async def test_set_passes_ttl_to_redis(cache_client, redis_client):
    await cache_client.set('k', [1, 2], ttl=600)

    redis_client.set.assert_awaited_once()
    assert redis_client.set.await_args.kwargs['ex'] == 600


@pytest.mark.asyncio
async def test_get_missing_key_is_none(cache_client):
    result = await cache_client.get('absent')

    assert result.ok
    assert result.value is None


@pytest.mark.asyncio
async def test_get_non_json_value_returns_raw_string(cache_client, redis_client):
    redis_client.data['plain'] = b'not json'

    result = await cache_client.get('plain')

    assert result.ok
    assert result.value == 'not json'


@pytest.mark.asyncio
async def test_delete_missing_key_is_noop(cache_client):
    result = await cache_client.delete('absent')

    assert result.ok
    assert result.value is False


@pytest.mark.asyncio
async def test_delete_existing_key(cache_client):
    await cache_client.set('k', 1)

    result = await cache_client.delete('k')

    assert result.value is True
    assert (await cache_client.exists('k')).value is False


@pytest.mark.asyncio
async def test_delete_pattern_removes_only_matching(cache_client, redis_client):
    for key in ('properties:filtered:a', 'properties:filtered:b', 'property:1'):
        await cache_client.set(key, 1)

    result = await cache_client.delete_pattern('properties:*')

    assert result.value == 2
    assert list(redis_client.data) == ['property:1']


@pytest.mark.asyncio
async def test_keys_and_delete_many(cache_client):
    await cache_client.set('favourites:user:1', [])
    await cache_client.set('favourites:user:2', [])

    found = await cache_client.keys('favourites:*')
    deleted = await cache_client.delete_many(*found.value)

    assert sorted(found.value) == ['favourites:user:1', 'favourites:user:2']
    assert deleted.value == 2


@pytest.mark.asyncio
async def test_expire(cache_client):
    await cache_client.set('k', 1)

    assert (await cache_client.expire('k', 10)).value is True
    assert (await cache_client.expire('absent', 10)).value is False


@pytest.mark.asyncio
async def test_unserializable_value_is_error_not_exception(cache_client):
    result = await cache_client.set('k', object())

    assert not result.ok
    assert isinstance(result.error, CacheError)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ('operation', 'args', 'default'),
    [
        ('get', ('k',), None),
        ('set', ('k', 1), False),
        ('delete', ('k',), False),
        ('delete_many', ('k', 'j'), 0),
        ('delete_pattern', ('properties:*',), 0),
        ('keys', ('properties:*',), []),
        ('exists', ('k',), False),
        ('expire', ('k', 10), False),
    ],
)
async def test_redis_failures_are_returned_as_errors(
    failing_cache,
    operation,
    args,
    default,
):
    result = await getattr(failing_cache, operation)(*args)

    assert not result.ok
    assert isinstance(result.error, CacheError)
    assert result.value == default
