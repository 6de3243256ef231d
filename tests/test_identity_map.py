import pytest

from idmap import identity_map
from tests.records import Animal, Dog, Cat, Vehicle


def test_disabled_by_default():
    assert identity_map.is_enabled() is False


def test_use_enables_during_body_only():
    assert identity_map.use( identity_map.is_enabled ) is True
    assert identity_map.is_enabled() is False


def test_use_restores_when_body_raises():
    def body():
        assert identity_map.is_enabled()
        raise RuntimeError( 'failed' )

    with pytest.raises( RuntimeError ):
        identity_map.use( body )

    assert identity_map.is_enabled() is False


def test_without_disables_during_body_only():
    identity_map.set_enabled( True )

    assert identity_map.without( identity_map.is_enabled ) is False
    assert identity_map.is_enabled() is True


def test_add_and_get_one():
    dog = Dog( id = 1, name = 'Rex' )

    assert identity_map.add( dog ) is dog
    assert identity_map.get_one( Dog, 1 ) is dog


def test_add_none_is_a_no_op():
    assert identity_map.add( None ) is None
    assert identity_map.stats().value( 'added' ) == 0


def test_add_overwrites_same_key_and_id():
    first = Dog( id = 1, name = 'Rex' )
    second = Cat( id = 1, name = 'Tom' )

    identity_map.add( first )
    identity_map.add( second )

    assert identity_map.get_one( Animal, 1 ) is second
    assert identity_map.get_one( Dog, 1 ) is None


def test_get_by_supertype_returns_subtype_record():
    dog = identity_map.add( Dog( id = 5 ) )

    assert identity_map.get_one( Animal, 5 ) is dog


def test_foreign_or_unrelated_type_is_a_miss():
    identity_map.add( Dog( id = 5 ) )

    assert identity_map.get_one( Cat, 5 ) is None
    assert identity_map.get_one( Vehicle, 5 ) is None


def test_get_one_miss_returns_none():
    assert identity_map.get_one( Dog, 99 ) is None


def test_get_many_filters_misses_in_order():
    one = identity_map.add( Dog( id = 1 ) )
    three = identity_map.add( Dog( id = 3 ) )

    assert identity_map.get_many( Dog, [ 3, 2, 1 ] ) == [ three, one ]
    assert identity_map.get_many( Dog, [ 1, 2, 3 ] ) == [ one, three ]


def test_get_many_rejects_empty_ids():
    with pytest.raises( ValueError ):
        identity_map.get_many( Dog, [] )


def test_get_dispatches_on_number_of_ids():
    one = identity_map.add( Dog( id = 1 ) )
    three = identity_map.add( Dog( id = 3 ) )

    assert identity_map.get( Dog, 1 ) is one
    assert identity_map.get( Dog, 2 ) is None
    assert identity_map.get( Dog, 1, 2, 3 ) == [ one, three ]
    assert identity_map.get( Dog, [ 1, 3 ] ) == [ one, three ]
    assert identity_map.get( Dog, [ 3 ] ) is three


def test_get_rejects_no_ids():
    with pytest.raises( ValueError ):
        identity_map.get( Dog )

    with pytest.raises( ValueError ):
        identity_map.get( Dog, [] )


def test_remove_and_remove_by_id():
    dog = identity_map.add( Dog( id = 1 ) )
    cat = identity_map.add( Cat( id = 2 ) )

    identity_map.remove( dog )
    identity_map.remove_by_id( Animal, 2 )

    assert identity_map.get_one( Dog, 1 ) is None
    assert identity_map.get_one( Cat, 2 ) is None
    assert cat.id == 2


def test_remove_is_idempotent():
    dog = Dog( id = 1 )

    identity_map.remove( dog )
    identity_map.remove_by_id( Vehicle, 123 )
    identity_map.add( dog )
    identity_map.remove( dog )
    identity_map.remove( dog )

    assert identity_map.get_one( Dog, 1 ) is None
    assert identity_map.stats().value( 'removed' ) == 1


def test_remove_record_without_id_logs_warning( caplog ):
    identity_map.remove( Dog() )

    assert 'without an id' in caplog.text


def test_clear():
    identity_map.add( Dog( id = 1 ) )
    identity_map.add( Vehicle( id = 1 ) )

    identity_map.clear()

    assert identity_map.get_one( Dog, 1 ) is None
    assert identity_map.get_one( Vehicle, 1 ) is None


def test_reset_disables_and_empties():
    identity_map.set_enabled( True )
    identity_map.add( Dog( id = 1 ) )

    identity_map.reset()

    assert not identity_map.is_enabled()
    assert identity_map.get_one( Dog, 1 ) is None
    assert identity_map.stats().value( 'added' ) == 0


def test_stats_count_hits_misses_and_adds():
    dog = Dog( id = 1 )
    identity_map.add( dog )
    identity_map.add( dog )
    identity_map.get_one( Dog, 1 )
    identity_map.get_one( Dog, 2 )

    stats = identity_map.stats()
    assert stats.value( 'added' ) == 1
    assert stats.value( 'hits' ) == 1
    assert stats.value( 'misses' ) == 1
    assert 'Identity map hits: 1' in stats.describe()


def test_configure():
    identity_map.configure( { 'enabled': True } )
    assert identity_map.is_enabled()

    identity_map.configure( None )
    assert not identity_map.is_enabled()


def test_configure_rejects_non_boolean():
    with pytest.raises( ValueError ):
        identity_map.configure( { 'enabled': 'yes please' } )
