import pytest

from tests.records import Dog


def test_attributes_from_columns():
    dog = Dog( id = 3, name = 'Rex', breed = 'collie' )

    assert dog.id == 3
    assert dog.attributes() == { 'name': 'Rex', 'breed': 'collie' }
    assert repr( dog ) == '<Dog id=3>'


def test_missing_columns_default_to_none():
    assert Dog( name = 'Rex' ).breed is None


def test_unknown_attribute_is_rejected():
    with pytest.raises( ValueError ):
        Dog( name = 'Rex', lives = 9 )
