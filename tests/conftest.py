"""Shared pytest fixtures for idmap tests."""

from unittest import mock

import pytest

from idmap import config, db, identity_map


@pytest.fixture( autouse = True )
def fresh_identity_map():
    """Each test starts with a disabled, empty identity map."""
    identity_map.reset()
    yield
    identity_map.reset()


@pytest.fixture
def enabled_map():
    identity_map.set_enabled( True )


@pytest.fixture
def fake_connection( monkeypatch ):
    """A stand-in for the mysql connection, installed as idmap.db.connection. Every
    call to cursor() returns the same mock cursor."""
    connection = mock.MagicMock()
    monkeypatch.setattr( db, 'connection', connection )
    return connection


@pytest.fixture
def cursor( fake_connection ):
    return fake_connection.cursor.return_value


@pytest.fixture
def config_reset( monkeypatch ):
    monkeypatch.delenv( config.ENV_VAR, raising = False )
    config.reset()
    yield
    config.reset()
    config.filename = None
