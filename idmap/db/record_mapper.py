"""Module for database operations involving Records. Lookups, creation, reloading and
destruction go through idmap.lifecycle, so they respect the identity map when it's
enabled for the current context.

All the types in a hierarchy share their root's table; each row's type column holds the
name of the row's concrete type.
"""


import logging
import re

import mysql.connector as mariadb

from idmap import db, hierarchy, lifecycle


# SQL templates
_SELECT_SQL = 'SELECT {columns} FROM {table} WHERE id = %s'
_LOCK_SUFFIX = ' FOR UPDATE'
_INSERT_SQL = 'INSERT INTO {table} ( {columns} ) VALUES ( {placeholders} )'
_UPDATE_SQL = 'UPDATE {table} SET {assignments} WHERE id = %(id)s'
_DELETE_SQL = 'DELETE FROM {table} WHERE id = %s'

_TYPE_COLUMN = 'type'

column_name_pattern = re.compile( '^[a-z_][a-z0-9_]*$' )

_logger = logging.getLogger( __name__ )


def find( cls, id, select = None, lock = False ):
    """Find a record of type cls (or a descendant of cls) by id. Returns None if there's
    no such record.

    :param type cls: The record type.
    :param id: The record's id.
    :param list select: Only fetch these columns. Partial records are never taken from or
        added to the identity map.
    :param bool lock: Read the row with a lock (SELECT ... FOR UPDATE). Bypasses the
        identity map.
    """

    options = { 'select': select, 'lock': lock }

    return lifecycle.find_one( cls, id, options,
        lambda: _fetch( cls, id, select, lock ) )


def find_many( cls, ids ):
    """Find records of type cls by id, in order, leaving out ids with no record.

    :param type cls: The record type.
    :param list ids: The ids. Must not be empty.
    """

    if not ids:
        raise ValueError( 'Must have at least one ID.' )

    records = [ find( cls, id ) for id in ids ]
    return [ record for record in records if record is not None ]


def create( record ):
    """Insert a row for a new record, and set the record's id.

    :param idmap.record.Record record: A record that hasn't been stored yet.
    """

    if record.id is not None:
        raise ValueError( '{!r} already has an id.'.format( record ) )

    return lifecycle.create( record, lambda: _insert( record ) )


def save( record ):
    """Save (update) an existing record in the database. The identity map is not
    involved; the mapped object is the one being saved.

    :param idmap.record.Record record: The record to save.
    """

    if record.id is None:
        raise ValueError( 'Attempting to save {!r}, which was never created.'.format(
            record ) )

    values = record.attributes()
    values[ 'id' ] = record.id
    sql = _UPDATE_SQL.format(
        table = _table_for( type( record ) ),
        assignments = ', '.join(
            '{0} = %({0})s'.format( column ) for column in record.columns )
    )

    _execute_and_commit( sql, values )


def reload( record ):
    """Re-read record's state from the database into the same object.

    :param idmap.record.Record record: The record to reload.
    """

    return lifecycle.reload( record, lambda: _reload_into( record ) )


def destroy( record ):
    """Delete record's row. Returns True if a row was deleted.

    :param idmap.record.Record record: The record to destroy.
    """

    return lifecycle.destroy( record, lambda: _delete( record ) )


def _fetch( cls, id, select, lock ):
    if select is not None:
        columns = [ 'id', _TYPE_COLUMN ] + [ column for column in select
            if column not in ( 'id', _TYPE_COLUMN ) ]
        for column in columns:
            if not column_name_pattern.match( column ):
                raise ValueError( 'Invalid column name: {}'.format( column ) )
    else:
        columns = [ '*' ]

    sql = _SELECT_SQL.format( columns = ', '.join( columns ), table = _table_for( cls ) )
    if lock:
        sql += _LOCK_SUFFIX

    cursor = db.connection.cursor( dictionary = True )
    cursor.execute( sql, ( id, ) )
    row = cursor.fetchone()
    cursor.close()

    if row is None:
        return None

    record_type = hierarchy.class_for_name( row[ _TYPE_COLUMN ] )

    # Rows of a sibling type share the table, but aren't a cls
    if record_type is None or not hierarchy.matches( cls, record_type ):
        _logger.debug( 'Row {} in {} has type {}, not a {}.'.format(
            id, _table_for( cls ), row[ _TYPE_COLUMN ], cls.__name__ ) )
        return None

    record = record_type( id = row[ 'id' ], **_attributes_from_row( record_type, row ) )

    if select is None and not lock:
        lifecycle.loaded( record )

    return record


def _reload_into( record ):
    sql = _SELECT_SQL.format( columns = '*', table = _table_for( type( record ) ) )

    cursor = db.connection.cursor( dictionary = True )
    cursor.execute( sql, ( record.id, ) )
    row = cursor.fetchone()
    cursor.close()

    if row is None:
        raise LookupError( 'Can\'t reload {!r}: row not found.'.format( record ) )

    for column, value in _attributes_from_row( type( record ), row ).items():
        setattr( record, column, value )

    lifecycle.loaded( record )
    return record


def _insert( record ):
    values = record.attributes()
    values[ _TYPE_COLUMN ] = type( record ).__name__
    columns = [ _TYPE_COLUMN ] + list( record.columns )

    sql = _INSERT_SQL.format(
        table = _table_for( type( record ) ),
        columns = ', '.join( columns ),
        placeholders = ', '.join( '%({})s'.format( column ) for column in columns )
    )

    cursor = db.connection.cursor()

    try:
        cursor.execute( sql, values )
        record.id = cursor.lastrowid

    except mariadb.Error as e:
        db.connection.rollback()
        cursor.close()
        raise e

    db.connection.commit()
    cursor.close()

    return record


def _delete( record ):
    sql = _DELETE_SQL.format( table = _table_for( type( record ) ) )
    return _execute_and_commit( sql, ( record.id, ) ) > 0


def _execute_and_commit( sql, params ):
    cursor = db.connection.cursor()

    try:
        cursor.execute( sql, params )
    except mariadb.Error as e:
        db.connection.rollback()
        cursor.close()
        raise e

    # Closing the cursor resets rowcount
    rowcount = cursor.rowcount
    db.connection.commit()
    cursor.close()
    return rowcount


def _attributes_from_row( record_type, row ):
    return { column: row[ column ] for column in record_type.columns if column in row }


def _table_for( cls ):
    table = hierarchy.repository_key_of( cls ).table_name
    if table is None:
        raise ValueError( 'No table_name set for {}.'.format( cls.__name__ ) )

    return table
