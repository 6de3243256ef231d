"""This module and its submodules provide database-related logic. No other code should
touch the database directly.
This module provides functions for the database connection.
"""


import mysql.connector as mariadb
from . import record_mapper


connection = None


def connect( user, password, host, database ):
    global connection

    if connection is not None:
        connection.close()
        connection = None
        raise RuntimeError( 'Attempt to connect to DB after connection already created.' )

    connection = mariadb.connect( user = user, password = password, host = host,
        database = database )

    return connection


def close():
    global connection

    if connection is None:
        raise RuntimeError( 'Attempt to close DB before connection was created.' )

    connection.close()
    connection = None
